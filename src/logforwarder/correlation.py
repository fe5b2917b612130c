"""
Invocation-correlated logging.

Every line is prefixed with the function name and invocation id:
``[<function-name>][<invocation-id>] <message>``. Messages are rendered only
when their level is enabled, so full payloads cost nothing at INFO.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .core.levels import TRACE
from .core.models import DispatchOutcome


class CorrelationLogger:
    def __init__(
        self,
        function_name: str,
        invocation_id: str,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.function_name = function_name
        self.invocation_id = invocation_id
        self._logger = logger or logging.getLogger("logforwarder")

    def prefix(self, message: str) -> str:
        return f"[{self.function_name}][{self.invocation_id}] {message}"

    def log(self, level: int, message: str | Callable[[], str]) -> None:
        """Log ``message``; a callable is only invoked when ``level`` is enabled."""
        if not self._logger.isEnabledFor(level):
            return
        text = message() if callable(message) else message
        self._logger.log(level, "%s", self.prefix(text))

    def info(self, message: str | Callable[[], str]) -> None:
        self.log(logging.INFO, message)

    def warning(self, message: str | Callable[[], str]) -> None:
        self.log(logging.WARNING, message)

    def trace(self, message: str | Callable[[], str]) -> None:
        self.log(TRACE, message)

    def log_outcome(self, outcome: DispatchOutcome) -> None:
        """Summary line plus response body.

        Success: INFO summary, TRACE body. Failure: both at WARNING.
        """
        level = logging.INFO if outcome.success else logging.WARNING
        self.log(
            level,
            lambda: (
                f"Received: status = {outcome.status_code}, "
                f"id = {outcome.request_id or 'none'}"
            ),
        )
        self.log(
            TRACE if outcome.success else logging.WARNING,
            lambda: f"Response body: {_render_body(outcome.body)}",
        )


def _render_body(body: Any) -> str:
    if hasattr(body, "model_dump_json"):
        return body.model_dump_json(exclude_none=True)
    return str(body)
