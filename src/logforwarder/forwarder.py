"""
One forwarding invocation: adapt, short-circuit, dispatch, report.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .client.provider import ClientProvider
from .core.errors import ForwarderError
from .core.models import DispatchOutcome, LogEntry
from .core.pipeline import Adapter, run_pipeline
from .core.serialization import serialize_batch
from .correlation import CorrelationLogger
from .dispatch import Dispatcher
from .metrics.metrics import MetricsCollector


def _render_request(entries: list[LogEntry]) -> str:
    try:
        return serialize_batch(entries).decode()
    except ForwarderError as exc:
        return f"unavailable ({exc.cause})"


@dataclass(frozen=True)
class InvocationContext:
    """Function name, invocation id and log sink of one invocation."""

    function_name: str
    invocation_id: str
    logger: logging.Logger | logging.LoggerAdapter = field(
        default_factory=lambda: logging.getLogger("logforwarder")
    )

    @classmethod
    def from_azure(
        cls, context: Any, logger: logging.Logger | None = None
    ) -> InvocationContext:
        """Build from an ``azure.functions.Context``."""
        return cls(
            function_name=str(getattr(context, "function_name", "")),
            invocation_id=str(getattr(context, "invocation_id", "")),
            logger=logger or logging.getLogger("logforwarder"),
        )


class LogForwarder:
    """Forwards Azure log events to LogicMonitor.

    The client provider is shared by every invocation handled by this
    forwarder; everything else is invocation-local.
    """

    def __init__(
        self,
        provider: ClientProvider | None = None,
        *,
        adapter: Adapter | None = None,
        metrics: MetricsCollector | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.provider = provider or ClientProvider()
        self._dispatcher = Dispatcher(self.provider)
        self._adapter = adapter
        self._metrics = metrics
        self._max_workers = max_workers

    def forward(
        self, log_events: Iterable[Any], context: InvocationContext
    ) -> DispatchOutcome | None:
        """Forward one delivered batch.

        Returns the submission outcome, or ``None`` when there was nothing
        to send. Failed submissions are logged, not raised.
        """
        log = CorrelationLogger(
            context.function_name, context.invocation_id, context.logger
        )
        result = run_pipeline(log_events, self._adapter, max_workers=self._max_workers)
        if self._metrics is not None:
            self._metrics.record_events_dropped(result.dropped)

        entries = result.entries
        if not entries:
            log.info("No entries to send")
            return None

        log.info(f"Sending {len(entries)} log entries")
        log.trace(lambda: "Request body: " + _render_request(entries))
        outcome = self._dispatcher.submit(entries)
        log.log_outcome(outcome)
        if self._metrics is not None:
            self._metrics.record_submission(entries=len(entries), success=outcome.success)
        return outcome
