"""
Structured internal diagnostics.

Components report non-fatal problems (a malformed record field, a response
body that is not JSON) through ``warn``/``debug`` with a component name and
key-value fields. Output goes to the ``logforwarder.diagnostics`` logger and
never raises.
"""

from __future__ import annotations

import logging
from typing import Any

_logger = logging.getLogger("logforwarder.diagnostics")


def _emit(level: int, component: str, message: str, fields: dict[str, Any]) -> None:
    if not _logger.isEnabledFor(level):
        return
    try:
        rendered = " ".join(f"{key}={value!r}" for key, value in sorted(fields.items()))
        _logger.log(
            level,
            "[%s] %s%s",
            component,
            message,
            f" ({rendered})" if rendered else "",
            extra={"component": component, "diagnostics": dict(fields)},
        )
    except Exception:
        # Diagnostics must never break the caller
        return


def warn(component: str, message: str, **fields: Any) -> None:
    _emit(logging.WARNING, component, message, fields)


def debug(component: str, message: str, **fields: Any) -> None:
    _emit(logging.DEBUG, component, message, fields)
