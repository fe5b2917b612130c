from __future__ import annotations

from typing import Any

from ..core.models import LogEntry


class BaseAdapter:
    """Base interface for event adapters.

    An adapter turns one raw JSON object into zero or more log entries. It
    must be pure: no I/O, no shared mutable state.
    """

    name = "base"

    def adapt(self, event: dict[str, Any]) -> list[LogEntry]:
        return []

    def __call__(self, event: dict[str, Any]) -> list[LogEntry]:
        return self.adapt(event)


from .azure import AzureLogAdapter  # noqa: E402

__all__ = ["BaseAdapter", "AzureLogAdapter"]
