"""
Data model shared by the adapter, pipeline and dispatcher.

- ``LogEntry``: one normalized LogicMonitor log entry
- ``LogResponse``: structured body returned by the ingestion endpoint
- ``ResponseHeaders``: multi-valued, case-insensitive header mapping
- ``DispatchOutcome``: result of a single batch submission
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, model_serializer

REQUEST_ID_HEADER = "x-request-id"
RESOURCE_ID_KEY = "_lm.resourceId"

MetadataValue = Union[str, int, float, bool]


class LogEntry(BaseModel):
    """A normalized log entry as accepted by ``POST /log/ingest``.

    Metadata fields are serialized flat next to ``message``; the resource
    mapping goes under ``_lm.resourceId`` and is omitted when empty, as is
    a missing timestamp (the endpoint then uses the ingest time).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str
    timestamp: int | None = None
    resource_id: dict[str, str] = Field(default_factory=dict)
    metadata: dict[str, MetadataValue] = Field(default_factory=dict)

    @model_serializer(mode="plain")
    def _to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.metadata)
        payload["message"] = self.message
        if self.timestamp is not None:
            payload["timestamp"] = self.timestamp
        if self.resource_id:
            payload[RESOURCE_ID_KEY] = dict(self.resource_id)
        return payload


class LogResponse(BaseModel):
    """Body of an ingestion reply; unknown keys are kept."""

    model_config = ConfigDict(extra="allow")

    success: bool = False
    message: str | None = None
    errors: list[Any] | None = None


class ResponseHeaders(Mapping[str, list[str]]):
    """Header name to list of values, looked up without regard to case.

    The original header spelling is kept for iteration and display.
    """

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        self._values: dict[str, list[str]] = {}
        self._names: dict[str, str] = {}
        for name, value in items:
            key = name.lower()
            self._names.setdefault(key, name)
            self._values.setdefault(key, []).append(value)

    @classmethod
    def from_mapping(cls, headers: Mapping[str, Any]) -> ResponseHeaders:
        pairs: list[tuple[str, str]] = []
        for name, value in headers.items():
            if isinstance(value, (list, tuple)):
                pairs.extend((name, str(v)) for v in value)
            else:
                pairs.append((name, str(value)))
        return cls(pairs)

    def __getitem__(self, name: str) -> list[str]:
        return list(self._values[name.lower()])

    def __iter__(self) -> Iterator[str]:
        return iter(self._names[key] for key in self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._values

    def first(self, name: str) -> str | None:
        """First value of ``name`` or ``None`` when absent or empty."""
        values = self._values.get(name.lower())
        if not values:
            return None
        return values[0]

    def __repr__(self) -> str:
        return f"ResponseHeaders({dict(self.items())!r})"


def get_request_id(headers: Mapping[str, list[str]]) -> str | None:
    """Read the request id from any header mapping, ignoring header case."""
    if isinstance(headers, ResponseHeaders):
        return headers.first(REQUEST_ID_HEADER)
    for name, values in headers.items():
        if name.lower() == REQUEST_ID_HEADER and values:
            return values[0]
    return None


@dataclass(frozen=True)
class DispatchOutcome:
    """Outcome of one submission.

    ``body`` is a ``LogResponse`` when the endpoint answered with a
    structured success reply, otherwise the raw response text or the
    transport error description. ``status_code`` is 0 when no response
    was received.
    """

    success: bool
    status_code: int
    headers: ResponseHeaders = field(default_factory=ResponseHeaders)
    body: LogResponse | str | None = None

    @property
    def request_id(self) -> str | None:
        return get_request_id(self.headers)
