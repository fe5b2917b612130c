"""
Adapter for Azure diagnostic and activity log events.

Event Hub messages produced by Azure diagnostic settings carry a
``{"records": [...]}`` envelope; other producers send bare records. Every
record object becomes one ``LogEntry``:

- ``resourceId`` -> ``_lm.resourceId = {"system.azure.resourceid": <lowercased id>}``
- ``time`` (ISO 8601) -> epoch seconds
- message -> first non-blank of ``properties.log``, ``properties.message``,
  ``properties.Msg``, ``message``, ``resultDescription``; otherwise the
  whole record as compact JSON
- selected scalar top-level fields -> ``azure.*`` metadata

A malformed field never drops the record: the timestamp falls back to
``None`` (ingest time), the resource mapping to empty, the message to the
serialized record, and non-scalar metadata values are left out.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from ..core import diagnostics
from ..core.models import LogEntry, MetadataValue
from ..core.serialization import dumps_compact
from . import BaseAdapter

LM_RESOURCE_PROPERTY = "system.azure.resourceid"

_MESSAGE_PATHS: tuple[tuple[str, ...], ...] = (
    ("properties", "log"),
    ("properties", "message"),
    ("properties", "Msg"),
    ("message",),
    ("resultDescription",),
)

_METADATA_FIELDS: dict[str, str] = {
    "category": "azure.category",
    "operationName": "azure.operation_name",
    "level": "azure.level",
    "resultType": "azure.result_type",
    "correlationId": "azure.correlation_id",
    "callerIpAddress": "azure.caller_ip_address",
    "location": "azure.location",
}

_ISO_FRACTION = re.compile(r"(\.\d+)")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def parse_timestamp(value: Any) -> int | None:
    """Parse an ISO 8601 timestamp into epoch seconds.

    Accepts a trailing ``Z``, numeric offsets and fractions of any length
    (Azure emits 7 digits). Naive timestamps are taken as UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"
    # fromisoformat wants exactly six fraction digits on older interpreters
    text = _ISO_FRACTION.sub(lambda m: "." + m.group(1)[1:7].ljust(6, "0"), text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return int(parsed.timestamp())
    except (ValueError, OverflowError):
        return None


def _lookup(record: dict[str, Any], path: tuple[str, ...]) -> Any:
    current: Any = record
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


class AzureLogAdapter(BaseAdapter):
    name = "azure"

    def adapt(self, event: dict[str, Any]) -> list[LogEntry]:
        records = event.get("records")
        if not isinstance(records, list):
            return [self.create_entry(event)]
        entries: list[LogEntry] = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                diagnostics.debug(
                    "adapter",
                    "skipping non-object record",
                    index=index,
                    type=type(record).__name__,
                )
                continue
            entries.append(self.create_entry(record))
        return entries

    def create_entry(self, record: dict[str, Any]) -> LogEntry:
        return LogEntry(
            message=self._message(record),
            timestamp=self._timestamp(record),
            resource_id=self._resource_id(record),
            metadata=self._metadata(record),
        )

    def _resource_id(self, record: dict[str, Any]) -> dict[str, str]:
        value = record.get("resourceId")
        if isinstance(value, str) and value.strip():
            return {LM_RESOURCE_PROPERTY: value.strip().lower()}
        diagnostics.debug("adapter", "record without resourceId", value=value)
        return {}

    def _timestamp(self, record: dict[str, Any]) -> int | None:
        value = record.get("time")
        timestamp = parse_timestamp(value)
        if timestamp is None and value is not None:
            diagnostics.debug("adapter", "unparseable record time", value=value)
        return timestamp

    def _message(self, record: dict[str, Any]) -> str:
        for path in _MESSAGE_PATHS:
            value = _lookup(record, path)
            if isinstance(value, str) and value.strip():
                return value
        try:
            return dumps_compact(record)
        except TypeError:
            # e.g. integers wider than 64 bits
            return repr(record)

    def _metadata(self, record: dict[str, Any]) -> dict[str, MetadataValue]:
        metadata: dict[str, MetadataValue] = {}
        for source, target in _METADATA_FIELDS.items():
            value = record.get(source)
            if isinstance(value, int) and not _INT64_MIN <= value <= _INT64_MAX:
                # not representable in the JSON body
                metadata[target] = str(value)
            elif isinstance(value, (str, int, float, bool)):
                metadata[target] = value
        return metadata


__all__ = ["AzureLogAdapter", "LM_RESOURCE_PROPERTY", "parse_timestamp"]
