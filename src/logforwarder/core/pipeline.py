"""
Batch pipeline: filter, adapt, flatten.

Each incoming element is classified; only structured objects reach the
adapter. Per-element results are flattened in input order, so entries from
one element stay contiguous and in the order the adapter produced them.
Adaptation may run on a thread pool because adapters are pure.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from .models import LogEntry
from .raw import RawObject, classify
from .serialization import loads_lenient

Adapter = Callable[[dict[str, Any]], list[LogEntry]]


@dataclass
class PipelineResult:
    entries: list[LogEntry] = field(default_factory=list)
    dropped: int = 0


def _default_adapter() -> Adapter:
    from ..adapters.azure import AzureLogAdapter

    return AzureLogAdapter()


def run_pipeline(
    raw_events: Iterable[Any],
    adapter: Adapter | None = None,
    *,
    max_workers: int | None = None,
) -> PipelineResult:
    """Adapt every structured object in ``raw_events`` into one batch.

    Args:
        raw_events: Decoded JSON values as delivered by the runtime.
        adapter: Callable mapping one object to its entries.
        max_workers: Adapt on a thread pool of this size when > 1.
    """
    adapt = adapter or _default_adapter()
    objects: list[dict[str, Any]] = []
    dropped = 0
    for value in raw_events:
        match classify(value):
            case RawObject(fields=fields):
                objects.append(fields)
            case _:
                dropped += 1

    per_object: Iterable[list[LogEntry]]
    if max_workers is not None and max_workers > 1 and len(objects) > 1:
        with ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="logforwarder-adapt"
        ) as pool:
            # map yields results in submission order
            per_object = list(pool.map(adapt, objects))
    else:
        per_object = (adapt(obj) for obj in objects)

    entries: list[LogEntry] = []
    for produced in per_object:
        entries.extend(produced)
    return PipelineResult(entries=entries, dropped=dropped)


def process_events(
    raw_events: Iterable[Any],
    adapter: Adapter | None = None,
    *,
    max_workers: int | None = None,
) -> list[LogEntry]:
    """Processes the received events and produces log entries."""
    return run_pipeline(raw_events, adapter, max_workers=max_workers).entries


def decode_event_bodies(bodies: Sequence[bytes | bytearray | memoryview | str]) -> list[Any]:
    """Decode Event Hub message bodies; invalid JSON decodes to ``None``."""
    return [loads_lenient(body) for body in bodies]
