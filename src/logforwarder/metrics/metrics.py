"""
Forwarding metrics.

Minimal Prometheus-compatible counters for the forwarder:
- entries submitted to the ingestion endpoint
- raw events dropped because they were not JSON objects
- submissions that succeeded / failed

In-memory counters are always tracked (useful for assertions in tests);
Prometheus collectors are created only when enabled, on an isolated
registry to avoid global duplication.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from prometheus_client import CollectorRegistry, Counter


@dataclass
class ForwarderMetrics:
    """Captured runtime metrics for quick assertions in tests."""

    entries_submitted: int = 0
    events_dropped: int = 0
    submissions_succeeded: int = 0
    submissions_failed: int = 0


class MetricsCollector:
    """Process-scoped, thread-safe metrics collector."""

    def __init__(self, *, enabled: bool = False) -> None:
        self._enabled = bool(enabled)
        self._lock = threading.Lock()
        self._state = ForwarderMetrics()

        self._c_entries: Any | None = None
        self._c_dropped: Any | None = None
        self._c_submissions: Any | None = None
        self._registry: CollectorRegistry | None = None

        if self._enabled:
            self._registry = CollectorRegistry()
            self._c_entries = Counter(
                "logforwarder_entries_submitted_total",
                "Total number of log entries submitted for ingestion",
                registry=self._registry,
            )
            self._c_dropped = Counter(
                "logforwarder_events_dropped_total",
                "Total number of raw events dropped as non-objects",
                registry=self._registry,
            )
            self._c_submissions = Counter(
                "logforwarder_submissions_total",
                "Total number of ingestion requests by outcome",
                ["outcome"],
                registry=self._registry,
            )

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def registry(self) -> CollectorRegistry | None:
        """Expose the isolated Prometheus registry when enabled."""
        return self._registry

    def record_events_dropped(self, count: int) -> None:
        if count <= 0:
            return
        with self._lock:
            self._state.events_dropped += count
        if self._c_dropped is not None:
            self._c_dropped.inc(count)

    def record_submission(self, *, entries: int, success: bool) -> None:
        with self._lock:
            self._state.entries_submitted += entries
            if success:
                self._state.submissions_succeeded += 1
            else:
                self._state.submissions_failed += 1
        if not self._enabled:
            return
        if self._c_entries is not None:
            self._c_entries.inc(entries)
        if self._c_submissions is not None:
            label = "success" if success else "failure"
            self._c_submissions.labels(outcome=label).inc()

    def snapshot(self) -> ForwarderMetrics:
        with self._lock:
            return ForwarderMetrics(
                entries_submitted=self._state.entries_submitted,
                events_dropped=self._state.events_dropped,
                submissions_succeeded=self._state.submissions_succeeded,
                submissions_failed=self._state.submissions_failed,
            )
