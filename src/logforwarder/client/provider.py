"""
Once-initialized, shared ingestion client handle.

The first ``get()`` builds the client from the environment; concurrent
first callers are serialized on a lock so exactly one client is created
and every caller sees the same, fully constructed instance.
"""

from __future__ import annotations

import threading
from typing import Callable

from ..core import diagnostics
from ..core.settings import ForwarderSettings, load_settings
from .api import LogIngestClient


def build_client(settings: ForwarderSettings | None = None) -> LogIngestClient:
    """Configure a client from settings, reading the environment by default.

    Raises:
        ConfigurationError: If an optional setting cannot be coerced.
    """
    cfg = settings if settings is not None else load_settings()
    client = LogIngestClient.from_settings(cfg)
    diagnostics.debug(
        "client",
        "ingestion client configured",
        base_url=client.base_url,
        connect_timeout=cfg.connect_timeout_seconds,
        read_timeout=cfg.read_timeout_seconds,
        debugging=cfg.debugging_enabled,
    )
    return client


class ClientProvider:
    """Lazily builds and memoizes one ``LogIngestClient``.

    The initialization must be lazy: settings are read on first use, not at
    import time. A factory error propagates and leaves the provider empty.
    """

    def __init__(self, factory: Callable[[], LogIngestClient] = build_client) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._client: LogIngestClient | None = None

    def get(self) -> LogIngestClient:
        client = self._client
        if client is not None:
            return client
        with self._lock:
            if self._client is None:
                self._client = self._factory()
            return self._client

    @property
    def initialized(self) -> bool:
        return self._client is not None

    def reset(self) -> None:
        """Close and drop the cached client (for testing only)."""
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()
