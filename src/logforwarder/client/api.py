"""
LogicMonitor log ingestion client on top of ``httpx.Client``.

One client is built per process and reused by every invocation. It sends a
whole batch as a single signed ``POST /log/ingest`` and hands the response
back untouched; classifying it is the dispatcher's job.
"""

from __future__ import annotations

import logging
import types
from collections.abc import Sequence
from typing import Any

import httpx

from .._version import __version__
from ..core.levels import TRACE
from ..core.models import LogEntry
from ..core.serialization import serialize_batch
from ..core.settings import ForwarderSettings
from .auth import lmv1_authorization

__all__ = ["LogIngestClient", "INGEST_PATH", "build_base_url"]

INGEST_PATH = "/log/ingest"
USER_AGENT = f"lm-logs-azure-python/{__version__}"

_logger = logging.getLogger("logforwarder.client")


def build_base_url(company_name: str | None) -> str:
    return f"https://{company_name}.logicmonitor.com/rest"


def _log_request(request: httpx.Request) -> None:
    _logger.debug("HTTP request: %s %s", request.method, request.url)
    if _logger.isEnabledFor(TRACE):
        _logger.log(TRACE, "HTTP request headers: %s", dict(request.headers))


def _log_response(response: httpx.Response) -> None:
    response.read()
    _logger.debug(
        "HTTP response: %s %s -> %d",
        response.request.method,
        response.request.url,
        response.status_code,
    )
    _logger.debug("HTTP response body: %s", response.text)


class LogIngestClient:
    """Signed ingestion client.

    ``transport`` allows tests to plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        *,
        company_name: str | None,
        access_id: str | None,
        access_key: str | None,
        connect_timeout: float = 10.0,
        read_timeout: float = 10.0,
        debugging: bool = False,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._access_id = access_id
        self._access_key = access_key
        self.base_url = base_url or build_base_url(company_name)
        self.timeout = httpx.Timeout(
            connect=connect_timeout, read=read_timeout, write=read_timeout, pool=connect_timeout
        )
        self.debugging = debugging
        event_hooks: dict[str, list[Any]] = {"request": [], "response": []}
        if debugging:
            event_hooks["request"].append(_log_request)
            event_hooks["response"].append(_log_response)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            event_hooks=event_hooks,
            headers={"User-Agent": USER_AGENT},
        )

    @classmethod
    def from_settings(
        cls,
        settings: ForwarderSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> LogIngestClient:
        return cls(
            company_name=settings.company_name,
            access_id=settings.access_id,
            access_key=settings.access_key,
            connect_timeout=settings.connect_timeout_seconds,
            read_timeout=settings.read_timeout_seconds,
            debugging=settings.debugging_enabled,
            transport=transport,
        )

    def ingest(self, entries: Sequence[LogEntry]) -> httpx.Response:
        """POST the entries as one JSON array.

        Raises ``httpx.HTTPError`` on transport failures and
        ``ForwarderError`` when the entries cannot be serialized. HTTP error
        statuses are returned, not raised.
        """
        body = serialize_batch(entries)
        headers = {
            "Content-Type": "application/json",
            "Authorization": lmv1_authorization(
                self._access_id,
                self._access_key,
                method="POST",
                body=body,
                resource_path=INGEST_PATH,
            ),
        }
        return self._client.post(INGEST_PATH, content=body, headers=headers)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> LogIngestClient:
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc: BaseException | None,
        _tb: types.TracebackType | None,
    ) -> None:
        self.close()
