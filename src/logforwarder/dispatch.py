"""
Batch submission and outcome classification.

The dispatcher sends one batch in one request and always returns a
``DispatchOutcome``. Error statuses, transport errors and requests that
cannot be built are values, not exceptions. Only configuration errors
raised while building the client escape.
"""

from __future__ import annotations

from collections.abc import Sequence

import httpx
from pydantic import ValidationError

from .client.provider import ClientProvider
from .core import diagnostics
from .core.errors import ForwarderError
from .core.models import DispatchOutcome, LogEntry, LogResponse, ResponseHeaders
from .core.serialization import loads_lenient


def classify_response(response: httpx.Response) -> DispatchOutcome:
    headers = ResponseHeaders(response.headers.multi_items())
    text = response.text
    if not response.is_success:
        return DispatchOutcome(
            success=False,
            status_code=response.status_code,
            headers=headers,
            body=text,
        )
    data = loads_lenient(text) if text else None
    if not isinstance(data, dict):
        diagnostics.warn(
            "dispatcher",
            "unstructured success response",
            status_code=response.status_code,
            body=text[:256],
        )
        return DispatchOutcome(
            success=False, status_code=response.status_code, headers=headers, body=text
        )
    try:
        parsed = LogResponse.model_validate(data)
    except ValidationError as exc:
        diagnostics.warn(
            "dispatcher",
            "unexpected response body",
            status_code=response.status_code,
            error=str(exc),
        )
        return DispatchOutcome(
            success=False, status_code=response.status_code, headers=headers, body=text
        )
    return DispatchOutcome(
        success=parsed.success,
        status_code=response.status_code,
        headers=headers,
        body=parsed,
    )


class Dispatcher:
    """Submits a batch through the shared client."""

    def __init__(self, provider: ClientProvider) -> None:
        self._provider = provider

    def submit(self, batch: Sequence[LogEntry]) -> DispatchOutcome:
        if not batch:
            raise ValueError("Refusing to submit an empty batch")
        client = self._provider.get()
        try:
            response = client.ingest(batch)
        except (httpx.HTTPError, ForwarderError, UnicodeEncodeError) as exc:
            # no response was received
            diagnostics.warn(
                "dispatcher",
                "exception while delivering logs",
                endpoint=client.base_url,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return DispatchOutcome(
                success=False,
                status_code=0,
                headers=ResponseHeaders(),
                body=f"{type(exc).__name__}: {exc}",
            )
        return classify_response(response)
