"""
LMv1 request signing.

The ingestion API authenticates each request with an HMAC-SHA256 signature
over the HTTP verb, the epoch in milliseconds, the exact request body and
the resource path.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import time


def lmv1_signature(
    access_key: str,
    *,
    method: str,
    epoch_ms: int,
    body: bytes,
    resource_path: str,
) -> str:
    message = method.upper().encode() + str(epoch_ms).encode() + body + resource_path.encode()
    digest = hmac.new(access_key.encode(), message, hashlib.sha256).hexdigest()
    return base64.b64encode(digest.encode()).decode()


def lmv1_authorization(
    access_id: str | None,
    access_key: str | None,
    *,
    method: str,
    body: bytes,
    resource_path: str,
    epoch_ms: int | None = None,
) -> str:
    """Build the ``Authorization`` header value.

    Missing credentials are signed as empty strings; the endpoint rejects
    them with an authentication error.
    """
    if epoch_ms is None:
        epoch_ms = int(time.time() * 1000)
    signature = lmv1_signature(
        access_key or "",
        method=method,
        epoch_ms=epoch_ms,
        body=body,
        resource_path=resource_path,
    )
    return f"LMv1 {access_id or ''}:{signature}:{epoch_ms}"
