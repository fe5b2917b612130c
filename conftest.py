"""
Root pytest configuration.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from logforwarder.client.api import LogIngestClient
from logforwarder.core.settings import (
    PARAMETER_ACCESS_ID,
    PARAMETER_ACCESS_KEY,
    PARAMETER_COMPANY_NAME,
    PARAMETER_CONNECT_TIMEOUT,
    PARAMETER_DEBUGGING,
    PARAMETER_READ_TIMEOUT,
)

ALL_PARAMETERS = (
    PARAMETER_COMPANY_NAME,
    PARAMETER_ACCESS_ID,
    PARAMETER_ACCESS_KEY,
    PARAMETER_CONNECT_TIMEOUT,
    PARAMETER_READ_TIMEOUT,
    PARAMETER_DEBUGGING,
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers",
        "critical: Tests that must never fail - core functionality",
    )
    config.addinivalue_line(
        "markers",
        "integration: Tests exercising the whole forwarding path",
    )
    config.addinivalue_line(
        "markers",
        "property: Property-based tests (may be slow)",
    )


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Start every test without forwarder settings in the environment."""
    for name in ALL_PARAMETERS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def lm_environment(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    values = {
        PARAMETER_COMPANY_NAME: "acme",
        PARAMETER_ACCESS_ID: "id-123",
        PARAMETER_ACCESS_KEY: "key-456",
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    return values


class RecordingEndpoint:
    """``httpx.MockTransport`` handler returning queued outcomes."""

    def __init__(self, outcomes: list[Any]) -> None:
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def make_client() -> Generator[Callable[..., tuple[LogIngestClient, RecordingEndpoint]], None, None]:
    """Build a client wired to a recording mock endpoint."""
    created: list[LogIngestClient] = []

    def _make(
        *outcomes: Any, **kwargs: Any
    ) -> tuple[LogIngestClient, RecordingEndpoint]:
        endpoint = RecordingEndpoint(list(outcomes))
        params: dict[str, Any] = {
            "company_name": "acme",
            "access_id": "id-123",
            "access_key": "key-456",
        }
        params.update(kwargs)
        client = LogIngestClient(transport=endpoint.transport, **params)
        created.append(client)
        return client, endpoint

    yield _make
    for client in created:
        client.close()
