from __future__ import annotations

import threading

import pytest

from logforwarder.client.api import LogIngestClient
from logforwarder.client.provider import ClientProvider, build_client
from logforwarder.core.errors import ConfigurationError
from logforwarder.core.settings import PARAMETER_READ_TIMEOUT, load_settings


def test_build_client_uses_environment(lm_environment: dict[str, str]) -> None:
    with build_client() as client:
        assert client.base_url == "https://acme.logicmonitor.com/rest"
        assert client.timeout.connect == 10.0
        assert client.timeout.read == 10.0
        assert client.debugging is False


def test_build_client_from_explicit_settings() -> None:
    settings = load_settings(company_name="beta", connect_timeout_ms=1500)

    with build_client(settings) as client:
        assert client.base_url == "https://beta.logicmonitor.com/rest"
        assert client.timeout.connect == 1.5


def test_build_client_rejects_bad_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(PARAMETER_READ_TIMEOUT, "abc")

    with pytest.raises(ConfigurationError):
        build_client()


def test_provider_builds_once_and_memoizes() -> None:
    calls: list[int] = []

    def factory() -> LogIngestClient:
        calls.append(1)
        return LogIngestClient(company_name="acme", access_id="a", access_key="k")

    provider = ClientProvider(factory)
    assert provider.initialized is False

    first = provider.get()
    second = provider.get()

    assert first is second
    assert len(calls) == 1
    assert provider.initialized is True
    provider.reset()
    assert provider.initialized is False


@pytest.mark.critical
def test_concurrent_first_callers_share_one_client() -> None:
    callers = 16
    barrier = threading.Barrier(callers)
    constructed: list[LogIngestClient] = []
    results: list[LogIngestClient] = []
    results_lock = threading.Lock()

    def slow_factory() -> LogIngestClient:
        # Widen the race window while the first caller holds the lock
        threading.Event().wait(0.05)
        client = LogIngestClient(company_name="acme", access_id="a", access_key="k")
        constructed.append(client)
        return client

    provider = ClientProvider(slow_factory)

    def worker() -> None:
        barrier.wait()
        client = provider.get()
        with results_lock:
            results.append(client)

    threads = [threading.Thread(target=worker) for _ in range(callers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert len(constructed) == 1
    assert len(results) == callers
    assert all(client is constructed[0] for client in results)
    provider.reset()


def test_failed_construction_propagates_and_is_retried() -> None:
    attempts: list[int] = []

    def failing_factory() -> LogIngestClient:
        attempts.append(1)
        raise ConfigurationError("bad timeout")

    provider = ClientProvider(failing_factory)

    for _ in range(2):
        with pytest.raises(ConfigurationError):
            provider.get()

    assert len(attempts) == 2
    assert provider.initialized is False


def test_provider_default_factory_reads_environment(
    lm_environment: dict[str, str],
) -> None:
    provider = ClientProvider()
    assert provider.get().base_url == "https://acme.logicmonitor.com/rest"
    provider.reset()
