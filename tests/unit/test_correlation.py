from __future__ import annotations

import logging

import pytest

from logforwarder.core.levels import TRACE
from logforwarder.core.models import DispatchOutcome, LogResponse, ResponseHeaders
from logforwarder.correlation import CorrelationLogger


@pytest.fixture
def log() -> CorrelationLogger:
    return CorrelationLogger("LogForwarder", "inv-1", logging.getLogger("logforwarder.test"))


def _lines(caplog: pytest.LogCaptureFixture) -> list[tuple[int, str]]:
    return [(r.levelno, r.getMessage()) for r in caplog.records if r.name == "logforwarder.test"]


def test_lines_are_prefixed(log: CorrelationLogger, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="logforwarder.test")

    log.info("No entries to send")

    assert _lines(caplog) == [(logging.INFO, "[LogForwarder][inv-1] No entries to send")]


def test_lazy_message_not_built_when_disabled(
    log: CorrelationLogger, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="logforwarder.test")
    built: list[int] = []

    def expensive() -> str:
        built.append(1)
        return "payload"

    log.trace(expensive)

    assert built == []
    assert _lines(caplog) == []


def test_trace_level_emits_when_enabled(
    log: CorrelationLogger, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(TRACE, logger="logforwarder.test")

    log.trace(lambda: "Request body: []")

    assert _lines(caplog) == [(TRACE, "[LogForwarder][inv-1] Request body: []")]
    assert caplog.records[-1].levelname == "TRACE"


def test_success_outcome_logging(log: CorrelationLogger, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(TRACE, logger="logforwarder.test")
    outcome = DispatchOutcome(
        success=True,
        status_code=202,
        headers=ResponseHeaders([("x-request-id", "abc123")]),
        body=LogResponse(success=True, message="Accepted"),
    )

    log.log_outcome(outcome)

    assert _lines(caplog) == [
        (logging.INFO, "[LogForwarder][inv-1] Received: status = 202, id = abc123"),
        (TRACE, '[LogForwarder][inv-1] Response body: {"success":true,"message":"Accepted"}'),
    ]


def test_failure_outcome_logging(log: CorrelationLogger, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="logforwarder.test")
    outcome = DispatchOutcome(success=False, status_code=500, body="boom")

    log.log_outcome(outcome)

    assert _lines(caplog) == [
        (logging.WARNING, "[LogForwarder][inv-1] Received: status = 500, id = none"),
        (logging.WARNING, "[LogForwarder][inv-1] Response body: boom"),
    ]
