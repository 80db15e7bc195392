"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from groupware.core.logger import (
    CorrelationFilter,
    JSONFormatter,
    configure_logging,
    correlation_scope,
    current_correlation_id,
)


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("groupware.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG
    assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)


def test_json_formatter_renders_whitelisted_extras() -> None:
    payload = json.loads(
        JSONFormatter().format(
            _record("refresh_token.expired", identity="ana@example.com", error_code="EXPIRED_TOKEN")
        )
    )

    assert payload["message"] == "refresh_token.expired"
    assert payload["level"] == "INFO"
    assert payload["identity"] == "ana@example.com"
    assert payload["error_code"] == "EXPIRED_TOKEN"
    assert payload["request_id"] is None


def test_json_formatter_ignores_unknown_extras() -> None:
    payload = json.loads(JSONFormatter().format(_record("x", token_value="secret")))
    assert "token_value" not in payload


def test_correlation_scope_stamps_records() -> None:
    record = _record("refresh_token.purged")

    with correlation_scope("abc-123") as correlation_id:
        CorrelationFilter().filter(record)
        assert current_correlation_id() == correlation_id == "abc-123"

    assert record.request_id == "abc-123"
    assert json.loads(JSONFormatter().format(record))["request_id"] == "abc-123"


def test_correlation_scope_generates_and_restores() -> None:
    with correlation_scope() as outer:
        assert outer
        with correlation_scope() as inner:
            assert inner != outer
        assert current_correlation_id() == outer

    assert current_correlation_id() is None
    record = _record("x")
    CorrelationFilter().filter(record)
    assert record.request_id is None


def test_service_logs_never_include_token_values(caplog) -> None:
    from groupware.services._shared.ports import FixedClock, StubTokenSigner
    from groupware.services.refresh_tokens import RefreshTokenService
    from groupware.uow import InMemoryUnitOfWork

    svc = RefreshTokenService(
        signer=StubTokenSigner(), clock=FixedClock(), uow_factory=InMemoryUnitOfWork
    )
    with caplog.at_level(logging.INFO, logger="groupware.services.refresh_tokens"):
        token_value = svc.create("ana@example.com", "ROLE_USER")

    assert [r.getMessage() for r in caplog.records] == ["refresh_token.issued"]
    assert all(token_value not in r.getMessage() for r in caplog.records)
    assert caplog.records[0].identity == "ana@example.com"
