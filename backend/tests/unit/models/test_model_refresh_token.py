"""Model tests for :class:`RefreshToken`."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from groupware.models import RefreshToken
from groupware.models.base import as_utc
from sqlalchemy.exc import IntegrityError
from tests.factories.refresh_token import ISSUED_AT, RefreshTokenFactory


def test_refresh_token_persists_with_timestamps(session):
    token = RefreshTokenFactory()
    session.flush()

    assert token.id is not None
    assert token.created_at is not None
    assert repr(token) == f"<RefreshToken id={token.id}>"
    assert "updated_at" not in RefreshToken.__table__.columns


def test_identity_is_unique(session):
    RefreshTokenFactory(identity="dup@example.com")
    session.flush()

    with pytest.raises(IntegrityError):
        RefreshTokenFactory(identity="dup@example.com")
        session.flush()
    session.rollback()


def test_token_value_is_unique(session):
    RefreshTokenFactory(token_value="same-value")
    session.flush()

    with pytest.raises(IntegrityError):
        RefreshTokenFactory(token_value="same-value")
        session.flush()
    session.rollback()


@pytest.mark.parametrize("field", ["identity", "token_value"])
def test_blank_text_fields_are_rejected(field):
    kwargs = {"identity": "a@example.com", "token_value": "v", "expiration_date": ISSUED_AT}
    kwargs[field] = "  "
    with pytest.raises(ValueError):
        RefreshToken(**kwargs)


class TestIsExpired:
    def test_future_expiration_is_live(self):
        token = RefreshTokenFactory.build(expiration_date=ISSUED_AT + timedelta(seconds=1))
        assert token.is_expired(ISSUED_AT) is False

    def test_expiration_instant_is_expired(self):
        token = RefreshTokenFactory.build(expiration_date=ISSUED_AT)
        assert token.is_expired(ISSUED_AT) is True

    def test_naive_expiration_is_read_as_utc(self):
        token = RefreshTokenFactory.build(expiration_date=datetime(2024, 1, 1, 12, 0))
        assert token.is_expired(datetime(2024, 1, 1, 11, 59, tzinfo=UTC)) is False
        assert token.is_expired(datetime(2024, 1, 1, 12, 0, tzinfo=UTC)) is True

    def test_other_timezones_are_normalized(self):
        plus_two = timezone(timedelta(hours=2))
        token = RefreshTokenFactory.build(expiration_date=datetime(2024, 1, 1, 12, 0, tzinfo=UTC))
        # 13:00+02:00 is 11:00 UTC
        assert token.is_expired(datetime(2024, 1, 1, 13, 0, tzinfo=plus_two)) is False


def test_as_utc_converts_aware_values():
    plus_two = timezone(timedelta(hours=2))
    value = as_utc(datetime(2024, 1, 1, 2, 0, tzinfo=plus_two))
    assert value == datetime(2024, 1, 1, 0, 0, tzinfo=UTC)
    assert value.tzinfo is UTC
