"""Refresh token model: one persisted refresh credential per identity."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from groupware.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, as_utc


class RefreshToken(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Issued refresh credential.

    Rows are never updated in place: replacing a token is always a delete of
    the previous row followed by an insert of the new one.

    Fields
    ------
    identity : str
        Subject the token was issued for (e.g. account email). At most one
        row per identity.
    token_value : str
        Opaque signed token string handed to the client.
    expiration_date : datetime
        Instant from which the token is no longer valid (UTC).
    """

    __tablename__ = "refresh_tokens"

    identity: Mapped[str] = mapped_column(String(254), nullable=False)
    token_value: Mapped[str] = mapped_column(String(1024), nullable=False)
    expiration_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("identity", name="uq_refresh_tokens_identity"),
        UniqueConstraint("token_value", name="uq_refresh_tokens_token_value"),
        Index("ix_refresh_tokens_expiration_date", "expiration_date"),
    )

    def is_expired(self, now: datetime) -> bool:
        """
        Tell whether the token is past its expiration at ``now``.

        :param now: Reference instant (timezone-aware).
        :type now: datetime
        :returns: ``True`` when ``expiration_date <= now``.
        :rtype: bool
        """
        return as_utc(self.expiration_date) <= as_utc(now)

    @validates("identity", "token_value")
    def _require_text(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{key} is required.")
        return value
