"""SQLAlchemy-backed refresh token store."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete

from groupware.models.base import as_utc
from groupware.models.refresh_token import RefreshToken
from groupware.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Relational implementation of :class:`RefreshTokenStore`.

    Lookups go through the unique ``identity`` and ``token_value`` columns.
    It NEVER signs or validates tokens, it only stores rows.
    """

    model = RefreshToken

    def _filterable_fields(self):
        return {
            "identity": RefreshToken.identity,
            "token_value": RefreshToken.token_value,
        }

    # ---------------------------- Lookup helpers ----------------------------

    def find_by_identity(self, identity: str) -> RefreshToken | None:
        """Fetch the token issued to ``identity``.

        :param identity: Subject the token was issued for.
        :type identity: str
        :returns: Token or ``None`` when the identity holds none.
        :rtype: RefreshToken | None
        """
        return self.find_one(identity=identity)

    def find_by_value(self, token_value: str) -> RefreshToken | None:
        """Fetch the token whose value equals ``token_value``.

        :param token_value: Raw token presented by a client.
        :type token_value: str
        :returns: Token or ``None`` when unknown.
        :rtype: RefreshToken | None
        """
        return self.find_one(token_value=token_value)

    # ---------------------------- Writes ----------------------------

    def save(self, token: RefreshToken) -> None:
        self.add(token)

    def delete(self, token: RefreshToken) -> None:
        self.remove(token)

    def delete_expired(self, now: datetime) -> int:
        """Bulk-delete tokens with ``expiration_date <= now``.

        :returns: Number of rows removed.
        :rtype: int
        """
        stmt = (
            delete(RefreshToken)
            .where(RefreshToken.expiration_date <= as_utc(now))
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)
