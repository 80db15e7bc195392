from __future__ import annotations

import threading
from datetime import datetime
from typing import Protocol

from groupware.models.refresh_token import RefreshToken


class RefreshTokenStore(Protocol):
    """
    Persistence for refresh tokens, keyed by identity and by token value.

    Implementations never commit on their own: the surrounding unit of work
    owns the transaction boundary.
    """

    def find_by_identity(self, identity: str) -> RefreshToken | None:
        """Return the token currently stored for ``identity`` (if any)."""

    def find_by_value(self, token_value: str) -> RefreshToken | None:
        """Return the token whose value equals ``token_value`` (if any)."""

    def save(self, token: RefreshToken) -> None:
        """Insert a new token record."""

    def delete(self, token: RefreshToken) -> None:
        """Remove a token record (hard delete)."""

    def delete_expired(self, now: datetime) -> int:
        """
        Remove every token with ``expiration_date <= now``.

        :returns: Number of tokens removed.
        """


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    In-memory refresh token store enforcing the same uniqueness rules as the
    relational table.

    .. note::
       Uses a threading lock so concurrent unit tests see consistent indexes.
    """

    def __init__(self) -> None:
        self._by_value: dict[str, RefreshToken] = {}
        self._by_identity: dict[str, str] = {}
        self._lock = threading.Lock()

    # ------------------------- helpers -------------------------

    def snapshot(self) -> tuple[dict[str, RefreshToken], dict[str, str]]:
        """Copy the indexes so a unit of work can restore them on rollback."""
        with self._lock:
            return dict(self._by_value), dict(self._by_identity)

    def restore(self, state: tuple[dict[str, RefreshToken], dict[str, str]]) -> None:
        with self._lock:
            self._by_value, self._by_identity = dict(state[0]), dict(state[1])

    def __len__(self) -> int:
        return len(self._by_value)

    # -------------------------- API ----------------------------

    def find_by_identity(self, identity: str) -> RefreshToken | None:
        value = self._by_identity.get(identity)
        return self._by_value.get(value) if value is not None else None

    def find_by_value(self, token_value: str) -> RefreshToken | None:
        return self._by_value.get(token_value)

    def save(self, token: RefreshToken) -> None:
        with self._lock:
            if token.token_value in self._by_value:
                raise ValueError("A refresh token with this value is already stored.")
            if token.identity in self._by_identity:
                raise ValueError(f"Identity {token.identity!r} already holds a refresh token.")
            self._by_value[token.token_value] = token
            self._by_identity[token.identity] = token.token_value

    def delete(self, token: RefreshToken) -> None:
        with self._lock:
            self._by_value.pop(token.token_value, None)
            if self._by_identity.get(token.identity) == token.token_value:
                del self._by_identity[token.identity]

    def delete_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [t for t in self._by_value.values() if t.is_expired(now)]
            for t in expired:
                self._by_value.pop(t.token_value, None)
                if self._by_identity.get(t.identity) == t.token_value:
                    del self._by_identity[t.identity]
            return len(expired)
