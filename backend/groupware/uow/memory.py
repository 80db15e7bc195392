"""
In-memory Unit of Work for unit tests and local experiments.
"""

from __future__ import annotations

from typing import Any

from groupware.services._shared.ports.refresh_token_store import (
    InMemoryRefreshTokenStore,
    RefreshTokenStore,
)
from groupware.uow.base import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """
    Wrap a store so services can run without a database.

    When the store is an :class:`InMemoryRefreshTokenStore` its state is
    snapshotted on enter and restored on rollback. Any other store (e.g. a
    ``unittest.mock`` double) is passed through untouched.

    :param store: Store exposed as ``refresh_tokens``.
    """

    def __init__(self, store: RefreshTokenStore | None = None) -> None:
        self.refresh_tokens = store if store is not None else InMemoryRefreshTokenStore()
        self.committed = 0
        self.rolled_back = 0
        self._snapshot: Any = None

    def __enter__(self) -> InMemoryUnitOfWork:
        if isinstance(self.refresh_tokens, InMemoryRefreshTokenStore):
            self._snapshot = self.refresh_tokens.snapshot()
        return self

    def commit(self) -> None:
        self.committed += 1
        self._snapshot = None

    def rollback(self) -> None:
        self.rolled_back += 1
        if self._snapshot is not None and isinstance(
            self.refresh_tokens, InMemoryRefreshTokenStore
        ):
            self.refresh_tokens.restore(self._snapshot)
        self._snapshot = None
