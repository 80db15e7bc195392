"""
groupware.services._shared.ports
================================

Collection of *ports* (hexagonal interfaces) that define the contracts the
refresh-token service depends on.

Modules
-------
- :mod:`token_signer`:
    Defines :class:`~.TokenSigner`: abstraction for producing signed tokens.

- :mod:`refresh_token_store`:
    Defines :class:`~.RefreshTokenStore`: persistence keyed by identity and
    by token value.

- :mod:`clock`:
    Defines :class:`~.Clock`: source of the current instant, injected so
    expiry checks stay deterministic under test.

Concrete adapters (SQLAlchemy, Redis, Flask-JWT-Extended) live under
``groupware.repositories`` and ``groupware.infra``. The in-memory doubles
exported here are meant for unit tests.
"""

from __future__ import annotations

from .clock import Clock, FixedClock, SystemClock
from .refresh_token_store import InMemoryRefreshTokenStore, RefreshTokenStore
from .token_signer import StubTokenSigner, TokenSigner

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "TokenSigner",
    "StubTokenSigner",
    "RefreshTokenStore",
    "InMemoryRefreshTokenStore",
]
