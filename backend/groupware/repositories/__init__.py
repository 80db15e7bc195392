"""Repository package exposing persistence-layer access for domain models."""

from __future__ import annotations

from groupware.repositories.base import BaseRepository
from groupware.repositories.refresh_token import RefreshTokenRepository

__all__ = [
    "BaseRepository",
    "RefreshTokenRepository",
]
