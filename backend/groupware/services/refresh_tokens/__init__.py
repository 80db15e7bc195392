"""Refresh token issuance, validation and housekeeping."""

from .dto import RefreshTokenConfig
from .service import RefreshTokenService
from .wiring import build_refresh_token_service, get_refresh_token_service

__all__ = [
    "RefreshTokenConfig",
    "RefreshTokenService",
    "build_refresh_token_service",
    "get_refresh_token_service",
]
