"""Build the refresh token service from application configuration."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import Any, cast

from flask import current_app

from groupware.core.config import BACKEND_REDIS, BACKEND_SQL
from groupware.infra.jwt.flask_jwt_token_signer import FlaskJWTTokenSigner
from groupware.services._shared.ports import Clock, SystemClock
from groupware.services.refresh_tokens.dto import RefreshTokenConfig
from groupware.services.refresh_tokens.service import RefreshTokenService
from groupware.uow.base import UnitOfWork

EXTENSION_KEY = "refresh_token_service"


def _ttl_from(config: Mapping[str, Any]) -> timedelta:
    raw = config.get("REFRESH_TOKEN_EXPIRES", timedelta(days=7))
    # Plain numbers are seconds, matching flask-jwt-extended's convention
    return raw if isinstance(raw, timedelta) else timedelta(seconds=int(raw))


def _uow_factory_for(backend: str, clock: Clock) -> Callable[[], UnitOfWork]:
    if backend == BACKEND_SQL:
        from groupware.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

        return SQLAlchemyUnitOfWork
    if backend == BACKEND_REDIS:
        from groupware.core.extensions import get_redis
        from groupware.uow.redis_uow import RedisUnitOfWork

        return lambda: RedisUnitOfWork(get_redis(), clock=clock)
    raise ValueError(
        f"Unknown REFRESH_TOKEN_BACKEND {backend!r}; expected {BACKEND_SQL!r} or {BACKEND_REDIS!r}."
    )


def build_refresh_token_service(
    config: Mapping[str, Any],
    *,
    clock: Clock | None = None,
) -> RefreshTokenService:
    """Assemble a :class:`RefreshTokenService` for the configured backend.

    :param config: Application config (``app.config``).
    :param clock: Optional time source; defaults to the system clock.
    :raises ValueError: If ``REFRESH_TOKEN_BACKEND`` is not supported.
    """
    clock = clock or SystemClock()
    backend = str(config.get("REFRESH_TOKEN_BACKEND", BACKEND_SQL)).strip().lower()
    return RefreshTokenService(
        signer=FlaskJWTTokenSigner(),
        clock=clock,
        token_cfg=RefreshTokenConfig(ttl=_ttl_from(config)),
        uow_factory=_uow_factory_for(backend, clock),
    )


def get_refresh_token_service() -> RefreshTokenService:
    """Return the service registered on the current application."""
    return cast(RefreshTokenService, current_app.extensions[EXTENSION_KEY])
