# groupware/services/refresh_tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True, slots=True)
class RefreshTokenConfig:
    """
    Token emission configuration.

    :param ttl: Refresh token lifetime; also drives ``expiration_date``.
    :type ttl: timedelta
    """

    ttl: timedelta

    def __post_init__(self) -> None:
        if self.ttl <= timedelta(0):
            raise ValueError("Refresh token ttl must be positive.")
