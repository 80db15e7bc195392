"""
Redis implementation of UnitOfWork.
"""

from __future__ import annotations

import redis  # type: ignore[import-untyped]

from groupware.infra.redis.redis_refresh_token_store import RedisRefreshTokenStore
from groupware.services._shared.ports import Clock, SystemClock
from groupware.uow.base import UnitOfWork


class RedisUnitOfWork(UnitOfWork):
    """
    Queue every write of the use-case on one ``MULTI/EXEC`` pipeline.

    Reads are served straight from Redis and do not observe writes queued in
    the same unit of work.

    :param r: A Redis client (already connected).
    :param clock: Time source forwarded to the store for TTL computation.
    """

    def __init__(self, r: redis.Redis, *, clock: Clock | None = None) -> None:
        self.r = r
        self._pipe = r.pipeline(transaction=True)
        self.refresh_tokens = RedisRefreshTokenStore(
            r=r, writer=self._pipe, clock=clock or SystemClock()
        )

    def __enter__(self) -> RedisUnitOfWork:
        return self

    def commit(self) -> None:
        self._pipe.execute()

    def rollback(self) -> None:
        self._pipe.reset()
