# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

import redis  # type: ignore[import-untyped]
from redis.client import Pipeline  # type: ignore[import-untyped]

from groupware.models.base import as_utc
from groupware.models.refresh_token import RefreshToken
from groupware.services._shared.ports import Clock, RefreshTokenStore, SystemClock

# Keys outlive the token by this much so an expired token is still reported
# as expired (not unknown) for a while before Redis evicts it.
EXPIRY_GRACE = timedelta(days=1)


def _s(value: bytes | str | None, default: str = "") -> str:
    if value is None:
        return default
    return value.decode() if isinstance(value, bytes | bytearray) else str(value)


@dataclass(slots=True)
class RedisRefreshTokenStore(RefreshTokenStore):
    """
    Redis-backed refresh token store.

    Layout::

        rt:v:<token_value>  hash   {identity, expiration_date}
        rt:i:<identity>     string token_value

    Reads always hit the client directly. Writes are queued on ``writer`` when
    one is given (see :class:`~groupware.uow.redis_uow.RedisUnitOfWork`) and
    executed at commit; otherwise each write runs in its own MULTI/EXEC.

    :param r: A Redis client (already connected).
    :param writer: Optional transactional pipeline shared with a unit of work.
    :param clock: Time source used to compute key TTLs.
    """

    r: redis.Redis
    writer: Pipeline | None = None
    clock: Clock = field(default_factory=SystemClock)

    # -------------------- helpers --------------------

    @staticmethod
    def _kv(token_value: str) -> str:
        return f"rt:v:{token_value}"

    @staticmethod
    def _ki(identity: str) -> str:
        return f"rt:i:{identity}"

    def _ttl(self, expiration_date: datetime) -> int:
        remaining = as_utc(expiration_date) + EXPIRY_GRACE - self.clock.now()
        return max(1, int(remaining.total_seconds()))

    def _pipe(self) -> Pipeline:
        return self.writer if self.writer is not None else self.r.pipeline(transaction=True)

    def _flush(self, pipe: Pipeline) -> None:
        # Pipelines owned by a unit of work are executed at commit
        if pipe is not self.writer:
            pipe.execute()

    def _indexes(self, identity: str, token_value: str) -> bool:
        # Only drop an identity index that still points at the deleted token
        return _s(self.r.get(self._ki(identity))) == token_value

    def _load(self, token_value: str) -> RefreshToken | None:
        h = self.r.hgetall(self._kv(token_value))
        if not h:
            return None
        fields = {_s(k): _s(v) for k, v in h.items()}
        return RefreshToken(
            identity=fields["identity"],
            token_value=token_value,
            expiration_date=datetime.fromisoformat(fields["expiration_date"]),
        )

    # -------------------- API ------------------------

    def find_by_identity(self, identity: str) -> RefreshToken | None:
        token_value = self.r.get(self._ki(identity))
        if token_value is None:
            return None
        # Index may point at an evicted hash; treat as absent
        return self._load(_s(token_value))

    def find_by_value(self, token_value: str) -> RefreshToken | None:
        return self._load(token_value)

    def save(self, token: RefreshToken) -> None:
        ttl = self._ttl(token.expiration_date)
        key = self._kv(token.token_value)
        pipe = self._pipe()
        pipe.hset(
            key,
            mapping={
                "identity": token.identity,
                "expiration_date": as_utc(token.expiration_date).isoformat(),
            },
        )
        pipe.expire(key, ttl)
        pipe.set(self._ki(token.identity), token.token_value, ex=ttl)
        self._flush(pipe)

    def delete(self, token: RefreshToken) -> None:
        pipe = self._pipe()
        pipe.delete(self._kv(token.token_value))
        if self._indexes(token.identity, token.token_value):
            pipe.delete(self._ki(token.identity))
        self._flush(pipe)

    def delete_expired(self, now: datetime) -> int:
        now_utc = as_utc(now)
        expired: list[tuple[str, str]] = []
        for raw_key in self.r.scan_iter(match="rt:v:*"):
            key = _s(raw_key)
            token_value = key[len("rt:v:") :]
            token = self._load(token_value)
            if token is not None and token.is_expired(now_utc):
                expired.append((token_value, token.identity))

        if not expired:
            return 0

        pipe = self._pipe()
        for token_value, identity in expired:
            pipe.delete(self._kv(token_value))
            if self._indexes(identity, token_value):
                pipe.delete(self._ki(identity))
        self._flush(pipe)
        return len(expired)
