from __future__ import annotations

from datetime import timedelta
from typing import Protocol


class TokenSigner(Protocol):
    """Port for producing signed refresh tokens."""

    def sign(self, identity: str, role: str, ttl: timedelta) -> str:
        """
        Produce an opaque signed token for ``identity`` holding ``role``.

        :param identity: Subject of the token.
        :param role: Role claim embedded in the token.
        :param ttl: Lifetime of the token.
        :returns: Encoded token string.
        """
        ...


class StubTokenSigner(TokenSigner):
    """Deterministic signer used in unit tests."""

    def __init__(self) -> None:
        self._seq = 0
        self.calls: list[tuple[str, str, timedelta]] = []

    def sign(self, identity: str, role: str, ttl: timedelta) -> str:
        self._seq += 1
        self.calls.append((identity, role, ttl))
        return f"refresh.{identity}.{role}.{self._seq}"
