from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Source of the current instant (timezone-aware UTC)."""

    def now(self) -> datetime: ...


class SystemClock(Clock):
    """Wall clock backed by :func:`datetime.now`."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock(Clock):
    """Deterministic clock used in unit tests; moves only when told to."""

    def __init__(self, at: datetime | None = None) -> None:
        self._at = at or datetime(2024, 1, 1, tzinfo=UTC)

    def now(self) -> datetime:
        return self._at

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock forward by ``delta`` and return the new instant."""
        self._at = self._at + delta
        return self._at
