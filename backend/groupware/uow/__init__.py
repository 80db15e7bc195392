"""Unit of Work abstractions and concrete implementations.

This package re-exports the units of work the refresh-token service can run
in: SQLAlchemy (default), Redis, and an in-memory variant for tests.
"""

from .base import UnitOfWork
from .memory import InMemoryUnitOfWork
from .redis_uow import RedisUnitOfWork
from .sqlalchemy_uow import SQLAlchemyUnitOfWork

__all__ = [
    "UnitOfWork",
    "InMemoryUnitOfWork",
    "RedisUnitOfWork",
    "SQLAlchemyUnitOfWork",
]
