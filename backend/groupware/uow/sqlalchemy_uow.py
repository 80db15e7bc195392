"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from groupware.core.extensions import db
from groupware.repositories import RefreshTokenRepository
from groupware.uow.base import UnitOfWork


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories, so a token
    replacement (delete + insert) lands in one transaction.
    """

    def __init__(self) -> None:
        self.session = db.session
        self.refresh_tokens = RefreshTokenRepository(session=self.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first statement.
        return self

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
