# groupware/services/_shared/base.py
from __future__ import annotations

from collections.abc import Callable

from groupware.uow.base import UnitOfWork


def _default_uow() -> UnitOfWork:
    from groupware.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

    return SQLAlchemyUnitOfWork()


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide a helper to run read-write units of work.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never touch a global session; they always go through a
      Unit of Work obtained from :meth:`rw_uow`.
    - Domain rules (e.g. expiry) live in the models.
    """

    def __init__(self, *, uow_factory: Callable[[], UnitOfWork] | None = None) -> None:
        """
        Initialize the base service.

        :param uow_factory: Callable returning a fresh Unit of Work per use-case.
            Defaults to the SQLAlchemy implementation.
        :type uow_factory: Callable[[], UnitOfWork] | None
        """
        self._uow_factory = uow_factory or _default_uow

    def rw_uow(self) -> UnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Unit of Work that commits on success and rolls back on error.
        :rtype: UnitOfWork
        """
        return self._uow_factory()
