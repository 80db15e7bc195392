"""Generic repository base for SQLAlchemy 2.x.

Repositories are persistence-only:

- They never implement use cases or domain policies.
- They never call commit/rollback; a unit of work owns the transaction.
- Writes are flushed immediately so constraint violations surface at the
  call site rather than at commit time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from groupware.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model`` and SHOULD override
    ``_filterable_fields`` to whitelist lookup columns.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        When no explicit session is provided the repository falls back to the
        Flask-scoped session exposed by ``groupware.core.extensions``.

        :param session: Session shared across the unit of work scope.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Whitelist mapping of public filter keys to model attributes."""
        return {}

    def _apply_equality_filters(self, stmt: Select[Any], filters: Mapping[str, Any]) -> Select[Any]:
        """Apply whitelisted equality filters; unknown keys raise.

        :raises ValueError: If a key is not exposed by ``_filterable_fields``.
        """
        allowed = self._filterable_fields()
        clauses: list[Any] = []
        for key, value in filters.items():
            col = allowed.get(key)
            if col is None:
                raise ValueError(f"Unknown filter field: {key!r}")
            clauses.append(col == value)
        return stmt.where(and_(*clauses)) if clauses else stmt

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize the PK.

        :param instance: New entity instance.
        :type instance: E
        :returns: The same instance after ``flush()``.
        :rtype: E
        """
        self.session.add(instance)
        self.flush()
        return instance

    def find_one(self, **filters: Any) -> E | None:
        """Find a single entity by whitelisted equality filters.

        :param filters: Field=value pairs (equality only).
        :returns: Entity or ``None``.
        :rtype: E | None
        """
        stmt: Select[Any] = self._apply_equality_filters(select(self.model), filters)
        result = self.session.execute(stmt).scalars().first()
        return cast(E | None, result)

    def remove(self, instance: E) -> None:
        """Hard-delete an entity and flush."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        """Flush pending changes to the database without committing."""
        self.session.flush()
