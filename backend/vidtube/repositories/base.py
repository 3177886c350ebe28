"""Generic repository base for SQLAlchemy 2.x.

Repositories are persistence-only:

- no commit/rollback; Units of Work own transactions,
- no business rules or cross-aggregate coordination,
- updates go through a per-repository ``_updatable_fields`` whitelist, so a
  request payload can never mass-assign ``password_hash`` or
  ``refresh_token``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import select
from sqlalchemy.orm import InstrumentedAttribute, Session

from vidtube.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Generic repository for a single aggregate.

    Subclasses MUST define ``model`` and MAY override ``_updatable_fields``.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Bind the repository to a session.

        :param session: Session shared across the Unit of Work scope. When
            omitted, the Flask-scoped ``db.session`` is used.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _updatable_fields(self) -> set[str]:
        """Whitelist of keys :meth:`assign_updates` may set."""
        return set()

    # ------------------------------ Internals --------------------------------

    def _sanitize_update_fields(
        self,
        fields: Mapping[str, Any],
        *,
        strict: bool = True,
    ) -> dict[str, Any]:
        """Return only whitelisted update keys.

        :param fields: Raw update mapping.
        :param strict: Raise on unknown keys instead of dropping them.
        :raises ValueError: If ``strict`` and unknown keys are present, or the
            repository exposes no updatable field at all.
        """
        allowed = self._updatable_fields()
        if not allowed:
            if fields and strict:
                raise ValueError("No updatable fields configured for this repository.")
            return {}

        unknown = [k for k in fields if k not in allowed]
        if unknown and strict:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        return {k: v for k, v in fields.items() if k in allowed}

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = select(self.model).where(pk_attr == entity_id)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def flush(self) -> None:
        self.session.flush()

    # ----------------------------- Safe updates -------------------------------

    def assign_updates(
        self,
        instance: E,
        fields: Mapping[str, Any],
        *,
        strict: bool = True,
        flush: bool = True,
    ) -> E:
        """Assign whitelisted keys through ``setattr`` so ``@validates`` runs.

        :param instance: Entity to mutate.
        :param fields: Mapping of public field names to new values.
        :param strict: Raise on unknown keys.
        :param flush: Flush the session after assignment.
        :returns: The mutated instance.
        """
        for key, value in self._sanitize_update_fields(fields, strict=strict).items():
            setattr(instance, key, value)
        if flush:
            self.flush()
        return instance
