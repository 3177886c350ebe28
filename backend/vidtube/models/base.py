"""Column and repr mixins shared by the account, edge, video and history models."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

# Never rendered by ReprMixin, even if a model lists them.
_SECRET_COLUMNS = frozenset({"password_hash", "refresh_token"})


class PKMixin:
    """Integer surrogate primary key named ``id``."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class CreatedAtMixin:
    """Insert timestamp for rows that are never updated (history, edges)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )


class TimestampMixin(CreatedAtMixin):
    """``created_at`` plus an ``updated_at`` bumped on every ORM update."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class ReprMixin:
    """
    ``<Model id=1 username='alice'>`` style repr.

    Models name the identifying attributes in ``__repr_fields__``. Credential
    columns are skipped so a logged or printed account never exposes them.
    """

    __repr_fields__: ClassVar[tuple[str, ...]] = ()

    def __repr__(self) -> str:
        parts = [f"id={getattr(self, 'id', None)}"]
        for name in self.__repr_fields__:
            if name in _SECRET_COLUMNS:
                continue
            parts.append(f"{name}={getattr(self, name, None)!r}")
        return f"<{self.__class__.__name__} {' '.join(parts)}>"
