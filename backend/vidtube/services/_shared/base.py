# vidtube/services/_shared/base.py
from __future__ import annotations

from vidtube.services._shared.errors import ValidationError
from vidtube.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared input guards.
    * Keep services thin, orchestration-only, no web leakage.

    Notes
    -----
    Services never touch the global session directly; they always go through
    a Unit of Work.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork()

    # ----------------------- Validation utilities ---------------------------

    @staticmethod
    def require_fields(**values: str | None) -> None:
        """
        Reject blank-after-trim values.

        :param values: Field name to raw value.
        :raises ValidationError: Listing every blank field.
        """
        blank = [name for name, value in values.items() if not (value or "").strip()]
        if blank:
            raise ValidationError(
                "All fields are required", details=[f"{name}: required" for name in blank]
            )

