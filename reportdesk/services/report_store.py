from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from reportdesk.core.errors import PersistenceError, ReportValidationError
from reportdesk.models.enums import ReportType
from reportdesk.models.report import Report
from reportdesk.models.user import User


logger = logging.getLogger(__name__)


class ReportStore:
    """Persistence boundary for reports and the users they reference."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(
        self,
        type: ReportType | str | None,
        target_id: int | None,
        reason: str | None,
        description: Optional[str] = None,
        submitted_by: Optional[int] = None,
    ) -> Report:
        missing = [
            name
            for name, value in (("type", type), ("target_id", target_id), ("reason", reason))
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ReportValidationError("missing_fields", f"missing required fields: {', '.join(missing)}")
        try:
            report_type = ReportType(type)
        except ValueError:
            raise ReportValidationError("invalid_type") from None
        rec = Report(
            type=report_type,
            target_id=int(target_id),
            reason=reason.strip(),
            description=description,
            submitted_by=submitted_by,
        )
        try:
            self.db.add(rec)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("report.create failed type=%s target_id=%s", report_type.value, target_id)
            raise PersistenceError(str(e)) from e
        self.db.refresh(rec)
        return rec

    def find_many(
        self,
        filters: Sequence[ColumnElement[bool]],
        order_by: Sequence[Any],
        skip: int,
        take: int,
    ) -> list[Report]:
        stmt = (
            select(Report)
            .options(selectinload(Report.submitter), selectinload(Report.resolver))
            .where(*filters)
            .order_by(*order_by)
            .offset(skip)
            .limit(take)
        )
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            logger.exception("report.find_many failed")
            raise PersistenceError(str(e)) from e

    def count(self, filters: Sequence[ColumnElement[bool]]) -> int:
        stmt = select(func.count()).select_from(Report).where(*filters)
        try:
            return int(self.db.execute(stmt).scalar() or 0)
        except SQLAlchemyError as e:
            logger.exception("report.count failed")
            raise PersistenceError(str(e)) from e

    def get(self, report_id: int) -> Optional[Report]:
        stmt = (
            select(Report)
            .options(selectinload(Report.submitter), selectinload(Report.resolver))
            .where(Report.id == report_id)
            .execution_options(populate_existing=True)
        )
        try:
            return self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception("report.get failed id=%s", report_id)
            raise PersistenceError(str(e)) from e

    def update(self, report_id: int, patch: dict[str, Any], only_unresolved: bool = False) -> int:
        """Apply ``patch`` in one UPDATE statement and return the affected row count."""
        stmt = update(Report).where(Report.id == report_id)
        if only_unresolved:
            stmt = stmt.where(Report.resolved_at.is_(None))
        stmt = stmt.values(**patch).execution_options(synchronize_session=False)
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("report.update failed id=%s", report_id)
            raise PersistenceError(str(e)) from e
        return result.rowcount or 0

    def get_user(self, user_id: int) -> Optional[User]:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.exception("user.get failed id=%s", user_id)
            raise PersistenceError(str(e)) from e

    def get_user_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip())
        try:
            return self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception("user.get_by_email failed")
            raise PersistenceError(str(e)) from e
