from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reportdesk.core.db import Base
from reportdesk.models.enums import ReportType
from reportdesk.models.user import IdType, User
from reportdesk.models.utils import utcnow


REASON_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 2000


class Report(Base):
    __tablename__ = "reports"
    __table_args__ = (
        Index("idx_reports_type", "type"),
        Index("idx_reports_resolved_at", "resolved_at"),
        Index("idx_reports_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    type: Mapped[ReportType] = mapped_column(
        Enum(ReportType, native_enum=False, length=16, validate_strings=True, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    # id of the reported entity; it lives outside this service, so no foreign key
    target_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    reason: Mapped[str] = mapped_column(String(REASON_MAX_LENGTH), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(DESCRIPTION_MAX_LENGTH), nullable=True)
    submitted_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    resolved_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    # null means unresolved
    resolved_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    submitter: Mapped[Optional[User]] = relationship(User, foreign_keys=[submitted_by])
    resolver: Mapped[Optional[User]] = relationship(User, foreign_keys=[resolved_by])

    def __repr__(self) -> str:
        return f"<Report {self.id} {self.type.value if self.type else None} -> {self.target_id}>"
