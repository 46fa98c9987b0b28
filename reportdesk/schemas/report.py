"""
Report wire schemas.

Identifiers are 64-bit in the database; they always leave the service as
decimal strings and are accepted back as either integers or decimal strings.
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

from reportdesk.models.enums import ReportType
from reportdesk.models.report import DESCRIPTION_MAX_LENGTH, REASON_MAX_LENGTH
from reportdesk.models.user import MAX_ID


WireId = Annotated[int, PlainSerializer(lambda v: str(v), return_type=str)]


class ReportCreate(BaseModel):
    type: ReportType = Field(..., description="被举报对象类型")
    target_id: int = Field(..., gt=0, le=MAX_ID, description="被举报对象ID")
    reason: str = Field(..., min_length=1, max_length=REASON_MAX_LENGTH, description="举报原因")
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH, description="详细描述")
    submitted_by: Optional[int] = Field(None, gt=0, le=MAX_ID, description="举报人ID（未登录时可选）")

    @field_validator("reason", "description", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            value = value.strip()
        return value

    @field_validator("description")
    @classmethod
    def _empty_description_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class ReportResolve(BaseModel):
    id: int = Field(..., gt=0, le=MAX_ID, description="举报ID")
    user_id: Optional[int] = Field(None, gt=0, le=MAX_ID, description="处理人ID，必须与当前登录用户一致")


class UserBrief(BaseModel):
    id: WireId
    email: str
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ReportOut(BaseModel):
    id: WireId
    type: ReportType
    target_id: WireId
    reason: str
    description: Optional[str] = None
    submitted_by: Optional[WireId] = None
    resolved_by: Optional[WireId] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime
    submitter: Optional[UserBrief] = None
    resolver: Optional[UserBrief] = None

    model_config = ConfigDict(from_attributes=True)


class ReportCreated(BaseModel):
    message: str = "Report submitted successfully"
    data: ReportOut


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int = Field(..., alias="totalPages")

    model_config = ConfigDict(populate_by_name=True)


class ReportListResponse(BaseModel):
    data: list[ReportOut]
    pagination: Pagination


class ReportSummary(BaseModel):
    total: int
    resolved: int
    unresolved: int
