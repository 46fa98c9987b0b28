from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from reportdesk.schemas.report import ReportSummary


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)


class AuthStatus(BaseModel):
    is_authenticated: bool = Field(..., alias="isAuthenticated")
    email: Optional[str] = None
    role: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class IdentityOut(BaseModel):
    user_id: str
    email: str
    role: str


class AdminOverview(BaseModel):
    identity: IdentityOut
    reports: ReportSummary
