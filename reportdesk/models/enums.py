from __future__ import annotations

import enum


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class ReportType(str, enum.Enum):
    REVIEW = "review"
    USER = "user"
    BUSINESS = "business"
    SERVICE = "service"
    OTHER = "other"
