"""
Report listing: parameter normalization, filtering, sorting and pagination.

Client-supplied values never reach the query directly. Status and type are
validated against closed sets, and the sort field is looked up in
``SORT_COLUMNS``.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import ColumnElement

from reportdesk.core.config import get_settings
from reportdesk.core.errors import ReportValidationError
from reportdesk.models.enums import ReportType
from reportdesk.models.report import Report
from reportdesk.schemas.report import Pagination, ReportListResponse, ReportOut, ReportSummary
from reportdesk.services.report_store import ReportStore


logger = logging.getLogger(__name__)

STATUS_VALUES = ("all", "resolved", "unresolved")
TYPE_VALUES = ("all",) + tuple(t.value for t in ReportType)
SORT_COLUMNS: dict[str, Any] = {
    "id": Report.id,
    "created_at": Report.created_at,
    "resolved_at": Report.resolved_at,
    "type": Report.type,
}
DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = "desc"


@dataclass(frozen=True)
class ReportQueryParams:
    status: str = "all"
    type: str = "all"
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER
    page: int = 1
    limit: int = 10

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def _clean(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _positive_int(value: Any, default: int, code: str) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ReportValidationError(code) from None
    if number < 1:
        raise ReportValidationError(code)
    return number


def normalize_query(
    status: Optional[str] = None,
    type: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: Any = None,
    limit: Any = None,
) -> ReportQueryParams:
    settings = get_settings()

    status_norm = _clean(status) or "all"
    if status_norm not in STATUS_VALUES:
        raise ReportValidationError("invalid_status")

    type_norm = _clean(type) or "all"
    if type_norm not in TYPE_VALUES:
        raise ReportValidationError("invalid_type")

    sort_by_norm = (sort_by or "").strip()
    if sort_by_norm not in SORT_COLUMNS:
        if sort_by_norm:
            logger.info("reports.query unknown sortBy=%r -> %s", sort_by_norm[:64], DEFAULT_SORT_BY)
        sort_by_norm = DEFAULT_SORT_BY

    sort_order_norm = _clean(sort_order)
    if sort_order_norm not in ("asc", "desc"):
        sort_order_norm = DEFAULT_SORT_ORDER

    page_num = _positive_int(page, 1, "invalid_page")
    limit_num = min(_positive_int(limit, settings.reports_default_page_size, "invalid_limit"), settings.reports_max_page_size)

    return ReportQueryParams(
        status=status_norm,
        type=type_norm,
        sort_by=sort_by_norm,
        sort_order=sort_order_norm,
        page=page_num,
        limit=limit_num,
    )


def build_filters(params: ReportQueryParams) -> list[ColumnElement[bool]]:
    filters: list[ColumnElement[bool]] = []
    if params.status == "resolved":
        filters.append(Report.resolved_at.is_not(None))
    elif params.status == "unresolved":
        filters.append(Report.resolved_at.is_(None))
    if params.type != "all":
        filters.append(Report.type == ReportType(params.type))
    return filters


def build_order_by(params: ReportQueryParams) -> list[Any]:
    column = SORT_COLUMNS[params.sort_by]
    if params.sort_order == "asc":
        order = [column.asc()]
        tiebreak = Report.id.asc()
    else:
        order = [column.desc()]
        tiebreak = Report.id.desc()
    if params.sort_by != "id":
        order.append(tiebreak)
    return order


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total else 0


def list_reports(store: ReportStore, params: ReportQueryParams) -> ReportListResponse:
    filters = build_filters(params)
    total = store.count(filters)
    # past the last page there is nothing to fetch, and the offset may not fit the column type
    rows = []
    if params.skip < total:
        rows = store.find_many(filters, build_order_by(params), params.skip, params.limit)
    return ReportListResponse(
        data=[ReportOut.model_validate(r) for r in rows],
        pagination=Pagination(
            total=total,
            page=params.page,
            limit=params.limit,
            total_pages=total_pages(total, params.limit),
        ),
    )


def report_summary(store: ReportStore) -> ReportSummary:
    resolved = store.count([Report.resolved_at.is_not(None)])
    unresolved = store.count([Report.resolved_at.is_(None)])
    return ReportSummary(total=resolved + unresolved, resolved=resolved, unresolved=unresolved)
