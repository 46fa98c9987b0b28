from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from reportdesk.core.db import get_db
from reportdesk.core.errors import AuthzDeniedError, ReportValidationError
from reportdesk.core.security import SessionIdentity
from reportdesk.deps.auth import get_optional_identity, require_admin
from reportdesk.schemas.report import ReportCreate, ReportCreated, ReportListResponse, ReportOut, ReportResolve
from reportdesk.services.report_query import list_reports, normalize_query
from reportdesk.services.report_store import ReportStore
from reportdesk.services.resolution import resolve_report


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


def get_report_store(db: Session = Depends(get_db)) -> ReportStore:
    return ReportStore(db)


@router.post("", status_code=201, response_model=ReportCreated)
def submit_report(
    payload: ReportCreate,
    identity: Optional[SessionIdentity] = Depends(get_optional_identity),
    store: ReportStore = Depends(get_report_store),
) -> ReportCreated:
    # a signed-in caller is always the submitter; the body value only counts for anonymous calls
    submitted_by = identity.user_id if identity else payload.submitted_by
    if identity is None and submitted_by is not None and store.get_user(submitted_by) is None:
        raise ReportValidationError("submitter_not_found")

    rec = store.create(
        type=payload.type,
        target_id=payload.target_id,
        reason=payload.reason,
        description=payload.description,
        submitted_by=submitted_by,
    )
    logger.info("report.created id=%s type=%s target=%s by=%s", rec.id, rec.type.value, rec.target_id, submitted_by)
    return ReportCreated(data=ReportOut.model_validate(rec))


@router.get("", response_model=ReportListResponse)
def get_reports(
    status: Optional[str] = Query(None, description="all | resolved | unresolved"),
    type: Optional[str] = Query(None, description="all | review | user | business | service | other"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="id | created_at | resolved_at | type"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc | desc"),
    page: Optional[str] = Query(None, description="页码，从1开始"),
    limit: Optional[str] = Query(None, description="每页数量"),
    identity: SessionIdentity = Depends(require_admin),
    store: ReportStore = Depends(get_report_store),
) -> ReportListResponse:
    """
    分页查询举报列表

    - **status**: all / resolved / unresolved
    - **type**: 举报类型或 all
    - **sortBy**: 排序字段，未知值按 created_at 处理
    - **sortOrder**: asc / desc
    - **page**, **limit**: 分页参数，limit 超过上限时按上限处理
    """
    params = normalize_query(status, type, sort_by, sort_order, page, limit)
    result = list_reports(store, params)
    logger.info(
        "reports.list user=%s status=%s type=%s page=%s limit=%s total=%s",
        identity.user_id, params.status, params.type, params.page, params.limit, result.pagination.total,
    )
    return result


@router.put("", response_model=ReportOut)
def put_resolution(
    payload: ReportResolve,
    identity: SessionIdentity = Depends(require_admin),
    store: ReportStore = Depends(get_report_store),
) -> ReportOut:
    if payload.user_id is not None and payload.user_id != identity.user_id:
        raise AuthzDeniedError("identity_mismatch")
    rec = resolve_report(store, payload.id, identity.user_id)
    return ReportOut.model_validate(rec)
