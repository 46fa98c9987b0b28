from __future__ import annotations

import logging

from sqlalchemy import case

from reportdesk.core.errors import ReportAlreadyResolvedError, ReportNotFoundError
from reportdesk.models.report import Report
from reportdesk.models.utils import utcnow
from reportdesk.services.report_store import ReportStore


logger = logging.getLogger(__name__)


def resolve_report(store: ReportStore, report_id: int, resolver_id: int) -> Report:
    """Mark a report resolved by ``resolver_id``.

    Resolution happens at most once: the UPDATE only matches unresolved rows,
    so a second call (or a concurrent one that lost the race) raises
    ``ReportAlreadyResolvedError`` and the first resolver is kept.
    """
    now = utcnow()
    # clock skew must not put resolution before creation
    resolved_at = case((Report.created_at > now, Report.created_at), else_=now)
    updated = store.update(
        report_id,
        {"resolved_at": resolved_at, "resolved_by": resolver_id},
        only_unresolved=True,
    )
    if updated == 0:
        if store.get(report_id) is None:
            raise ReportNotFoundError()
        raise ReportAlreadyResolvedError()

    logger.info("report.resolved id=%s resolver=%s", report_id, resolver_id)
    report = store.get(report_id)
    if report is None:
        raise ReportNotFoundError()
    return report
