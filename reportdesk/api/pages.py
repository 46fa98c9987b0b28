from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from reportdesk.core.db import get_db
from reportdesk.core.errors import AuthzDeniedError
from reportdesk.core.security import SessionIdentity
from reportdesk.deps.auth import get_gate_identity
from reportdesk.schemas.auth import AdminOverview, IdentityOut
from reportdesk.services.report_query import report_summary
from reportdesk.services.report_store import ReportStore


router = APIRouter(tags=["pages"])


def _identity_out(identity: SessionIdentity) -> IdentityOut:
    return IdentityOut(user_id=str(identity.user_id), email=identity.email, role=identity.role)


@router.get("/admin", response_model=AdminOverview)
def admin_home(identity: SessionIdentity = Depends(get_gate_identity), db: Session = Depends(get_db)) -> AdminOverview:
    # the gate already redirects non-admins; checked again in case it is not mounted
    if not identity.is_admin:
        raise AuthzDeniedError()
    return AdminOverview(identity=_identity_out(identity), reports=report_summary(ReportStore(db)))


@router.get("/user", response_model=IdentityOut)
def user_home(identity: SessionIdentity = Depends(get_gate_identity)) -> IdentityOut:
    return _identity_out(identity)
