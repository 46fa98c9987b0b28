from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from reportdesk.core.db import get_db
from reportdesk.core.security import SessionIdentity, issue_session_token
from reportdesk.deps.auth import clear_session_cookie, get_optional_identity, set_session_cookie
from reportdesk.models.enums import Role
from reportdesk.schemas.auth import AuthStatus, LoginRequest
from reportdesk.services.report_store import ReportStore


logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> JSONResponse:
    """Issue a session cookie for a known email.

    Admins get 202, plain users 403; both receive the cookie so the user area
    works. Unknown emails get 404 and no cookie.
    """
    user = ReportStore(db).get_user_by_email(payload.email)
    if user is None:
        logger.info("login.not_found email=%s", payload.email)
        return JSONResponse({"message": "User Not Found"}, status_code=404)

    token = issue_session_token(user.id, user.role.value, user.email)
    if user.role == Role.ADMIN:
        response = JSONResponse({"message": "Approved"}, status_code=202)
    else:
        response = JSONResponse({"message": "Prohibited"}, status_code=403)
    set_session_cookie(response, token)
    logger.info("login.ok user=%s role=%s", user.id, user.role.value)
    return response


@router.post("/logout")
def logout() -> JSONResponse:
    response = JSONResponse({"message": "Logged out successfully"}, status_code=200)
    clear_session_cookie(response)
    return response


@router.get("/auth")
def auth_status(identity: Optional[SessionIdentity] = Depends(get_optional_identity)) -> JSONResponse:
    if identity is None:
        status = AuthStatus(is_authenticated=False)
    else:
        status = AuthStatus(is_authenticated=True, email=identity.email, role=identity.role)
    return JSONResponse(status.model_dump(by_alias=True, exclude_none=True))
