from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request, Response

from reportdesk.core.config import get_settings
from reportdesk.core.errors import AuthInvalidError, AuthzDeniedError
from reportdesk.core.security import SessionIdentity, verify_session_token


def read_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(get_settings().session_cookie_name) or None


def get_optional_identity(request: Request) -> Optional[SessionIdentity]:
    """Identity of the caller, re-derived from the cookie on every call."""
    return verify_session_token(read_session_token(request))


def get_current_identity(identity: Optional[SessionIdentity] = Depends(get_optional_identity)) -> SessionIdentity:
    if identity is None:
        raise AuthInvalidError()
    return identity


def require_admin(identity: SessionIdentity = Depends(get_current_identity)) -> SessionIdentity:
    if not identity.is_admin:
        raise AuthzDeniedError()
    return identity


def get_gate_identity(request: Request) -> SessionIdentity:
    """Identity attached by ``AccessGateMiddleware``; only set on gated paths."""
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise AuthInvalidError()
    return identity


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_expires_minutes * 60,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.session_cookie_secure,
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value="",
        max_age=-1,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.session_cookie_secure,
    )
