from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from reportdesk.models.enums import Role

from .config import get_settings


logger = logging.getLogger(__name__)

ROLES = frozenset(role.value for role in Role)
_REQUIRED_CLAIMS = ["sub", "role", "email", "sid", "iat", "exp"]


@dataclass(frozen=True)
class SessionIdentity:
    user_id: int
    role: str
    email: str
    session_id: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def issue_session_token(user_id: int, role: str, email: str, expires_minutes: Optional[int] = None) -> str:
    """Sign a session credential for ``user_id``.

    The token carries the identity, role, email and a fresh session id. It is the
    only session state; nothing is stored server side.
    """
    settings = get_settings()
    expire_delta = timedelta(minutes=expires_minutes or settings.session_expires_minutes)
    now = datetime.now(tz=timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "role": role,
        "email": email,
        "sid": uuid.uuid4().hex,
        "iat": int(now.timestamp()),
        "exp": int((now + expire_delta).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> dict[str, Any]:
    settings = get_settings()
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require": _REQUIRED_CLAIMS},
    )


def verify_session_token(token: str | None) -> Optional[SessionIdentity]:
    """Return the identity encoded in ``token`` or ``None``.

    Bad signature, expiry, missing claims and unknown roles all collapse into
    ``None`` so callers cannot tell the failures apart.
    """
    if not token:
        return None
    try:
        payload = decode_session_token(token)
        user_id = int(payload["sub"])
        role = str(payload["role"])
        email = str(payload["email"])
        session_id = str(payload["sid"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError) as e:
        logger.debug("session token rejected: %s", type(e).__name__)
        return None
    if user_id < 1 or role not in ROLES:
        logger.debug("session token rejected: bad identity claims")
        return None
    return SessionIdentity(user_id=user_id, role=role, email=email, session_id=session_id)
