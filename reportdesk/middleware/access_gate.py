from __future__ import annotations

import logging
from typing import Iterable

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from reportdesk.core.security import verify_session_token
from reportdesk.deps.auth import clear_session_cookie, read_session_token


logger = logging.getLogger(__name__)


def path_matches(path: str, prefixes: Iterable[str]) -> bool:
    return any(path == p or path.startswith(p.rstrip("/") + "/") for p in prefixes)


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Checks the session cookie before any handler under a protected prefix runs.

    - no cookie: admin paths go to the public entry, other protected paths
      continue anonymously and the handler decides
    - invalid cookie: cleared, redirect to the public entry
    - valid cookie: identity is put on ``request.state.identity``; non-admins on
      admin paths are sent to the user area
    """

    def __init__(
        self,
        app: ASGIApp,
        protected_prefixes: tuple[str, ...] = ("/admin", "/user"),
        admin_prefix: str = "/admin",
        public_entry: str = "/",
        user_area: str = "/user",
    ) -> None:
        super().__init__(app)
        self.protected_prefixes = protected_prefixes
        self.admin_prefix = admin_prefix
        self.public_entry = public_entry
        self.user_area = user_area

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if not path_matches(path, self.protected_prefixes):
            return await call_next(request)

        is_admin_path = path_matches(path, (self.admin_prefix,))
        token = read_session_token(request)
        if token is None:
            if is_admin_path:
                logger.info("gate.redirect path=%s reason=anonymous", path)
                return RedirectResponse(self.public_entry)
            return await call_next(request)

        identity = verify_session_token(token)
        if identity is None:
            logger.info("gate.redirect path=%s reason=invalid_token", path)
            response = RedirectResponse(self.public_entry)
            clear_session_cookie(response)
            return response

        request.state.identity = identity
        if is_admin_path and not identity.is_admin:
            logger.info("gate.redirect path=%s user=%s reason=role", path, identity.user_id)
            return RedirectResponse(self.user_area)
        return await call_next(request)
