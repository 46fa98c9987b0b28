from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from reportdesk.core.config import settings
from reportdesk.core.db import Base, engine
from reportdesk.core.errors import PersistenceError, ReportDeskError
from reportdesk.core.logging_config import configure_logging
from reportdesk.middleware.access_gate import AccessGateMiddleware

# register tables on Base.metadata
from reportdesk.models import report as _report_model  # noqa: F401
from reportdesk.models import user as _user_model  # noqa: F401


configure_logging(settings.log_level)
logger = logging.getLogger("reportdesk.main")

app = FastAPI(title=settings.app_name, version="0.1.0")

app.add_middleware(AccessGateMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- Error handling ----
def _persistence_response(exc: Exception) -> JSONResponse:
    body = {"error": "persistence_error"}
    if settings.environment != "production":
        body["details"] = str(exc)
    return JSONResponse(body, status_code=500)


@app.exception_handler(PersistenceError)
async def _handle_persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("persistence error on %s %s: %s", request.method, request.url.path, exc)
    return _persistence_response(exc)


@app.exception_handler(SQLAlchemyError)
async def _handle_sqlalchemy_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("unhandled datastore error on %s %s", request.method, request.url.path, exc_info=exc)
    return _persistence_response(exc)


@app.exception_handler(ReportDeskError)
async def _handle_domain_error(request: Request, exc: ReportDeskError) -> JSONResponse:
    logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    body = {"detail": exc.code}
    if str(exc) != exc.code:
        body["message"] = str(exc)
    return JSONResponse(body, status_code=exc.status_code)


# ---- System routes ----
@app.get("/", include_in_schema=False)
def _root() -> RedirectResponse:
    return RedirectResponse(url="/docs")


@app.get("/favicon.ico", include_in_schema=False)
def _favicon() -> Response:
    return Response(status_code=204)


@app.get("/health", tags=["system"])
async def health() -> JSONResponse:
    return JSONResponse({"status": "ok"})


# ---- Routers ----
from reportdesk.api.auth import router as auth_router
from reportdesk.api.pages import router as pages_router
from reportdesk.api.reports import router as reports_router


app.include_router(auth_router)
app.include_router(reports_router)
app.include_router(pages_router)


# ---- DB init on startup ----
@app.on_event("startup")
def _ensure_tables() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("%s started environment=%s", settings.app_name, settings.environment)
