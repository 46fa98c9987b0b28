"""Domain errors raised by the services and mapped to HTTP responses in ``reportdesk.main``."""
from __future__ import annotations


class ReportDeskError(Exception):
    """Base error; ``code`` is the machine-readable value clients get as ``detail``."""

    status_code = 500
    code = "internal_error"

    def __init__(self, code: str | None = None, message: str | None = None) -> None:
        if code:
            self.code = code
        super().__init__(message or self.code)


class AuthInvalidError(ReportDeskError):
    """Missing, malformed or expired session credential."""

    status_code = 401
    code = "not_authenticated"


class AuthzDeniedError(ReportDeskError):
    """Valid credential without the required role."""

    status_code = 403
    code = "forbidden"


class ReportNotFoundError(ReportDeskError):
    status_code = 404
    code = "report_not_found"


class ReportValidationError(ReportDeskError):
    status_code = 400
    code = "invalid_params"


class ReportAlreadyResolvedError(ReportDeskError):
    status_code = 409
    code = "report_already_resolved"


class PersistenceError(ReportDeskError):
    """Datastore failure; the original exception is chained as ``__cause__``."""

    status_code = 500
    code = "persistence_error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message=message)
