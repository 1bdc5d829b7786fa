"""Error Handlers: global exception handlers for the HTTP routes (health probes).

Invariants:
    - WikiTrainsError -> its to_response() envelope with the error's own http_status
    - Any other exception -> generic 500 envelope, never leaks internal details
    - Logged at the level matching the error's severity

Design Decisions:
    - Socket traffic does not pass through here; the session handler emits error events
    - No request-validation handler: the HTTP surface takes no parameters or bodies
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from wikitrains.core.errors import ErrorCategory, ErrorSeverity, WikiTrainsError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register domain and catch-all handlers on the FastAPI app."""

    @app.exception_handler(WikiTrainsError)
    async def wikitrains_error_handler(request: Request, exc: WikiTrainsError):
        logger.log(
            _LOG_LEVELS.get(exc.severity, logging.ERROR),
            f"{exc.code} on {request.url.path}: {exc.message}",
            extra={"error_code": exc.code, "tier": exc.context.tier},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
