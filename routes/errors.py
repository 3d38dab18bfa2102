"""
Error envelope shared by every router.

Handlers wrap their body in try/except and return handle_error(e), so an
AppError keeps its own status and code and anything else becomes a 500.
"""

from fastapi.responses import JSONResponse
import structlog

from exceptions import AppError

logger = structlog.get_logger(__name__)


def handle_error(e: Exception) -> JSONResponse:
    """Convert an exception to the JSON error envelope."""
    if isinstance(e, AppError):
        if e.status_code >= 500:
            logger.error("request_failed", code=e.code, error=e.message)
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )
