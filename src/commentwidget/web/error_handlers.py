import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from commentwidget.errors import CorruptRecordError, IdentifierError, StorageError

logger = structlog.get_logger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def storage_error_handler(request: Request, exc: Exception) -> Response:
    """Handle comment storage and identifier failures (500), hiding internal details."""
    if isinstance(exc, CorruptRecordError):
        logger.error("comments_log_corrupt", path=request.url.path, line_index=exc.line_index, error=str(exc))
    elif isinstance(exc, StorageError | IdentifierError):
        logger.error("comments_storage_failed", path=request.url.path, error=str(exc), error_class=type(exc).__name__)
    return create_json_error_response(status_code=500, message="Comments are unavailable right now.", error_type="storage_error")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", error=str(exc))
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
