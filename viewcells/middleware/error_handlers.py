"""Exception handlers for applications rendering cells."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from viewcells.exceptions import CellException
from viewcells.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


async def cell_exception_handler(request: Request, exc: CellException) -> JSONResponse:
    """Handle cell exceptions with proper HTTP status codes.

    Returns structured JSON error responses with status code, error code,
    message, and optional details.
    """
    log_with_context(
        logger,
        "warning",
        "Cell error",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        url=str(request.url),
        event_type="cell_error",
    )

    error_content: dict[str, Any] = {"code": exc.code.value, "message": exc.message, "details": exc.details}

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error_content},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register cell exception handlers with the application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(CellException, cell_exception_handler)
