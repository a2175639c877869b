"""Global error handler: consistent JSON error responses.

Every error body has the shape ``{"success": false, "error": "<message>"}``.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()


def _validation_message(errors: list[dict[str, Any]]) -> str:
    """Turn the first pydantic error into a human-readable message."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON in request body"
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query")]
    field = loc[-1] if loc else "request body"
    if first.get("type") == "missing":
        return f"Missing required field: {field}"
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle HTTP exceptions; dict details are merged into the body."""
        content: dict[str, Any] = {"success": False}
        if isinstance(exc.detail, dict):
            content.update(exc.detail)
        else:
            content["error"] = exc.detail
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed bodies and bad parameters are client errors (400)."""
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": _validation_message(list(exc.errors()))},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions: always return JSON."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Internal server error"},
        )
