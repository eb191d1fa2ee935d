"""
Shared API plumbing for the Inkwell HTTP layer.

This module provides:
- The error response shape used by every endpoint
- Exception handlers mapping the error taxonomy onto HTTP status codes
- The per-request database session dependency
"""

from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.common.db.session import Database
from inkwell.common.exceptions import InkwellError
from inkwell.common.logger import app_logger

logger = app_logger.getChild("api")


def error_response(message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    """
    Create an error response body.

    Args:
        message: Error message safe to show to the caller
        details: Optional structured details

    Returns:
        Response dictionary
    """
    response: Dict[str, Any] = {"error": message}
    if details:
        response["details"] = details
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 "Invalid input"."""
    details = [
        {
            "location": list(error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "")
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response("Invalid input", details)
    )


async def inkwell_error_handler(request: Request, exc: InkwellError) -> JSONResponse:
    """Map a service error onto its status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc.original_exception)
    return JSONResponse(status_code=exc.status_code, content=error_response(exc.message))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback and answer with an opaque 500."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response("internal server error")
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(InkwellError, inkwell_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def get_database(request: Request) -> Database:
    """Get the Database the application was started with."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database not initialized. Was the application started?")
    return database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides one database session per request."""
    async with get_database(request).session() as session:
        yield session
