"""
Error taxonomy for the search API and the FastAPI handlers that render it.

Every failure a single request can hit is an ApiError carrying its HTTP
status and a machine-readable code. Handlers turn them into
{"error", "message", "detail"} JSON bodies so one bad query never takes the
server down with it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

CORS_HEADERS = {"access-control-allow-origin": "*"}

DEFAULT_ERRORS: Dict[int, Tuple[str, str]] = {
    status.HTTP_400_BAD_REQUEST: ("bad_request", "Invalid request"),
    status.HTTP_404_NOT_FOUND: ("not_found", "Resource not found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("method_not_allowed", "Method not allowed"),
    status.HTTP_500_INTERNAL_SERVER_ERROR: ("internal_error", "Internal server error"),
    status.HTTP_503_SERVICE_UNAVAILABLE: ("index_unavailable", "Search index unavailable"),
    status.HTTP_504_GATEWAY_TIMEOUT: ("search_timeout", "Search timed out"),
}


class ApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "internal_error"

    def __init__(self, message: str, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class QueryTooLong(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "query_too_long"


class IndexUnavailable(ApiError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error = "index_unavailable"


class SearchError(ApiError):
    """The engine could not run the search."""
    error = "search_failed"


class SearchTimeout(SearchError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    error = "search_timeout"


class SerializationError(ApiError):
    error = "serialization_failed"


def _response(status_code: int, error: str, message: str, detail: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, "detail": detail},
        headers=CORS_HEADERS,
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.error, exc.message)
    return _response(exc.status_code, exc.error, exc.message, exc.detail)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    error, message = DEFAULT_ERRORS.get(
        exc.status_code, DEFAULT_ERRORS[status.HTTP_500_INTERNAL_SERVER_ERROR]
    )
    if isinstance(exc.detail, str) and exc.detail:
        message = exc.detail
    return _response(exc.status_code, error, message)


async def internal_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    error, message = DEFAULT_ERRORS[status.HTTP_500_INTERNAL_SERVER_ERROR]
    return _response(status.HTTP_500_INTERNAL_SERVER_ERROR, error, message)


def register_error_handlers(app: FastAPI) -> None:
    """Attach shared exception handlers to the FastAPI application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, internal_exception_handler)


__all__ = [
    "ApiError",
    "QueryTooLong",
    "IndexUnavailable",
    "SearchError",
    "SearchTimeout",
    "SerializationError",
    "register_error_handlers",
]
