#!/usr/bin/env python3
"""
Error handlers mapping engine exceptions to HTTP responses.

Every error body has the same shape:
    {"success": false, "error": <message>, "type": <exception name>}
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import MatchingError, NotFoundError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "type": error_type}
    )


async def matching_exception_handler(request: Request, exc: MatchingError) -> JSONResponse:
    """NotFoundError maps to 404, any other engine error to 500."""
    if isinstance(exc, NotFoundError):
        logger.info(f"{request.method} {request.url.path}: {exc}")
        return _error_response(404, str(exc), exc.__class__.__name__)

    logger.error(f"Matching error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return _error_response(500, str(exc), exc.__class__.__name__)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(500, "Internal server error", "InternalError")


def register_exception_handlers(app) -> None:
    app.add_exception_handler(MatchingError, matching_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
