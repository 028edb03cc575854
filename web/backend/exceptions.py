#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import PersistenceError, ProviderUnavailableError

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class InvalidOutcomeException(ServiceException):
    """Raised when an outcome value is not recognised."""
    pass


def _error_response(status_code: int, error: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "type": error_type
        }
    )


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    logger.error(f"Service error in {request.url.path}: {exc}")

    status_code = 500
    if isinstance(exc, InvalidOutcomeException):
        status_code = 400

    return _error_response(status_code, str(exc), exc.__class__.__name__)


async def persistence_exception_handler(
    request: Request,
    exc: PersistenceError
) -> JSONResponse:
    """Agent or outcome store unreachable: the request can be retried later."""
    logger.error(f"Store unavailable in {request.url.path}: {exc}")
    return _error_response(503, "Agent store unavailable", exc.__class__.__name__)


async def provider_unavailable_handler(
    request: Request,
    exc: ProviderUnavailableError
) -> JSONResponse:
    logger.warning(f"Embedding provider unavailable in {request.url.path}: {exc}")
    return _error_response(503, str(exc), exc.__class__.__name__)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle FastAPI HTTP exceptions with consistent format."""
    return _error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Args:
        request: The FastAPI request.
        exc: The exception.

    Returns:
        JSONResponse with error details.
    """
    logger.exception(f"Unexpected error in {request.url.path}")
    return _error_response(500, "Internal server error", "InternalError")
