"""
Custom exception classes and error handlers
Provides consistent error responses across the application
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

class PrintShopException(HTTPException):
    """Base exception class for the print shop"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

class NotFoundException(PrintShopException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class InvalidInputException(PrintShopException):
    """400 Bad Request for values the domain rejects"""

    def __init__(self, detail: str, error_code: str = "INVALID_INPUT"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )

class EmptyCartException(InvalidInputException):
    """Order creation attempted without cart lines"""

    def __init__(self, detail: str = "Cart is empty"):
        super().__init__(detail=detail, error_code="EMPTY_CART")

class MissingSessionException(InvalidInputException):
    """Cart or order call made without a session token"""

    def __init__(self, detail: str = "Session ID required"):
        super().__init__(detail=detail, error_code="MISSING_SESSION")

class PersistenceFailureException(PrintShopException):
    """500 wrapper around storage-layer errors"""

    def __init__(
        self,
        detail: str = "Storage operation failed",
        error_code: str = "PERSISTENCE_FAILURE"
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code=error_code
        )

def _error_response(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "request_id": getattr(request.state, "request_id", None)
            }
        }
    )

async def printshop_exception_handler(request: Request, exc: PrintShopException) -> JSONResponse:
    """Render domain errors in the common error envelope"""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code}: {exc.detail} ({request.method} {request.url.path})")
    response = _error_response(request, exc.status_code, exc.error_code, exc.detail)
    if exc.headers:
        response.headers.update(exc.headers)
    return response

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for anything the services did not map"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred"
    )
