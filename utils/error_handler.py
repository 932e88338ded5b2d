"""Centralized error handling for the application"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import List, Optional
import logging
import traceback

logger = logging.getLogger(__name__)


class NotAuthorizedError(Exception):
    """Raised when a customer is not in the wholesale directory"""
    def __init__(self, message: str = "Not a wholesale customer", identity: str = None):
        self.message = message
        self.status_code = status.HTTP_403_FORBIDDEN
        self.identity = identity
        super().__init__(self.message)


class ShopifyAPIError(Exception):
    """Custom exception for Shopify Admin API errors"""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ProvisioningFailedError(Exception):
    """
    Raised when a discount could not be provisioned in Shopify.

    ``orphaned_price_rule_id`` is set when the price rule was created but the
    discount code bound to it was not. The rule is left in place.
    """
    def __init__(
        self,
        message: str,
        details: dict = None,
        steps: Optional[List] = None,
        orphaned_price_rule_id: Optional[int] = None
    ):
        self.message = message
        self.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        self.details = details or {}
        self.steps = steps or []
        self.orphaned_price_rule_id = orphaned_price_rule_id
        super().__init__(self.message)


class CheckoutError(Exception):
    """Unexpected failure while processing a checkout"""
    def __init__(self, message: str = "Internal server error"):
        self.message = message
        super().__init__(self.message)


class DatabaseError(Exception):
    """Custom exception for database errors"""
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


async def not_authorized_error_handler(request: Request, exc: NotAuthorizedError):
    """Handle customers without wholesale access"""
    logger.warning(
        f"Not Authorized: {exc.message}",
        extra={"path": request.url.path}
    )

    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={
            "error": "not_authorized",
            "message": exc.message
        }
    )


async def provisioning_failed_error_handler(request: Request, exc: ProvisioningFailedError):
    """Handle discount provisioning failures"""
    logger.error(
        f"Provisioning Failed: {exc.message}",
        extra={
            "details": exc.details,
            "orphaned_price_rule_id": exc.orphaned_price_rule_id,
            "path": request.url.path
        }
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "provisioning_failed",
            "message": "Failed to create discount code",
            "details": exc.details
        }
    )


async def shopify_api_error_handler(request: Request, exc: ShopifyAPIError):
    """Handle Shopify API errors raised outside the provisioning flow"""
    logger.error(
        f"Shopify API Error: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "details": exc.details,
            "path": request.url.path
        }
    )

    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "error": "shopify_api_error",
            "message": exc.message,
            "details": exc.details
        }
    )


async def checkout_error_handler(request: Request, exc: CheckoutError):
    """Handle unexpected checkout failures without leaking internals"""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_server_error",
            "message": exc.message
        }
    )


async def database_error_handler(request: Request, exc: DatabaseError):
    """Handle database errors"""
    logger.error(
        f"Database Error: {exc.message}",
        extra={
            "details": exc.details,
            "path": request.url.path
        }
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "database_error",
            "message": "Database operation failed",
            "details": exc.details
        }
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors"""
    logger.warning(
        f"Validation Error: {exc.errors()}",
        extra={"path": request.url.path}
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "message": "Invalid request data",
            "details": [
                {"loc": list(err.get("loc", [])), "msg": err.get("msg"), "type": err.get("type")}
                for err in exc.errors()
            ]
        }
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(
        f"HTTP Exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "http_error",
            "message": exc.detail
        }
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    logger.error(
        f"Unexpected Error: {str(exc)}",
        extra={
            "path": request.url.path,
            "traceback": traceback.format_exc()
        }
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred"
        }
    )


def register_error_handlers(app):
    """Register all error handlers with the FastAPI app"""
    app.add_exception_handler(NotAuthorizedError, not_authorized_error_handler)
    app.add_exception_handler(ProvisioningFailedError, provisioning_failed_error_handler)
    app.add_exception_handler(ShopifyAPIError, shopify_api_error_handler)
    app.add_exception_handler(CheckoutError, checkout_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
