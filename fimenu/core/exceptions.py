"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Product not found", "PRODUCT_NOT_FOUND", 404)
        raise AppException("Import failed", "INVALID_IMPORT", 400, {"reason": "not a list"})

    Error Codes:
        Access:
            - UNAUTHORIZED (401)
            - ADMIN_AUTH_NOT_CONFIGURED (500)

        Catalog:
            - PRODUCT_NOT_FOUND (404)
            - PACKAGE_NOT_FOUND (404)
            - INVALID_IMPORT (400)
            - INVALID_VALUE (400)

        General:
            - VALIDATION_ERROR (422)
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    FastAPI exception handler for AppException.

    Converts AppException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def unauthorized() -> AppException:
    """Create missing or wrong admin credentials exception."""
    return AppException("Unauthorized", "UNAUTHORIZED", 401)


def admin_auth_not_configured() -> AppException:
    """Create exception for an admin area with no credentials configured."""
    return AppException(
        "Admin auth not configured. Set ADMIN_USER and ADMIN_PASS.",
        "ADMIN_AUTH_NOT_CONFIGURED",
        500
    )


def product_not_found(product_id: Optional[str] = None) -> AppException:
    """Create product not found exception."""
    details = {"product_id": product_id} if product_id else {}
    return AppException("Product not found", "PRODUCT_NOT_FOUND", 404, details)


def package_not_found(package_id: Optional[str] = None) -> AppException:
    """Create package not found exception."""
    details = {"package_id": package_id} if package_id else {}
    return AppException("Package not found", "PACKAGE_NOT_FOUND", 404, details)


def invalid_import(reason: str) -> AppException:
    """Create exception for an unreadable product import."""
    return AppException(
        f"Import failed: {reason}",
        "INVALID_IMPORT",
        400,
        {"reason": reason}
    )


def invalid_value(message: str) -> AppException:
    """Create exception for a value the encoder cannot represent."""
    return AppException(message, "INVALID_VALUE", 400)


def internal_error(message: str = "Internal server error") -> AppException:
    """Create internal server error exception."""
    return AppException(message, "INTERNAL_ERROR", 500)
