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

    Provides a consistent error response format across the entire API.

    Usage:
        raise AppException("Admin not set up", "NOT_SET_UP", 409)
        raise AppException("Invalid password. 4 attempts remaining",
                           "INVALID_PASSWORD", 401, {"remaining_attempts": 4})

    Error Codes:
        Catalog:
            - INVALID_FORMAT (400)
            - TYPE_MISMATCH (400)
            - BARCODE_NOT_FOUND (404)

        Auth Gate:
            - WEAK_PASSWORD (400)
            - SETUP_FAILED (500)
            - ALREADY_SET_UP (409)
            - NOT_SET_UP (409)
            - INVALID_PASSWORD (401)
            - TOO_MANY_ATTEMPTS (423)
            - LOCKED_OUT (423)
            - AUTHENTICATION_FAILED (500)
            - PASSWORD_CHANGE_FAILED (500)
            - SESSION_REQUIRED (401)

        Visualization:
            - MISSING_SELECTION (400)
            - GENERATION_FAILED (502)

        General:
            - STORAGE_ERROR (500)
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
            code: Machine-readable error code (e.g., "LOCKED_OUT")
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


class StorageError(AppException):
    """Raised by the slot store when the underlying database call fails."""

    def __init__(self, message: str = "Storage operation failed", key: Optional[str] = None):
        details = {"key": key} if key else {}
        super().__init__(message, "STORAGE_ERROR", 500, details)


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

def invalid_format(barcode: Optional[str] = None) -> AppException:
    """Create invalid barcode format exception."""
    details = {"barcode": barcode} if barcode else {}
    return AppException(
        "Invalid barcode format. Use STYLE-### or MAT-### where ### is at least 3 digits",
        "INVALID_FORMAT",
        400,
        details
    )


def type_mismatch(barcode: str, expected: str, actual: str) -> AppException:
    """Create prefix/type disagreement exception."""
    return AppException(
        f"Barcode {barcode} must be assigned to a {expected} record, not {actual}",
        "TYPE_MISMATCH",
        400,
        {"barcode": barcode, "expected_type": expected, "actual_type": actual}
    )


def barcode_not_found(barcode: str) -> AppException:
    """Create barcode not found exception."""
    return AppException(
        f"No record found for barcode {barcode}",
        "BARCODE_NOT_FOUND",
        404,
        {"barcode": barcode}
    )


def weak_password(min_length: int = 6, new: bool = False) -> AppException:
    """Create password too short exception."""
    prefix = "New password" if new else "Password"
    return AppException(
        f"{prefix} must be at least {min_length} characters",
        "WEAK_PASSWORD",
        400,
        {"min_length": min_length}
    )


def setup_failed() -> AppException:
    """Create setup persistence failure exception."""
    return AppException("Failed to set up admin password", "SETUP_FAILED", 500)


def already_set_up() -> AppException:
    """Create already set up exception."""
    return AppException("Admin password is already set up", "ALREADY_SET_UP", 409)


def not_set_up() -> AppException:
    """Create admin not set up exception."""
    return AppException("Admin not set up", "NOT_SET_UP", 409)


def invalid_password(remaining_attempts: int) -> AppException:
    """Create wrong password exception carrying the remaining attempt count."""
    return AppException(
        f"Invalid password. {remaining_attempts} attempts remaining",
        "INVALID_PASSWORD",
        401,
        {"remaining_attempts": remaining_attempts}
    )


def too_many_attempts(lockout_minutes: int) -> AppException:
    """Create lockout-triggered exception."""
    return AppException(
        f"Too many failed attempts. Account locked for {lockout_minutes} minutes",
        "TOO_MANY_ATTEMPTS",
        423,
        {"lockout_minutes": lockout_minutes}
    )


def locked_out(remaining_minutes: int, remaining_time: int) -> AppException:
    """Create locked out exception."""
    return AppException(
        f"Account locked. Try again in {remaining_minutes} minute(s)",
        "LOCKED_OUT",
        423,
        {"remaining_minutes": remaining_minutes, "remaining_time": remaining_time}
    )


def authentication_failed() -> AppException:
    """Create generic authentication failure exception."""
    return AppException("Authentication failed", "AUTHENTICATION_FAILED", 500)


def password_change_failed() -> AppException:
    """Create password change persistence failure exception."""
    return AppException("Failed to change admin password", "PASSWORD_CHANGE_FAILED", 500)


def session_required() -> AppException:
    """Create missing or expired admin session exception."""
    return AppException("Admin session required", "SESSION_REQUIRED", 401)


def missing_selection() -> AppException:
    """Create missing style/material exception."""
    return AppException(
        "Both style name and material name are required",
        "MISSING_SELECTION",
        400
    )


def generation_failed(reason: str) -> AppException:
    """Create text generation failure exception."""
    return AppException(
        f"Failed to generate visualization: {reason}",
        "GENERATION_FAILED",
        502
    )


def internal_error(message: str = "Internal server error") -> AppException:
    """Create internal server error exception."""
    return AppException(message, "INTERNAL_ERROR", 500)
