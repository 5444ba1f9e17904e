"""Custom exceptions and error response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standardized error envelope returned to clients."""

    success: bool = Field(False, description="Always false for errors")
    error: str = Field(..., description="Human-readable error message")


class AppError(Exception):
    """Base exception for all app-level errors."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert to API response schema."""
        return ErrorResponse(error=self.message)


class ValidationError(AppError):
    """Raised when a required field is missing or invalid."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details=details,
        )


class NotFoundError(AppError):
    """Raised when no parking session matches the query."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
            details=details,
        )


class ConflictError(AppError):
    """Raised when a concurrent write keeps winning over this one."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="CONFLICT",
            message=message,
            status_code=409,
            details=details,
        )


class StoreError(AppError):
    """Raised on record store (database) operation failures."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="STORE_ERROR",
            message=message,
            status_code=500,
            details=details,
        )
