"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status and a details dict so
routes can hand it straight back to the client via to_dict().
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "SESSION_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


# ===================
# UPLOAD / PARSER ERRORS
# ===================

class EmptyInputError(ValidationError):
    """Uploaded text has no non-blank lines."""

    def __init__(self, filename: Optional[str] = None):
        super().__init__(
            code="CSV_EMPTY",
            message="File appears to be empty",
            details={"filename": filename} if filename else None
        )


class InvalidFileTypeError(AppError):
    """Upload is neither text/csv nor named *.csv (415)."""

    def __init__(self, filename: Optional[str], content_type: Optional[str]):
        super().__init__(
            code="INVALID_FILE_TYPE",
            message="Please upload a CSV file",
            status_code=415,
            details={"filename": filename, "content_type": content_type}
        )


class UploadTooLargeError(AppError):
    """Upload exceeds the configured size limit (413)."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            code="UPLOAD_TOO_LARGE",
            message=f"File is larger than {limit} bytes",
            status_code=413,
            details={"size": size, "limit": limit}
        )


# ===================
# MAPPING ERRORS
# ===================

class DuplicateOrEmptyFieldError(ConflictError):
    """Custom field name is blank or already registered."""

    def __init__(self, name: str):
        super().__init__(
            code="CUSTOM_FIELD_INVALID",
            message="Field name is empty or already exists",
            details={"name": name}
        )


class InvalidMappingTargetError(ValidationError):
    """Mapping target is not allowed for this field."""

    def __init__(self, field_key: str, target: str, reason: str):
        super().__init__(
            code="INVALID_MAPPING_TARGET",
            message=reason,
            details={"field_key": field_key, "target": target}
        )


class UnknownFieldError(NotFoundError):
    """Field key is neither built-in nor a registered custom field."""

    def __init__(self, field_key: str):
        super().__init__(
            resource="Field",
            identifier=field_key,
            code="FIELD_NOT_FOUND"
        )


class MissingTitleMappingError(ValidationError):
    """Export requested before title is mapped or without rows."""

    def __init__(self, row_count: int):
        super().__init__(
            code="EXPORT_NOT_READY",
            message="Map the Title field and upload at least one row before exporting",
            details={"row_count": row_count}
        )


# ===================
# SESSION ERRORS
# ===================

class SessionNotFoundError(NotFoundError):
    """Mapping session missing or expired."""

    def __init__(self, session_id: str):
        super().__init__(
            resource="Session",
            identifier=session_id,
            code="SESSION_NOT_FOUND"
        )
