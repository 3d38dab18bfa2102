"""
Application errors.

Every error carries a stable code, an HTTP status and a details dict.
Routes turn any AppError into the same JSON envelope:

    {"error": {"code": ..., "message": ..., "details": {...}, "timestamp": ...}}
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base for every error the API reports on purpose.

    Attributes:
        code: Stable machine-readable code, e.g. "SKU_NOT_FOUND"
        message: Human-readable message
        status_code: HTTP status to respond with
        details: Extra context for clients
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
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Response envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class BadRequestError(AppError):
    """Request is missing something required (400)."""

    def __init__(self, code: str, message: str, details: Optional[dict] = None):
        super().__init__(code=code, message=message, status_code=400, details=details)


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(self, resource: str, identifier, code: Optional[str] = None):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": str(identifier)}
        )


class ValidationError(AppError):
    """Input failed validation (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(code=code, message=message, status_code=422, details=details)


class DuplicateError(AppError):
    """Unique field already taken (409)."""

    def __init__(self, resource: str, field: str, value: str, code: Optional[str] = None):
        super().__init__(
            code=code or f"{resource.upper()}_EXISTS",
            message=f"{resource} with this {field} already exists",
            status_code=409,
            details={field: value}
        )


class ExternalServiceError(AppError):
    """Upstream service unavailable (503)."""

    def __init__(self, service: str, message: str, details: Optional[dict] = None):
        super().__init__(
            code=f"{service.upper()}_UNAVAILABLE",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Store operation failed (500)."""

    def __init__(self, operation: str, message: str, details: Optional[dict] = None):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# SKU ERRORS
# ===================

class SKUNotFoundError(NotFoundError):
    """SKU not found."""

    def __init__(self, identifier: str):
        super().__init__(
            resource="SKU",
            identifier=identifier,
            code="SKU_NOT_FOUND"
        )


class SKUCodeExistsError(DuplicateError):
    """SKU code already exists."""

    def __init__(self, sku: str):
        super().__init__(
            resource="SKU",
            field="sku",
            value=sku,
            code="SKU_CODE_EXISTS"
        )


class MSKUNotFoundError(NotFoundError):
    """Master SKU not found."""

    def __init__(self, identifier: str):
        super().__init__(
            resource="MSKU",
            identifier=identifier,
            code="MSKU_NOT_FOUND"
        )


class MSKUCodeExistsError(DuplicateError):
    """Master SKU code already exists."""

    def __init__(self, msku: str):
        super().__init__(
            resource="MSKU",
            field="msku",
            value=msku,
            code="MSKU_CODE_EXISTS"
        )


# ===================
# MAPPING ERRORS
# ===================

class MappingNotFoundError(NotFoundError):
    """SKU mapping not found."""

    def __init__(self, mapping_id: str):
        super().__init__(
            resource="Mapping",
            identifier=mapping_id,
            code="MAPPING_NOT_FOUND"
        )


# ===================
# UPLOAD / INGESTION ERRORS
# ===================

class UploadNotFoundError(NotFoundError):
    """Upload job not found."""

    def __init__(self, upload_id: str):
        super().__init__(
            resource="Upload",
            identifier=upload_id,
            code="UPLOAD_NOT_FOUND"
        )


class UnsupportedFileTypeError(ValidationError):
    """Uploaded file is not a CSV."""

    def __init__(self, extension: str):
        super().__init__(
            code="UNSUPPORTED_FILE_TYPE",
            message=f"Unsupported file type: {extension or '(none)'}",
            details={"extension": extension, "supported": [".csv"]}
        )


class MissingIdentifierColumnError(ValidationError):
    """CSV header has no column that looks like a product identifier."""

    def __init__(self, headers: list[str], expected: list[str]):
        super().__init__(
            code="MISSING_IDENTIFIER_COLUMN",
            message=(
                "No SKU identifier column found. Expected a header containing one of: "
                + ", ".join(expected)
            ),
            details={"headers": headers, "expected": expected}
        )


class FileReadError(ValidationError):
    """Uploaded file could not be read."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="FILE_READ_ERROR",
            message=message,
            details=details
        )


class NoFileUploadedError(BadRequestError):
    """Upload request carried no file."""

    def __init__(self):
        super().__init__(code="NO_FILE_UPLOADED", message="No file uploaded")


class FileTooLargeError(ValidationError):
    """Uploaded file exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            code="FILE_TOO_LARGE",
            message=f"File is {size} bytes; limit is {limit} bytes",
            details={"size": size, "limit": limit}
        )


# ===================
# AI ERRORS
# ===================

class EmptyQueryError(BadRequestError):
    """AI query request with no question."""

    def __init__(self):
        super().__init__(code="EMPTY_QUERY", message="Query is required")


class AIServiceUnavailableError(ExternalServiceError):
    """AI assistant is not configured."""

    def __init__(self):
        super().__init__(
            service="ai",
            message="AI assistant is not configured (ANTHROPIC_API_KEY missing)"
        )


# ===================
# ADMIN ERRORS
# ===================

class SeedingNotAllowedError(AppError):
    """Seeding attempted outside development."""

    def __init__(self, environment: str):
        super().__init__(
            code="SEEDING_NOT_ALLOWED",
            message="Seeding only allowed in development",
            status_code=403,
            details={"environment": environment}
        )
