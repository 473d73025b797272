"""
Custom Exception Classes

This module defines custom exceptions for better error handling and
consistent error responses across the application.
"""

from typing import Any

from fastapi import status


class TranslateError(Exception):
    """Base exception class for all application exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class LocaleConfigurationError(TranslateError):
    """Raised when the configured locale set is unusable"""

    def __init__(self, message: str = "Invalid locale configuration"):
        super().__init__(message=message)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(TranslateError):
    """Base class for resource not found errors"""

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ContentTypeNotFoundError(ResourceNotFoundError):
    """Raised when a content type is not configured"""

    def __init__(self, contenttype: str):
        super().__init__(resource_type="Content type", resource_id=contenttype)


class ContentNotFoundError(ResourceNotFoundError):
    """Raised when a content record is not found"""

    def __init__(self, content_id: Any | None = None):
        super().__init__(resource_type="Content", resource_id=content_id)


# ============================================================================
# Validation & Overlay Exceptions
# ============================================================================


class FieldTypeError(TranslateError):
    """Raised when a value of the wrong shape is written into a known field slot"""

    def __init__(self, field: str, expected: str, value: Any):
        super().__init__(
            message=f"Field '{field}' expects {expected}, got {type(value).__name__}",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"field": field, "expected": expected},
        )


class UnknownFieldError(TranslateError):
    """Raised when a payload names a key that is not a field of the content type"""

    def __init__(self, field: str, contenttype: str):
        super().__init__(
            message=f"'{field}' is not a field of content type '{contenttype}'",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"field": field, "contenttype": contenttype},
        )


class LocaleMismatchError(TranslateError):
    """Raised when a record tagged with another locale is saved under the default locale"""

    def __init__(self, record_locale: str, active_locale: str):
        super().__init__(
            message=(
                f"Record in locale '{record_locale}' cannot be saved while '{active_locale}' "
                f"is active; save it under '{record_locale}' instead"
            ),
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"record_locale": record_locale, "active_locale": active_locale},
        )


class MalformedOverlayError(TranslateError):
    """Raised when a locale side-slot does not hold a JSON object"""

    def __init__(self, slot: str, reason: str):
        super().__init__(
            message=f"Locale overlay '{slot}' is malformed: {reason}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"slot": slot},
        )


# ============================================================================
# Database Exceptions
# ============================================================================


class DatabaseError(TranslateError):
    """Raised when a database operation fails"""

    def __init__(self, message: str = "A database error occurred", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)
