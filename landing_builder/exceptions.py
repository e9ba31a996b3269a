"""
Custom Exception Classes for the Landing Page Builder

This module defines custom exceptions for better error handling and
consistent error responses across the application.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in the error envelope."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    AUTH_FAILED = "AUTH_FAILED"
    AUTH_INVALID_TOKEN = "AUTH_INVALID_TOKEN"
    AUTH_TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    AUTH_PERMISSION_DENIED = "AUTH_PERMISSION_DENIED"

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_PAGE_NOT_FOUND = "RESOURCE_PAGE_NOT_FOUND"
    RESOURCE_TENANT_NOT_FOUND = "RESOURCE_TENANT_NOT_FOUND"

    VALIDATION_FAILED = "VALIDATION_FAILED"
    VALIDATION_DUPLICATE_RESOURCE = "VALIDATION_DUPLICATE_RESOURCE"
    VALIDATION_SLUG_CONFLICT = "VALIDATION_SLUG_CONFLICT"


class BuilderError(Exception):
    """Base exception class for all builder-related exceptions"""

    default_error_code = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.default_error_code
        super().__init__(self.message)


# ============================================================================
# Authentication & Authorization Exceptions
# ============================================================================


class AuthenticationError(BuilderError):
    """Raised when authentication fails"""

    default_error_code = ErrorCode.AUTH_FAILED

    def __init__(self, message: str = "Authentication failed", error_code: ErrorCode | None = None):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED, error_code=error_code)


class TokenExpiredError(AuthenticationError):
    """Raised when JWT token has expired"""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message=message, error_code=ErrorCode.AUTH_TOKEN_EXPIRED)


class InvalidTokenError(AuthenticationError):
    """Raised when JWT token is invalid"""

    def __init__(self, message: str = "Invalid or malformed token"):
        super().__init__(message=message, error_code=ErrorCode.AUTH_INVALID_TOKEN)


class AuthorizationError(BuilderError):
    """Raised when the principal lacks the role for an action"""

    default_error_code = ErrorCode.AUTH_PERMISSION_DENIED

    def __init__(
        self, message: str = "You do not have permission to perform this action", required_roles: list[str] | None = None
    ):
        details = {"required_roles": required_roles} if required_roles else {}
        super().__init__(message=message, status_code=status.HTTP_403_FORBIDDEN, details=details)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(BuilderError):
    """Base class for resource not found errors"""

    default_error_code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any | None = None, message: str | None = None):
        if message is None:
            message = f"{resource_type} not found"
            if resource_id is not None:
                message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class PageNotFoundError(ResourceNotFoundError):
    """Raised when a page is not found"""

    default_error_code = ErrorCode.RESOURCE_PAGE_NOT_FOUND

    def __init__(self, page_id: Any | None = None, message: str | None = None):
        super().__init__(resource_type="Page", resource_id=page_id, message=message)


class TenantNotFoundError(ResourceNotFoundError):
    """Raised when a tenant is not found"""

    default_error_code = ErrorCode.RESOURCE_TENANT_NOT_FOUND

    def __init__(self, tenant_id: Any | None = None, message: str | None = None):
        super().__init__(resource_type="Tenant", resource_id=tenant_id, message=message)


# ============================================================================
# Validation & Conflict Exceptions
# ============================================================================


class ValidationError(BuilderError):
    """Raised when input validation fails"""

    default_error_code = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=error_details)


class DuplicateResourceError(BuilderError):
    """Raised when attempting to create a duplicate resource"""

    default_error_code = ErrorCode.VALIDATION_DUPLICATE_RESOURCE

    def __init__(self, resource_type: str, field: str, value: Any, message: str | None = None):
        super().__init__(
            message=message or f"{resource_type} with {field} '{value}' already exists",
            status_code=status.HTTP_409_CONFLICT,
            details={"resource_type": resource_type, "field": field, "value": value},
        )


class SlugConflictError(DuplicateResourceError):
    """Raised when a slug is already taken within a tenant"""

    default_error_code = ErrorCode.VALIDATION_SLUG_CONFLICT

    def __init__(self, slug: str, tenant_id: Any | None = None):
        super().__init__(
            resource_type="Page",
            field="slug",
            value=slug,
            message=f"Slug '{slug}' already exists for this tenant",
        )
        if tenant_id is not None:
            self.details["tenant_id"] = tenant_id


class TenantAlreadyExistsError(DuplicateResourceError):
    """Raised when a subdomain or custom domain is already registered"""

    def __init__(self, field: str, value: str):
        super().__init__(resource_type="Tenant", field=field, value=value)
