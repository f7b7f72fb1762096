"""
Custom exception classes
Each error carries a stable error_code that the error handler maps to an HTTP status.
"""

from typing import Any, Dict, Optional


class BaseApplicationError(Exception):
    """Base class for all application errors"""

    default_code = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseApplicationError):
    """Invalid user input: empty cart, missing form fields, malformed email"""
    default_code = "VALIDATION_ERROR"


class PersistenceError(BaseApplicationError):
    """Any read/write failure against the database"""
    default_code = "PERSISTENCE_ERROR"


# Older name kept for the database layer
DatabaseError = PersistenceError


class AuthError(BaseApplicationError):
    """Bad credentials, duplicate sign-up, expired or revoked session"""
    default_code = "AUTHENTICATION_REQUIRED"


class PermissionDeniedError(BaseApplicationError):
    """Authenticated, but the role is not allowed to do this"""
    default_code = "PERMISSION_DENIED"


class NotFoundError(BaseApplicationError):
    """Requested resource does not exist"""
    default_code = "RESOURCE_NOT_FOUND"


class MenuItemNotFoundError(NotFoundError):
    default_code = "MENU_ITEM_NOT_FOUND"


class TransactionNotFoundError(NotFoundError):
    default_code = "TRANSACTION_NOT_FOUND"


class ConcurrencyError(BaseApplicationError):
    """Concurrent access conflict"""
    default_code = "CONCURRENCY_CONFLICT"


class CheckoutInProgressError(ConcurrencyError):
    """A checkout for the same session has not settled yet"""
    default_code = "CHECKOUT_IN_PROGRESS"


class ExternalServiceError(BaseApplicationError):
    """Third-party service (chat completion) failed"""
    default_code = "EXTERNAL_SERVICE_ERROR"
