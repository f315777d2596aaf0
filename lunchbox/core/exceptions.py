"""
Application exceptions.
Every error carries a stable error_code that the error handler maps to an HTTP status.
"""

from typing import Any, Dict, Optional


class BaseApplicationError(Exception):
    """Base class for all application errors"""

    default_error_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)


class RepositoryError(BaseApplicationError):
    """Storage layer failure"""
    default_error_code = "REPOSITORY_ERROR"


class ValidationError(BaseApplicationError):
    """Malformed input or a reference to an unusable record"""
    default_error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None,
                 details: Dict[str, Any] = None):
        details = dict(details or {})
        if field:
            details.setdefault("field", field)
        super().__init__(message, details=details)
        self.field = field


class AuthenticationError(BaseApplicationError):
    """Missing or invalid credentials"""
    default_error_code = "AUTHENTICATION_REQUIRED"


class ResourceNotFoundError(BaseApplicationError):
    """Record does not exist"""
    default_error_code = "RESOURCE_NOT_FOUND"


class AuthorizationError(ResourceNotFoundError):
    """Actor does not own the resource; reported as not found"""


class PermissionDeniedError(BaseApplicationError):
    """Admin privileges required"""
    default_error_code = "PERMISSION_DENIED"


class ConflictError(BaseApplicationError):
    """Unique constraint violated (username, holiday date)"""
    default_error_code = "DUPLICATE_RESOURCE"


class LockedSelectionError(BaseApplicationError):
    """Selection is inside the lock window or no longer exists"""
    default_error_code = "SELECTION_LOCKED"

    def __init__(self, message: str = "Selection can no longer be modified",
                 selection_id: Optional[int] = None, details: Dict[str, Any] = None):
        details = dict(details or {})
        if selection_id is not None:
            details.setdefault("selection_id", selection_id)
        super().__init__(message, details=details)
        self.selection_id = selection_id
