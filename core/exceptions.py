"""Custom exception classes for the diet planning engine.

Defines domain-specific exceptions that can be raised throughout the
application and handled consistently by exception handlers. Failures of
the generative collaborator (`GenerationError`, `MalformedOutputError`) are
caught at the adapter boundary and never reach HTTP callers.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize application exception.

        Args:
            message: Error message.
            status_code: HTTP status code (default: 500).
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'Patient', 'DietChart').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class PatientNotFoundError(NotFoundError):
    """Raised when a plan, chart or analysis references an unknown patient."""

    def __init__(self, patient_id: Any):
        super().__init__("Patient", patient_id)


class ValidationError(AppException):
    """Exception raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        """Initialize validation error.

        Args:
            message: Validation error message.
            field: Optional field name that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class DatabaseError(AppException):
    """Exception raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None):
        """Initialize database error.

        Args:
            message: Database error message.
            operation: Optional operation that failed (e.g., 'create', 'update').
        """
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class ConfigurationError(AppException):
    """Exception raised when application configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        """Initialize configuration error.

        Args:
            message: Configuration error message.
            config_key: Optional configuration key that is invalid.
        """
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, status_code=500, details=details)


class GenerationError(AppException):
    """Raised when the external text generator fails (network, auth, timeout)."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        details = {"cause": type(cause).__name__} if cause else {}
        super().__init__(message, status_code=502, details=details)
        self.cause = cause


class MalformedOutputError(AppException):
    """Raised when generated text cannot be turned into a diet plan."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message, status_code=502, details={"type": "malformed_output"})
        self.raw = raw
