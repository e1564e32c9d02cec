"""Domain-specific exceptions for the employee API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers.
"""

from dataclasses import dataclass
from typing import Any


class EmployeeAPIError(Exception):
    """Base exception for all employee API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Validation Errors (400)
# =============================================================================


@dataclass(frozen=True)
class FieldError:
    """A single validation failure attributed to a request field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationError(EmployeeAPIError):
    """Base class for validation errors."""

    def __init__(
        self,
        message: str = "Invalid employee data",
        errors: list[FieldError] | None = None,
    ) -> None:
        self.errors = list(errors or [])
        super().__init__(message, {"errors": [error.to_dict() for error in self.errors]})


class RegistrationValidationError(ValidationError):
    """Raised when a registration payload is missing fields or has invalid values."""

    MISSING_FIELDS_MESSAGE = "Please provide all required fields"
    INVALID_DATA_MESSAGE = "Invalid employee data"

    def __init__(self, errors: list[FieldError], missing_only: bool = False) -> None:
        message = self.MISSING_FIELDS_MESSAGE if missing_only else self.INVALID_DATA_MESSAGE
        super().__init__(message, errors)


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(EmployeeAPIError):
    """Base class for resource conflict errors."""

    pass


class EmployeeAlreadyExistsError(ConflictError):
    """Raised when trying to register an employee whose email is taken."""

    def __init__(self, email: str | None = None) -> None:
        message = "Email already registered"
        details = {"email": email} if email else {}
        super().__init__(message, details)


# =============================================================================
# Persistence Errors (500)
# =============================================================================


class PersistenceError(EmployeeAPIError):
    """Raised when the employee store fails for a reason the caller cannot fix.

    The message is never shown to API clients.
    """

    def __init__(self, message: str = "Failed to register employee") -> None:
        super().__init__(message)
