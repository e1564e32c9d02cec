"""Data Transfer Objects package."""

from employee_api.models.dto.employee import (
    EmployeeRegistrationRequest,
    EmployeeRegistrationResponse,
    EmployeeResponse,
    ErrorResponse,
    FieldErrorResponse,
)

__all__ = [
    "EmployeeRegistrationRequest",
    "EmployeeRegistrationResponse",
    "EmployeeResponse",
    "ErrorResponse",
    "FieldErrorResponse",
]
