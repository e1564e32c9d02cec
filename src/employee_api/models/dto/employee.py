"""Employee DTOs."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EmployeeRegistrationRequest(BaseModel):
    """Request body for registering an employee.

    Every field is optional here so that missing values are reported by the
    registration validator together with all other violations.
    """

    model_config = ConfigDict(extra="ignore")

    employee_first_name: str | None = Field(default=None, description="First name")
    employee_last_name: str | None = Field(default=None, description="Last name")
    employee_phone: str | None = Field(default=None, description="Phone number")
    employee_email: str | None = Field(default=None, description="Email address")
    employee_password: str | None = Field(default=None, description="Plaintext password, min 6 characters")
    active_employee: Any = Field(default=None, description="Active flag, 0 or 1 (default 1)")
    # Accepted for compatibility with older clients, never persisted
    employee_role: Any = Field(default=None, description="Ignored; the role is always assigned by the server")
    employee_position: Any = Field(default=None, description="Ignored")


class EmployeeResponse(BaseModel):
    """Employee response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    phone: str
    email: str
    active_status: int
    role: str


class EmployeeRegistrationResponse(BaseModel):
    """Response for a successful registration."""

    message: str = "Employee created successfully"
    success: bool = True
    data: EmployeeResponse


class FieldErrorResponse(BaseModel):
    """A single field-attributed validation failure."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error response body."""

    error: str
    message: str
    errors: list[FieldErrorResponse] | None = None
