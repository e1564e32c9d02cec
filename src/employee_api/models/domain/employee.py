"""Employee domain models."""

from pydantic import BaseModel, ConfigDict, Field

from employee_api.constants.validation import ACTIVE_STATUS, DEFAULT_ROLE


class NewEmployee(BaseModel):
    """Sanitized registration data, before the password is hashed."""

    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    phone: str
    email: str
    # Plaintext, only ever handed to the password hasher
    password: str = Field(repr=False)
    active_status: int = ACTIVE_STATUS


class RegisteredEmployee(BaseModel):
    """A stored employee, without any password material."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    phone: str
    email: str
    active_status: int
    role: str = DEFAULT_ROLE
