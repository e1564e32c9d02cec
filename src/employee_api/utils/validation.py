"""Input validation and sanitization for employee registration.

Nothing in this module touches storage. Strings that may later be rendered
as HTML are escaped, the email is canonicalized, and every violation is
collected so the client sees all of them at once.
"""

import string
from typing import Any

from employee_api.constants.validation import (
    ACTIVE_STATUS,
    ACTIVE_STATUS_INVALID,
    ALLOWED_ACTIVE_STATUSES,
    EMAIL_INVALID,
    EMAIL_REQUIRED,
    FIRST_NAME_REQUIRED,
    LAST_NAME_REQUIRED,
    MAX_NAME_LENGTH,
    MAX_PASSWORD_BYTES,
    MAX_PHONE_DIGITS,
    MAX_PHONE_LENGTH,
    MIN_PASSWORD_LENGTH,
    MIN_PHONE_DIGITS,
    PASSWORD_REQUIRED,
    PASSWORD_TOO_LONG,
    PASSWORD_TOO_SHORT,
    PHONE_INVALID,
    PHONE_PATTERN,
    PHONE_REQUIRED,
)
from employee_api.exceptions import FieldError, RegistrationValidationError
from employee_api.models.domain.employee import NewEmployee
from employee_api.models.dto.employee import EmployeeRegistrationRequest
from employee_api.utils.email import is_valid_email, normalize_email

# Characters that could be interpreted as markup or script when rendered
HTML_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#x27;",
        "/": "&#x2F;",
        "\\": "&#x5C;",
        "`": "&#96;",
    }
)


def escape_html(value: str | None) -> str | None:
    """Strip surrounding whitespace and escape HTML-relevant characters.

    Args:
        value: Raw string input

    Returns:
        Escaped string, or None if nothing is left
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    return value.translate(HTML_ESCAPE_TABLE)


def is_valid_phone(phone: str) -> bool:
    """Check whether a phone number looks plausible.

    Args:
        phone: Phone number as typed by the user

    Returns:
        True if the number matches the phone pattern and digit count
    """
    if len(phone) > MAX_PHONE_LENGTH or not PHONE_PATTERN.match(phone):
        return False
    digits = sum(1 for char in phone if char in string.digits)
    return MIN_PHONE_DIGITS <= digits <= MAX_PHONE_DIGITS


def parse_active_status(value: Any) -> int | None:
    """Parse the optional active flag.

    Args:
        value: Raw ``active_employee`` value

    Returns:
        0 or 1 (1 when absent), or None if the value is not allowed
    """
    if value is None:
        return ACTIVE_STATUS
    # bool is an int subclass, but true/false are not valid flags
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        return int(value) if value in {str(status) for status in ALLOWED_ACTIVE_STATUSES} else None
    if isinstance(value, int) and value in ALLOWED_ACTIVE_STATUSES:
        return value
    return None


def validate_registration(payload: EmployeeRegistrationRequest) -> NewEmployee:
    """Sanitize and validate a registration payload.

    Client-supplied role and position fields are ignored; the role is
    assigned by the registration service.

    Args:
        payload: Raw registration request

    Returns:
        Sanitized employee data ready for registration

    Raises:
        RegistrationValidationError: With one entry per violated rule, in field order
    """
    errors: list[FieldError] = []
    missing_only = True

    def fail(field: str, message: str, missing: bool = False) -> None:
        nonlocal missing_only
        errors.append(FieldError(field, message))
        missing_only = missing_only and missing

    first_name = escape_html(payload.employee_first_name)
    if not first_name:
        fail("employee_first_name", FIRST_NAME_REQUIRED, missing=True)
    elif len(first_name) > MAX_NAME_LENGTH:
        fail("employee_first_name", f"First name must be at most {MAX_NAME_LENGTH} characters long")

    last_name = escape_html(payload.employee_last_name)
    if not last_name:
        fail("employee_last_name", LAST_NAME_REQUIRED, missing=True)
    elif len(last_name) > MAX_NAME_LENGTH:
        fail("employee_last_name", f"Last name must be at most {MAX_NAME_LENGTH} characters long")

    raw_phone = (payload.employee_phone or "").strip()
    phone = escape_html(raw_phone)
    if not phone:
        fail("employee_phone", PHONE_REQUIRED, missing=True)
    elif not is_valid_phone(raw_phone):
        fail("employee_phone", PHONE_INVALID)

    raw_email = (payload.employee_email or "").strip()
    email: str | None = None
    if not raw_email:
        fail("employee_email", EMAIL_REQUIRED, missing=True)
    elif not is_valid_email(raw_email):
        fail("employee_email", EMAIL_INVALID)
    else:
        email = normalize_email(raw_email)
        if email is None:
            fail("employee_email", EMAIL_INVALID)

    password = payload.employee_password
    if not password:
        fail("employee_password", PASSWORD_REQUIRED, missing=True)
    elif len(password) < MIN_PASSWORD_LENGTH:
        fail("employee_password", PASSWORD_TOO_SHORT)
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        fail("employee_password", PASSWORD_TOO_LONG)

    active_status = parse_active_status(payload.active_employee)
    if active_status is None:
        fail("active_employee", ACTIVE_STATUS_INVALID)

    if errors:
        raise RegistrationValidationError(errors, missing_only=missing_only)

    return NewEmployee(
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        email=email,
        password=password,
        active_status=active_status,
    )
