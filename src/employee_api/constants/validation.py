"""Centralized validation constants for the employee API.

This module provides a single source of truth for the registration rules,
default values, and limits used across routers and services.
"""

import re
from typing import Final

# =============================================================================
# Employee Constants
# =============================================================================

# Role written for every registered employee, whatever the client sends
DEFAULT_ROLE: Final[str] = "employee"

ACTIVE_STATUS: Final[int] = 1
INACTIVE_STATUS: Final[int] = 0
ALLOWED_ACTIVE_STATUSES: Final[frozenset[int]] = frozenset({INACTIVE_STATUS, ACTIVE_STATUS})

# =============================================================================
# Password Constants
# =============================================================================

MIN_PASSWORD_LENGTH: Final[int] = 6
# bcrypt only uses the first 72 bytes of its input
MAX_PASSWORD_BYTES: Final[int] = 72

# =============================================================================
# Text Length Constants
# =============================================================================

MAX_NAME_LENGTH: Final[int] = 255
MAX_PHONE_LENGTH: Final[int] = 64
MAX_EMAIL_LENGTH: Final[int] = 255

# =============================================================================
# Phone Constants
# =============================================================================

MIN_PHONE_DIGITS: Final[int] = 7
MAX_PHONE_DIGITS: Final[int] = 15

# Optional "+" and country code, an optional parenthesized area code, then
# digit groups separated by one space, dot or dash, e.g. "+1 (555) 123-4567".
# ASCII digits only.
PHONE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\+?\d{0,4}[ .\-]?(?:\(\d{1,5}\)[ .\-]?)?\d+(?:[ .\-]\d+)*$",
    re.ASCII,
)

# =============================================================================
# Error Messages
# =============================================================================

FIRST_NAME_REQUIRED: Final[str] = "First name is required"
LAST_NAME_REQUIRED: Final[str] = "Last name is required"
PHONE_REQUIRED: Final[str] = "Phone number is required"
PHONE_INVALID: Final[str] = "Please enter a valid phone number"
EMAIL_REQUIRED: Final[str] = "Email is required"
EMAIL_INVALID: Final[str] = "Please enter a valid email"
PASSWORD_REQUIRED: Final[str] = "Password is required"
PASSWORD_TOO_SHORT: Final[str] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
PASSWORD_TOO_LONG: Final[str] = f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
ACTIVE_STATUS_INVALID: Final[str] = "Active status must be 0 or 1"
