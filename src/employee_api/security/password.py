"""Password hashing utilities."""

import asyncio
from functools import lru_cache, partial

import bcrypt

from employee_api.config import get_settings


class PasswordService:
    """Service for password hashing and verification."""

    DEFAULT_BCRYPT_ROUNDS = 10

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        """Initialize with the bcrypt cost factor."""
        self.rounds = rounds

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    async def hash_password_async(self, password: str) -> str:
        """Hash a password in a worker thread.

        bcrypt is deliberately slow; running it inline would stall the
        event loop for every other request.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(self.hash_password, password))

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify a password against a hash.

        Args:
            password: Plain text password
            hashed: Hashed password

        Returns:
            True if password matches
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except (ValueError, UnicodeDecodeError, UnicodeEncodeError):
            # Invalid hash format or encoding issues
            return False


@lru_cache
def get_password_service() -> PasswordService:
    """Get the password service singleton."""
    return PasswordService(rounds=get_settings().bcrypt_rounds)
