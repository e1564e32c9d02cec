"""Employee registration service."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.constants.validation import (
    DEFAULT_ROLE,
    EMAIL_REQUIRED,
    FIRST_NAME_REQUIRED,
    LAST_NAME_REQUIRED,
    PASSWORD_REQUIRED,
    PHONE_REQUIRED,
)
from employee_api.exceptions import (
    EmployeeAlreadyExistsError,
    FieldError,
    PersistenceError,
    RegistrationValidationError,
)
from employee_api.models.domain.employee import NewEmployee, RegisteredEmployee
from employee_api.models.orm.employee import EMPLOYEE_EMAIL_CONSTRAINT
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.security.password import PasswordService, get_password_service
from employee_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    ("first_name", "employee_first_name", FIRST_NAME_REQUIRED),
    ("last_name", "employee_last_name", LAST_NAME_REQUIRED),
    ("phone", "employee_phone", PHONE_REQUIRED),
    ("email", "employee_email", EMAIL_REQUIRED),
    ("password", "employee_password", PASSWORD_REQUIRED),
)


def is_email_conflict(exc: IntegrityError) -> bool:
    """Check whether an integrity error comes from the email unique constraint.

    Drivers word this differently: PostgreSQL names the constraint, SQLite
    names the column ("UNIQUE constraint failed: employees.email").
    """
    message = str(exc.orig if exc.orig is not None else exc).lower()
    if EMPLOYEE_EMAIL_CONSTRAINT in message:
        return True
    return ("unique" in message or "duplicate" in message) and "email" in message


class EmployeeRegistrationService:
    """Service for registering new employees."""

    def __init__(
        self,
        session: AsyncSession,
        password_service: PasswordService | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Database session, committed by ``register``
            password_service: Hasher with the configured bcrypt cost
            debug: Log full exception details instead of sanitized ones
        """
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.password_service = password_service or get_password_service()
        self.debug = debug

    async def register(self, employee: NewEmployee) -> RegisteredEmployee:
        """Register a new employee.

        The email lookup only gives an early, friendly answer. Two concurrent
        registrations can both pass it, so a unique violation on insert is
        reported as the same conflict.

        Args:
            employee: Sanitized employee data with a normalized email

        Returns:
            RegisteredEmployee with the storage-assigned ID and no password

        Raises:
            RegistrationValidationError: If a required field is empty
            EmployeeAlreadyExistsError: If the email is already registered
            PersistenceError: If the employee store fails
        """
        missing = [
            FieldError(field, message)
            for attribute, field, message in REQUIRED_FIELDS
            if not getattr(employee, attribute)
        ]
        if missing:
            raise RegistrationValidationError(missing, missing_only=True)

        try:
            email_taken = await self.employee_repo.email_exists(employee.email)
        except SQLAlchemyError as e:
            log_error(logger, "Failed to look up employee email", e, debug=self.debug)
            raise PersistenceError() from e

        if email_taken:
            logger.warning("Registration rejected: email already registered")
            raise EmployeeAlreadyExistsError()

        password_hash = await self.password_service.hash_password_async(employee.password)

        try:
            employee_orm = await self.employee_repo.create(
                first_name=employee.first_name,
                last_name=employee.last_name,
                phone=employee.phone,
                email=employee.email,
                password=password_hash,
                active_status=employee.active_status,
                role=DEFAULT_ROLE,
            )
            # Commit here so a failed commit is still reported to the client
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_email_conflict(e):
                logger.warning("Registration rejected: email registered concurrently")
                raise EmployeeAlreadyExistsError() from e
            log_error(logger, "Failed to insert employee", e, debug=self.debug)
            raise PersistenceError() from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            log_error(logger, "Failed to insert employee", e, debug=self.debug)
            raise PersistenceError() from e

        logger.info(f"Registered employee {employee_orm.id}")

        return RegisteredEmployee(
            id=employee_orm.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            phone=employee.phone,
            email=employee.email,
            active_status=employee.active_status,
            role=DEFAULT_ROLE,
        )
