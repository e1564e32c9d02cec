"""Employee repository."""

from sqlalchemy import select

from employee_api.models.orm.employee import EmployeeORM
from employee_api.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    async def get_by_email(self, email: str) -> EmployeeORM | None:
        """Get employee by normalized email.

        Args:
            email: Normalized email address

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.email == email)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check whether an employee with this normalized email exists.

        Args:
            email: Normalized email address

        Returns:
            True if the email is taken
        """
        result = await self.session.execute(
            select(EmployeeORM.id).where(EmployeeORM.email == email).limit(1)
        )
        return result.scalar_one_or_none() is not None
