"""Domain models package."""

from employee_api.models.domain.employee import NewEmployee, RegisteredEmployee

__all__ = [
    "NewEmployee",
    "RegisteredEmployee",
]
