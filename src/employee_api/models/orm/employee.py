"""Employee ORM model."""

from sqlalchemy import Integer, SmallInteger, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from employee_api.constants.validation import (
    ACTIVE_STATUS,
    DEFAULT_ROLE,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
)
from employee_api.models.orm.base import Base, TimestampMixin

# Name of the unique constraint that guards against duplicate registrations
EMPLOYEE_EMAIL_CONSTRAINT = "uq_employees_email"


class EmployeeORM(Base, TimestampMixin):
    """Employee database model."""

    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    phone: Mapped[str] = mapped_column(String(MAX_PHONE_LENGTH), nullable=False)
    # Normalized address; the unique constraint is the source of truth for duplicates
    email: Mapped[str] = mapped_column(String(MAX_EMAIL_LENGTH), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)  # bcrypt hash
    active_status: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=ACTIVE_STATUS)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default=DEFAULT_ROLE)

    __table_args__ = (UniqueConstraint("email", name=EMPLOYEE_EMAIL_CONSTRAINT),)
