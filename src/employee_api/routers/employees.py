"""Employees router - employee registration."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.database import get_db
from employee_api.exceptions import ConflictError, PersistenceError, ValidationError
from employee_api.models.dto.employee import (
    EmployeeRegistrationRequest,
    EmployeeRegistrationResponse,
    EmployeeResponse,
    ErrorResponse,
)
from employee_api.security.password import PasswordService
from employee_api.services.registration_service import EmployeeRegistrationService
from employee_api.utils.validation import validate_registration

logger = logging.getLogger(__name__)
router = APIRouter()

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred."


def get_registration_service(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> EmployeeRegistrationService:
    """Get EmployeeRegistrationService configured from the application settings."""
    settings = request.app.state.settings
    return EmployeeRegistrationService(
        db,
        PasswordService(rounds=settings.bcrypt_rounds),
        debug=settings.debug,
    )


def error_response(status_code: int, error: str, message: str, errors: list | None = None) -> JSONResponse:
    """Build an error response in the API's stable error shape."""
    body = ErrorResponse(error=error, message=message, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/employee",
    response_model=EmployeeRegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"},
    },
)
async def register_employee(
    body: EmployeeRegistrationRequest,
    service: Annotated[EmployeeRegistrationService, Depends(get_registration_service)],
) -> EmployeeRegistrationResponse | JSONResponse:
    """Register a new employee.

    The role is always assigned by the server; any client-supplied role
    is ignored.
    """
    try:
        employee = validate_registration(body)
        registered = await service.register(employee)
    except ValidationError as e:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Bad Request",
            e.message,
            [error.to_dict() for error in e.errors],
        )
    except ConflictError as e:
        return error_response(status.HTTP_409_CONFLICT, "Conflict", e.message)
    except PersistenceError:
        # Already logged by the service with sanitized details
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            INTERNAL_ERROR_MESSAGE,
        )

    return EmployeeRegistrationResponse(
        data=EmployeeResponse.model_validate(registered, from_attributes=True),
    )
