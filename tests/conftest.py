"""
Shared test fixtures and configuration for the employee API tests.
"""
import os
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

# Set test environment before importing app modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
# Lowest cost bcrypt accepts, keeps the suite fast
os.environ["BCRYPT_ROUNDS"] = "4"

from employee_api.config import Settings  # noqa: E402
from employee_api.main import create_app  # noqa: E402
from employee_api.models.orm import Base  # noqa: E402


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file.

    A file (not :memory:) is used so that every pooled connection sees the
    same database and the unique constraint behaves as in production.
    """
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}",
        bcrypt_rounds=4,
        cors_origins="http://localhost:3000",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Application with the employees table created."""
    application = create_app(settings)
    async with application.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield application
    await application.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def session(app: FastAPI) -> AsyncGenerator[AsyncSession, None]:
    """Database session on the application's engine."""
    async with app.state.session_maker() as db_session:
        yield db_session


@pytest.fixture
def valid_payload() -> dict[str, Any]:
    """A registration body that passes validation."""
    return {
        "employee_first_name": "Ann",
        "employee_last_name": "Lee",
        "employee_phone": "+15551234567",
        "employee_email": "Ann.Lee+test@gmail.com",
        "employee_password": "secret1",
    }
