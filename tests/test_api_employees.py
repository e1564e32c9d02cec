"""HTTP tests for POST /api/employee."""

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.config import Settings
from employee_api.main import create_app
from employee_api.models.orm import Base
from employee_api.repositories.employee_repository import EmployeeRepository
from employee_api.routers.employees import get_registration_service
from employee_api.security.password import PasswordService
from employee_api.services.registration_service import EmployeeRegistrationService

ENDPOINT = "/api/employee"


async def _count(app: FastAPI) -> int:
    async with app.state.session_maker() as session:
        return await EmployeeRepository(session).count()


class TestRegisterEmployee:
    """Successful registration."""

    async def test_creates_employee(
        self, client: AsyncClient, app: FastAPI, valid_payload: dict[str, Any]
    ) -> None:
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Employee created successfully"
        assert body["success"] is True
        assert body["data"] == {
            "id": body["data"]["id"],
            "first_name": "Ann",
            "last_name": "Lee",
            "phone": "+15551234567",
            "email": "annlee@gmail.com",
            "active_status": 1,
            "role": "employee",
        }
        assert isinstance(body["data"]["id"], int)
        assert await _count(app) == 1

    async def test_password_never_in_response(
        self, client: AsyncClient, app: FastAPI, valid_payload: dict[str, Any]
    ) -> None:
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 201
        assert "password" not in response.text
        assert "secret1" not in response.text
        async with app.state.session_maker() as session:
            stored = await EmployeeRepository(session).get_by_email("annlee@gmail.com")
        assert stored.password not in response.text

    @pytest.mark.parametrize("role", ["admin", "superadmin", "", None, {"name": "admin"}])
    async def test_client_role_is_ignored(
        self, client: AsyncClient, app: FastAPI, valid_payload: dict[str, Any], role: Any
    ) -> None:
        valid_payload["employee_role"] = role
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 201
        assert response.json()["data"]["role"] == "employee"
        async with app.state.session_maker() as session:
            stored = await EmployeeRepository(session).get_by_email("annlee@gmail.com")
        assert stored.role == "employee"

    @pytest.mark.parametrize(("value", "expected"), [(0, 0), (1, 1), ("0", 0), ("1", 1)])
    async def test_active_status_values(
        self, client: AsyncClient, valid_payload: dict[str, Any], value: Any, expected: int
    ) -> None:
        valid_payload["active_employee"] = value
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 201
        assert response.json()["data"]["active_status"] == expected

    async def test_names_are_escaped(self, client: AsyncClient, valid_payload: dict[str, Any]) -> None:
        valid_payload["employee_first_name"] = "<script>alert('x')</script>"
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 201
        assert response.json()["data"]["first_name"] == (
            "&lt;script&gt;alert(&#x27;x&#x27;)&lt;&#x2F;script&gt;"
        )


class TestDuplicateRegistration:
    """409 Conflict on an email that is already registered."""

    async def test_same_email_conflicts(
        self, client: AsyncClient, app: FastAPI, valid_payload: dict[str, Any]
    ) -> None:
        first = await client.post(ENDPOINT, json=valid_payload)
        second = await client.post(ENDPOINT, json=valid_payload)

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json() == {"error": "Conflict", "message": "Email already registered"}
        assert await _count(app) == 1

    async def test_equivalent_email_conflicts(
        self, client: AsyncClient, app: FastAPI, valid_payload: dict[str, Any]
    ) -> None:
        await client.post(ENDPOINT, json=valid_payload)
        valid_payload["employee_email"] = "a.n.n.l.e.e+other@googlemail.com"
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 409
        assert await _count(app) == 1

    async def test_concurrent_duplicates_create_one_row(
        self, client: AsyncClient, app: FastAPI, valid_payload: dict[str, Any]
    ) -> None:
        responses = await asyncio.gather(
            *(client.post(ENDPOINT, json=valid_payload) for _ in range(2))
        )

        assert sorted(r.status_code for r in responses) == [201, 409]
        assert await _count(app) == 1


class TestValidationFailures:
    """400 Bad Request with field-attributed errors."""

    async def test_short_password(
        self, client: AsyncClient, app: FastAPI, valid_payload: dict[str, Any]
    ) -> None:
        valid_payload["employee_password"] = "abc12"
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Bad Request"
        assert body["errors"] == [
            {"field": "employee_password", "message": "Password must be at least 6 characters long"}
        ]
        assert "abc12" not in response.text
        assert await _count(app) == 0

    async def test_missing_phone(self, client: AsyncClient, valid_payload: dict[str, Any]) -> None:
        del valid_payload["employee_phone"]
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 400
        assert response.json() == {
            "error": "Bad Request",
            "message": "Please provide all required fields",
            "errors": [{"field": "employee_phone", "message": "Phone number is required"}],
        }

    @pytest.mark.parametrize("value", [2, -1, True, "yes", 0.5])
    async def test_invalid_active_status(
        self, client: AsyncClient, app: FastAPI, valid_payload: dict[str, Any], value: Any
    ) -> None:
        valid_payload["active_employee"] = value
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "active_employee", "message": "Active status must be 0 or 1"}
        ]
        assert await _count(app) == 0

    async def test_invalid_phone_and_email_reported_together(
        self, client: AsyncClient, valid_payload: dict[str, Any]
    ) -> None:
        valid_payload["employee_phone"] = "not a phone"
        valid_payload["employee_email"] = "not-an-email"
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["employee_phone", "employee_email"]

    async def test_wrong_field_type(self, client: AsyncClient, valid_payload: dict[str, Any]) -> None:
        valid_payload["employee_phone"] = 15551234567
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["employee_phone"]

    async def test_malformed_json(self, client: AsyncClient) -> None:
        response = await client.post(
            ENDPOINT, content=b'{"employee_first_name": ', headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"

    async def test_missing_body(self, client: AsyncClient) -> None:
        response = await client.post(ENDPOINT)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "body"


class TestPersistenceFailure:
    """500 without leaking internals."""

    async def test_database_failure_returns_generic_error(
        self, client: AsyncClient, app: FastAPI, valid_payload: dict[str, Any]
    ) -> None:
        session = AsyncMock(spec=AsyncSession)
        session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("could not connect to db.internal:5432"))
        )
        app.dependency_overrides[get_registration_service] = lambda: EmployeeRegistrationService(
            session, PasswordService(rounds=4)
        )
        try:
            response = await client.post(ENDPOINT, json=valid_payload)
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred.",
        }
        assert "db.internal" not in response.text

    async def test_commit_failure_returns_error_and_stores_nothing(
        self,
        client: AsyncClient,
        app: FastAPI,
        valid_payload: dict[str, Any],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        async def failing_commit(self: AsyncSession) -> None:
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred.",
        }
        assert await _count(app) == 0


class TestConfiguredSettings:
    """Settings passed to create_app reach the request path."""

    async def test_bcrypt_cost_comes_from_app_settings(
        self, tmp_path, valid_payload: dict[str, Any]
    ) -> None:
        # The environment says 4; the injected settings must win
        settings = Settings(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'cost.db'}",
            bcrypt_rounds=5,
        )
        application = create_app(settings)
        async with application.state.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        try:
            async with AsyncClient(
                transport=ASGITransport(app=application), base_url="http://test"
            ) as http_client:
                response = await http_client.post(ENDPOINT, json=valid_payload)
            async with application.state.session_maker() as session:
                stored = await EmployeeRepository(session).get_by_email("annlee@gmail.com")
        finally:
            await application.state.engine.dispose()

        assert response.status_code == 201
        assert stored.password.startswith("$2b$05$")


class TestApplication:
    """Application-level behavior."""

    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_security_headers(self, client: AsyncClient, valid_payload: dict[str, Any]) -> None:
        response = await client.post(ENDPOINT, json=valid_payload)

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Cache-Control"] == "no-store, max-age=0"

    async def test_cors_preflight(self, client: AsyncClient) -> None:
        response = await client.options(
            ENDPOINT,
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    async def test_unknown_route(self, client: AsyncClient) -> None:
        response = await client.get("/api/employees")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "message": "Resource not found"}

    async def test_get_not_allowed(self, client: AsyncClient) -> None:
        response = await client.get(ENDPOINT)

        assert response.status_code == 405

    async def test_lifespan_disposes_engine(self, app: FastAPI) -> None:
        async with app.router.lifespan_context(app):
            assert await _count(app) == 0

        # The pool is recreated lazily after dispose
        assert app.state.engine.pool.checkedout() == 0
