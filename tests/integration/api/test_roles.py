"""Integration tests for the role API."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from journal.core.errors import ConflictError
from journal.core.permissions import all_capabilities
from journal.modules.roles.services import RoleService
from tests.factories.user import auth_user, build_role, super_admin


pytestmark = pytest.mark.integration


@pytest.fixture
def role_service(app: FastAPI) -> AsyncMock:
    service = AsyncMock(spec=RoleService)
    app.dependency_overrides[RoleService] = lambda: service
    return service


class TestListRoles:
    """Tests for GET /api/v1/roles."""

    @pytest.mark.asyncio
    async def test_lists_roles(self, client: AsyncClient, login_as, role_service):
        login_as(auth_user(["role.READ"]))
        role_service.list_roles.return_value = [build_role("Editor"), build_role("Viewer")]

        response = await client.get("/api/v1/roles")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [r["name"] for r in body["items"]] == ["Editor", "Viewer"]

    @pytest.mark.asyncio
    async def test_requires_role_read(self, client: AsyncClient, login_as, role_service):
        login_as(auth_user(["article.ALL"]))

        response = await client.get("/api/v1/roles")

        assert response.status_code == 403
        assert response.json()["detail"] == (
            "insufficient permissions: missing one of role.READ, SYSTEM.ROLE_MANAGEMENT"
        )
        role_service.list_roles.assert_not_awaited()


class TestCatalogue:
    """Tests for GET /api/v1/roles/catalogue."""

    @pytest.mark.asyncio
    async def test_lists_every_capability(self, client: AsyncClient, login_as):
        login_as(auth_user(["SYSTEM.ROLE_MANAGEMENT"]))

        response = await client.get("/api/v1/roles/catalogue")

        assert response.status_code == 200
        values = [o["value"] for o in response.json()["options"]]
        assert values == all_capabilities()


class TestCreateRole:
    """Tests for POST /api/v1/roles."""

    @pytest.mark.asyncio
    async def test_creates_role(self, client: AsyncClient, login_as, role_service):
        actor = login_as(super_admin())
        role_service.create_role.return_value = build_role("Copy Editor", ["article.UPDATE"])

        response = await client.post(
            "/api/v1/roles",
            json={"name": "Copy Editor", "permissions": ["article.UPDATE"]},
        )

        assert response.status_code == 201
        assert response.json()["permissions"] == ["article.UPDATE"]
        data, passed_actor = role_service.create_role.await_args.args
        assert data.name == "Copy Editor"
        assert passed_actor == actor

    @pytest.mark.asyncio
    async def test_rejects_unknown_capability(self, client: AsyncClient, login_as, role_service):
        """Unknown capabilities are a 422 validation problem."""
        login_as(super_admin())

        response = await client.post(
            "/api/v1/roles",
            json={"name": "Publisher", "permissions": ["article.PUBLISH"]},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["errors"][0]["field"] == "permissions"
        role_service.create_role.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_conflict_is_problem_details(self, client: AsyncClient, login_as, role_service):
        login_as(super_admin())
        role_service.create_role.side_effect = ConflictError(
            "A role with this name already exists", error_code="role_exists"
        )

        response = await client.post("/api/v1/roles", json={"name": "Editor"})

        assert response.status_code == 409
        assert response.json()["type"].endswith("/errors/role_exists")


class TestDeleteRole:
    """Tests for DELETE /api/v1/roles/{role_id}."""

    @pytest.mark.asyncio
    async def test_deletes_role(self, client: AsyncClient, login_as, role_service):
        login_as(auth_user(["role.DELETE"]))
        role_id = uuid4()

        response = await client.delete(f"/api/v1/roles/{role_id}")

        assert response.status_code == 204
        assert role_service.delete_role.await_args.args[0] == role_id

    @pytest.mark.asyncio
    async def test_requires_role_delete(self, client: AsyncClient, login_as, role_service):
        login_as(auth_user(["role.READ", "role.UPDATE"]))

        response = await client.delete(f"/api/v1/roles/{uuid4()}")

        assert response.status_code == 403
        role_service.delete_role.assert_not_awaited()
