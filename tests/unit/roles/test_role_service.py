"""Tests for the role service."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from journal.core.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from journal.modules.roles.schemas import RoleCreate, RoleUpdate
from journal.modules.roles.services import RoleService
from tests.factories.user import auth_user, build_role, build_super_admin_role, super_admin


pytestmark = pytest.mark.unit


@pytest.fixture
def role_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_name.return_value = None
    repo.create.side_effect = lambda role: role
    repo.update.side_effect = lambda role: role
    return repo


@pytest.fixture
def user_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.count_by_role.return_value = 0
    return repo


@pytest.fixture
def service(role_repo: AsyncMock, user_repo: AsyncMock) -> RoleService:
    return RoleService(repo=role_repo, users=user_repo)


class TestCreateRole:
    """Tests for RoleService.create_role."""

    @pytest.mark.asyncio
    async def test_creates_custom_role(self, service, role_repo):
        """A new role is never a system role."""
        data = RoleCreate(name="Copy Editor", permissions=["article.UPDATE"])

        role = await service.create_role(data, super_admin())

        assert role.name == "Copy Editor"
        assert role.is_system is False
        assert role.permissions == ["article.UPDATE"]
        role_repo.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts(self, service, role_repo):
        """Role names are unique."""
        role_repo.get_by_name.return_value = build_role("Copy Editor")

        with pytest.raises(ConflictError) as exc_info:
            await service.create_role(RoleCreate(name="Copy Editor"), super_admin())

        assert exc_info.value.error_code == "role_exists"
        role_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_admin_cannot_grant_system_capabilities(self, service, role_repo):
        """Role managers cannot bundle system capabilities into a role."""
        actor = auth_user(["SYSTEM.ROLE_MANAGEMENT"])
        data = RoleCreate(name="Backup", permissions=["SYSTEM.BACKUP"])

        with pytest.raises(ForbiddenError):
            await service.create_role(data, actor)

        role_repo.create.assert_not_awaited()

    def test_schema_rejects_unknown_capabilities(self):
        """Unknown capabilities never reach the service."""
        with pytest.raises(ValueError, match="article.PUBLISH"):
            RoleCreate(name="Publisher", permissions=["article.PUBLISH"])

    def test_schema_drops_duplicate_capabilities(self):
        """Repeated capabilities are stored once, in order."""
        data = RoleCreate(name="Reader", permissions=["media.READ", "article.READ", "media.READ"])

        assert data.permissions == ["media.READ", "article.READ"]


class TestUpdateRole:
    """Tests for RoleService.update_role."""

    @pytest.mark.asyncio
    async def test_updates_custom_role(self, service, role_repo):
        """Name, description and permissions of custom roles can change."""
        role = build_role("Reviewer", ["article.READ"])
        role_repo.get_by_id.return_value = role

        updated = await service.update_role(
            role.id,
            RoleUpdate(name="Senior Reviewer", description="Reads", permissions=["article.ALL"]),
            super_admin(),
        )

        assert updated.name == "Senior Reviewer"
        assert updated.description == "Reads"
        assert updated.permissions == ["article.ALL"]

    @pytest.mark.asyncio
    async def test_system_role_name_is_immutable(self, service, role_repo):
        """Renaming a system role is refused."""
        role = build_super_admin_role()
        role_repo.get_by_id.return_value = role

        with pytest.raises(BadRequestError):
            await service.update_role(role.id, RoleUpdate(name="Root"), super_admin())

        assert role.name == "Super Admin"

    @pytest.mark.asyncio
    async def test_system_role_permissions_are_immutable(self, service, role_repo):
        """Changing a system role's permissions is refused."""
        role = build_super_admin_role()
        role_repo.get_by_id.return_value = role

        with pytest.raises(BadRequestError):
            await service.update_role(
                role.id, RoleUpdate(permissions=["article.READ"]), super_admin()
            )

        assert role.permissions == ["SYSTEM.ADMIN"]

    @pytest.mark.asyncio
    async def test_system_role_description_can_change(self, service, role_repo):
        """Descriptions of system roles are editable."""
        role = build_super_admin_role()
        role_repo.get_by_id.return_value = role

        updated = await service.update_role(
            role.id,
            RoleUpdate(name="Super Admin", description="Owners", permissions=["SYSTEM.ADMIN"]),
            super_admin(),
        )

        assert updated.description == "Owners"

    @pytest.mark.asyncio
    async def test_rename_to_taken_name_conflicts(self, service, role_repo):
        """Renaming onto an existing role name is refused."""
        role = build_role("Reviewer")
        role_repo.get_by_id.return_value = role
        role_repo.get_by_name.return_value = build_role("Editor")

        with pytest.raises(ConflictError):
            await service.update_role(role.id, RoleUpdate(name="Editor"), super_admin())

    @pytest.mark.asyncio
    async def test_missing_role(self, service, role_repo):
        """Updating an unknown role raises NotFoundError."""
        role_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.update_role(uuid4(), RoleUpdate(description="x"), super_admin())


class TestDeleteRole:
    """Tests for RoleService.delete_role."""

    @pytest.mark.asyncio
    async def test_deletes_unused_custom_role(self, service, role_repo):
        """A custom role without users is deleted."""
        role = build_role("Intern")
        role_repo.get_by_id.return_value = role

        await service.delete_role(role.id, super_admin())

        role_repo.delete.assert_awaited_once_with(role)

    @pytest.mark.asyncio
    async def test_system_role_cannot_be_deleted(self, service, role_repo):
        """System roles are never deleted."""
        role = build_super_admin_role()
        role_repo.get_by_id.return_value = role

        with pytest.raises(BadRequestError) as exc_info:
            await service.delete_role(role.id, super_admin())

        assert exc_info.value.error_code == "system_role_protected"
        role_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_role_in_use_cannot_be_deleted(self, service, role_repo, user_repo):
        """Roles with assigned users are kept."""
        role = build_role("Editor")
        role_repo.get_by_id.return_value = role
        user_repo.count_by_role.return_value = 3

        with pytest.raises(ConflictError) as exc_info:
            await service.delete_role(role.id, super_admin())

        assert exc_info.value.error_code == "role_in_use"
        assert exc_info.value.details["user_count"] == 3
        role_repo.delete.assert_not_awaited()


class TestSyncDefaultRoles:
    """Tests for RoleService.sync_default_roles."""

    @pytest.mark.asyncio
    async def test_creates_missing_roles_only(self, service, role_repo):
        """Existing roles are left alone; Super Admin is created as a system role."""
        role_repo.get_by_name.side_effect = lambda name: (
            build_role(name) if name == "Editor" else None
        )

        created = await service.sync_default_roles()

        names = {r.name for r in created}
        assert "Editor" not in names
        assert {"Super Admin", "Admin", "Author", "Reviewer", "Viewer"} <= names
        super_admin_role = next(r for r in created if r.name == "Super Admin")
        assert super_admin_role.is_system is True
        assert super_admin_role.permissions == ["SYSTEM.ADMIN"]
        assert all(not r.is_system for r in created if r.name != "Super Admin")
