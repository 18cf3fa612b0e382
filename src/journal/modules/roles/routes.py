"""Role API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, status

from journal.core.permissions import AuthUser, list_permission_options
from journal.core.permissions.dependencies import require_any_permission
from journal.modules.roles import router
from journal.modules.roles.schemas import (
    PermissionCatalogueResponse,
    RoleCreate,
    RoleListResponse,
    RoleResponse,
    RoleUpdate,
)
from journal.modules.roles.services import RoleSvc


CanReadRoles = Annotated[
    AuthUser, Depends(require_any_permission(["role.READ", "SYSTEM.ROLE_MANAGEMENT"]))
]
CanCreateRoles = Annotated[
    AuthUser,
    Depends(require_any_permission(["role.CREATE", "SYSTEM.ROLE_MANAGEMENT"])),
]
CanUpdateRoles = Annotated[
    AuthUser,
    Depends(require_any_permission(["role.UPDATE", "SYSTEM.ROLE_MANAGEMENT"])),
]
CanDeleteRoles = Annotated[
    AuthUser,
    Depends(require_any_permission(["role.DELETE", "SYSTEM.ROLE_MANAGEMENT"])),
]


@router.get(
    "",
    response_model=RoleListResponse,
    summary="List roles",
)
async def list_roles(
    service: RoleSvc,
    current_user: CanReadRoles,  # noqa: ARG001
) -> RoleListResponse:
    roles = await service.list_roles()
    return RoleListResponse(
        items=[RoleResponse.model_validate(r) for r in roles],
        total=len(roles),
    )


@router.get(
    "/catalogue",
    response_model=PermissionCatalogueResponse,
    summary="List grantable permissions",
    description="Every capability with a label and category, for role editors.",
)
async def permission_catalogue(
    current_user: CanReadRoles,  # noqa: ARG001
) -> PermissionCatalogueResponse:
    return PermissionCatalogueResponse(options=list_permission_options())


@router.get(
    "/{role_id}",
    response_model=RoleResponse,
    summary="Get a role",
)
async def get_role(
    role_id: UUID,
    service: RoleSvc,
    current_user: CanReadRoles,  # noqa: ARG001
) -> RoleResponse:
    role = await service.get_role(role_id)
    return RoleResponse.model_validate(role)


@router.post(
    "",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a role",
)
async def create_role(
    data: RoleCreate,
    service: RoleSvc,
    current_user: CanCreateRoles,
) -> RoleResponse:
    role = await service.create_role(data, current_user)
    return RoleResponse.model_validate(role)


@router.patch(
    "/{role_id}",
    response_model=RoleResponse,
    summary="Update a role",
    description="System roles accept description changes only.",
)
async def update_role(
    role_id: UUID,
    data: RoleUpdate,
    service: RoleSvc,
    current_user: CanUpdateRoles,
) -> RoleResponse:
    role = await service.update_role(role_id, data, current_user)
    return RoleResponse.model_validate(role)


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a role",
    description="System roles and roles with assigned users cannot be deleted.",
)
async def delete_role(
    role_id: UUID,
    service: RoleSvc,
    current_user: CanDeleteRoles,
) -> None:
    await service.delete_role(role_id, current_user)
