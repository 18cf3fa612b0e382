"""User API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query, status

from journal.core.auth import AccessTokenResponse, CurrentUser
from journal.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from journal.core.permissions import (
    AuthUser,
    PermissionContext,
    describe_effective_permissions,
)
from journal.core.permissions.dependencies import (
    enforce_permission,
    require_any_permission,
    require_permission,
)
from journal.modules.users import router
from journal.modules.users.schemas import (
    CurrentUserResponse,
    LoginRequest,
    UserCreate,
    UserListResponse,
    UserPermissionsUpdate,
    UserResponse,
    UserRoleUpdate,
    UserUpdate,
)
from journal.modules.users.services import UserSvc


CanListUsers = Annotated[
    AuthUser,
    Depends(require_any_permission(["user.READ", "SYSTEM.USER_MANAGEMENT"])),
]
CanCreateUsers = Annotated[
    AuthUser,
    Depends(require_any_permission(["user.CREATE", "SYSTEM.USER_MANAGEMENT"])),
]
CanUpdateUsers = Annotated[
    AuthUser,
    Depends(require_any_permission(["user.UPDATE", "SYSTEM.USER_MANAGEMENT"])),
]
CanAssignRoles = Annotated[
    AuthUser, Depends(require_permission("SYSTEM.ROLE_MANAGEMENT"))
]
CanGrantPermissions = Annotated[
    AuthUser, Depends(require_permission("SYSTEM.USER_MANAGEMENT"))
]
CanDeleteUsers = Annotated[
    AuthUser,
    Depends(require_any_permission(["user.DELETE", "SYSTEM.USER_MANAGEMENT"])),
]


@router.post(
    "/login",
    response_model=AccessTokenResponse,
    summary="Login with email and password",
)
async def login(data: LoginRequest, service: UserSvc) -> AccessTokenResponse:
    return await service.authenticate(data)


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Get the signed-in user",
    description="Includes the role, direct and combined capabilities.",
)
async def get_me(current_user: CurrentUser, service: UserSvc) -> CurrentUserResponse:
    user = await service.get_user(current_user.id)
    return CurrentUserResponse(
        user=UserResponse.model_validate(user),
        effective_permissions=describe_effective_permissions(current_user),
    )


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
)
async def list_users(
    service: UserSvc,
    current_user: CanListUsers,  # noqa: ARG001
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> UserListResponse:
    users, total = await service.list_users(page=page, page_size=page_size)
    return UserListResponse(
        items=[UserResponse.model_validate(u) for u in users],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
    description="Users may always read their own account.",
)
async def get_user(
    user_id: UUID,
    service: UserSvc,
    current_user: CurrentUser,
) -> UserResponse:
    # A user account is owned by itself
    enforce_permission(
        current_user,
        "user.READ",
        PermissionContext(
            user_id=current_user.id,
            resource_owner=user_id,
            resource_id=user_id,
        ),
    )
    user = await service.get_user(user_id)
    return UserResponse.model_validate(user)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def create_user(
    data: UserCreate,
    service: UserSvc,
    current_user: CanCreateUsers,
) -> UserResponse:
    user = await service.create_user(data, current_user)
    return UserResponse.model_validate(user)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user",
)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    service: UserSvc,
    current_user: CanUpdateUsers,
) -> UserResponse:
    user = await service.update_user(user_id, data, current_user)
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}/role",
    response_model=UserResponse,
    summary="Assign a role",
)
async def assign_role(
    user_id: UUID,
    data: UserRoleUpdate,
    service: UserSvc,
    current_user: CanAssignRoles,
) -> UserResponse:
    user = await service.assign_role(user_id, data.role_id, current_user)
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}/permissions",
    response_model=UserResponse,
    summary="Replace direct permissions",
)
async def update_permissions(
    user_id: UUID,
    data: UserPermissionsUpdate,
    service: UserSvc,
    current_user: CanGrantPermissions,
) -> UserResponse:
    user = await service.update_permissions(user_id, data.permissions, current_user)
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
)
async def delete_user(
    user_id: UUID,
    service: UserSvc,
    current_user: CanDeleteUsers,
) -> None:
    await service.delete_user(user_id, current_user)
