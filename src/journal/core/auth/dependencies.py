"""FastAPI dependencies for authentication.

This is the only place a user record is turned into an ``AuthUser``.
The role is loaded with the user, so handlers and the permission checker
always receive a fully-hydrated user and never refetch it.
"""

from typing import Annotated

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from journal.api.dependencies import DBSession
from journal.core.auth.backend import decode_token
from journal.core.auth.schemas import TokenData
from journal.core.errors import ForbiddenError, UnauthorizedError
from journal.core.permissions.schemas import AuthUser


bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_data(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData:
    """Extract and validate token data from the Authorization header.

    Raises:
        UnauthorizedError: If the token is missing, invalid or not an access token
    """
    if not credentials:
        raise UnauthorizedError(
            "Missing authentication token",
            error_code="missing_token",
        )

    token_data = decode_token(credentials.credentials)
    if not token_data:
        raise UnauthorizedError(
            "Invalid or expired token",
            error_code="invalid_token",
        )

    if token_data.type != "access":
        raise UnauthorizedError(
            "Invalid token type",
            error_code="invalid_token_type",
        )

    return token_data


async def get_current_user(
    request: Request,
    token_data: Annotated[TokenData, Depends(get_token_data)],
    db: DBSession,
) -> AuthUser:
    """Load the authenticated user together with their role.

    Raises:
        UnauthorizedError: If the user no longer exists
        ForbiddenError: If the account is deactivated
    """
    from journal.modules.users.repos import UserRepository  # noqa: PLC0415

    user = await UserRepository(db).get_by_id(token_data.user_id)
    if not user:
        raise UnauthorizedError(
            "User not found",
            error_code="user_not_found",
        )

    if not user.is_active:
        raise ForbiddenError(
            "User account is deactivated",
            error_code="user_inactive",
        )

    request.state.user_id = user.id
    structlog.contextvars.bind_contextvars(user_id=str(user.id))

    return AuthUser.model_validate(user)


CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
