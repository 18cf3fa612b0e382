"""Authentication module for JWT and password handling."""

from journal.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from journal.core.auth.dependencies import CurrentUser, get_current_user
from journal.core.auth.schemas import AccessTokenResponse, TokenData


__all__ = [
    "AccessTokenResponse",
    "CurrentUser",
    "TokenData",
    "create_access_token",
    "decode_token",
    "get_current_user",
    "hash_password",
    "verify_password",
]
