"""Authentication schemas for token handling."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class TokenData(BaseModel):
    """Data extracted from a JWT access token.

    Attributes:
        user_id: The user's UUID (``sub`` claim)
        exp: Token expiration time
        type: Token type; only ``access`` tokens authenticate requests
    """

    user_id: UUID
    exp: datetime
    type: str = "access"


class AccessTokenResponse(BaseModel):
    """Access token issued to an administrator."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
