"""Authentication backend: password hashing and JWT access tokens."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from journal.config import settings
from journal.core.auth.schemas import TokenData
from journal.core.constants import BCRYPT_ROUNDS


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its bcrypt hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: UUID,
    expires_delta: timedelta | None = None,
    additional_claims: dict[str, Any] | None = None,
) -> str:
    """Create a signed JWT access token.

    Args:
        user_id: The user's UUID, stored in the ``sub`` claim
        expires_delta: Optional custom lifetime
        additional_claims: Optional extra claims to include

    Returns:
        Encoded JWT access token
    """
    now = datetime.now(UTC)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)

    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "exp": now + lifetime,
        "iat": now,
        "type": "access",
        "jti": secrets.token_urlsafe(16),
    }
    if additional_claims:
        to_encode.update(additional_claims)

    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> TokenData | None:
    """Decode and validate a JWT token.

    Returns:
        TokenData if the signature and expiry are valid, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

    user_id = payload.get("sub")
    exp = payload.get("exp")
    if not user_id or exp is None:
        return None

    try:
        return TokenData(
            user_id=UUID(user_id),
            exp=datetime.fromtimestamp(exp, tz=UTC),
            type=payload.get("type", "access"),
        )
    except ValueError:
        return None
