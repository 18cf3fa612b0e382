"""Unit tests for auth backend (JWT and password handling)."""

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import jwt

from journal.config import settings
from journal.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)


pytestmark = pytest.mark.unit


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password_returns_hash(self):
        """hash_password should return a bcrypt hash."""
        hashed = hash_password("mysecretpassword")

        assert hashed != "mysecretpassword"
        assert hashed.startswith("$2b$")

    def test_hash_password_different_each_time(self):
        """hash_password should salt every hash."""
        assert hash_password("mysecretpassword") != hash_password("mysecretpassword")

    def test_verify_password(self):
        """verify_password accepts the right password and rejects others."""
        hashed = hash_password("mysecretpassword")

        assert verify_password("mysecretpassword", hashed) is True
        assert verify_password("wrongpassword", hashed) is False


class TestJWTTokens:
    """Tests for JWT token functions."""

    def test_round_trip(self):
        """A fresh token decodes back to its user."""
        user_id = uuid4()

        token_data = decode_token(create_access_token(user_id))

        assert token_data is not None
        assert token_data.user_id == user_id
        assert token_data.type == "access"

    def test_expired_token(self):
        """Expired tokens are rejected."""
        token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-1))

        assert decode_token(token) is None

    def test_tampered_token(self):
        """Tokens signed with another key are rejected."""
        token = jwt.encode(
            {"sub": str(uuid4()), "exp": 9999999999},
            "another-secret-key-that-is-long-enough",
            algorithm=settings.jwt_algorithm,
        )

        assert decode_token(token) is None

    def test_invalid_subject(self):
        """A subject that is not a UUID is rejected."""
        token = create_access_token(uuid4(), additional_claims={"sub": "not-a-uuid"})

        assert decode_token(token) is None

    def test_garbage(self):
        """Random strings are rejected."""
        assert decode_token("not.a.jwt") is None
