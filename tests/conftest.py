"""Pytest configuration and shared fixtures.

No database is needed: route tests override the session, the current user
and the services through ``app.dependency_overrides``.
"""

from collections.abc import AsyncGenerator, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from journal.core.auth.dependencies import get_current_user
from journal.core.database import get_db
from journal.core.permissions import AuthUser
from journal.main import create_app


@pytest.fixture
def db_session() -> AsyncMock:
    """An AsyncSession stand-in whose ``execute`` returns a configurable result."""
    session = AsyncMock()
    session.execute.return_value = MagicMock()
    return session


@pytest.fixture
async def app(db_session: AsyncMock) -> AsyncGenerator[FastAPI, None]:
    """Create test application instance."""
    application = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncMock, None]:
        yield db_session

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def login_as(app: FastAPI) -> Callable[[AuthUser], AuthUser]:
    """Make every request in the test authenticate as the given user."""

    def _login(user: AuthUser) -> AuthUser:
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    return _login
