from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.database import get_registry, get_tutorials
from app.main import app


@pytest.fixture
def tutorials() -> MagicMock:
    """Tutorial model stand-in with awaitable CRUD methods."""
    model = MagicMock()
    for name in (
        "create",
        "find_all",
        "find_published",
        "find_by_id",
        "update_by_id",
        "delete_by_id",
        "delete_all",
    ):
        setattr(model, name, AsyncMock())
    return model


@pytest.fixture
def registry(tutorials: MagicMock) -> MagicMock:
    registry = MagicMock()
    registry.client.admin.command = AsyncMock(return_value={"ok": 1.0})
    registry.model.return_value = tutorials
    return registry


@pytest_asyncio.fixture
async def client(registry: MagicMock, tutorials: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app with database dependencies overridden.

    ASGITransport does not run the lifespan, so no MongoDB is contacted.
    """
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_tutorials] = lambda: tutorials
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
