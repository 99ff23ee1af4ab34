from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession



@pytest_asyncio.fixture(name="client")
async def client_fixture(backend, db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with the backend and session dependencies overridden.

    The backend client talks to the in-memory fake table API of the root conftest.
    """
    from holyspots_admin.core.database import get_session
    from holyspots_admin.server.main import app
    from holyspots_admin.server.services.deps import get_backend_client

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_backend_client] = lambda: backend

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
