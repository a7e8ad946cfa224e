# tests/conftest.py
import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from sahayata.core.config import Settings
from sahayata.main import create_app


@pytest.fixture(scope="session")
def anyio_backend():
    # keep AnyIO on asyncio for the whole test session
    return "asyncio"


@pytest.fixture
def app():
    return create_app(Settings(storage_backend="memory", cors_origins=["*"]))


@pytest.fixture
async def test_client(app):
    async with LifespanManager(app):
        transport = ASGITransport(app=app, raise_app_exceptions=True)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest.fixture
def repo(app, test_client):
    # test_client has run the lifespan, so the repo exists
    return app.state.repo
