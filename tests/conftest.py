"""Shared pytest fixtures."""

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from tests.fakes import FakeMongoClient
from tunebook.app import App
from tunebook.config import Config
from tunebook.core.core import Core
from tunebook.web.server import create_fastapi_app


@pytest.fixture
def config() -> Config:
    """Test configuration with a fast bcrypt work factor."""
    return Config(
        _env_file=None,
        database_url="mongodb://localhost:27017/tunebook_test",
        host="127.0.0.1",
        port=3100,
        debug=True,
        jwt_secret="test-secret-key-for-signing-tokens",
        bcrypt_rounds=4,
    )


@pytest.fixture
def mongo_client() -> FakeMongoClient:
    return FakeMongoClient()


@pytest_asyncio.fixture
async def core(config: Config, mongo_client: FakeMongoClient) -> AsyncGenerator[Core]:
    """Started Core backed by the in-memory database."""
    core = Core(config, mongo_client)  # type: ignore[arg-type]
    async with core.lifespan():
        yield core


@pytest.fixture
def client(config: Config, mongo_client: FakeMongoClient) -> Generator[TestClient]:
    """HTTP client running the full FastAPI app (lifespan included)."""
    app = App(config, mongo_client)  # type: ignore[arg-type]
    with TestClient(create_fastapi_app(app, config), raise_server_exceptions=False) as test_client:
        yield test_client
