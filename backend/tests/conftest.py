from contextlib import ExitStack

import pytest
from fastapi.testclient import TestClient

from animecards.core.config import Settings
from animecards.core.context import AppContext
from animecards.db.session import session_scope
from animecards.main import create_app

PASSWORD = "password123"

FLAME_DRAKE = {
    "name": "Flame Drake",
    "type": "character",
    "rarity": "legendary",
    "attack": 50,
    "defense": 30,
    "health": 80,
    "mana": 10,
    "abilities": ["fire_immunity"],
}


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'cards.db'}",
        secret_key="test-secret",
        session_purge_enabled=False,
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client_factory(app):
    """Each client keeps its own cookie jar, i.e. acts as a separate browser."""
    with ExitStack() as stack:

        def make() -> TestClient:
            return stack.enter_context(TestClient(app))

        yield make


@pytest.fixture()
def client(client_factory) -> TestClient:
    return client_factory()


def register(client: TestClient, username: str, password: str = PASSWORD) -> dict:
    res = client.post("/api/auth/register", json={"username": username, "password": password})
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture()
async def context(settings):
    ctx = AppContext.from_settings(settings)
    await ctx.create_all()
    try:
        yield ctx
    finally:
        await ctx.dispose()


@pytest.fixture()
async def db(context):
    async with session_scope(context.session_factory) as session:
        yield session
