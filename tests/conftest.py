"""Root conftest — shared fixtures: in-memory database, FastAPI test client, fake upstream.

Invariants:
    - DATABASE_URL set before kanji_api is imported (settings require it)
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_dictionary_client overridden: no lifespan, no network

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Upstream dictionary faked with httpx.MockTransport, not by patching the client
"""

import os

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient  # noqa: E402

from kanji_api.db.base import Base  # noqa: E402
from kanji_api.infrastructure.database import get_db  # noqa: E402
from kanji_api.infrastructure.dictionary_client import (  # noqa: E402
    DictionaryClient, get_dictionary_client,
)
from kanji_api.main import app  # noqa: E402
from kanji_api.models.kanji import Kanji  # noqa: E402

UPSTREAM_URL = "https://dictionary.test/api/v1/search/words"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def upstream():
    """Controllable fake of the upstream dictionary service.

    Returns dict with:
      - requests: list of httpx.Request received
      - response: httpx.Response to return, or an exception instance to raise
    """
    state = {
        "requests": [],
        "response": httpx.Response(200, json={"meta": {"status": 200}, "data": []}),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        if isinstance(state["response"], Exception):
            raise state["response"]
        return state["response"]

    state["client"] = DictionaryClient(
        UPSTREAM_URL, transport=httpx.MockTransport(handler),
    )
    return state


@pytest.fixture
async def client(test_session_factory, upstream):
    """FastAPI test client with DB and upstream dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dictionary_client] = lambda: upstream["client"]

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    await upstream["client"].close()


@pytest.fixture
async def seed_kanji(test_db):
    """Insert a few records directly; returns them in insertion order."""
    rows = [
        Kanji(character="水", onyomi="スイ", kunyomi="みず", meaning="water"),
        Kanji(character="火", onyomi="カ", kunyomi="ひ", meaning="fire"),
        Kanji(character="木", onyomi="ボク、モク", kunyomi="き", meaning="tree"),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    for row in rows:
        await test_db.refresh(row)
    return rows
