import copy
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardbinder.db.database import get_session
from cardbinder.main import app
from cardbinder.models.card import CardSet
from cardbinder.models.db import Base
from cardbinder.services.catalog import parse_catalog
from cardbinder.services.local_cache import LocalCache

SAMPLE_CATALOG: list[dict[str, Any]] = [
    {
        "id": "mega-dream-ex",
        "name": "MEGA Dream ex",
        "releaseDate": "2025-11-01",
        "cards": [
            {
                "number": "001",
                "name": "Bulbasaur",
                "rarity": "Common",
                "variants": [
                    {"type": "Regular", "image": "images/cards/bulbasaur-001-regular.jpg"},
                    {"type": "Ball", "image": "images/cards/bulbasaur-001-ball.jpg"},
                    {"type": "Energy", "image": "images/cards/bulbasaur-001-energy.jpg"},
                    {"type": "Reverse Holo", "image": "images/cards/bulbasaur-001-rh.jpg"},
                ],
            },
            {
                "number": "002",
                "name": "Mega Charizard X ex",
                "rarity": "Double Rare",
                "variants": [
                    {"type": "Regular", "image": "images/cards/charizard-002-regular.jpg"},
                    {"type": "Reverse Holo", "image": "images/cards/charizard-002-rh.jpg"},
                    {"type": "Full Art", "image": "images/cards/charizard-002-fa.jpg"},
                ],
            },
            {
                "number": "003",
                "name": "Ultra Ball",
                "rarity": "Uncommon",
                "variants": [
                    {"type": "Regular", "image": "images/cards/ultra-ball-003-regular.jpg"},
                    {"type": "Reverse Holo", "image": "images/cards/ultra-ball-003-rh.jpg"},
                ],
            },
            {
                "number": "004",
                "name": "Ethan's Pinsir",
                "rarity": "Rare",
                "variants": [
                    {"type": "Regular", "image": "images/cards/pinsir-004-regular.jpg"},
                    {"type": "Ball", "image": "images/cards/pinsir-004-ball.jpg"},
                ],
            },
        ],
    },
    {
        "id": "greninja-collection",
        "name": "Greninja Collection",
        "releaseDate": "2025-09-12",
        "cards": [
            {
                "number": "010",
                "name": "Froakie",
                "rarity": "Common",
                "variants": [
                    {"type": "Regular", "image": "images/cards/froakie-010-regular.jpg"},
                    {"type": "Reverse Holo", "image": "images/cards/froakie-010-rh.jpg"},
                ],
            },
            {
                "number": "011",
                "name": "Prism Energy",
                "rarity": "Uncommon",
                "variants": [
                    {"type": "Regular", "image": "images/cards/prism-energy-011-regular.jpg"},
                    {"type": "Reverse Holo", "image": "images/cards/prism-energy-011-rh.jpg"},
                ],
            },
        ],
    },
]


@pytest.fixture
def catalog_data() -> list[dict[str, Any]]:
    """Raw catalog JSON with two sets."""
    return copy.deepcopy(SAMPLE_CATALOG)


@pytest.fixture
def catalog_sets(catalog_data: list[dict[str, Any]]) -> list[CardSet]:
    return parse_catalog(catalog_data)


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "local_collection.json"


@pytest.fixture
def cache(cache_path: Path) -> LocalCache:
    return LocalCache(cache_path)


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
async def client(async_engine):
    """Provide an async test client with overridden database session."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
