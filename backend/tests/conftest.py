"""
Shared fixtures: an in-memory SQLite store with the full schema, a second
store with no tables (reachable engine, uninitialised schema), and an HTTP
client bound to the app.
"""
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from medlink.db.base import Base
from medlink.db.models import Post, Profile
from medlink.db.session import get_db
from medlink.store.guard import readiness

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _memory_engine():
    return create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture(autouse=True)
def fresh_readiness():
    readiness.reset()
    yield
    readiness.reset()


@pytest.fixture
async def engine():
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db(engine):
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        yield session


@pytest.fixture
async def bare_db():
    """Session on a store whose schema was never created."""
    engine = _memory_engine()
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def client(db):
    from main import app

    async def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def bare_client(bare_db):
    from main import app

    async def override_get_db():
        yield bare_db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def add_row(db: AsyncSession, row) -> str:
    """Insert a model row directly and return its id."""
    db.add(row)
    await db.commit()
    return row.id


async def add_profile(db: AsyncSession, profile_id: str, **fields) -> str:
    fields.setdefault("email", f"{profile_id}@example.org")
    fields.setdefault("full_name", profile_id.title())
    return await add_row(db, Profile(id=profile_id, **fields))


async def add_post(db: AsyncSession, author_id: str, content: str, minutes: int = 0, **fields) -> str:
    created = BASE_TIME + timedelta(minutes=minutes)
    return await add_row(
        db,
        Post(author_id=author_id, content=content, created_at=created, updated_at=created, **fields),
    )


@pytest.fixture
async def file_db(tmp_path):
    """Session on a file-backed store, so other connections can write to it too."""
    path = tmp_path / "medlink.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{path}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        session.info["path"] = str(path)
        yield session
    await engine.dispose()
