import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.db.base import Base, Group, GroupMember, User
from app.db.session import get_db
from app.main import app


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_group(db, name, creator, members):
    group = Group(name=name, created_by=creator.id)
    db.add(group)
    await db.flush()
    db.add_all([GroupMember(group_id=group.id, user_id=m.id) for m in members])
    await db.commit()
    return group


@pytest.fixture
def make_group(db):
    async def factory(name, creator, members):
        return await _make_group(db, name, creator, members)
    return factory


@pytest.fixture
async def trip(db):
    """Alice, Bob and Carol share a group; Dave is not in it."""
    alice = User(name="Alice", email="alice@example.com", default_currency="INR")
    bob = User(name="Bob", email="bob@example.com", default_currency="INR")
    carol = User(name="Carol", email="carol@example.com", default_currency="USD")
    dave = User(name="Dave", email="dave@example.com", default_currency="EUR")
    db.add_all([alice, bob, carol, dave])
    await db.flush()

    group = await _make_group(db, "Goa Trip", alice, [alice, bob, carol])
    return SimpleNamespace(group=group, alice=alice, bob=bob, carol=carol, dave=dave)
