"""Integration-test fixtures — real app + real repository on SQLite.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db_session dependency overridden to use the test database
    - Seed data mirrors alembic/versions/003_seed_demo_data.py

Design Decisions:
    - SQLite in-memory via aiosqlite: no external dependency; the repository
      only issues portable Core statements (FOR UPDATE is dropped by SQLite)
    - StaticPool: all sessions share the single in-memory connection
    - bcrypt rounds lowered for seed hashes to keep the suite fast
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.cc_cashcard.infrastructure.db_models import CashCardORM
from src.cc_common.database import Base, get_db_session
from src.cc_gateway.auth.password import hash_password
from src.cc_gateway.user.db_models import ROLE_CARD_OWNER, ROLE_NON_OWNER, UserModel
from src.main import app

SEED_USERS = [
    ("sarah1", "abc123", ROLE_CARD_OWNER),
    ("kumar2", "xyz789", ROLE_CARD_OWNER),
    ("hank-owns-no-cards", "qrs456", ROLE_NON_OWNER),
]

SEED_CARDS = [
    {"id": 99, "amount": 123.45, "owner": "sarah1"},
    {"id": 100, "amount": 1.00, "owner": "sarah1"},
    {"id": 101, "amount": 150.00, "owner": "sarah1"},
    {"id": 102, "amount": 200.00, "owner": "kumar2"},
]


@pytest.fixture(scope="session")
def password_hashes() -> dict[str, str]:
    return {username: hash_password(password, rounds=4) for username, password, _ in SEED_USERS}


@pytest.fixture
async def test_engine(password_hashes: dict[str, str]):
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add_all(
            [
                UserModel(username=username, password_hash=password_hashes[username], role=role)
                for username, _, role in SEED_USERS
            ]
        )
        await session.execute(insert(CashCardORM.__table__), SEED_CARDS)
        await session.commit()

    yield engine
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory):
    """HTTP client against the app with the DB dependency overridden."""

    async def override_get_db_session():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
