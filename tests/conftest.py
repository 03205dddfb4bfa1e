import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from gym_api import models  # noqa: F401  # register models on Base.metadata
from gym_api.core.database import Base, get_db
from gym_api.main import app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def session_maker(tmp_path):
    """Session factory bound to a fresh SQLite file."""
    db_path = tmp_path / "test.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", future=True)
    TestingSessionLocal = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autocommit=False, autoflush=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield TestingSessionLocal
    finally:
        await engine.dispose()


@pytest.fixture
async def client(session_maker):
    """HTTP client against the app with get_db pointed at the test database."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def create_trainer(client: AsyncClient, name: str = "Anna") -> dict:
    res = await client.post(
        "/trainers",
        json={"name": name, "specialization": "yoga", "email": f"{name.lower()}@gym.test"},
    )
    assert res.status_code == 201
    return res.json()


async def create_client(client: AsyncClient, name: str = "Boris", age: int = 30) -> dict:
    res = await client.post(
        "/clients", json={"name": name, "age": age, "membershipType": "monthly"}
    )
    assert res.status_code == 201
    return res.json()


async def create_class(client: AsyncClient, trainer_id: int, capacity: int = 10) -> dict:
    res = await client.post(
        "/classes",
        json={
            "title": "Morning yoga",
            "trainerId": trainer_id,
            "dateTime": "2026-11-01T09:00:00",
            "capacity": capacity,
        },
    )
    assert res.status_code == 201
    return res.json()


def use_failing_flush(session_maker) -> None:
    """Point get_db at sessions whose flush raises a database error."""

    async def failing_flush(*_args, **_kwargs):
        raise SQLAlchemyError("flush failed")

    async def override_get_db():
        async with session_maker() as session:
            session.flush = failing_flush
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db


async def count_rows(session_maker, model) -> int:
    async with session_maker() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()
