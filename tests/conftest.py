"""API test fixtures: a throwaway SQLite database per test, fakeredis cache, bearer headers."""
import asyncio
import os
import uuid

# Must be set before parkhub is imported: settings are read at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["REDIS_URL"] = ""

import pytest
from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from parkhub.core.cache import Cache, get_cache
from parkhub.core.database import Base, get_db
from parkhub.models import Customer, Staff, StaffRole
from parkhub.services.auth_service import create_access_token, hash_password

STAFF_PASSWORD = "secret123"


@pytest.fixture
def db_engine(tmp_path):
    """
    File-backed SQLite with NullPool: TestClient serves every request on its own
    event loop, so connections must not outlive a request. Foreign keys are
    enforced as on PostgreSQL.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'parkhub.db'}", poolclass=NullPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enforce_foreign_keys(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_maker(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest.fixture
def run_db(session_maker):
    """run_db(fn) -> result of `await fn(session)`, committed."""
    def _run(fn):
        async def _inner():
            async with session_maker() as session:
                result = await fn(session)
                await session.commit()
                return result
        return asyncio.run(_inner())
    return _run


@pytest.fixture
def add_rows(run_db):
    """Insert ORM objects and return them (attributes stay loaded)."""
    def _add(*rows):
        async def _fn(session):
            session.add_all(rows)
            await session.flush()
            return rows
        run_db(_fn)
        return rows[0] if len(rows) == 1 else rows
    return _add


@pytest.fixture
def cache_server():
    return FakeServer()


@pytest.fixture
def client(session_maker, cache_server):
    """Test client of the application with database and cache overridden."""
    from parkhub.main import app

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    def override_get_cache():
        # new client per request (per event loop), shared fake server
        return Cache(FakeRedis(server=cache_server, decode_responses=True))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = override_get_cache
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_staff(add_rows):
    def _make(role: StaffRole, email: str = None, name: str = None) -> Staff:
        return add_rows(
            Staff(
                email=email or f"{role.value.lower()}.{uuid.uuid4().hex[:8]}@park.test",
                password_hash=hash_password(STAFF_PASSWORD),
                name=name or f"{role.value} Tester",
                role=role,
            )
        )
    return _make


def _bearer(staff: Staff) -> dict:
    token = create_access_token(subject=staff.staff_id, role=staff.role.value, name=staff.name, email=staff.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def bearer_for():
    """bearer_for(staff) -> Authorization header of that staff member."""
    return _bearer


@pytest.fixture
def headers_for(make_staff):
    """headers_for(role) -> Authorization header of a fresh staff member with that role."""
    def _headers(role: StaffRole) -> dict:
        return _bearer(make_staff(role))
    return _headers


@pytest.fixture
def ceo(make_staff):
    return make_staff(StaffRole.CEO)


@pytest.fixture
def ceo_headers(ceo):
    return _bearer(ceo)


@pytest.fixture
def customer(add_rows):
    return add_rows(Customer(name="Alice Guest"))


@pytest.fixture
def customer_headers(customer):
    token = create_access_token(subject=customer.customer_id, role="Customer", name=customer.name)
    return {"Authorization": f"Bearer {token}"}
