import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["AUTO_CREATE_TABLES"] = "0"
os.environ["SESSION_SECRET_KEY"] = "test-secret"
os.environ["APP_ENV"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from roster.api import deps
from roster.db.models import Base
from roster.main import app

PASSWORD = "secret123"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def session_factory(tmp_path):
    db_path = tmp_path / "roster.db"

    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[deps.get_db] = override_get_db
    yield factory
    app.dependency_overrides.clear()


@pytest.fixture
def client(session_factory):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def other_client(session_factory):
    return TestClient(app, raise_server_exceptions=False)


def register(client, email="owner@example.com", name="Owner", password=PASSWORD):
    return client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )


def login(client, email="owner@example.com", password=PASSWORD):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def employee_payload(**overrides):
    payload = {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@x.com",
        "department": "Engineering",
        "salary": 80000,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def logged_in(client):
    register(client)
    assert login(client).status_code == 200
    return client
