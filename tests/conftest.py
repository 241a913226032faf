"""
Pytest configuration and shared fixtures.

Each test gets its own SQLite database file: tables are created with a sync
engine, the app's ``get_db`` dependency is pointed at an aiosqlite engine on
the same file.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_task_manager.db")

from dataclasses import dataclass
from typing import Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from task_manager.core.jwt import create_access_token
from task_manager.core.security import hash_password
from task_manager.db.base import Base
from task_manager.db.session import get_db
from task_manager.main import app
from task_manager.models import Task, User


TEST_PASSWORD = "secret123"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no database")
    config.addinivalue_line("markers", "db: uses a per-test SQLite database")


@dataclass
class AuthUser:
    id: int
    email: str
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture(scope="session")
def password_hash() -> str:
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "tasks.db"


@pytest.fixture
def sync_engine(db_path):
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def client(db_path, sync_engine):
    """TestClient rooted at the API prefix, backed by the per-test database."""
    async_engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    session_maker = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app, base_url="http://testserver/api")
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(sync_engine, password_hash):
    """Factory: insert a user and return it with a valid bearer token."""
    counter = {"n": 0}

    def _make(name: str = "Test User", email: str = None, is_active: bool = True) -> AuthUser:
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        with Session(sync_engine) as session:
            user = User(name=name, email=email, hashed_password=password_hash, is_active=is_active)
            session.add(user)
            session.commit()
            user_id = user.id
        token = create_access_token({"user_id": str(user_id), "email": email})
        return AuthUser(id=user_id, email=email, token=token)

    return _make


@pytest.fixture
def alice(make_user) -> AuthUser:
    return make_user(name="Alice", email="alice@example.com")


@pytest.fixture
def bob(make_user) -> AuthUser:
    return make_user(name="Bob", email="bob@example.com")


@pytest.fixture
def count_tasks(sync_engine):
    """Count persisted task rows, optionally for one user."""

    def _count(user_id: int = None) -> int:
        with Session(sync_engine) as session:
            query = select(Task)
            if user_id is not None:
                query = query.where(Task.user_id == user_id)
            return len(session.scalars(query).all())

    return _count
