"""Shared fixtures: a throwaway SQLite database per test and an HTTP client.

The environment is prepared before ``dshop`` is imported, because settings and
the module-level engine are built at import time.
"""

import os

os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///./dshop-test.db")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DEBUG"] = "false"

from collections.abc import AsyncGenerator  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dshop import models  # noqa: E402,F401
from dshop.config import settings  # noqa: E402
from dshop.core.security import create_user_token  # noqa: E402
from dshop.database import Base, get_db  # noqa: E402
from dshop.main import app  # noqa: E402
from dshop.models.device import Device  # noqa: E402
from dshop.models.user import User  # noqa: E402


@pytest.fixture
async def engine(tmp_path):
    """Fresh schema in a temporary SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'dshop.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Pin the settings the tests rely on; individual tests may override."""
    monkeypatch.setattr(settings, "admin_email", None)
    monkeypatch.setattr(settings, "allowed_email_pattern", None)
    monkeypatch.setattr(settings, "detect_engulfment", True)
    monkeypatch.setattr(settings, "recheck_conflicts_on_approve", True)
    monkeypatch.setattr(settings, "expose_internal_errors", False)
    monkeypatch.setattr(settings, "rate_limit_enabled", False)


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client talking to the app, with get_db bound to the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _add_user(db: AsyncSession, email: str, first: str, last: str, is_admin: bool) -> User:
    user = User(email=email, first_name=first, last_name=last, is_admin=is_admin)
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def user(db) -> User:
    return await _add_user(db, "maria.muster@sap.com", "Maria", "Muster", False)


@pytest.fixture
async def other_user(db) -> User:
    return await _add_user(db, "john.doe@sap.com", "John", "Doe", False)


@pytest.fixture
async def admin(db) -> User:
    return await _add_user(db, "anna.admin@sap.com", "Anna", "Admin", True)


@pytest.fixture
async def device(db) -> Device:
    device = Device(name="Raspberry Pi", category="Computers", model="4B", ram="4 GB", os="Raspbian")
    db.add(device)
    await db.commit()
    return device


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_user_token(str(user.id), user.email)}"}


@pytest.fixture
def user_headers(user) -> dict[str, str]:
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin) -> dict[str, str]:
    return auth_headers(admin)
