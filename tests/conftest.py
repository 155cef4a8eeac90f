"""
Shared pytest fixtures for ormdemo tests.

Every test gets its own SQLite file under ``tmp_path``; the async engine
talks to it through aiosqlite, and migrations run through Alembic exactly as
they do against PostgreSQL.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from ormdemo.migrations import Migrator
from ormdemo.orm.session import create_demo_engine, demo_session_factory

_ENV_VARS = ("DATABASE_URL", "DATABASE_SCHEMA", "DATABASE_ECHO", "LOG_LEVEL", "LOG_FORMAT")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests that use a database file as integration tests."""
    for item in items:
        fixtures = getattr(item, "fixturenames", ())
        if "database_url" in fixtures:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """No settings leak in from the host environment or a stray ``.env``."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'ormdemo.db'}"


@pytest_asyncio.fixture
async def engine(database_url: str) -> AsyncIterator[AsyncEngine]:
    """Async engine on an empty database."""
    eng = create_demo_engine(database_url)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def migrated_engine(engine: AsyncEngine) -> AsyncEngine:
    """Engine whose database has the users table and its seed row."""
    await Migrator(engine).up()
    return engine


@pytest_asyncio.fixture
async def session(migrated_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    async with demo_session_factory(migrated_engine)() as sess:
        yield sess
