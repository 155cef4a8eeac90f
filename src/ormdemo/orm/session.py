"""Async SQLAlchemy engine factory and session factory.

This module provides:

* ``create_demo_engine``    -- Create an ``AsyncEngine`` from a URL.
* ``demo_session_factory``  -- ``async_sessionmaker`` with ``expire_on_commit=False``.
* ``connect``               -- Build the engine straight from ``DemoSettings``.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ormdemo.settings import DemoSettings, to_async_url


def create_demo_engine(
    url: str,
    *,
    echo: bool = False,
    schema: str | None = None,
    **kwargs: Any,
) -> AsyncEngine:
    """Create an ``AsyncEngine`` with sane defaults.

    Parameters
    ----------
    url:
        Database URL. Sync schemes are switched to their async driver
        (``postgres://`` → asyncpg, ``sqlite://`` → aiosqlite).
    echo:
        If ``True``, log all SQL.
    schema:
        PostgreSQL ``search_path`` applied to every new connection
        (ignored for SQLite).
    **kwargs:
        Extra arguments forwarded to ``create_async_engine``.
    """
    url = to_async_url(url)

    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=echo, **kwargs)

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    if schema and url.startswith("postgresql+asyncpg"):
        connect_args = kwargs.setdefault("connect_args", {})
        connect_args.setdefault("server_settings", {})["search_path"] = schema

    kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(url, echo=echo, **kwargs)


def demo_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return an ``async_sessionmaker`` bound to *engine*.

    ``expire_on_commit=False`` keeps models readable after each verb commits.
    """
    return async_sessionmaker(bind=engine, expire_on_commit=False)


def connect(settings: DemoSettings) -> AsyncEngine:
    return create_demo_engine(
        settings.database_url,
        echo=settings.database_echo,
        schema=settings.database_schema,
    )


__all__ = ["create_demo_engine", "demo_session_factory", "connect"]
