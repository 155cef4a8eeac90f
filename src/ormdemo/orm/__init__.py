"""SQLAlchemy 2.0 ORM layer for ormdemo.

Modules
-------
base        DemoBase (declarative base)
session     Async engine factory, session factory
tables      UserTable
"""

from __future__ import annotations

from ormdemo.orm.base import DemoBase
from ormdemo.orm.session import connect, create_demo_engine, demo_session_factory
from ormdemo.orm.tables import UserTable

__all__ = [
    "DemoBase",
    "UserTable",
    "connect",
    "create_demo_engine",
    "demo_session_factory",
]
