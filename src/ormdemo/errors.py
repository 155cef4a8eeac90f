"""
Typed errors raised by ormdemo.

Library errors (SQLAlchemy, Alembic, pydantic) are never swallowed. Where
ormdemo needs to report a failure of its own, or to give a library error a
category, it raises one of the classes below with the original exception
chained as ``cause``.

Hierarchy::

    DemoError
    ├── ConfigError          missing / invalid settings
    ├── PayloadError         JSON payload rejected when building a model
    ├── DatabaseError
    │   ├── QueryError       a statement produced no usable result
    │   ├── RecordNotUpdated an UPDATE matched no row
    │   └── DecodeError      a row did not decode to the expected tuple
    └── MigrationError       Alembic failed to apply / revert a revision

Examples:
    >>> err = QueryError("failed to get query result")
    >>> err.category.value
    'DATABASE'
    >>> err.with_context(table="users").to_dict()["context"]
    {'table': 'users'}
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Coarse classification used when logging or rendering an error."""

    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"
    DATABASE = "DATABASE"
    MIGRATION = "MIGRATION"
    INTERNAL = "INTERNAL"


class DemoError(Exception):
    """Base class for every error ormdemo raises itself.

    Subclasses set ``default_category``. Extra metadata goes into
    ``context`` through :meth:`with_context`.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> DemoError:
        """Attach metadata (fluent API)."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class ConfigError(DemoError):
    """Required configuration is missing or invalid."""

    default_category = ErrorCategory.CONFIG


class PayloadError(DemoError):
    """A mapping could not be turned into a model instance."""

    default_category = ErrorCategory.VALIDATION


class DatabaseError(DemoError):
    default_category = ErrorCategory.DATABASE


class QueryError(DatabaseError):
    """A statement expected to return a row returned nothing."""


class RecordNotUpdated(DatabaseError):
    """An UPDATE ... RETURNING matched no row."""


class DecodeError(DatabaseError):
    """A result row did not match the expected column types."""


class MigrationError(DemoError):
    default_category = ErrorCategory.MIGRATION


__all__ = [
    "ErrorCategory",
    "DemoError",
    "ConfigError",
    "PayloadError",
    "DatabaseError",
    "QueryError",
    "RecordNotUpdated",
    "DecodeError",
    "MigrationError",
]
