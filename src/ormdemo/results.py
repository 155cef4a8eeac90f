"""Outcome records for the demonstration verbs.

These are what each verb prints, and what it hands back to callers and tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ormdemo.orm.tables import UserTable


@dataclass
class InsertResult:
    last_insert_id: str


@dataclass
class ExecResult:
    """Rows touched by a statement run for its side effect."""

    rows_affected: int


@dataclass
class DeleteResult:
    rows_affected: int


@dataclass
class QueryResultView:
    """One raw row, decoded by hand into ``(id, username, age)``."""

    columns: list[str]
    values: tuple[str, str, int]


@dataclass
class SelectReport:
    orm_all: list[UserTable] = field(default_factory=list)
    orm_first: UserTable | None = None
    raw_all: list[UserTable] = field(default_factory=list)
    decoded: QueryResultView | None = None


@dataclass
class NameReport:
    orm: list[dict[str, Any]] = field(default_factory=list)
    raw: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class DeleteReport:
    by_model: DeleteResult
    by_id: DeleteResult
    raw: DeleteResult


__all__ = [
    "InsertResult",
    "ExecResult",
    "DeleteResult",
    "QueryResultView",
    "SelectReport",
    "NameReport",
    "DeleteReport",
]
