"""Mapped table definitions.

Tags:
    ormdemo, orm, sqlalchemy, tables, users
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy import BigInteger, String, text
from sqlalchemy.orm import Mapped, mapped_column

from ormdemo.errors import PayloadError
from ormdemo.orm.base import DemoBase
from ormdemo.schemas import UserPayload


class UserTable(DemoBase):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    username: Mapped[str] = mapped_column(String, nullable=False)
    age: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0, server_default=text("0")
    )

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> UserTable:
        """Build an unsaved ``UserTable`` from a JSON-like mapping.

        Missing ``age`` falls back to 0. Raises ``PayloadError`` when the
        mapping lacks ``id``/``username`` or carries values of the wrong type.
        """
        try:
            payload = UserPayload.model_validate(data)
        except ValidationError as exc:
            raise PayloadError(f"invalid user payload: {exc}", cause=exc) from exc
        return cls(**payload.model_dump())

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "username": self.username, "age": self.age}

    def __repr__(self) -> str:
        return f"UserTable(id={self.id!r}, username={self.username!r}, age={self.age!r})"


__all__ = ["UserTable"]
