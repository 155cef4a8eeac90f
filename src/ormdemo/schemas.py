"""Pydantic payloads accepted when building models from JSON."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

INT8_MIN = -(2**63)
INT8_MAX = 2**63 - 1


class UserPayload(BaseModel):
    """One ``users`` row as plain JSON. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid", strict=True)

    id: str
    username: str
    age: int = Field(default=0, ge=INT8_MIN, le=INT8_MAX)


__all__ = ["UserPayload", "INT8_MIN", "INT8_MAX"]
