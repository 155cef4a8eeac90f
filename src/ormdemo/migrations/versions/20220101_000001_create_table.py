"""create users table and seed one row

Revision ID: 20220101_000001
Revises:
Create Date: 2022-01-01 00:00:01
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "20220101_000001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # No bindings: plain DDL string
    op.execute(
        """
        CREATE TABLE users (
            id VARCHAR PRIMARY KEY,
            username VARCHAR NOT NULL,
            age INT8 NOT NULL DEFAULT 0
        )
        """
    )

    # Bound values go through text() so they render in offline mode too
    op.execute(
        sa.text("INSERT INTO users (id, username) VALUES (:id, :username)").bindparams(
            id="1", username="itsuki"
        )
    )


def downgrade() -> None:
    op.execute("DROP TABLE users")
