"""Alembic migration runner.

Runs Alembic commands against a connection borrowed from an ``AsyncEngine``.
Alembic itself is synchronous, so each command executes inside
``AsyncConnection.run_sync`` with the sync connection handed to ``env.py``
through ``Config.attributes``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from alembic.util.exc import CommandError
from sqlalchemy import MetaData
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine

from ormdemo.errors import MigrationError
from ormdemo.logging import get_logger

logger = get_logger(__name__)

# env.py, script.py.mako and versions/ live next to this module
_SCRIPT_DIR = Path(__file__).resolve().parent


def alembic_config(connection: Connection | None = None) -> Config:
    """Build an in-memory Alembic ``Config`` pointing at the bundled scripts."""
    cfg = Config()
    cfg.set_main_option("script_location", str(_SCRIPT_DIR))
    if connection is not None:
        cfg.attributes["connection"] = connection
    return cfg


@dataclass
class MigrationStatus:
    """Where the database stands relative to the bundled revisions."""

    current: str | None
    head: str | None
    applied: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)

    @property
    def up_to_date(self) -> bool:
        return not self.pending


@dataclass
class MigrationResult:
    """Revisions applied or reverted by one runner call."""

    applied: list[str] = field(default_factory=list)
    reverted: list[str] = field(default_factory=list)
    current: str | None = None


def _status(connection: Connection) -> MigrationStatus:
    script = ScriptDirectory.from_config(alembic_config())
    current = MigrationContext.configure(connection).get_current_revision()
    head = script.get_current_head()

    applied = []
    if current is not None:
        applied = [r.revision for r in script.iterate_revisions(current, "base")]
        applied.reverse()
    pending = [r.revision for r in script.iterate_revisions("heads", current or "base")]
    pending.reverse()
    return MigrationStatus(current=current, head=head, applied=applied, pending=pending)


def _drop_all(connection: Connection) -> list[str]:
    meta = MetaData()
    meta.reflect(bind=connection)
    names = [t.name for t in meta.sorted_tables]
    meta.drop_all(bind=connection)
    return names


class Migrator:
    """Apply and revert the bundled Alembic revisions.

    Example::

        engine = create_demo_engine(os.environ["DATABASE_URL"])
        result = await Migrator(engine).up()
        print(f"Applied {len(result.applied)} migrations")
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def status(self) -> MigrationStatus:
        async with self._engine.connect() as conn:
            return await conn.run_sync(_status)

    async def up(self, steps: int | None = None) -> MigrationResult:
        """Apply pending revisions: all of them, or the next *steps*."""
        target = "heads" if steps is None else f"+{steps}"
        return await self._run("up", command.upgrade, target)

    async def down(self, steps: int | None = 1) -> MigrationResult:
        """Revert the last *steps* revisions (``None`` reverts everything)."""
        target = "base" if steps is None else f"-{steps}"
        return await self._run("down", command.downgrade, target)

    async def reset(self) -> MigrationResult:
        """Revert every applied revision."""
        return await self.down(None)

    async def refresh(self) -> MigrationResult:
        """Revert everything, then apply everything."""
        reverted = await self.reset()
        result = await self.up()
        result.reverted = reverted.reverted
        return result

    async def fresh(self) -> MigrationResult:
        """Drop every table in the database, then apply everything."""
        async with self._engine.begin() as conn:
            dropped = await conn.run_sync(_drop_all)
        logger.info("migration.fresh.dropped", tables=dropped)
        return await self.up()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _run(
        self,
        direction: str,
        alembic_command: Callable[..., Any],
        target: str,
    ) -> MigrationResult:
        def _apply(connection: Connection) -> MigrationResult:
            before = _status(connection)
            alembic_command(alembic_config(connection), target)
            after = _status(connection)
            return MigrationResult(
                applied=[r for r in after.applied if r not in before.applied],
                reverted=[r for r in before.applied if r not in after.applied],
                current=after.current,
            )

        try:
            async with self._engine.begin() as conn:
                result = await conn.run_sync(_apply)
        except CommandError as exc:
            logger.error(f"migration.{direction}.failed", target=target, error=str(exc))
            raise MigrationError(
                f"migration {direction} to {target!r} failed: {exc}", cause=exc
            ).with_context(target=target) from exc

        logger.info(
            f"migration.{direction}",
            target=target,
            applied=result.applied,
            reverted=result.reverted,
            current=result.current,
        )
        return result
