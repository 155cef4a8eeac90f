"""Schema migrations for ormdemo, managed with Alembic.

This directory is also the Alembic script location: ``env.py``,
``script.py.mako`` and ``versions/`` sit next to the runner.

Modules
-------
runner    Migrator with up() / down() / status() / reset() / refresh() / fresh()
"""

from ormdemo.migrations.runner import (
    MigrationResult,
    MigrationStatus,
    Migrator,
    alembic_config,
)

__all__ = ["Migrator", "MigrationResult", "MigrationStatus", "alembic_config"]
