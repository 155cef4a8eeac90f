"""
ormdemo: CRUD on a single ``users`` table, three ways per verb.

The same insert / update / select / delete is performed through the
SQLAlchemy fluent builder, through raw parameterized SQL on the same session,
and through direct execution with the row decoded by hand. The table itself
is created and seeded by an Alembic migration.

Modules
-------
settings     DemoSettings (DATABASE_URL and friends, pydantic-settings)
logging      structlog configuration
errors       DemoError hierarchy
orm          declarative base, UserTable, async engine/session factories
schemas      pydantic payload for UserTable.from_json
results      outcome dataclasses printed by each verb
demo         insert / update / select / select_name / delete / run_demo
migrations   Alembic scripts + Migrator
cli          typer application (``ormdemo``)
"""

__version__ = "0.1.0"
