"""
CLI: ``ormdemo migrate``, apply and revert schema migrations.
"""

from __future__ import annotations

import typer

from ormdemo.cli.utils import get_settings, handle_errors, output_data, run_async
from ormdemo.migrations import MigrationResult, MigrationStatus, Migrator
from ormdemo.orm.session import connect
from ormdemo.settings import DemoSettings

app = typer.Typer(no_args_is_help=True)


async def _migrate(settings: DemoSettings, action: str, **kwargs: object) -> MigrationResult | MigrationStatus:
    engine = connect(settings)
    try:
        return await getattr(Migrator(engine), action)(**kwargs)
    finally:
        await engine.dispose()


def _invoke(ctx: typer.Context, action: str, title: str, as_json: bool = False, **kwargs: object) -> None:
    with handle_errors():
        settings = get_settings(ctx)
        result = run_async(_migrate(settings, action, **kwargs))
    output_data(result, as_json=as_json, title=title)


@app.command()
def up(
    ctx: typer.Context,
    steps: int | None = typer.Option(None, "--steps", "-n", min=1, help="Apply only N revisions"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Apply pending migrations."""
    _invoke(ctx, "up", "Migrate Up", as_json=json_out, steps=steps)


@app.command()
def down(
    ctx: typer.Context,
    steps: int = typer.Option(1, "--steps", "-n", min=1, help="Revert N revisions"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Revert applied migrations (one by default)."""
    _invoke(ctx, "down", "Migrate Down", as_json=json_out, steps=steps)


@app.command()
def status(
    ctx: typer.Context,
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show current revision and pending migrations."""
    _invoke(ctx, "status", "Migration Status", as_json=json_out)


@app.command()
def reset(ctx: typer.Context, json_out: bool = typer.Option(False, "--json")) -> None:
    """Revert every applied migration."""
    _invoke(ctx, "reset", "Migrate Reset", as_json=json_out)


@app.command()
def refresh(ctx: typer.Context, json_out: bool = typer.Option(False, "--json")) -> None:
    """Revert every migration, then apply them all again."""
    _invoke(ctx, "refresh", "Migrate Refresh", as_json=json_out)


@app.command()
def fresh(ctx: typer.Context, json_out: bool = typer.Option(False, "--json")) -> None:
    """Drop all tables, then apply every migration."""
    _invoke(ctx, "fresh", "Migrate Fresh", as_json=json_out)
