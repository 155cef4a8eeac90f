"""
Root Typer application for the ormdemo CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from ormdemo.cli.migrate import app as migrate_app
from ormdemo.cli.utils import get_settings, handle_errors, run_async

app = Typer(
    name="ormdemo",
    help="ormdemo: CRUD on one table through SQLAlchemy, raw SQL and hand decoding.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("ormdemo")
        except PackageNotFoundError:
            v = "0.1.0"
        typer.echo(f"ormdemo {v}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    database_url: str | None = typer.Option(
        None,
        "--database-url",
        help="Database URL (overrides DATABASE_URL).",
    ),
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """ormdemo CLI. Migrate the users table and run the CRUD demonstration."""
    ctx.obj = {"database_url": database_url}


@app.command()
def run(ctx: typer.Context) -> None:
    """Migrate, then insert, update, select and delete users."""
    from ormdemo.demo import run_demo

    with handle_errors():
        settings = get_settings(ctx)
        run_async(run_demo(settings))


app.add_typer(migrate_app, name="migrate", help="Schema migrations.")
