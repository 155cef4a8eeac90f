"""
CLI utility helpers: settings, error rendering, asyncio bridge.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Coroutine, Iterator
from contextlib import contextmanager
from dataclasses import asdict
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.markup import escape
from sqlalchemy.exc import SQLAlchemyError

from ormdemo.errors import DemoError
from ormdemo.logging import configure_logging
from ormdemo.settings import DemoSettings, load_settings

T = TypeVar("T")

console = Console()
err_console = Console(stderr=True)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print ormdemo / SQLAlchemy errors and exit with status 1."""
    try:
        yield
    except DemoError as exc:
        err_console.print(
            f"[bold red]Error[/bold red] ({exc.category.value}): {escape(exc.message)}"
        )
        raise typer.Exit(code=1) from exc
    except SQLAlchemyError as exc:
        err_console.print(f"[bold red]Error[/bold red] (DATABASE): {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def get_settings(ctx: typer.Context) -> DemoSettings:
    """Load settings (``--database-url`` wins over ``DATABASE_URL``) and set up logging."""
    obj = ctx.obj or {}
    settings = load_settings(database_url=obj.get("database_url"))
    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    return settings


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(coro)


def output_data(data: Any, *, as_json: bool = False, title: str = "") -> None:
    """Render a dataclass as JSON or as ``key: value`` lines."""
    payload = asdict(data) if hasattr(data, "__dataclass_fields__") else data
    if as_json:
        console.print_json(json.dumps(payload, default=str))
        return
    if title:
        console.print(f"[bold]{title}[/bold]")
    for key, value in payload.items():
        console.print(f"  {key}: {escape(str(value))}")
