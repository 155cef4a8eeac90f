"""ormdemo command line (typer)."""

from ormdemo.cli.app import app

__all__ = ["app"]
