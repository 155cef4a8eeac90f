"""Tests for the ``ormdemo`` CLI."""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from typer.testing import CliRunner

from ormdemo.cli.app import app

runner = CliRunner()

REVISION = "20220101_000001"


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    """Keep log lines out of CliRunner output so ``--json`` output parses."""
    monkeypatch.setattr("ormdemo.cli.utils.configure_logging", lambda **kwargs: None)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    yield
    structlog.reset_defaults()


def _invoke(database_url: str, *args: str):
    return runner.invoke(app, ["--database-url", database_url, *args])


class TestRoot:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("ormdemo ")

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "migrate" in result.output
        assert "run" in result.output

    def test_missing_database_url(self):
        result = runner.invoke(app, ["migrate", "status"])
        assert result.exit_code == 1
        assert "DATABASE_URL" in result.output


class TestMigrate:
    def test_status_fresh_database(self, database_url):
        result = _invoke(database_url, "migrate", "status", "--json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["current"] is None
        assert data["pending"] == [REVISION]

    def test_up_then_status(self, database_url):
        result = _invoke(database_url, "migrate", "up", "--json")
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["applied"] == [REVISION]

        result = _invoke(database_url, "migrate", "status")
        assert result.exit_code == 0
        assert "Migration Status" in result.output
        assert f"current: {REVISION}" in result.output

    def test_database_url_from_env(self, database_url):
        result = runner.invoke(app, ["migrate", "up", "--json"], env={"DATABASE_URL": database_url})
        assert result.exit_code == 0, result.output

    def test_down_past_base_fails(self, database_url):
        assert _invoke(database_url, "migrate", "up").exit_code == 0
        assert _invoke(database_url, "migrate", "down").exit_code == 0

        result = _invoke(database_url, "migrate", "down")
        assert result.exit_code == 1
        assert "MIGRATION" in result.output

    @pytest.mark.parametrize("command", ["reset", "refresh", "fresh"])
    def test_rebuild_commands(self, database_url, command):
        assert _invoke(database_url, "migrate", "up").exit_code == 0
        result = _invoke(database_url, "migrate", command, "--json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        if command == "reset":
            assert data["current"] is None
        else:
            assert data["current"] == REVISION

    def test_steps_must_be_positive(self, database_url):
        result = _invoke(database_url, "migrate", "up", "--steps", "0")
        assert result.exit_code == 2


class TestRun:
    def test_run(self, database_url):
        result = _invoke(database_url, "run")
        assert result.exit_code == 0, result.output
        assert "InsertResult(" in result.output
        assert "DeleteResult(rows_affected=1)" in result.output
        assert "response: DeleteResult(rows_affected=2)" in result.output

    def test_run_reports_database_errors(self, tmp_path):
        # a directory cannot be opened as a SQLite database
        result = _invoke(f"sqlite:///{tmp_path}", "run")
        assert result.exit_code == 1
        assert "Error" in result.output
