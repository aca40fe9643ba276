"""Tests for the chat-service CLI.

Testing approach:
- Uses Click's CliRunner for command invocation
- Database commands run against a SQLite file in tmp_path
- Schema commands use the module-level schema built from the test environment
"""

from __future__ import annotations

from unittest.mock import patch

from click.testing import CliRunner
import pytest

from chat_service.cli.main import cli
from chat_service.core.settings import clear_all_caches
from chat_service.infra.database import get_engine, get_sessionmaker

# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
def cli_runner():
    """Create Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def sqlite_file_database(monkeypatch, tmp_path):
    """Point DATABASE_URL at a fresh SQLite file and reset cached engines."""

    def reset():
        clear_all_caches()
        get_engine.cache_clear()
        get_sessionmaker.cache_clear()

    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    reset()
    yield tmp_path / "cli.db"
    reset()


# =============================================================================
# Top-level CLI
# =============================================================================


def test_help_lists_command_groups(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for group in ("db", "schema", "server"):
        assert group in result.output


def test_version(cli_runner):
    result = cli_runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output


# =============================================================================
# Schema commands
# =============================================================================


def test_schema_print(cli_runner):
    result = cli_runner.invoke(cli, ["schema", "print"])

    assert result.exit_code == 0
    assert "input ConnectionInput {" in result.output
    assert "messages(messageConnection: ConnectionInput = {}): MessageConnection!" in result.output


def test_check_documents_passes(cli_runner):
    result = cli_runner.invoke(cli, ["schema", "check-documents"])

    assert result.exit_code == 0
    assert "Checked 10 documents" in result.output


def test_check_documents_show_renders_documents(cli_runner):
    result = cli_runner.invoke(cli, ["schema", "check-documents", "--show"])

    assert result.exit_code == 0
    assert "fragment GroupFragment on Group" in result.output


def test_check_documents_reports_failures(cli_runner):
    failures = {"group": ["Cannot query field 'color' on type 'Group'."]}

    with patch("chat_service.client.check_catalog", return_value=failures):
        result = cli_runner.invoke(cli, ["schema", "check-documents"])

    assert result.exit_code == 1
    assert "color" in result.output


# =============================================================================
# Database commands
# =============================================================================


def test_drop_requires_confirmation(cli_runner):
    result = cli_runner.invoke(cli, ["db", "drop"])

    assert result.exit_code == 1
    assert "--yes" in result.output


def test_seed_then_reseed(cli_runner, sqlite_file_database):
    first = cli_runner.invoke(cli, ["db", "seed"])

    assert first.exit_code == 0, first.output
    assert "users:" in first.output
    assert sqlite_file_database.exists()

    second = cli_runner.invoke(cli, ["db", "seed"])

    assert second.exit_code == 0, second.output
    assert "nothing seeded" in second.output


def test_init_and_drop(cli_runner, sqlite_file_database):
    assert cli_runner.invoke(cli, ["db", "init"]).exit_code == 0

    result = cli_runner.invoke(cli, ["db", "drop", "--yes"])

    assert result.exit_code == 0
    assert "All tables dropped" in result.output


# =============================================================================
# Server command
# =============================================================================


def test_server_run_uses_app_factory(cli_runner):
    with patch("uvicorn.run") as run:
        result = cli_runner.invoke(cli, ["server", "run", "--port", "9001"])

    assert result.exit_code == 0
    args, kwargs = run.call_args
    assert args == ("chat_service.app.main:create_app",)
    assert kwargs["factory"] is True
    assert kwargs["port"] == 9001
    assert kwargs["reload"] is False
