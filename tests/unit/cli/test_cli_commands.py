"""Tests for the typer CLI against a temporary SQLite database."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from src.user_service.cli import app
from src.user_service.cli.user_commands import SAMPLE_USERS, seed_users
from src.user_service.cli.utils import user_service_scope
from src.user_service.core.services import UserService
from src.user_service.entities.core.user import UserStatus
from src.user_service.runtime.config.config_data import ConfigData, DatabaseConfig
from src.user_service.runtime.context import with_context

runner = CliRunner()


@pytest.fixture
def cli_database(tmp_path: Path) -> Iterator[Path]:
    """Point the CLI at a fresh SQLite file for the duration of a test."""
    db_file = tmp_path / "cli.db"
    with with_context(ConfigData(database=DatabaseConfig(url=f"sqlite:///{db_file}"))):
        result = runner.invoke(app, ["db", "init"])
        assert result.exit_code == 0, result.output
        yield db_file


class TestDbCommands:
    def test_init_creates_database(self, cli_database: Path):
        assert cli_database.exists()

    def test_drop_requires_confirmation(self, cli_database: Path):
        result = runner.invoke(app, ["db", "drop"], input="n\n")

        assert result.exit_code == 1

    def test_drop_with_yes(self, cli_database: Path):
        result = runner.invoke(app, ["db", "drop", "--yes"])

        assert result.exit_code == 0
        assert "All tables dropped" in result.output


class TestUserCommands:
    def test_seed_and_list(self, cli_database: Path):
        result = runner.invoke(app, ["users", "seed"])
        assert result.exit_code == 0, result.output
        assert "5 created" in result.output

        result = runner.invoke(app, ["users", "list"])
        assert result.exit_code == 0, result.output
        assert "Showing 5 users" in result.output

    def test_seed_is_idempotent(self, cli_database: Path):
        runner.invoke(app, ["users", "seed"])

        result = runner.invoke(app, ["users", "seed"])

        assert result.exit_code == 0
        assert "0 created" in result.output

    def test_list_empty(self, cli_database: Path):
        result = runner.invoke(app, ["users", "list"])

        assert result.exit_code == 0
        assert "No users found" in result.output

    def test_set_status_unknown_user(self, cli_database: Path):
        result = runner.invoke(app, ["users", "set-status", "missing-id", "suspended"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_delete_unknown_user(self, cli_database: Path):
        result = runner.invoke(app, ["users", "delete", "missing-id", "--yes"])

        assert result.exit_code == 1
        assert "not found" in result.output


def test_seed_users_applies_statuses(user_service: UserService):
    created = seed_users(user_service)

    assert len(created) == len(SAMPLE_USERS)
    statuses = {user.login: user.status for user in user_service.find_all()}
    assert statuses["john_doe"] == UserStatus.ACTIVE
    assert statuses["maria_garcia"] == UserStatus.INACTIVE
    assert statuses["david_wilson"] == UserStatus.SUSPENDED


def test_set_status_and_delete(cli_database: Path):
    result = runner.invoke(app, ["users", "seed"])
    assert result.exit_code == 0

    with user_service_scope() as service:
        john = service.find_by_login("john_doe")

    result = runner.invoke(app, ["users", "set-status", john.id, "inactive"])
    assert result.exit_code == 0, result.output
    assert "inactive" in result.output

    result = runner.invoke(app, ["users", "delete", john.id, "--yes"])
    assert result.exit_code == 0, result.output

    with user_service_scope() as service:
        assert [u.login for u in service.find_all()].count("john_doe") == 0


def test_unknown_user_is_not_logged_as_database_failure(cli_database: Path):
    messages: list[str] = []
    sink_id = logger.add(lambda message: messages.append(message.record["message"]), level="ERROR")
    try:
        result = runner.invoke(app, ["users", "delete", "missing-id", "--yes"])
    finally:
        logger.remove(sink_id)

    assert result.exit_code == 1
    assert not any("Database transaction failed" in m for m in messages)
