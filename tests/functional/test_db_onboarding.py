"""Functional tests for the ``gigflow db`` subcommands.

Scope
-----
Black-box verification of GIGFLOW's database CLI via ``click.testing.CliRunner``.
Commands covered: ``current``, ``heads``, ``history``, ``status``, and ``upgrade``.

What these tests assert
-----------------------
* When ``GIGFLOW_DB_URL`` is unset/empty, commands that require a connection fail
  with exit code ``1`` and emit :data:`MISSING_DB_URL_MSG`.
* ``db heads`` shows the project's base revision without a database.
* ``db upgrade`` warns and prompts, supports ``--sql``, and migrates on "y".
* ``db status`` reports connectivity, backend, masked URL and schema state.

The onboarding flows run against a temporary SQLite file and, when Docker is
available, a scratch PostgreSQL instance.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from gigflow.entrypoints.cli.db import (
    CANNOT_CONNECT_MSG,
    INVALID_URL_FORMAT_MSG,
    MISSING_DB_URL_MSG,
    UPGRADE_SCHEMA_INSTRUCTIONS,
    UPGRADE_SCHEMA_WARNING,
)
from gigflow.entrypoints.cli.main import gigflow as gigflow_cli

# pylint: disable=magic-value-comparison
# pylint: disable=redefined-outer-name

BASE_REVISION = "5c1e0a7d2b94"

BACKENDS = [
    pytest.param("sqlite_url_file", id="sqlite"),
    pytest.param("pg_url_base", id="postgres", marks=pytest.mark.slow),
]


@pytest.fixture
def make_runner(tmp_path: Path):
    """Build CliRunners with a given GIGFLOW_DB_URL and a temp log path."""

    def _make(db_url: str) -> CliRunner:
        return CliRunner(
            env={
                "GIGFLOW_DB_URL": db_url,
                "GIGFLOW_LOG_PATH": str(tmp_path / "gigflow.log"),
            }
        )

    return _make


@pytest.fixture(params=BACKENDS)
def db_url(request: pytest.FixtureRequest) -> str:
    """URL of an empty database on each backend."""
    return request.getfixturevalue(request.param)


@pytest.mark.parametrize(
    "cmd",
    [["db", "current"], ["db", "history", "-i"], ["db", "upgrade"]],
)
def test_db_no_url(make_runner, cmd):
    """db commands requiring a connection fail if GIGFLOW_DB_URL is not set."""
    result = make_runner("").invoke(gigflow_cli, cmd)

    assert result.exit_code == 1
    assert MISSING_DB_URL_MSG in result.output


def test_heads_needs_no_database(make_runner):
    """`db heads` reads the packaged migrations only."""
    result = make_runner("").invoke(gigflow_cli, ["db", "heads"])

    assert result.exit_code == 0, result.output
    assert BASE_REVISION in result.output


def test_malformed_url_is_reported(make_runner):
    """A value that is not a SQLAlchemy URL gets a readable message."""
    result = make_runner("not a valid url").invoke(gigflow_cli, ["db", "upgrade"])

    assert result.exit_code == 1
    assert INVALID_URL_FORMAT_MSG in result.output


def test_unreachable_database_is_reported(make_runner, tmp_path: Path):
    """`db status` explains that the database cannot be reached."""
    missing = tmp_path / "no-such-dir" / "gigflow.db"
    result = make_runner(f"sqlite:///{missing}").invoke(gigflow_cli, ["db", "status"])

    assert result.exit_code == 0, result.output
    assert "Cannot connect to database" in result.output
    assert CANNOT_CONNECT_MSG in result.output


def test_new_user_initial_db_setup(make_runner, db_url: str):
    """Simulate a new user setting up GIGFLOW's database step by step."""

    # The user points GIGFLOW at an empty database and checks its status.
    runner = make_runner(db_url)
    result = runner.invoke(gigflow_cli, ["db", "status"])
    assert result.exit_code == 0, result.output
    assert "Database reachable" in result.output
    assert "uninitialized" in result.output
    assert UPGRADE_SCHEMA_INSTRUCTIONS in result.output

    # There is no current revision yet.
    result = runner.invoke(gigflow_cli, ["db", "current"])
    assert result.exit_code == 0, result.output
    assert BASE_REVISION not in result.output

    # They try to upgrade, read the backup warning, and decline.
    result = runner.invoke(gigflow_cli, ["db", "upgrade"], input="n\n")
    assert result.exit_code == 1, result.output
    assert UPGRADE_SCHEMA_WARNING in result.output
    assert "Are you sure you want to proceed?" in result.output

    # They look at the SQL that would run; nothing is applied.
    result = runner.invoke(gigflow_cli, ["db", "upgrade", "--sql"])
    assert result.exit_code == 0, result.output
    assert "CREATE TABLE jobs" in result.output
    result = runner.invoke(gigflow_cli, ["db", "current"])
    assert BASE_REVISION not in result.output

    # They confirm the upgrade.
    result = runner.invoke(gigflow_cli, ["db", "upgrade"], input="y\n")
    assert result.exit_code == 0, result.output
    assert "Upgrade complete!" in result.output

    # The schema is now at head.
    result = runner.invoke(gigflow_cli, ["db", "current"])
    assert result.exit_code == 0, result.output
    assert BASE_REVISION in result.output
    result = runner.invoke(gigflow_cli, ["db", "history", "-i"])
    assert "(current)" in result.output
    result = runner.invoke(gigflow_cli, ["db", "status"])
    assert f"{BASE_REVISION} (up to date)" in result.output
    assert UPGRADE_SCHEMA_INSTRUCTIONS not in result.output


def test_forced_upgrade_skips_the_prompt(make_runner, sqlite_url_file: str):
    """`--force` upgrades without asking."""
    result = make_runner(sqlite_url_file).invoke(
        gigflow_cli, ["db", "upgrade", "--force"]
    )

    assert result.exit_code == 0, result.output
    assert "Are you sure" not in result.output
    assert "Upgrade complete!" in result.output
