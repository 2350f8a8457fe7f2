"""
Tests for the click command line interface
"""

import pytest
from click.testing import CliRunner

from memberql.cli import cli
from memberql.database.connection import reset_database
from memberql.repository import reset_repository


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def sqlite_env(monkeypatch, database_url):
    reset_database()
    reset_repository()
    monkeypatch.setenv("MEMBERQL_DATABASE_URL", database_url)
    yield database_url
    reset_database()


def test_schema_prints_sdl(runner):
    result = runner.invoke(cli, ["schema"])

    assert result.exit_code == 0
    assert "type Query" in result.output
    assert "scalar UUID" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "memberql" in result.output


@pytest.mark.requires_db
def test_db_init_then_seed(runner, sqlite_env):
    init = runner.invoke(cli, ["db", "init"])
    assert init.exit_code == 0, init.output
    assert "Tables created" in init.output

    seed = runner.invoke(cli, ["db", "seed"])
    assert seed.exit_code == 0, seed.output
    assert "BASIC, BUSINESS" in seed.output

    again = runner.invoke(cli, ["db", "seed"])
    assert again.exit_code == 0, again.output
    assert "already present" in again.output


@pytest.mark.requires_db
def test_db_check(runner, sqlite_env):
    result = runner.invoke(cli, ["db", "check"])

    assert result.exit_code == 0, result.output
    assert "Database connection OK" in result.output


def test_db_check_reports_unusable_url(runner, monkeypatch):
    reset_database()
    monkeypatch.setenv("MEMBERQL_DATABASE_URL", "mysql://nobody@localhost/none")

    result = runner.invoke(cli, ["db", "check"])

    assert result.exit_code == 1
    reset_database()
