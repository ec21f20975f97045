"""Tests for the ``keys`` and top-level CLI commands.

Testing approach:
- Uses Click's CliRunner for command invocation
- Mocks the session factory and repository to avoid a real database
"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner
import pytest

from photo_catalog.cli.commands.keys import keys
from photo_catalog.cli.main import cli
from photo_catalog.core.database import StorageError


@pytest.fixture
def cli_runner():
    """Create Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def mock_repo():
    """Secret key repository with async methods."""
    repo = MagicMock()
    repo.add = AsyncMock(return_value=True)
    repo.remove = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def patched_db(mock_repo):
    """Patch the session factory, engine disposal and repository getter."""
    session = AsyncMock()

    @asynccontextmanager
    async def fake_session():
        yield session

    with (
        patch("photo_catalog.infra.database.get_async_session", fake_session),
        patch("photo_catalog.infra.database.close_database", AsyncMock()),
        patch(
            "photo_catalog.features.secret_keys.get_secret_key_repository",
            return_value=mock_repo,
        ),
    ):
        yield session


class TestKeysCommands:
    """Tests for ``photo-catalog keys``."""

    def test_add_given_key(self, cli_runner, patched_db, mock_repo):
        result = cli_runner.invoke(keys, ["add", "my-key"])

        assert result.exit_code == 0
        assert "my-key" in result.output
        mock_repo.add.assert_awaited_once_with(patched_db, "my-key")

    def test_add_generates_key_when_omitted(self, cli_runner, patched_db, mock_repo):
        result = cli_runner.invoke(keys, ["add"])

        assert result.exit_code == 0
        generated = mock_repo.add.await_args.args[1]
        assert len(generated) >= 32
        assert generated in result.output

    def test_add_existing_key_warns(self, cli_runner, patched_db, mock_repo):
        mock_repo.add.return_value = False

        result = cli_runner.invoke(keys, ["add", "my-key"])

        assert result.exit_code == 0
        assert "already exists" in result.output

    def test_add_storage_failure_exits_nonzero(self, cli_runner, patched_db, mock_repo):
        mock_repo.add.side_effect = StorageError("secret_keys.add", RuntimeError("down"))

        result = cli_runner.invoke(keys, ["add", "my-key"])

        assert result.exit_code == 1

    def test_revoke_unknown_key(self, cli_runner, patched_db, mock_repo):
        mock_repo.remove.return_value = False

        result = cli_runner.invoke(keys, ["revoke", "nope"])

        assert result.exit_code == 0
        assert "No such key" in result.output


class TestCliGroup:
    """Top-level command group."""

    def test_help_lists_command_groups(self, cli_runner):
        result = cli_runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for group in ("db", "keys", "server"):
            assert group in result.output
