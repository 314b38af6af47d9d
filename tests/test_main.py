"""Tests for the command-line entry point."""

import os
import sys
from unittest.mock import AsyncMock, patch

import pytest

from serp_search_hub import main as cli
from serp_search_hub.config import get_settings
from serp_search_hub.utils.errors import MissingConfigurationError


@pytest.fixture(autouse=True)
def isolated_env():
    """Restore the environment and settings cache after each test."""
    with patch.dict(os.environ, {"SERP_API_KEY": "test_serp_key"}), patch.object(
        cli, "configure_logging"
    ) as configure_logging:
        yield configure_logging
    get_settings.cache_clear()


def test_parse_args():
    """Options are parsed alongside the positional query."""
    args = cli.parse_args(["--extensive", "--num-results", "20", "garlic"])

    assert args.query == "garlic"
    assert args.extensive is True
    assert args.num_results == 20
    assert args.api_key is None


def test_main_prints_simple_search_output(capsys):
    """The JSON envelope is printed to stdout."""
    with patch.object(cli, "run", AsyncMock(return_value='{"credits": 1}')) as run:
        assert cli.main(["What is Garlic"]) == 0

    run.assert_awaited_once_with("What is Garlic", extensive=False)
    assert capsys.readouterr().out.strip() == '{"credits": 1}'


def test_main_extensive_flag(capsys):
    """--extensive selects the extensive search."""
    with patch.object(cli, "run", AsyncMock(return_value="{}")) as run:
        assert cli.main(["--extensive", "What is Garlic? Onions?"]) == 0

    run.assert_awaited_once_with("What is Garlic? Onions?", extensive=True)


def test_main_applies_overrides():
    """Command-line options override the environment settings."""
    with patch.object(cli, "run", AsyncMock(return_value="{}")):
        cli.main(["--api-key", "cli_key", "--num-results", "7", "--timeout", "5", "q"])

    settings = get_settings()
    assert settings.get_api_key() == "cli_key"
    assert settings.serper.num_results == 7
    assert settings.serper.timeout == 5.0


def test_main_reports_search_errors(capsys):
    """Search errors are printed to stderr with a non-zero exit status."""
    error = MissingConfigurationError("SERP_API_KEY")
    with patch.object(cli, "run", AsyncMock(side_effect=error)):
        assert cli.main(["q"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error: Required configuration 'SERP_API_KEY' is missing" in captured.err


def test_main_rejects_invalid_settings(capsys):
    """Out-of-range overrides fail before any search."""
    with patch.object(cli, "run", AsyncMock()) as run:
        assert cli.main(["--num-results", "500", "q"]) == 2

    run.assert_not_called()
    assert capsys.readouterr().err.startswith("Error:")


def test_main_logs_to_stderr(isolated_env):
    """Logging is configured on stderr so stdout only carries JSON."""
    with patch.object(cli, "run", AsyncMock(return_value="{}")):
        cli.main(["--log-level", "WARNING", "q"])

    isolated_env.assert_called_once_with("WARNING", stream=sys.stderr)
