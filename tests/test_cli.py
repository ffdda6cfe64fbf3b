"""Tests for the root CLI group."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from cmdlint import __version__
from cmdlint.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestRootGroup:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_subcommand_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "check" in result.output
        assert "rules" in result.output

    def test_bad_config_is_usage_error(self, cli_runner: CliRunner, tmp_path) -> None:
        (tmp_path / "cmdlint.toml").write_text("[check\n")
        result = cli_runner.invoke(cli, ["rules"])
        assert result.exit_code == 2
        assert "Invalid TOML" in result.output
