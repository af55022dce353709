"""Tests for the root CLI group."""

from __future__ import annotations

from click.testing import CliRunner

from hypervctl import __version__
from hypervctl.cli import cli


class TestRootGroup:
    def test_no_command_shows_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        for name in ("vms", "import", "compare"):
            assert name in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_compare_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["compare", "--examples"])
        assert result.exit_code == 0
        assert "hypervctl compare ./web01.vmcx" in result.output

    def test_import_requires_path(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["import"])
        assert result.exit_code == 2
