"""Smoke tests for the CLI entrypoint."""

from click.testing import CliRunner

from secutils.cli import cli


def test_cli_help_displays_commands() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "quick forensic views" in result.output
    for command in ("info", "ioc", "config"):
        assert command in result.output
