"""Tests for the root stackscout CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from stackscout import __version__
from stackscout.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "stackscout" in result.output
    for name in ("rules", "resources", "generators", "actions", "gen", "serve"):
        assert name in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_project")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_gen_group_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["gen", "--help"])
    assert result.exit_code == 0
    for name in ("install", "usage-rules", "mcp"):
        assert name in result.output


# --- Global flags ---


def test_root_option(cli_runner: CliRunner, tmp_path: Path) -> None:
    other = tmp_path / "other"
    other.mkdir()
    (other / "stackscout.toml").write_text('[project]\napp = "other"\n')
    result = cli_runner.invoke(cli, ["--root", str(other), "--json", "resources"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["data"]["scope"] == "other"


def test_config_option(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "custom.toml"
    config.write_text('[project]\napp = "custom"\n')
    result = cli_runner.invoke(
        cli, ["-c", str(config), "--root", str(tmp_path), "--json", "resources"]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["data"]["scope"] == "custom"


@pytest.mark.usefixtures("_isolated_project")
def test_verbose_adds_telemetry(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-v", "--json", "generators"])
    assert result.exit_code == 0, result.output
    start = result.stdout.index("{")
    data = json.loads(result.stdout[start:])
    assert data["meta"]["telemetry"]["name"] == "GeneratorService.list_generators"


@pytest.mark.usefixtures("_isolated_project")
def test_invalid_config_reports_error(cli_runner: CliRunner, project_root: Path) -> None:
    (project_root / "stackscout.toml").write_text("[project\n")
    result = cli_runner.invoke(cli, ["rules", "stackscout"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.output
