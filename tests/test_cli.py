"""
Tests for CLI commands.

Uses typer's CliRunner to run commands in-process.
"""

import json

import pytest
from typer.testing import CliRunner

from envoverlay.cli.main import app

runner = CliRunner()

DOCUMENT = """
name = "billing"
host = "<<ENV:EO_HOST>>"
token = "<<ENV?:EO_TOKEN>>"
[more]
port = 8080
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "Config.toml"
    path.write_text(DOCUMENT)
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("EO_HOST", "EO_TOKEN", "EO_A", "EO_B"):
        monkeypatch.delenv(name, raising=False)


class TestVersion:
    """Tests for --version flag."""

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "envoverlay version" in result.output

    def test_version_short_flag(self):
        result = runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert "envoverlay version" in result.output


class TestHelp:
    """Tests for help output."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "envoverlay" in result.output.lower()

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "check" in result.output

    @pytest.mark.parametrize("command", ["check", "show", "placeholders"])
    def test_command_help(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0


class TestCheck:
    """Tests for check command."""

    def test_ok(self, config_file, monkeypatch):
        monkeypatch.setenv("EO_HOST", "db1")
        result = runner.invoke(app, ["check", str(config_file)])
        assert result.exit_code == 0
        assert "OK" in result.output

    def test_missing_variable(self, config_file):
        result = runner.invoke(app, ["check", str(config_file)])
        assert result.exit_code == 1
        assert "EO_HOST" in result.output

    def test_lists_every_missing_variable(self, tmp_path):
        path = tmp_path / "Config.toml"
        path.write_text('a = "<<ENV:EO_A>>"\nb = "<<ENV:EO_B>>"\n')
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 1
        assert "EO_A" in result.output
        assert "EO_B" in result.output
        assert "2 configuration error(s)" in result.output

    def test_default_path(self, config_file, monkeypatch):
        monkeypatch.chdir(config_file.parent)
        monkeypatch.setenv("EO_HOST", "db1")
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 0

    def test_default_path_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check"])
        assert result.exit_code == 1
        assert "Default config file not found" in result.output

    def test_parse_error(self, tmp_path):
        path = tmp_path / "Config.toml"
        path.write_text("foo = ")
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 1
        assert "Error parsing TOML" in result.output


class TestShow:
    """Tests for show command."""

    def test_show_json_raw(self, config_file, monkeypatch):
        monkeypatch.setenv("EO_HOST", "db1")
        result = runner.invoke(app, ["show", str(config_file), "--format", "json", "--raw"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"name": "billing", "host": "db1", "more": {"port": 8080}}

    def test_show_yaml(self, config_file, monkeypatch):
        monkeypatch.setenv("EO_HOST", "db1")
        monkeypatch.setenv("EO_TOKEN", "secret")
        result = runner.invoke(app, ["show", str(config_file)])
        assert result.exit_code == 0
        assert "db1" in result.output
        assert "secret" in result.output

    def test_show_failure(self, config_file):
        result = runner.invoke(app, ["show", str(config_file)])
        assert result.exit_code == 1
        assert "EO_HOST" in result.output

    def test_input_format(self, tmp_path):
        path = tmp_path / "settings.conf"
        path.write_text("a: 1\n")
        result = runner.invoke(app, ["show", str(path), "-i", "yaml", "-f", "json", "--raw"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"a": 1}


class TestPlaceholders:
    """Tests for placeholders command."""

    def test_lists_placeholders(self, config_file, monkeypatch):
        monkeypatch.setenv("EO_HOST", "do-not-print")
        result = runner.invoke(app, ["placeholders", str(config_file)])
        assert result.exit_code == 0
        assert "EO_HOST" in result.output
        assert "EO_TOKEN" in result.output
        assert "required" in result.output
        assert "optional" in result.output
        assert "do-not-print" not in result.output

    def test_no_placeholders(self, tmp_path):
        path = tmp_path / "Config.toml"
        path.write_text("a = 1\n")
        result = runner.invoke(app, ["placeholders", str(path)])
        assert result.exit_code == 0
        assert "No placeholders found" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["placeholders", str(tmp_path / "nope.toml")])
        assert result.exit_code == 1

    def test_self_referential_document(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("a: &x [*x]\n")
        result = runner.invoke(app, ["placeholders", str(path)])
        assert result.exit_code == 1
        assert not isinstance(result.exception, RecursionError)
        assert "nesting exceeds" in result.output

    def test_self_referential_document_check(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("a: &x [*x]\n")
        result = runner.invoke(app, ["check", str(path)])
        assert result.exit_code == 1
        assert "nesting exceeds" in result.output
