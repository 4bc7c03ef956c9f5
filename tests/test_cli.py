"""
Unit tests for main CLI interface.

Tests environment inspection, data source listing and project validation.
"""

import json

import pytest

from opencart_ui.cli import cmd_env, create_main_parser, main


class TestEnvCommand:
    """Test cases for the env command."""

    def test_env_prints_masked_config(self, project_dir, capsys):
        result = main(["--root", str(project_dir), "env", "--env", "stage"])

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data["name"] == "stage"
        assert data["browser"] == "chrome"
        assert data["password"] == "****"

    def test_env_defaults_to_qa(self, project_dir, capsys):
        assert main(["--root", str(project_dir), "env"]) == 0

        assert json.loads(capsys.readouterr().out)["name"] == "qa"

    def test_env_uses_env_var(self, project_dir, capsys, monkeypatch):
        monkeypatch.setenv("OPENCART_ENV", "prod")

        assert main(["--root", str(project_dir), "env"]) == 0

        assert json.loads(capsys.readouterr().out)["browser"] == "firefox"

    def test_headless_override(self, project_dir, capsys, monkeypatch):
        monkeypatch.setenv("OPENCART_HEADLESS", "false")

        assert main(["--root", str(project_dir), "env"]) == 0

        assert json.loads(capsys.readouterr().out)["headless"] is False

    def test_unknown_env(self, project_dir, capsys):
        result = main(["--root", str(project_dir), "--verbose", "env", "--env", "perf"])

        assert result == 1
        out = capsys.readouterr().out
        assert "Unknown environment 'perf'" in out
        assert '"kind": "configuration"' in out

    def test_custom_config_dir(self, project_dir, capsys):
        other = project_dir / "elsewhere"
        other.mkdir()
        (project_dir / "config" / "qa.properties").rename(other / "qa.properties")

        result = main(
            ["--root", str(project_dir), "--config-dir", str(other), "env", "--env", "qa"]
        )

        assert result == 0


class TestDataCommand:
    """Test cases for the data command."""

    def test_data_prints_rows(self, project_dir, capsys):
        result = main(["--root", str(project_dir), "data", "register"])

        assert result == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 5
        assert json.loads(lines[0]) == ["Arun", "Kumar", "9876543210", "arun@123", "yes"]

    def test_missing_source(self, project_dir, capsys):
        result = main(["--root", str(project_dir), "data", "checkout"])

        assert result == 1
        assert "checkout" in capsys.readouterr().out

    def test_missing_sheet_workbook(self, project_dir, capsys):
        result = main(["--root", str(project_dir), "data", "productimages", "--sheet"])

        assert result == 1


class TestValidateCommand:
    """Test cases for the validate command."""

    def test_valid_project(self, project_dir, capsys):
        result = main(["--root", str(project_dir), "validate"])

        assert result == 0
        out = capsys.readouterr().out
        assert "qa: chrome" in out
        assert "prod: firefox" in out
        assert "Configuration is valid" in out

    def test_invalid_environment_file(self, project_dir, capsys):
        (project_dir / "config" / "uat.properties").write_text(
            "url=https://shop.example.com\n", encoding="utf-8"
        )

        result = main(["--root", str(project_dir), "validate"])

        assert result == 1
        assert "uat:" in capsys.readouterr().out

    def test_missing_environment_file_is_a_warning(self, project_dir, capsys):
        (project_dir / "config" / "dev.properties").unlink()

        assert main(["--root", str(project_dir), "validate"]) == 0
        assert "dev.properties not present" in capsys.readouterr().out

    def test_missing_directories(self, tmp_path, capsys):
        result = main(["--root", str(tmp_path / "empty"), "validate"])

        assert result == 1
        assert "config directory does not exist" in capsys.readouterr().out


class TestParser:
    """Test cases for argument parsing."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage: opencart-ui" in capsys.readouterr().out

    def test_env_command_wiring(self):
        args = create_main_parser().parse_args(["env", "--env", "dev"])

        assert args.func is cmd_env
        assert args.env == "dev"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "opencart-ui 0.1.0" in capsys.readouterr().out
