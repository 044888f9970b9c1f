"""Tests for the ``create-atsdc-stack`` entry point (atsdc_cli.cli).

Tests cover:
- --help / --version short-circuit
- Exit codes for invalid names, existing directories and unexpected errors
- Environment configuration and --output
- Interactive end-to-end run without installing
- User-supplied text containing Rich markup
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from atsdc_cli import __version__
from atsdc_cli.cli import cli_version, main


@pytest.fixture
def template_env(monkeypatch: pytest.MonkeyPatch, template_dir: Path) -> Path:
    monkeypatch.setenv("ATSDC_TEMPLATE_DIR", str(template_dir))
    return template_dir


# ---------------------------------------------------------------------------
# Help and version
# ---------------------------------------------------------------------------


class TestHelpAndVersion:
    @pytest.mark.unit
    @pytest.mark.parametrize("argv", [["--help"], ["-h"], ["demo-app", "-i", "-h"]])
    def test_help(self, argv, monkeypatch, tmp_path, capsys, mock_run_command):
        monkeypatch.chdir(tmp_path)
        assert main(argv) == 0
        assert "usage: create-atsdc-stack" in capsys.readouterr().out
        assert list(tmp_path.iterdir()) == []
        mock_run_command.assert_not_awaited()

    @pytest.mark.unit
    def test_help_wins_over_version(self, capsys):
        assert main(["-v", "--help"]) == 0
        assert "usage:" in capsys.readouterr().out

    @pytest.mark.unit
    @pytest.mark.parametrize("flag", ["--version", "-v"])
    def test_version_from_template(self, flag, template_env, capsys):
        assert main([flag]) == 0
        assert capsys.readouterr().out.strip() == "2.3.4"

    @pytest.mark.unit
    def test_version_from_bundled_template(self, monkeypatch, tmp_path, capsys):
        monkeypatch.chdir(tmp_path)
        assert main(["my-app", "--version"]) == 0
        assert capsys.readouterr().out.strip() == "1.0.0"
        assert not (tmp_path / "my-app").exists()

    @pytest.mark.unit
    def test_version_fallback(self, tmp_path):
        assert cli_version(tmp_path / "missing") == __version__

    @pytest.mark.unit
    @pytest.mark.parametrize("flag", ["--version", "--help"])
    def test_invalid_settings_do_not_block_help_or_version(self, flag, template_env, monkeypatch, capsys):
        monkeypatch.setenv("ATSDC_PACKAGE_MANAGER", "cargo")
        assert main([flag]) == 0
        captured = capsys.readouterr()
        assert captured.out.strip()
        assert "Invalid configuration" not in captured.err


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    @pytest.mark.unit
    def test_invalid_name(self, template_env, output_dir, make_prompter, capsys):
        code = main(["bad name!", "-o", str(output_dir)], prompter=make_prompter())
        assert code == 1
        assert "can only contain letters" in capsys.readouterr().err
        assert list(output_dir.iterdir()) == []

    @pytest.mark.unit
    def test_missing_name(self, template_env, output_dir, make_prompter, capsys):
        code = main(["-o", str(output_dir)], prompter=make_prompter(""))
        assert code == 1
        assert "Project name is required" in capsys.readouterr().err

    @pytest.mark.unit
    def test_existing_directory(self, template_env, output_dir, make_prompter, capsys, mock_run_command):
        existing = output_dir / "demo-app"
        existing.mkdir()
        (existing / "notes.txt").write_text("keep", encoding="utf-8")

        code = main(["demo-app", "-i", "-a", "node", "-o", str(output_dir)], prompter=make_prompter(""))

        assert code == 1
        assert 'Directory "demo-app" already exists!' in capsys.readouterr().err
        assert [p.name for p in existing.iterdir()] == ["notes.txt"]
        mock_run_command.assert_not_awaited()

    @pytest.mark.unit
    def test_invalid_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("ATSDC_PACKAGE_MANAGER", "cargo")
        assert main(["demo-app"]) == 1
        assert "Invalid configuration" in capsys.readouterr().err

    @pytest.mark.unit
    def test_unexpected_error(self, template_env, output_dir, make_prompter, capsys):
        with patch("atsdc_cli.cli.ProjectAssembler.run", side_effect=RuntimeError("disk on fire")):
            code = main(["demo-app", "-a", "node", "-o", str(output_dir)], prompter=make_prompter("n"))
        assert code == 1
        assert "Failed to create project: disk on fire" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Successful runs
# ---------------------------------------------------------------------------


class TestRun:
    @pytest.mark.unit
    def test_interactive_defaults_without_install(
        self, template_env, output_dir, make_prompter, mock_run_command
    ):
        # Decline the install, take the default adapter.
        code = main(["demo-app", "-o", str(output_dir)], prompter=make_prompter("n", ""))

        assert code == 0
        project = output_dir / "demo-app"
        manifest = json.loads((project / "package.json").read_text(encoding="utf-8"))
        assert manifest["name"] == "demo-app"
        config_text = (project / "astro.config.mjs").read_text(encoding="utf-8")
        assert "import vercel from '@astrojs/vercel/serverless';" in config_text
        assert (project / ".env").is_file()
        mock_run_command.assert_not_awaited()

    @pytest.mark.unit
    def test_output_dir_from_environment(
        self, template_env, output_dir, monkeypatch, make_prompter, mock_run_command
    ):
        monkeypatch.setenv("ATSDC_OUTPUT_DIR", str(output_dir))
        assert main(["env-app", "-a", "static"], prompter=make_prompter("n")) == 0
        assert (output_dir / "env-app" / "package.json").is_file()

    @pytest.mark.unit
    def test_full_flags_with_install(self, template_env, output_dir, make_prompter, mock_run_command):
        code = main(
            ["demo-app", "--install", "--setup-db", "--adapter", "netlify", "--output", str(output_dir)],
            prompter=make_prompter("n"),
        )
        assert code == 0
        assert [c.args[0] for c in mock_run_command.await_args_list] == [
            ["npm", "install"],
            ["npm", "run", "db:push"],
        ]

    @pytest.mark.unit
    def test_unknown_arguments_warned(self, template_env, output_dir, make_prompter, capsys, mock_run_command):
        code = main(["demo-app", "--turbo", "-a", "node", "-o", str(output_dir)], prompter=make_prompter("n"))
        assert code == 0
        assert "Ignoring unrecognised arguments: --turbo" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Literal output of user-supplied text
# ---------------------------------------------------------------------------


class TestBracketedInput:
    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["[/red]", "[bold]x", "[link=x]y"])
    def test_invalid_adapter_printed_verbatim(
        self, value, template_env, output_dir, make_prompter, capsys, mock_run_command
    ):
        code = main(["demo-app", "-a", value, "-o", str(output_dir)], prompter=make_prompter("n"))

        assert code == 0
        assert f"Invalid adapter '{value}', using default" in capsys.readouterr().out
        config_text = (output_dir / "demo-app" / "astro.config.mjs").read_text(encoding="utf-8")
        assert "import vercel from '@astrojs/vercel/serverless';" in config_text

    @pytest.mark.unit
    def test_unknown_bracketed_argument(self, template_env, output_dir, make_prompter, capsys, mock_run_command):
        code = main(["demo-app", "[/x]", "-a", "node", "-o", str(output_dir)], prompter=make_prompter("n"))
        assert code == 0
        assert "Ignoring unrecognised arguments: [/x]" in capsys.readouterr().out

    @pytest.mark.unit
    def test_bracketed_exception_text(self, template_env, output_dir, make_prompter, capsys):
        with patch("atsdc_cli.cli.ProjectAssembler.run", side_effect=RuntimeError("[/red] broke")):
            code = main(["demo-app", "-a", "node", "-o", str(output_dir)], prompter=make_prompter("n"))
        assert code == 1
        assert "Failed to create project: [/red] broke" in capsys.readouterr().err
