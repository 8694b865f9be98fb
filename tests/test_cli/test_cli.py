"""End-to-end tests for the ``woflang`` command-line interface."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from woflang.cli.main import cli

PLUGIN_SOURCE = """
from woflang.core.value import Value

def register_plugin(interp):
    interp.register("answer", lambda i: i.push(Value.from_integer(42)))
"""


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def cli_plugins(tmp_path: Path) -> Path:
    directory = tmp_path / "cli_plugins"
    directory.mkdir()
    (directory / "answer.py").write_text(textwrap.dedent(PLUGIN_SOURCE), encoding="utf-8")
    return directory


def _script(tmp_path: Path, text: str, name: str = "script.wof") -> Path:
    path = tmp_path / name
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


class TestExec:
    def test_prints_final_stack(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--no-entrypoints", "exec", "5 3 +"])
        assert result.exit_code == 0
        assert "Stack [1]" in result.output
        assert "[0] 8" in result.output

    def test_multiple_lines_share_stack(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--no-entrypoints", "exec", "1 2", "swap"])
        assert result.exit_code == 0
        assert "[0] 2" in result.output
        assert "[1] 1" in result.output

    def test_quiet_suppresses_stack(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--no-entrypoints", "exec", "--quiet", '"hi" print'])
        assert result.exit_code == 0
        assert result.output.strip() == "hi"

    def test_error_exits_with_status_one(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--no-entrypoints", "exec", "1", "drop drop"])
        assert result.exit_code == 1
        assert "argument 2" in result.output
        assert "underflow" in result.output

    def test_plugins_option(self, runner: CliRunner, cli_plugins: Path) -> None:
        result = runner.invoke(
            cli, ["--no-entrypoints", "--plugins", str(cli_plugins), "exec", "answer"]
        )
        assert result.exit_code == 0
        assert "[0] 42" in result.output

    def test_plugin_dir_from_environment(self, runner: CliRunner, cli_plugins: Path) -> None:
        result = runner.invoke(
            cli,
            ["--no-entrypoints", "exec", "answer"],
            env={"WOFLANG_PLUGIN_DIR": str(cli_plugins)},
        )
        assert result.exit_code == 0
        assert "[0] 42" in result.output


class TestRun:
    """Scripts are written into an isolated working directory so the short
    relative names keep rich from wrapping error messages."""

    def test_runs_script(self, runner: CliRunner, tmp_path: Path) -> None:
        with runner.isolated_filesystem(temp_dir=tmp_path):
            _script(Path("."), "# greet\n\"hello world\" print\n", "hello.wof")
            result = runner.invoke(cli, ["--no-entrypoints", "run", "hello.wof"])
        assert result.exit_code == 0
        assert "hello world" in result.output

    def test_missing_script(self, runner: CliRunner, tmp_path: Path) -> None:
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, ["--no-entrypoints", "run", "none.wof"])
        assert result.exit_code == 1
        assert "cannot read script" in result.output

    def test_runtime_error_reports_line(self, runner: CliRunner, tmp_path: Path) -> None:
        with runner.isolated_filesystem(temp_dir=tmp_path):
            _script(Path("."), "1\n1 0 /\n\"unreached\" print\n", "div.wof")
            result = runner.invoke(cli, ["--no-entrypoints", "run", "div.wof"])
        assert result.exit_code == 1
        assert "line 2" in result.output
        assert "unreached" not in result.output

    def test_dump_json(self, runner: CliRunner, tmp_path: Path) -> None:
        script = _script(tmp_path, "20 4 /\n")
        result = runner.invoke(cli, ["--no-entrypoints", "run", str(script), "--dump", "json"])
        assert result.exit_code == 0
        assert '"depth": 1' in result.output
        assert '"float"' in result.output

    def test_dump_yaml(self, runner: CliRunner, tmp_path: Path) -> None:
        script = _script(tmp_path, "7\n")
        result = runner.invoke(cli, ["--no-entrypoints", "run", str(script), "--dump", "yaml"])
        assert result.exit_code == 0
        assert "depth: 1" in result.output
        assert "type: integer" in result.output


class TestRepl:
    def test_reads_until_quit(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--no-entrypoints", "repl"], input="5 3 + print\nquit\n")
        assert result.exit_code == 0
        assert "Woflang REPL" in result.output
        assert "8" in result.output
        assert "Goodbye from woflang!" in result.output

    def test_errors_do_not_end_session(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["--no-entrypoints", "repl"], input="drop\n\"still here\" print\n"
        )
        assert result.exit_code == 0
        assert "underflow" in result.output
        assert "still here" in result.output

    def test_debug_shows_stack(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--no-entrypoints", "repl", "--debug"], input="1 2\nexit\n")
        assert result.exit_code == 0
        assert "Stack [2]" in result.output


class TestOps:
    def test_lists_builtins(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--no-entrypoints", "ops"])
        assert result.exit_code == 0
        assert "Operators" in result.output
        assert "dup" in result.output
        assert "No extensions loaded" in result.output

    def test_lists_extensions(self, runner: CliRunner, cli_plugins: Path) -> None:
        result = runner.invoke(cli, ["--no-entrypoints", "--plugins", str(cli_plugins), "ops"])
        assert result.exit_code == 0
        assert "Extensions" in result.output
        assert "answer" in result.output


class TestGlobalOptions:
    def test_version_command(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "v0.1.0" in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("run", "exec", "repl", "ops", "version"):
            assert command in result.output

    def test_config_file(self, runner: CliRunner, tmp_path: Path, cli_plugins: Path) -> None:
        config = tmp_path / "woflang.yaml"
        config.write_text(
            f"plugin_dir: {cli_plugins.name}\nload_entrypoints: false\n", encoding="utf-8"
        )
        result = runner.invoke(cli, ["--config", str(config), "exec", "answer"])
        assert result.exit_code == 0
        assert "[0] 42" in result.output

    def test_bad_config_exits(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "woflang.yaml"
        config.write_text("unknown_setting: 1\n", encoding="utf-8")
        result = runner.invoke(cli, ["--config", str(config), "exec", "1"])
        assert result.exit_code == 1
        assert "unknown_setting" in result.output

    def test_invalid_log_level_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--log-level", "LOUD", "exec", "1"])
        assert result.exit_code != 0
