"""Tests for the nixc command-line interface."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from nixc.cli import _dump_value, main
from nixc.values import Integer, LetIn, String


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def value_file(tmp_path):
    path = tmp_path / "value.nix"
    path.write_text("{a=[1 2],b=null,c={},d=-0.5}")
    return path


class TestCLI:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "FILE" in result.output
        assert "--format" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_dump(self, runner, value_file):
        result = runner.invoke(main, [str(value_file)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "AttrSet",
            "  a = List",
            "    Integer: 1",
            "    Integer: 2",
            "  b = Null",
            "  c = AttrSet: {}",
            "  d = Float: -0.5",
        ]

    def test_format(self, runner, value_file):
        result = runner.invoke(main, ["--format", str(value_file)])
        assert result.exit_code == 0
        assert result.output == "{a=[1 2],b=null,c={},d=-0.5}\n"

    def test_verbose(self, runner, value_file):
        result = runner.invoke(main, ["-v", str(value_file)])
        assert result.exit_code == 0

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "absent.nix")])
        assert result.exit_code == 1
        assert "error: cannot read" in result.output

    def test_parse_error(self, runner, tmp_path):
        path = tmp_path / "broken.nix"
        path.write_text("{a=1")
        result = runner.invoke(main, ["--no-color", str(path)])
        assert result.exit_code == 1
        assert "error[E203]: parse error: unmatched opening brace (context: attrset)" in result.output
        assert f"--> {path}:1:1" in result.output
        assert "\033[" not in result.output

    def test_lex_error(self, runner, tmp_path):
        path = tmp_path / "broken.nix"
        path.write_text("[1 ?]")
        result = runner.invoke(main, ["--no-color", str(path)])
        assert result.exit_code == 1
        assert "error[E100]: lexer error" in result.output

    def test_color_by_default(self, runner, tmp_path):
        path = tmp_path / "broken.nix"
        path.write_text("[1 2")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == 1
        assert "\033[1;31m" in result.output

    def test_config_disables_color(self, runner, tmp_path):
        (tmp_path / "nixc.toml").write_text("[diagnostics]\ncolor = false\n")
        path = tmp_path / "broken.nix"
        path.write_text("[1 2")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == 1
        assert "error[E202]" in result.output
        assert "\033[" not in result.output

    def test_flag_overrides_config(self, runner, tmp_path):
        (tmp_path / "nixc.toml").write_text("[diagnostics]\ncolor = false\n")
        path = tmp_path / "broken.nix"
        path.write_text("[1 2")
        result = runner.invoke(main, ["--color", str(path)])
        assert "\033[1;31m" in result.output

    def test_invalid_config(self, runner, tmp_path):
        (tmp_path / "nixc.toml").write_text("[diagnostics\n")
        path = tmp_path / "value.nix"
        path.write_text("null")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == 1
        assert "error: cannot load" in result.output


class TestDumpValue:
    def test_let_in(self, capsys):
        _dump_value(LetIn({"x": Integer(1)}, String("s")), 0)
        assert capsys.readouterr().out.splitlines() == [
            "LetIn",
            "  x = Integer: 1",
            "  in String: 's'",
        ]
