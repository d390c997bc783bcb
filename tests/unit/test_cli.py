"""Command line entry points."""

from click.testing import CliRunner

from stackcalc import __version__
from stackcalc.cli.main import cli


def _write(tmp_path, text):
    path = tmp_path / "prog.calc"
    path.write_text(text)
    return str(path)


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_run_prints_results(tmp_path):
    path = _write(tmp_path, "1 + 2 * (3 - 1) ;\n4.0 / 2 ;\n")
    result = CliRunner().invoke(cli, ["run", path])
    assert result.exit_code == 0
    assert "5" in result.output
    assert "2.0" in result.output


def test_run_failure_exit_code(tmp_path):
    path = _write(tmp_path, "1 + 2\n")
    result = CliRunner().invoke(cli, ["run", path])
    assert result.exit_code == 1
    assert "expected ';'" in result.output


def test_run_keep_going_and_fixed_floats(tmp_path):
    path = _write(tmp_path, "x ;\n1.5 * 2 ;\n")
    result = CliRunner().invoke(cli, ["run", "--keep-going", "--float-format", "fixed", path])
    assert result.exit_code == 1
    assert "3.000000" in result.output


def test_run_max_depth(tmp_path):
    path = _write(tmp_path, "(((1))) ;\n")
    result = CliRunner().invoke(cli, ["run", "--max-depth", "2", path])
    assert result.exit_code == 1
    assert "expression too complex" in result.output


def test_run_division_by_zero(tmp_path):
    path = _write(tmp_path, "1 / 0 ;\n")
    result = CliRunner().invoke(cli, ["run", path])
    assert result.exit_code == 2


def test_run_missing_file_is_usage_error(tmp_path):
    result = CliRunner().invoke(cli, ["run", str(tmp_path / "missing.calc")])
    assert result.exit_code == 2
    assert "does not exist" in result.output


def test_tokens_table(tmp_path):
    path = _write(tmp_path, "(1 + 2.5) ;\n")
    result = CliRunner().invoke(cli, ["tokens", path])
    assert result.exit_code == 0
    for kind in ("PAREN_OPEN", "INTEGER", "OPERATOR", "FLOAT", "PAREN_CLOSE", "STATEMENT_END"):
        assert kind in result.output


def test_tokens_table_shows_literals_verbatim(tmp_path):
    path = _write(tmp_path, "\"[/oops]\" ;\n\"[bold]x\" ;\n")
    result = CliRunner().invoke(cli, ["tokens", path])
    assert result.exit_code == 0, result.output
    assert "[/oops]" in result.output
    assert "[bold]x" in result.output


def test_tokens_reports_lexical_error(tmp_path):
    path = _write(tmp_path, "1 @ 2 ;\n")
    result = CliRunner().invoke(cli, ["tokens", path])
    assert result.exit_code == 1
    assert "unexpected character" in result.output


def test_repl_evaluates_lines():
    result = CliRunner().invoke(cli, ["repl"], input="1 + 2 ;\n(1 ;\nexit\n")
    assert result.exit_code == 0
    assert "3" in result.output
    assert "mismatched parentheses" in result.output
