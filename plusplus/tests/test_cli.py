"""Tests for the ppp command-line entry point."""
import pytest

import ppp


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("PPPDEBUG", "PPP_MAX_TOKENS", "PPP_MAX_VARIABLES"):
        monkeypatch.delenv(key, raising=False)


def write_program(tmp_path, source: str) -> str:
    path = tmp_path / "prog.ppp"
    path.write_text(source, encoding="utf-8")
    return str(tmp_path / "prog")


def test_runs_program(tmp_path, capsys):
    name = write_program(tmp_path, "number a; a := 5; a += 3; write a;")
    assert ppp.main([name]) == 0
    captured = capsys.readouterr()
    assert captured.out == "8"
    assert captured.err.splitlines() == [
        "Keyword(number)",
        "Identifier(a)",
        "EndOfLine",
        "Identifier(a)",
        "Operator(:=)",
        "IntConstant(5)",
        "EndOfLine",
        "Identifier(a)",
        "Operator(+=)",
        "IntConstant(3)",
        "EndOfLine",
        "Keyword(write)",
        "Identifier(a)",
        "EndOfLine",
        "Syntax analysis completed successfully.",
    ]


def test_quiet_suppresses_diagnostics(tmp_path, capsys):
    name = write_program(tmp_path, 'write "hi" and newline;')
    assert ppp.main(["--quiet", name]) == 0
    captured = capsys.readouterr()
    assert captured.out == "hi\n"
    assert captured.err == ""


def test_token_table(tmp_path, capsys):
    name = write_program(tmp_path, "number x;")
    assert ppp.main(["--tokens", name]) == 0
    assert "--- Token List ---" in capsys.readouterr().err


def test_lex_error_stops_before_execution(tmp_path, capsys):
    name = write_program(tmp_path, 'write "a";\nwrite "a" and b;')
    assert ppp.main(["-q", name]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.splitlines() == ["[ERROR] (line 2): 'b' is not defined"]


def test_syntax_error_stops_before_execution(tmp_path, capsys):
    name = write_program(tmp_path, 'write "a";\nnumber x\nwrite x;')
    assert ppp.main(["-q", name]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.splitlines() == [
        "[ERROR] (line 2): Expected token 'semicolon ';'' but got 'write'."
    ]


def test_runtime_error_keeps_earlier_output(tmp_path, capsys):
    name = write_program(tmp_path, 'write "before";\nnumber x;\nnumber x;')
    assert ppp.main(["-q", name]) == 1
    captured = capsys.readouterr()
    assert captured.out == "before"
    assert captured.err.splitlines() == ["[ERROR] (line 3): Variable 'x' already declared."]


def test_missing_source(tmp_path, capsys):
    missing = str(tmp_path / "nope")
    assert ppp.main([missing]) == 1
    assert capsys.readouterr().err.strip() == (
        f"[ERROR] (line unknown): Could not open source file '{missing}.ppp'"
    )


def test_limit_flag(tmp_path, capsys):
    name = write_program(tmp_path, "number a; number b;")
    assert ppp.main(["-q", "--max-variables", "1", name]) == 1
    assert "Too many variables (limit 1)." in capsys.readouterr().err


def test_limit_from_environment(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("PPP_MAX_TOKENS", "2")
    name = write_program(tmp_path, "number a;")
    assert ppp.main(["-q", name]) == 1
    assert capsys.readouterr().err.strip() == "[ERROR] (line 1): Too many tokens."


def test_invalid_limit_flag(tmp_path, capsys):
    name = write_program(tmp_path, "number a;")
    assert ppp.main(["-q", "--max-tokens", "0", name]) == 1
    assert "must be a positive integer" in capsys.readouterr().err


def test_prompts_for_name(tmp_path, capsys, monkeypatch):
    name = write_program(tmp_path, 'write "prompted";')
    monkeypatch.setattr("builtins.input", lambda _prompt: name)
    assert ppp.main(["-q"]) == 0
    assert capsys.readouterr().out == "prompted"
