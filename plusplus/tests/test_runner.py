"""Tests for running a whole program through every phase."""
import io
import logging

import pytest

from plusplus.exceptions import LexError, ParseError
from plusplus.runner import SUCCESS_MESSAGE, run_source


def test_run_source_from_stream():
    out = io.StringIO()
    lines = []
    variables = run_source(
        io.StringIO('number n; n := 2;\nrepeat n times write "ok" and newline;'),
        out=out,
        sink=lines.append,
    )
    assert out.getvalue() == "ok\nok\n"
    assert variables.get("n") == 0
    assert lines[-1] == SUCCESS_MESSAGE


def test_show_tokens_sends_table_to_sink():
    lines = []
    run_source("number x;", out=io.StringIO(), sink=lines.append, show_tokens=True)
    assert lines[3].startswith("--- Token List ---")
    assert lines[4] == SUCCESS_MESSAGE


def test_lex_error_skips_later_phases():
    out = io.StringIO()
    lines = []
    with pytest.raises(LexError):
        run_source('write "a" and b;', out=out, sink=lines.append)
    assert out.getvalue() == ""
    assert SUCCESS_MESSAGE not in lines


def test_syntax_error_skips_execution():
    out = io.StringIO()
    with pytest.raises(ParseError):
        run_source('write "a";\nwrite "b"', out=out)
    assert out.getvalue() == ""


def test_debug_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="plusplus")
    run_source('number i; repeat 2 times i += 1;', out=io.StringIO())
    messages = [record.getMessage() for record in caplog.records]
    assert "Tokenized 10 tokens over 1 lines" in messages
    assert "Declared 'i' on line 1" in messages
    assert "Repeat on line 1 ran 2 iterations" in messages
