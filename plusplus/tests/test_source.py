"""Tests for resolving and reading source files."""
import pytest

from plusplus.exceptions import SourceError
from plusplus.source import PROMPT, read_source, source_filename


def test_suffix_is_appended():
    assert source_filename("examples/hello") == "examples/hello.ppp"


def test_existing_suffix_is_kept():
    assert source_filename("hello.ppp") == "hello.ppp"


def test_prompt_when_no_name():
    asked = []

    def prompt(text):
        asked.append(text)
        return "  demo \n"

    assert source_filename(None, prompt=prompt) == "demo.ppp"
    assert asked == [PROMPT]


def test_prompt_end_of_input():
    def prompt(_text):
        raise EOFError

    with pytest.raises(SourceError) as exc:
        source_filename(None, prompt=prompt)
    assert exc.value.message == "Failed to read input."


def test_empty_name():
    with pytest.raises(SourceError):
        source_filename("   ")


def test_read_source(tmp_path):
    path = tmp_path / "prog.ppp"
    path.write_text("number x;\n", encoding="utf-8")
    assert read_source(str(path)) == "number x;\n"


def test_read_missing_source(tmp_path):
    path = str(tmp_path / "missing.ppp")
    with pytest.raises(SourceError) as exc:
        read_source(path)
    assert exc.value.diagnostic() == f"[ERROR] (line unknown): Could not open source file '{path}'"
