"""Tests for the Plus++ language server's analysis."""
from lsprotocol.types import DiagnosticSeverity, SymbolKind

from plusplus.exceptions import LexError, ParseError
from plusplus.server import PlusPlusLanguageServer, analyse, declarations, to_diagnostic
from plusplus.tests.utils import lex_source

URI = "file:///work/prog.ppp"


def test_declarations_are_symbols():
    tokens = list(lex_source("number a;\n\nnumber b; a := 1;"))
    symbols = declarations(URI, tokens)
    assert [(s.name, s.line, s.detail) for s in symbols] == [
        ("a", 0, "number a"),
        ("b", 2, "number b"),
    ]
    assert all(s.kind == SymbolKind.Variable for s in symbols)


def test_analyse_valid_document():
    symbols, error = analyse(URI, "number a; write a;")
    assert error is None
    assert [s.name for s in symbols] == ["a"]


def test_analyse_keeps_symbols_before_lex_error():
    symbols, error = analyse(URI, "number a;\nnumber b;\nwrite c;")
    assert isinstance(error, LexError)
    assert error.line == 3
    assert [s.name for s in symbols] == ["a", "b"]


def test_analyse_reports_syntax_error():
    _, error = analyse(URI, "number a\nwrite a;")
    assert isinstance(error, ParseError)
    assert error.line == 1


def test_diagnostic_covers_error_line():
    text = "number a\nwrite a;"
    _, error = analyse(URI, text)
    diagnostic = to_diagnostic(error, text)
    assert diagnostic.range.start.line == 0
    assert diagnostic.range.end.character == len("number a")
    assert diagnostic.severity == DiagnosticSeverity.Error
    assert diagnostic.message == error.message


def test_diagnostic_without_line():
    diagnostic = to_diagnostic(LexError("broken"), "")
    assert diagnostic.range.start.line == 0
    assert diagnostic.range.end.character == 0


def test_index_and_lookup():
    server = PlusPlusLanguageServer()
    server.indexed_workspace = True
    assert server.update_index(URI, "number total;\ntotal := 3;") == []
    other = "file:///work/other.ppp"
    diagnostics = server.update_index(other, "number count;\nwrite x;")
    assert len(diagnostics) == 1
    assert diagnostics[0].range.start.line == 1

    assert server.lookup("total").uri == URI
    assert server.lookup("count").uri == other
    assert server.lookup("missing") is None


def test_reindex_replaces_symbols():
    server = PlusPlusLanguageServer()
    server.indexed_workspace = True
    server.update_index(URI, "number old;")
    server.update_index(URI, "number new;")
    assert server.lookup("old") is None
    assert [s.name for s in server.symbols_by_uri[URI]] == ["new"]


def test_diagnostic_lines_match_lexer_lines():
    # Vertical tab is whitespace to the lexer, not a line break.
    diagnostic = to_diagnostic(ParseError("bad", 2), "a\x0bbb\nccc")
    assert diagnostic.range.start.line == 1
    assert diagnostic.range.end.character == 3
