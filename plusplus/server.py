"""
Plus++ Language Server.

This server provides basic editor features for ``.ppp`` files using
`pygls`. It reuses the Plus++ lexer and validator to report the first
lexical or syntax error as a diagnostic, and builds a symbol index of
``number`` declarations supporting definition lookup, hover information and
document symbols.


File: server.py
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)
from pygls.server import LanguageServer

from plusplus.exceptions import LexError, ParseError, PlusPlusError
from plusplus.lexer import Lexer
from plusplus.parser import Validator
from plusplus.tokens import Token, TokenKind

logger = logging.getLogger(__name__)


@dataclass
class PlusPlusSymbol:
    """Represents a declared variable in a Plus++ file."""

    name: str
    kind: SymbolKind
    uri: str
    line: int
    detail: str


def analyse(uri: str, text: str) -> Tuple[List[PlusPlusSymbol], Optional[PlusPlusError]]:
    """
    Lex and validate ``text``, returning its declarations and the first error.

    Declarations are collected from the tokens accepted before any lexical
    error, so a broken document still lists what precedes the error.
    """
    lexer = Lexer(text)
    error: Optional[PlusPlusError] = None
    try:
        tokens = lexer.tokenize()
        Validator(tokens).validate()
    except (LexError, ParseError) as e:
        error = e
    return declarations(uri, lexer.tokens), error


def declarations(uri: str, tokens: List[Token]) -> List[PlusPlusSymbol]:
    """Extract every ``number <name>`` declaration from ``tokens``."""
    symbols: List[PlusPlusSymbol] = []
    for tok, nxt in zip(tokens, tokens[1:]):
        if tok.is_keyword("number") and nxt.kind is TokenKind.IDENTIFIER:
            symbols.append(
                PlusPlusSymbol(nxt.text, SymbolKind.Variable, uri, nxt.line - 1, f"number {nxt.text}")
            )
    return symbols


def to_diagnostic(error: PlusPlusError, text: str) -> Diagnostic:
    """Convert an error into an LSP diagnostic covering its line."""
    lines = text.split("\n")
    line = max((error.line or 1) - 1, 0)
    width = len(lines[line]) if line < len(lines) else 0
    return Diagnostic(
        range=Range(Position(line, 0), Position(line, width)),
        message=error.message,
        severity=DiagnosticSeverity.Error,
        source="ppp-ls",
    )


class PlusPlusLanguageServer(LanguageServer):
    """Language server for Plus++ source files."""

    def __init__(self) -> None:
        super().__init__("ppp-ls", "v0.1")
        self.symbols_by_uri: Dict[str, List[PlusPlusSymbol]] = {}
        self.global_symbols: Dict[str, List[PlusPlusSymbol]] = {}
        self.indexed_workspace = False

    def _index_workspace(self) -> None:
        """Analyse all `.ppp` files under the current workspace."""
        root = self.workspace.root_path
        if not root:
            self.indexed_workspace = True
            return
        for path in Path(root).rglob("*.ppp"):
            uri = path.as_uri()
            if uri in self.symbols_by_uri:
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Failed to index %s: %s", path, e)
                continue
            self.update_index(uri, text)
        self.indexed_workspace = True

    def update_index(self, uri: str, text: str) -> List[Diagnostic]:
        """
        Analyse ``text``, update the symbol index for ``uri`` and return
        the diagnostics to publish.
        """
        symbols, error = analyse(uri, text)
        self.symbols_by_uri[uri] = symbols
        self._rebuild_global_index()
        return [to_diagnostic(error, text)] if error is not None else []

    def _rebuild_global_index(self) -> None:
        self.global_symbols.clear()
        for syms in self.symbols_by_uri.values():
            for sym in syms:
                self.global_symbols.setdefault(sym.name, []).append(sym)

    def lookup(self, word: str) -> Optional[PlusPlusSymbol]:
        """Return the first known declaration of ``word``."""
        if not self.indexed_workspace:
            self._index_workspace()
        matches = self.global_symbols.get(word)
        return matches[0] if matches else None


lang_server = PlusPlusLanguageServer()


def _refresh(ls: PlusPlusLanguageServer, uri: str) -> None:
    doc = ls.workspace.get_text_document(uri)
    ls.publish_diagnostics(uri, ls.update_index(uri, doc.source))


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: PlusPlusLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Analyse a document when it is opened."""
    _refresh(ls, params.text_document.uri)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: PlusPlusLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-analyse a document when it changes."""
    _refresh(ls, params.text_document.uri)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: PlusPlusLanguageServer, params: DefinitionParams) -> Optional[Location]:
    """Return the declaration location for the name under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    sym = ls.lookup(word) if word else None
    if sym is None:
        return None
    rng = Range(Position(sym.line, 0), Position(sym.line, len(sym.detail)))
    return Location(uri=sym.uri, range=rng)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: PlusPlusLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return hover information for the name under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    sym = ls.lookup(word) if word else None
    if sym is None:
        return None
    contents = MarkupContent(kind=MarkupKind.PlainText, value=sym.detail)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: PlusPlusLanguageServer, params: DocumentSymbolParams) -> List[DocumentSymbol]:
    """Return the declarations in the given document."""
    result: List[DocumentSymbol] = []
    for sym in ls.symbols_by_uri.get(params.text_document.uri, []):
        rng = Range(Position(sym.line, 0), Position(sym.line, len(sym.detail)))
        result.append(
            DocumentSymbol(
                name=sym.name,
                kind=sym.kind,
                range=rng,
                selection_range=rng,
                detail=sym.detail,
            )
        )
    return result


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
