"""Token model for Plus++.

A :class:`Token` is the unit shared by every phase: the lexer produces them,
the validator and the interpreter both read them. Tokens never change once
they are created.


File: tokens.py
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """
    Kinds of token. The value is the display name used in diagnostics.
    """
    KEYWORD = "Keyword"
    IDENTIFIER = "Identifier"
    INTEGER = "IntConstant"
    STRING = "StringConstant"
    OPERATOR = "Operator"
    OPEN_BLOCK = "OpenBlock"
    CLOSE_BLOCK = "CloseBlock"
    SEMICOLON = "EndOfLine"
    ERROR = "Error"


# Descriptions used in "expected ... but got ..." messages.
KIND_DESCRIPTIONS = {
    TokenKind.KEYWORD: "a keyword",
    TokenKind.IDENTIFIER: "an identifier",
    TokenKind.INTEGER: "an integer constant",
    TokenKind.STRING: "a string constant",
    TokenKind.OPERATOR: "an operator",
    TokenKind.OPEN_BLOCK: "open block '{'",
    TokenKind.CLOSE_BLOCK: "close block '}'",
    TokenKind.SEMICOLON: "semicolon ';'",
    TokenKind.ERROR: "a token",
}

# Kinds whose text is implied by the kind and omitted when rendered.
_BARE_KINDS = frozenset({
    TokenKind.SEMICOLON,
    TokenKind.OPEN_BLOCK,
    TokenKind.CLOSE_BLOCK,
})

KEYWORDS = ("number", "repeat", "times", "write", "newline", "and")
ASSIGNMENT_OPERATORS = (":=", "+=", "-=")


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token with a kind, its raw text and source line.
    """
    kind: TokenKind
    text: str
    line: int

    def render(self) -> str:
        """
        Render the token the way it is echoed to the diagnostic sink.
        """
        if self.kind in _BARE_KINDS:
            return self.kind.value
        return f"{self.kind.value}({self.text})"

    def is_keyword(self, word: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.text == word
