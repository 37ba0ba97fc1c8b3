"""Lexer for Plus++.

The lexer makes a single pass over the source using a combined regular
expression of named groups. Each match yields a :class:`Token` holding its
kind, raw text and the line the lexeme starts on.

Comments are delimited by a single ``*`` on both ends and may span lines.
String constants are enclosed in double quotes and may also span lines.
``+`` and ``-`` directly followed by a digit start a signed integer constant.

The lexer also enforces the forward-declaration rule: a word that is not a
keyword is only accepted as an identifier if it follows the ``number``
keyword (which declares it) or if it was declared earlier in the file. This
lexical record is independent of the interpreter's variable table; the two
can disagree, e.g. when a loop body uses a name that is declared textually
earlier but has not been declared at run time yet.


File: lexer.py
Version: 0.1.0
License: MIT
"""

import logging
import re
from typing import Callable, Iterable, Optional, Set, TextIO, Union

from plusplus.config import DEFAULT_LIMITS, Limits
from plusplus.exceptions import LexError
from plusplus.tokens import KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

TOKEN_SPECIFICATION = [
    # Comments and strings; the bare opener only matches when unterminated
    ('COMMENT',       r'\*[^*]*\*'),
    ('OPEN_COMMENT',  r'\*'),
    ('STRING',        r'"[^"]*"'),
    ('OPEN_STRING',   r'"'),

    # Operators and signed constants
    ('ASSIGN',        r'[:+-]='),
    ('INTEGER',       r'[+-]?[0-9]+'),
    ('OPERATOR',      r'[:+-]'),

    # Identifiers and keywords
    ('WORD',          r'[A-Za-z_][A-Za-z0-9_]*'),

    # Delimiters
    ('SEMICOLON',     r';'),
    ('LBRACE',        r'\{'),
    ('RBRACE',        r'\}'),

    # Miscellaneous
    ('NEWLINE',       r'\n'),
    ('SKIP',          r'[ \t\r\v\f]+'),
    ('MISMATCH',      r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in TOKEN_SPECIFICATION),
    re.DOTALL,
)

Sink = Callable[[str], None]


class Lexer:
    """
    Converts Plus++ source text into a token sequence.

    The declaration set is explicit state: pass one in to share it, or let the
    lexer create its own. ``tokens`` holds everything accepted so far, which
    remains available after a :class:`LexError`.
    """

    def __init__(
        self,
        source: Union[str, TextIO],
        declared: Optional[Set[str]] = None,
        limits: Limits = DEFAULT_LIMITS,
        sink: Optional[Sink] = None,
    ):
        self.code = source if isinstance(source, str) else source.read()
        self.declared = declared if declared is not None else set()
        self.limits = limits
        self.sink = sink
        self.tokens: list[Token] = []
        self.expect_declaration = False

    def tokenize(self) -> tuple[Token, ...]:
        """
        Tokenize the whole source.

        Returns:
            tuple[Token, ...]: The token sequence.

        Raises:
            LexError: On the first malformed lexeme or undeclared name.
        """
        line_num = 1

        for match_obj in TOKEN_REGEX.finditer(self.code):
            kind = match_obj.lastgroup
            value = match_obj.group()

            if kind == 'NEWLINE':
                line_num += 1
                continue
            if kind == 'SKIP':
                continue
            if kind == 'COMMENT':
                line_num += value.count('\n')
                continue
            if kind == 'OPEN_COMMENT':
                raise LexError("Unterminated comment detected.", line_num)
            if kind == 'OPEN_STRING':
                raise LexError("Unterminated string constant.", line_num)
            if kind == 'MISMATCH':
                raise LexError(f"Unrecognized character '{value}'", line_num)

            if kind == 'STRING':
                text = value[1:-1]
                if len(text) > self.limits.max_string_length:
                    raise LexError(
                        f"String constant exceeds {self.limits.max_string_length} characters.",
                        line_num,
                    )
                self._emit(TokenKind.STRING, text, line_num)
                line_num += value.count('\n')
            elif kind == 'INTEGER':
                digits = value.lstrip('+-')
                if len(digits) > self.limits.max_int_digits:
                    raise LexError(
                        f"IntConstant exceeds {self.limits.max_int_digits} digits.", line_num
                    )
                self._emit(TokenKind.INTEGER, value, line_num)
            elif kind in ('ASSIGN', 'OPERATOR'):
                self._emit(TokenKind.OPERATOR, value, line_num)
            elif kind == 'WORD':
                self._word(value, line_num)
            elif kind == 'SEMICOLON':
                self._emit(TokenKind.SEMICOLON, value, line_num)
            elif kind == 'LBRACE':
                self._emit(TokenKind.OPEN_BLOCK, value, line_num)
            elif kind == 'RBRACE':
                self._emit(TokenKind.CLOSE_BLOCK, value, line_num)

        logger.debug("Tokenized %d tokens over %d lines", len(self.tokens), line_num)
        return tuple(self.tokens)

    def _word(self, word: str, line: int) -> None:
        if len(word) > self.limits.max_identifier_length:
            raise LexError(
                f"Identifier exceeds {self.limits.max_identifier_length} characters.", line
            )

        if word in KEYWORDS:
            self._emit(TokenKind.KEYWORD, word, line)
            if word == 'number':
                self.expect_declaration = True
            return

        if self.expect_declaration:
            self.declared.add(word)
            self.expect_declaration = False
        elif word not in self.declared:
            raise LexError(f"'{word}' is not defined", line)
        self._emit(TokenKind.IDENTIFIER, word, line)

    def _emit(self, kind: TokenKind, text: str, line: int) -> None:
        if len(self.tokens) >= self.limits.max_tokens:
            raise LexError("Too many tokens.", line)
        tok = Token(kind, text, line)
        self.tokens.append(tok)
        if self.sink is not None:
            self.sink(tok.render())


def tokenize(
    source: Union[str, TextIO],
    limits: Limits = DEFAULT_LIMITS,
    sink: Optional[Sink] = None,
) -> tuple[Token, ...]:
    """
    Convert Plus++ source into a tuple of tokens with a fresh declaration set.

    Parameters:
        source (str | TextIO): Source text or a readable text stream.
        limits (Limits): Resource bounds to enforce.
        sink (Callable[[str], None]): Receives each accepted token's rendering.

    Returns:
        tuple[Token, ...]: The token sequence.

    Raises:
        LexError: If the source is not lexically valid.
    """
    return Lexer(source, limits=limits, sink=sink).tokenize()


def format_token_table(tokens: Iterable[Token]) -> str:
    """
    Format tokens as a debug table, one row per token.
    """
    rows = ["--- Token List ---"]
    for tok in tokens:
        rows.append(f"Line {tok.line}: {tok.kind.value:<15} {tok.text}")
    rows.append("------------------")
    return "\n".join(rows)
