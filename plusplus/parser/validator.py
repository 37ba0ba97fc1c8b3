"""
Syntax validator for Plus++.

This module defines the :class:`Validator` class, which coordinates a
single left-to-right check of the token sequence against the grammar.
Open blocks and repeat bodies still to come are kept on an explicit
stack, so nesting depth does not consume Python stack frames. No tree
is built; the validator only confirms the program is well formed. The
individual statement rules live in :mod:`plusplus.parser.statements`.

Grammar:
    program     := statement*
    statement   := declaration | write | repeat | assignment | block
    declaration := "number" Identifier ";"
    assignment  := Identifier ( ":=" | "+=" | "-=" ) (IntConstant | Identifier) ";"
    write       := "write" writeval ( "and" writeval )* ";"
    writeval    := StringConstant | "newline" | IntConstant | Identifier
    repeat      := "repeat" (IntConstant | Identifier) "times" (block | statement)
    block       := "{" statement* "}"


File: validator.py
Version: 0.1.0
License: MIT
"""

import logging
from typing import Optional, Sequence

from plusplus.cursor import TokenCursor
from plusplus.exceptions import ParseError
from plusplus.tokens import KIND_DESCRIPTIONS, Token, TokenKind

from . import statements as _stmt
from .statements import BLOCK, REPEAT

logger = logging.getLogger(__name__)


class Validator:
    """Plus++ grammar checker."""

    def __init__(self, tokens: Sequence[Token]):
        """
        Initialize the validator with a token sequence.

        Parameters:
            tokens (Sequence[Token]): Tokens produced by the lexer.
        """
        self.cursor = TokenCursor(tokens)
        self.pending: list[str] = []

    @property
    def curr_token(self) -> Optional[Token]:
        return self.cursor.peek()

    def error(self, message: str, line: Optional[int] = None) -> ParseError:
        """
        Build a ParseError, attributing it to the best line when none is given.
        """
        return ParseError(message, line if line is not None else self.cursor.error_line())

    def eat(self, kind: TokenKind, text: Optional[str] = None) -> Token:
        """
        Consume the current token if it matches the expected kind and text.

        Parameters:
            kind (TokenKind): The expected token kind.
            text (str): The expected token text, if any.

        Returns:
            Token: The consumed token.

        Raises:
            ParseError: If the token does not match.
        """
        tok = self.curr_token
        if not self.cursor.match(kind, text):
            expected = text if text is not None else KIND_DESCRIPTIONS[kind]
            found = tok.text if tok is not None else "EOF"
            raise self.error(f"Expected token '{expected}' but got '{found}'.")
        return tok

    def eat_value(self, context: str) -> Token:
        """
        Consume an integer constant or identifier operand.
        """
        tok = self.curr_token
        if tok is None or tok.kind not in (TokenKind.INTEGER, TokenKind.IDENTIFIER):
            raise self.error(f"Expected int or identifier in {context}.")
        return self.cursor.advance()

    # Statement wrappers
    def statement(self) -> None:
        """
        Check the statement starting at the cursor.
        """
        _stmt.check_statement(self)

    def declaration(self) -> None:
        _stmt.check_declaration(self)

    def assignment(self) -> None:
        _stmt.check_assignment(self)

    def write(self) -> None:
        _stmt.check_write(self)

    def repeat(self) -> None:
        _stmt.check_repeat(self)

    def open_block(self) -> None:
        _stmt.check_block_open(self)

    def close_block(self) -> None:
        _stmt.check_block_close(self)

    def statement_done(self) -> None:
        """
        A statement just ended; every repeat waiting for its body ends with it.
        """
        while self.pending and self.pending[-1] == REPEAT:
            self.pending.pop()

    def validate(self) -> None:
        """
        Check the entire token sequence.

        Blocks and repeat bodies are tracked on ``pending`` rather than by
        recursion, so nesting depth is bounded only by the token limit.

        Raises:
            ParseError: On the first grammar violation.
        """
        count = 0
        while True:
            tok = self.curr_token
            if self.pending and self.pending[-1] == BLOCK:
                if tok is None:
                    raise self.error("Unexpected end of input in block.")
                if tok.kind is TokenKind.CLOSE_BLOCK:
                    self.close_block()
                    continue
            elif self.pending and tok is None:
                raise self.error("Unexpected end of input after 'repeat times'.")
            if tok is None:
                break
            self.statement()
            count += 1
        logger.debug("Validated %d statements", count)


def validate(tokens: Sequence[Token]) -> None:
    """
    Check that ``tokens`` form a valid Plus++ program.

    Raises:
        ParseError: If they do not.
    """
    Validator(tokens).validate()
