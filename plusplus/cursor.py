"""Token cursor.

Both the validator and the interpreter read the token sequence through a
:class:`TokenCursor`. Each phase creates its own cursor, so the only state
shared between them is the immutable token tuple. The position is a plain
integer, which is what lets the interpreter bookmark a loop body and jump
back to it.


File: cursor.py
Version: 0.1.0
License: MIT
"""

from typing import Optional, Sequence

from plusplus.tokens import Token, TokenKind


class TokenCursor:
    """Read position into a token sequence."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tuple(tokens)
        self.position = 0
        self.last_token: Optional[Token] = None

    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def peek(self, offset: int = 0) -> Optional[Token]:
        """
        Return the token ``offset`` places ahead without consuming it,
        or ``None`` past the end of input.
        """
        index = self.position + offset
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return None

    def advance(self) -> Optional[Token]:
        """
        Consume and return the current token, or ``None`` at end of input.
        """
        tok = self.peek()
        if tok is not None:
            self.last_token = tok
            self.position += 1
        return tok

    def match(self, kind: TokenKind, text: Optional[str] = None) -> bool:
        """
        Consume the current token if it has the given kind (and text, when given).

        Returns:
            bool: ``True`` if a token was consumed.
        """
        tok = self.peek()
        if tok is not None and tok.kind is kind and (text is None or tok.text == text):
            self.advance()
            return True
        return False

    def error_line(self) -> Optional[int]:
        """
        Best line to blame for a problem at the current position.

        A missing token belongs to the end of the previous line, so when the
        current token starts a later line than the last consumed one the
        earlier line is reported.
        """
        tok = self.peek()
        last_line = self.last_token.line if self.last_token is not None else None
        if tok is None:
            return last_line
        if last_line is not None and last_line < tok.line:
            return last_line
        return tok.line
