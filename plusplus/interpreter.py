"""Interpreter.

This is a direct token interpreter: it walks the same token sequence the
validator checked, a second time, and performs each statement's effects as
it reads it. No syntax tree is built.

1. Execution Model
The interpreter owns a private :class:`TokenCursor`. Each statement is
dispatched on the kind of its first token (and the operator after an
identifier), the same decisions the validator makes.

2. Variables
A :class:`VariableTable` maps declared names to signed 64-bit integers in
declaration order. Declaring a name twice is an error, as is exceeding the
configured capacity or touching a name that was never declared.

3. Loops
Open blocks and running loops are kept on an explicit frame stack rather
than on the Python call stack, so nesting depth is limited only by the
token limit.

``repeat`` bookmarks the cursor position of its body and rewinds to it on
every iteration, so the body's tokens are interpreted again each time. A
runtime error inside the body (including a declaration that already ran on a
previous iteration) surfaces on the iteration where it first occurs. When
the count comes from a variable, the variable's current value is re-read
after each iteration, so the body may change it; once the loop ends the
variable is set to 0.

4. Error Handling
Every failure is raised as an :class:`ExecutionError` subclass carrying the
line number. Nothing is caught here; output already written stays written.


File: interpreter.py
Version: 0.1.0
License: MIT
"""

import logging
import sys
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, TextIO, Union

from plusplus.config import DEFAULT_LIMITS, Limits
from plusplus.cursor import TokenCursor
from plusplus.exceptions import (
    ExecutionError,
    RedeclarationException,
    UndefinedVariableException,
    UnknownOpException,
    VariableLimitException,
)
from plusplus.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap_int64(value: int) -> int:
    """Wrap an integer into the signed 64-bit range."""
    return ((value - INT64_MIN) & 0xFFFFFFFFFFFFFFFF) + INT64_MIN


def parse_int64(text: str) -> int:
    """Parse an integer constant, saturating at the signed 64-bit bounds."""
    return max(INT64_MIN, min(INT64_MAX, int(text)))


class VariableTable:
    """Insertion-ordered table of declared variables."""

    def __init__(self, capacity: int = DEFAULT_LIMITS.max_variables):
        self.capacity = capacity
        self._values: dict[str, int] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def items(self):
        return self._values.items()

    def declare(self, name: str, line: Optional[int] = None) -> None:
        """
        Declare ``name`` with the value 0.

        Raises:
            RedeclarationException: If the name is already declared.
            VariableLimitException: If the table is full.
        """
        if name in self._values:
            raise RedeclarationException(name, line)
        if len(self._values) >= self.capacity:
            raise VariableLimitException(self.capacity, line)
        self._values[name] = 0

    def get(self, name: str, line: Optional[int] = None) -> int:
        if name not in self._values:
            raise UndefinedVariableException(name, line)
        return self._values[name]

    def set(self, name: str, value: int, line: Optional[int] = None) -> None:
        if name not in self._values:
            raise UndefinedVariableException(name, line)
        self._values[name] = wrap_int64(value)


@dataclass
class LoopFrame:
    """A running ``repeat``: where its body starts and how often it still runs."""

    count_tok: Token
    bookmark: int
    count: int
    iterations: int = 0

    @property
    def counter(self) -> Optional[str]:
        """Name of the variable the count was read from, if any."""
        return self.count_tok.text if self.count_tok.kind is TokenKind.IDENTIFIER else None


# Frame marking an open block.
BLOCK = "block"


class Interpreter:
    """Direct token interpreter for Plus++."""

    def __init__(
        self,
        tokens: Sequence[Token],
        variables: Optional[VariableTable] = None,
        out: Optional[TextIO] = None,
        limits: Limits = DEFAULT_LIMITS,
    ):
        """
        Initialize the interpreter.

        ``limits.max_variables`` sizes a fresh variable table; a table passed
        in as ``variables`` keeps its own capacity.
        """
        self.cursor = TokenCursor(tokens)
        self.limits = limits
        self.vars = variables if variables is not None else VariableTable(limits.max_variables)
        self.out = out if out is not None else sys.stdout
        self.frames: list[Union[str, LoopFrame]] = []

    def execute(self) -> None:
        """
        Execute every statement from the start of the token sequence.

        Raises:
            ExecutionError: On the first runtime failure.
        """
        self.cursor.position = 0
        self.frames = []
        while True:
            tok = self.cursor.peek()
            top = self.frames[-1] if self.frames else None
            if top == BLOCK:
                if tok is None or tok.kind is TokenKind.CLOSE_BLOCK:
                    self.close_block()
                    continue
            elif top is not None and tok is None:
                raise ExecutionError("Unexpected end of input after 'repeat times'.", self.cursor.error_line())
            if tok is None:
                break
            self.execute_statement()
        logger.debug("Execution finished with %d variables", len(self.vars))

    def value_of(self, tok: Optional[Token]) -> int:
        """
        Return the value of an integer constant or a declared variable.
        """
        if tok is None:
            raise ExecutionError("Expected a value but reached end of input.", self.cursor.error_line())
        if tok.kind is TokenKind.INTEGER:
            return parse_int64(tok.text)
        if tok.kind is TokenKind.IDENTIFIER:
            return self.vars.get(tok.text, tok.line)
        raise ExecutionError(f"Invalid value '{tok.text}'.", tok.line)

    def expect(self, kind: TokenKind, text: Optional[str], message: str) -> None:
        if not self.cursor.match(kind, text):
            raise ExecutionError(message, self.cursor.error_line())

    def execute_statement(self) -> None:
        """
        Start the statement at the cursor.

        Simple statements run to completion here. A block or a repeat only
        pushes a frame; its body is run by the loop in :meth:`execute`.
        """
        tok = self.cursor.peek()
        if tok is None:
            return

        if tok.kind is TokenKind.KEYWORD:
            if tok.text == 'number':
                self.execute_declaration()
                self.end_statement()
            elif tok.text == 'write':
                self.execute_write()
                self.end_statement()
            elif tok.text == 'repeat':
                self.execute_repeat()
            else:
                raise ExecutionError(f"Unknown keyword '{tok.text}'", tok.line)
        elif tok.kind is TokenKind.IDENTIFIER:
            self.execute_assignment()
            self.end_statement()
        elif tok.kind is TokenKind.OPEN_BLOCK:
            self.open_block()
        else:
            raise ExecutionError(f"Unexpected token '{tok.text}'", tok.line)

    def end_statement(self) -> None:
        """
        A statement just finished, so the loops whose body it was finish an iteration.

        The innermost loop that still has iterations left rewinds the cursor
        to its body; loops that are done are popped and finished.
        """
        while self.frames and isinstance(self.frames[-1], LoopFrame):
            loop = self.frames[-1]
            loop.iterations += 1
            if loop.counter is not None:
                loop.count = self.vars.get(loop.counter, loop.count_tok.line) - 1
                self.vars.set(loop.counter, loop.count, loop.count_tok.line)
            else:
                loop.count -= 1
            if loop.count >= 1:
                self.cursor.position = loop.bookmark
                return
            self.frames.pop()
            self.finish_repeat(loop)

    def execute_declaration(self) -> None:
        self.cursor.advance()
        ident = self.cursor.advance()
        if ident is None or ident.kind is not TokenKind.IDENTIFIER:
            raise ExecutionError("Expected identifier after 'number'", self.cursor.error_line())
        self.vars.declare(ident.text, ident.line)
        logger.debug("Declared '%s' on line %d", ident.text, ident.line)
        self.expect(TokenKind.SEMICOLON, None, "Expected ';' after declaration")

    def execute_assignment(self) -> None:
        target = self.cursor.advance()
        op = self.cursor.advance()
        rhs = self.cursor.advance()

        value = self.value_of(rhs)
        current = self.vars.get(target.text, target.line)

        op_text = op.text if op is not None else None
        match op_text:
            case ':=':
                result = value
            case '+=':
                result = current + value
            case '-=':
                result = current - value
            case _:
                raise UnknownOpException(op_text, target.line)
        self.vars.set(target.text, result, target.line)

        self.expect(TokenKind.SEMICOLON, None, "Expected ';' after assignment.")

    def execute_write(self) -> None:
        self.cursor.advance()
        while True:
            tok = self.cursor.peek()
            if tok is None:
                break
            if tok.kind is TokenKind.STRING:
                self.out.write(tok.text)
            elif tok.is_keyword('newline'):
                self.out.write('\n')
            elif tok.kind in (TokenKind.INTEGER, TokenKind.IDENTIFIER):
                self.out.write(str(self.value_of(tok)))
            else:
                break
            self.cursor.advance()
            if not self.cursor.match(TokenKind.KEYWORD, 'and'):
                break
        self.out.flush()
        self.expect(TokenKind.SEMICOLON, None, "Expected ';' at end of write statement.")

    def open_block(self) -> None:
        self.expect(TokenKind.OPEN_BLOCK, None, "Expected '{'")
        self.frames.append(BLOCK)

    def close_block(self) -> None:
        self.expect(TokenKind.CLOSE_BLOCK, None, "Expected '}' to close block.")
        self.frames.pop()
        self.end_statement()

    def execute_repeat(self) -> None:
        """
        Read ``repeat <count> times`` and bookmark the body that follows.

        A count below 1 skips the body at once. Otherwise a :class:`LoopFrame`
        is pushed and :meth:`end_statement` rewinds to the bookmark after each
        pass through the body.
        """
        self.cursor.advance()
        count_tok = self.cursor.advance()
        if count_tok is None or count_tok.kind not in (TokenKind.INTEGER, TokenKind.IDENTIFIER):
            raise ExecutionError("Expected int or identifier after 'repeat'.", self.cursor.error_line())
        count = self.value_of(count_tok)
        self.expect(TokenKind.KEYWORD, 'times', "Expected 'times' after repeat.")

        loop = LoopFrame(count_tok, self.cursor.position, count)
        if count >= 1:
            self.frames.append(loop)
            return
        self.skip_statement()
        self.finish_repeat(loop)
        self.end_statement()

    def finish_repeat(self, loop: LoopFrame) -> None:
        if loop.counter is not None:
            self.vars.set(loop.counter, 0, loop.count_tok.line)
        logger.debug("Repeat on line %d ran %d iterations", loop.count_tok.line, loop.iterations)

    def skip_statement(self) -> None:
        """
        Move the cursor past the statement at the cursor without executing it.

        The statement ends at the first ``;`` outside any block, or at the
        ``}`` that closes the block it opened.
        """
        tok = self.cursor.advance()
        if tok is None:
            raise ExecutionError("Unexpected end of input after 'repeat times'.", self.cursor.error_line())
        depth = 0
        while True:
            if tok.kind is TokenKind.OPEN_BLOCK:
                depth += 1
            elif tok.kind is TokenKind.CLOSE_BLOCK:
                depth -= 1
                if depth <= 0:
                    return
            elif tok.kind is TokenKind.SEMICOLON and depth == 0:
                return
            tok = self.cursor.advance()
            if tok is None:
                raise ExecutionError("Expected ';' at end of statement.", self.cursor.error_line())


def execute(
    tokens: Sequence[Token],
    out: Optional[TextIO] = None,
    limits: Limits = DEFAULT_LIMITS,
) -> VariableTable:
    """
    Execute ``tokens`` and return the final variable table.
    """
    interpreter = Interpreter(tokens, out=out, limits=limits)
    interpreter.execute()
    return interpreter.vars
