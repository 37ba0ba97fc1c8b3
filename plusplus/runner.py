"""Run one Plus++ source unit through every phase.

Lexing, validation and execution run in order; the first error from any of
them stops the run and no later phase is attempted.


File: runner.py
Version: 0.1.0
License: MIT
"""

from typing import Callable, Optional, TextIO, Union

from plusplus.config import DEFAULT_LIMITS, Limits
from plusplus.interpreter import Interpreter, VariableTable
from plusplus.lexer import Lexer, format_token_table
from plusplus.parser import Validator

SUCCESS_MESSAGE = "Syntax analysis completed successfully."


def run_source(
    source: Union[str, TextIO],
    out: Optional[TextIO] = None,
    sink: Optional[Callable[[str], None]] = None,
    limits: Limits = DEFAULT_LIMITS,
    show_tokens: bool = False,
) -> VariableTable:
    """
    Lex, validate and execute a program.

    Parameters:
        source (str | TextIO): The program text or a readable stream.
        out (TextIO): Program output, ``sys.stdout`` by default.
        sink (Callable[[str], None]): Diagnostic sink for token echo and status.
        limits (Limits): Resource bounds.
        show_tokens (bool): Send the token table to the sink after lexing.

    Returns:
        VariableTable: The variables left after execution.

    Raises:
        PlusPlusError: The first error raised by any phase.
    """
    tokens = Lexer(source, limits=limits, sink=sink).tokenize()
    if show_tokens and sink is not None:
        sink(format_token_table(tokens))

    Validator(tokens).validate()
    if sink is not None:
        sink(SUCCESS_MESSAGE)

    interpreter = Interpreter(tokens, out=out, limits=limits)
    interpreter.execute()
    return interpreter.vars
