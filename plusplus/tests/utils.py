"""
Utility functions shared across Plus++ tests.
"""
import io

from plusplus.config import DEFAULT_LIMITS, Limits
from plusplus.interpreter import Interpreter, VariableTable
from plusplus.lexer import tokenize
from plusplus.parser import validate


def lex_source(source: str, limits: Limits = DEFAULT_LIMITS):
    """
    Tokenize source code and return the token tuple.
    """
    return tokenize(source, limits=limits)


def kinds_and_texts(tokens):
    """
    Reduce tokens to ``(kind display name, text)`` pairs.
    """
    return [(tok.kind.value, tok.text) for tok in tokens]


def run_program(source: str, limits: Limits = DEFAULT_LIMITS) -> tuple[VariableTable, str]:
    """
    Lex, validate and execute source code.

    Returns the variable table and everything the program wrote.
    """
    tokens = tokenize(source, limits=limits)
    validate(tokens)
    out = io.StringIO()
    interpreter = Interpreter(tokens, out=out, limits=limits)
    interpreter.execute()
    return interpreter.vars, out.getvalue()
