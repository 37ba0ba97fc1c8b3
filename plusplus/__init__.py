"""Plus++ language front-end and interpreter.


File: __init__.py
Version: 0.1.0
License: MIT
"""

from plusplus.config import Limits
from plusplus.exceptions import ExecutionError, LexError, ParseError, PlusPlusError
from plusplus.interpreter import Interpreter, VariableTable
from plusplus.lexer import Lexer, tokenize
from plusplus.parser import Validator, validate
from plusplus.runner import run_source

__version__ = "0.1.0"

__all__ = [
    "ExecutionError",
    "Interpreter",
    "LexError",
    "Lexer",
    "Limits",
    "ParseError",
    "PlusPlusError",
    "Validator",
    "VariableTable",
    "run_source",
    "tokenize",
    "validate",
]
