"""Errors.

Every failure in Plus++ is fatal to the run. Each phase raises its own error
type and nothing is caught until the top-level boundary, which renders the
error as a single ``[ERROR] (line N): message`` diagnostic.


File: exceptions.py
Version: 0.1.0
License: MIT
"""


class PlusPlusError(Exception):
    """
    Base error carrying a message and the best known source line.
    """
    def __init__(self, message, line=None):
        self.message = message
        self.line = line
        super().__init__(message)

    def diagnostic(self) -> str:
        """
        Render the error as a diagnostic line.
        """
        where = self.line if self.line is not None else "unknown"
        return f"[ERROR] (line {where}): {self.message}"


class LexError(PlusPlusError):
    """
    Error for malformed input found while tokenizing.
    """


class ParseError(PlusPlusError):
    """
    Error for a token sequence that does not match the grammar.
    """


class ExecutionError(PlusPlusError):
    """
    Error for a valid program that breaks a rule while running.
    """


class SourceError(PlusPlusError):
    """
    Error for a source unit that could not be obtained.
    """


class ConfigError(PlusPlusError):
    """
    Error for invalid interpreter limits.
    """


class UndefinedVariableException(ExecutionError):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, line=None):
        self.varname = varname
        super().__init__(f"Variable '{varname}' is not declared.", line)


class RedeclarationException(ExecutionError):
    """
    Error for declaring a variable that already exists.
    """
    def __init__(self, varname, line=None):
        self.varname = varname
        super().__init__(f"Variable '{varname}' already declared.", line)


class VariableLimitException(ExecutionError):
    """
    Error for exceeding the variable table capacity.
    """
    def __init__(self, limit, line=None):
        self.limit = limit
        super().__init__(f"Too many variables (limit {limit}).", line)


class UnknownOpException(ExecutionError):
    """
    Error for unknown operations.
    """
    def __init__(self, op, line=None):
        self.op = op
        super().__init__(f"Unknown operator '{op}'", line)
