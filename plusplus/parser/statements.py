"""Statement checks for Plus++.

These functions operate on a :class:`plusplus.parser.validator.Validator`
instance and consume the tokens of one grammar rule each. They raise
:class:`plusplus.exceptions.ParseError` on the first mismatch.


File: statements.py
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from plusplus.tokens import ASSIGNMENT_OPERATORS, TokenKind

if TYPE_CHECKING:
    from plusplus.parser.validator import Validator

# Wording used for each assignment operator in error messages.
_ASSIGNMENT_CONTEXT = {
    ":=": "assignment",
    "+=": "increment",
    "-=": "decrement",
}

_WRITE_VALUE_KINDS = (TokenKind.STRING, TokenKind.INTEGER, TokenKind.IDENTIFIER)

# Entries of Validator.pending: an open block or a repeat awaiting its body.
BLOCK = "block"
REPEAT = "repeat"


def check_statement(validator: 'Validator') -> None:
    """
    Check a single statement, dispatching on one token of lookahead.

    Syntax:
        <declaration> | <write> | <repeat> | <assignment> | <block>

    Args:
        validator: The validator instance.
    """
    tok = validator.curr_token
    if tok is None:
        return

    if tok.kind is TokenKind.KEYWORD:
        if tok.text == "number":
            validator.declaration()
            validator.statement_done()
        elif tok.text == "write":
            validator.write()
            validator.statement_done()
        elif tok.text == "repeat":
            validator.repeat()
        else:
            raise validator.error(f"Unexpected keyword '{tok.text}'", tok.line)
    elif tok.kind is TokenKind.IDENTIFIER:
        lookahead = validator.cursor.peek(1)
        if lookahead is not None and lookahead.kind is TokenKind.OPERATOR:
            if lookahead.text not in ASSIGNMENT_OPERATORS:
                raise validator.error(f"Unexpected operator '{lookahead.text}'", lookahead.line)
            validator.assignment()
            validator.statement_done()
        else:
            raise validator.error(f"Unexpected token '{tok.text}'", tok.line)
    elif tok.kind is TokenKind.OPEN_BLOCK:
        validator.open_block()
    elif tok.kind is TokenKind.CLOSE_BLOCK:
        raise validator.error("Unexpected '}'", tok.line)
    else:
        raise validator.error(f"Unexpected token '{tok.text}'", tok.line)


def check_declaration(validator: 'Validator') -> None:
    """
    Syntax:
        number <identifier> ;
    """
    validator.eat(TokenKind.KEYWORD, "number")
    validator.eat(TokenKind.IDENTIFIER)
    validator.eat(TokenKind.SEMICOLON)


def check_assignment(validator: 'Validator') -> None:
    """
    Check an assignment, increment or decrement.

    Syntax:
        <identifier> ( := | += | -= ) <int | identifier> ;
    """
    validator.eat(TokenKind.IDENTIFIER)
    op = validator.curr_token
    validator.eat(TokenKind.OPERATOR)
    validator.eat_value(_ASSIGNMENT_CONTEXT.get(op.text, "assignment"))
    validator.eat(TokenKind.SEMICOLON)


def check_write(validator: 'Validator') -> None:
    """
    Check a write statement.

    Syntax:
        write <value> ( and <value> )* ;
    """
    validator.eat(TokenKind.KEYWORD, "write")
    while True:
        tok = validator.curr_token
        if tok is None:
            raise validator.error("Unexpected end of input in write statement.")
        if tok.kind in _WRITE_VALUE_KINDS or tok.is_keyword("newline"):
            validator.cursor.advance()
        else:
            raise validator.error(
                f"Unexpected token '{tok.text}' in write statement. "
                "Expected string, identifier, or newline.",
                tok.line,
            )
        if not validator.cursor.match(TokenKind.KEYWORD, "and"):
            break
    validator.eat(TokenKind.SEMICOLON)


def check_block_open(validator: 'Validator') -> None:
    """
    Open a block; its statements are checked by the validator's main loop.

    Syntax:
        { <statement>* }
    """
    validator.eat(TokenKind.OPEN_BLOCK)
    validator.pending.append(BLOCK)


def check_block_close(validator: 'Validator') -> None:
    validator.eat(TokenKind.CLOSE_BLOCK)
    validator.pending.pop()
    validator.statement_done()


def check_repeat(validator: 'Validator') -> None:
    """
    Check a repeat header and leave its body pending.

    Syntax:
        repeat <int | identifier> times ( <block> | <statement> )
    """
    validator.eat(TokenKind.KEYWORD, "repeat")
    tok = validator.curr_token
    if tok is None or tok.kind not in (TokenKind.INTEGER, TokenKind.IDENTIFIER):
        raise validator.error("Expected int or identifier after 'repeat'.")
    validator.cursor.advance()
    validator.eat(TokenKind.KEYWORD, "times")
    validator.pending.append(REPEAT)
