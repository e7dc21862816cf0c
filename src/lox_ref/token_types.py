"""
Token Types for Lox

Shared between lexer, parser and the REPL highlighter.
"""

from typing import Any
from dataclasses import dataclass
from enum import Enum, auto


class TT(Enum):
    """Token Types"""

    # Literals
    NUMBER = auto()
    STRING = auto()
    IDENT = auto()

    # Keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FOR = auto()
    FUN = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    NEG = auto()  # !

    # Comparison
    EQ = auto()
    NEQ = auto()
    LT = auto()
    LTE = auto()
    GT = auto()
    GTE = auto()

    # Assignment
    ASSIGN = auto()

    # Punctuation
    LPAR = auto()
    RPAR = auto()
    LBRACE = auto()
    RBRACE = auto()
    DOT = auto()
    COMMA = auto()
    SEMI = auto()
    QMARK = auto()
    COLON = auto()

    # Special
    EOF = auto()


@dataclass(frozen=True)
class Tok:
    """Token with its source lexeme, decoded literal and line"""

    type: TT
    lexeme: str
    literal: Any = None
    line: int = 0

    def __repr__(self):
        if self.literal is not None:
            return f"Tok({self.type.name}, {self.lexeme!r}, {self.literal!r}, line {self.line})"
        return f"Tok({self.type.name}, {self.lexeme!r}, line {self.line})"
