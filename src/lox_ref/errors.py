"""Common base for every diagnostic the pipeline reports.

Each stage defines its own subclass next to the code that raises it
(``LexError`` in the lexer, ``ParseError`` in the parser, ...). The caller
only needs ``category``, ``message`` and ``line`` to render them uniformly.
"""

from __future__ import annotations

from typing import Optional

from .token_types import TT, Tok


class LoxError(Exception):
    category = "Error"

    def __init__(self, message: str, token: Optional[Tok] = None, line: Optional[int] = None):
        self.message = message
        self.token = token
        if line is None and token is not None:
            line = token.line
        self.line = line
        super().__init__(self.render())

    def location(self) -> str:
        if self.token is None:
            return ""
        if self.token.type == TT.EOF:
            return " at end"
        return f" at '{self.token.lexeme}'"

    def render(self) -> str:
        text = f"{self.category}{self.location()}: {self.message}"
        if self.line is None:
            return text
        return f"{text} [line {self.line}]"
