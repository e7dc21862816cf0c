from __future__ import annotations

from typing import Dict, Optional

from .token_types import Tok
from .types import Builtins, LoxNameError, LoxValue

# Stored for `var x;` until the first assignment.
UNINITIALIZED = None


class Environment:
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Optional[LoxValue]] = {}

        if enclosing is None and Builtins.stdlib_functions:
            for name, std in Builtins.stdlib_functions.items():
                self.values[name] = std

    def define(self, name: str, value: Optional[LoxValue] = UNINITIALIZED) -> None:
        self.values[name] = value

    def get(self, name: Tok) -> LoxValue:
        if name.lexeme in self.values:
            return _initialized(self.values[name.lexeme], name)

        if self.enclosing is not None:
            return self.enclosing.get(name)

        raise LoxNameError(f"Undefined variable '{name.lexeme}'.", name)

    def assign(self, name: Tok, value: LoxValue) -> None:
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return

        if self.enclosing is not None:
            self.enclosing.assign(name, value)
            return

        raise LoxNameError(f"Undefined variable '{name.lexeme}'.", name)

    def ancestor(self, distance: int) -> 'Environment':
        env = self
        for _ in range(distance):
            if env.enclosing is None:
                raise RuntimeError(f"Environment chain shorter than resolved depth {distance}")
            env = env.enclosing
        return env

    def get_at(self, distance: int, name: Tok) -> LoxValue:
        values = self.ancestor(distance).values

        if name.lexeme not in values:
            raise LoxNameError(f"Undefined variable '{name.lexeme}'.", name)

        return _initialized(values[name.lexeme], name)

    def assign_at(self, distance: int, name: Tok, value: LoxValue) -> None:
        self.ancestor(distance).values[name.lexeme] = value


def _initialized(value: Optional[LoxValue], name: Tok) -> LoxValue:
    if value is UNINITIALIZED:
        raise LoxNameError(f"Uninitialized variable '{name.lexeme}'.", name)
    return value
