from __future__ import annotations

from typing import TYPE_CHECKING

from ..tree import Var

if TYPE_CHECKING:
    from ..evaluator import Interpreter

def eval_var_decl(n: Var, interp: 'Interpreter') -> None:
    if n.initializer is None:
        interp.environment.define(n.name.lexeme)
        return

    interp.environment.define(n.name.lexeme, interp.evaluate(n.initializer))
