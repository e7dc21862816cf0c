from __future__ import annotations

from typing import TYPE_CHECKING

from ..runtime import LoxReturnSignal
from ..tree import Return

if TYPE_CHECKING:
    from ..evaluator import Interpreter

def eval_return_stmt(n: Return, interp: 'Interpreter') -> None:
    # The resolver has already rejected `return` outside a function body.
    raise LoxReturnSignal(interp.evaluate(n.value))
