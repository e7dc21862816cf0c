from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..runtime import LoxValue, call_value
from ..tree import Call

if TYPE_CHECKING:
    from ..evaluator import Interpreter

def eval_call(n: Call, interp: 'Interpreter') -> LoxValue:
    callee = interp.evaluate(n.callee)
    arguments: List[LoxValue] = [interp.evaluate(arg) for arg in n.arguments]

    return call_value(callee, arguments, n.paren, interp)
