from __future__ import annotations

from typing import TYPE_CHECKING

from ..runtime import LoxValue
from ..tree import Assign, This, Variable

if TYPE_CHECKING:
    from ..evaluator import Interpreter

def eval_variable(n: Variable, interp: 'Interpreter') -> LoxValue:
    return interp.look_up_variable(n.name, n.node_id)

def eval_assign(n: Assign, interp: 'Interpreter') -> LoxValue:
    value = interp.evaluate(n.value)
    interp.assign_variable(n.name, n.node_id, value)
    return value

def eval_this(n: This, interp: 'Interpreter') -> LoxValue:
    return interp.look_up_variable(n.keyword, n.node_id)
