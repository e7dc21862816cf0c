from __future__ import annotations

from typing import TYPE_CHECKING

from ..runtime import LoxInstance, LoxPropertyError, LoxValue
from ..tree import Get, Set

if TYPE_CHECKING:
    from ..evaluator import Interpreter

def eval_get(n: Get, interp: 'Interpreter') -> LoxValue:
    obj = interp.evaluate(n.object)

    if not isinstance(obj, LoxInstance):
        raise LoxPropertyError("Only instances have properties.", n.name)

    return obj.get(n.name)

def eval_set(n: Set, interp: 'Interpreter') -> LoxValue:
    obj = interp.evaluate(n.object)

    if not isinstance(obj, LoxInstance):
        raise LoxPropertyError("Only instances have fields.", n.name)

    value = interp.evaluate(n.value)
    obj.set(n.name, value)
    return value
