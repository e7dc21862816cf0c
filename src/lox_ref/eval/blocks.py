from __future__ import annotations

from typing import TYPE_CHECKING

from ..runtime import Environment
from ..tree import Block, Expression, Print
from ..utils import stringify

if TYPE_CHECKING:
    from ..evaluator import Interpreter

def eval_block(n: Block, interp: 'Interpreter') -> None:
    interp.execute_block(n.statements, Environment(interp.environment))

def eval_expression_stmt(n: Expression, interp: 'Interpreter') -> None:
    interp.evaluate(n.expression)

def eval_print(n: Print, interp: 'Interpreter') -> None:
    value = interp.evaluate(n.expression)
    print(stringify(value), file=interp.out)
