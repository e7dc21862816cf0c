from __future__ import annotations

from typing import TYPE_CHECKING

from ..runtime import LoxArithmeticError, LoxBool, LoxNil, LoxNumber, LoxString, LoxTypeError, LoxValue
from ..token_types import TT, Tok
from ..tree import Binary, Boolean, Conditional, Grouping, LogicAnd, LogicOr, Nil, Number, String, Unary
from ..utils import lox_equals, stringify
from .common import is_text_or_number, require_number, require_numbers
from .helpers import is_truthy

if TYPE_CHECKING:
    from ..evaluator import Interpreter

def eval_binary(n: Binary, interp: 'Interpreter') -> LoxValue:
    lhs = interp.evaluate(n.left)
    rhs = interp.evaluate(n.right)
    return apply_binary_operator(n.operator, lhs, rhs)

def apply_binary_operator(op: Tok, lhs: LoxValue, rhs: LoxValue) -> LoxValue:
    match op.type:
        case TT.PLUS:
            return _add(op, lhs, rhs)
        case TT.MINUS:
            require_numbers(lhs, rhs, op)
            return LoxNumber(lhs.value - rhs.value)
        case TT.STAR:
            require_numbers(lhs, rhs, op)
            if rhs.value == 0:
                raise LoxArithmeticError("Multiplication by zero.", op)
            return LoxNumber(lhs.value * rhs.value)
        case TT.SLASH:
            require_numbers(lhs, rhs, op)
            if rhs.value == 0:
                raise LoxArithmeticError("Division by zero.", op)
            return LoxNumber(lhs.value / rhs.value)
        case TT.GT | TT.GTE | TT.LT | TT.LTE:
            return LoxBool(_compare_values(op, lhs, rhs))
        case TT.EQ:
            return LoxBool(lox_equals(lhs, rhs))
        case TT.NEQ:
            return LoxBool(not lox_equals(lhs, rhs))

    raise LoxTypeError(f"Unknown operator {op.lexeme}", op)

def _add(op: Tok, lhs: LoxValue, rhs: LoxValue) -> LoxValue:
    if isinstance(lhs, LoxNumber) and isinstance(rhs, LoxNumber):
        return LoxNumber(lhs.value + rhs.value)

    # Strings concatenate; a number on either side is rendered first.
    if is_text_or_number(lhs) and is_text_or_number(rhs):
        return LoxString(stringify(lhs) + stringify(rhs))

    raise LoxTypeError("Operands must be numbers or strings.", op)

def _compare_values(op: Tok, lhs: LoxValue, rhs: LoxValue) -> bool:
    match (lhs, rhs):
        case (LoxNumber(value=a), LoxNumber(value=b)) | (LoxString(value=a), LoxString(value=b)):
            pass
        case _:
            raise LoxTypeError("Operands must be two numbers or two strings.", op)

    match op.type:
        case TT.GT:
            return a > b
        case TT.GTE:
            return a >= b
        case TT.LT:
            return a < b
        case _:
            return a <= b

def eval_unary(n: Unary, interp: 'Interpreter') -> LoxValue:
    rhs = interp.evaluate(n.right)

    match n.operator.type:
        case TT.NEG:
            return LoxBool(not is_truthy(rhs))
        case TT.MINUS:
            return LoxNumber(-require_number(rhs, n.operator).value)

    raise LoxTypeError(f"Unknown unary operator {n.operator.lexeme}", n.operator)

def eval_logic_or(n: LogicOr, interp: 'Interpreter') -> LoxValue:
    lhs = interp.evaluate(n.left)
    if is_truthy(lhs):
        return lhs
    return interp.evaluate(n.right)

def eval_logic_and(n: LogicAnd, interp: 'Interpreter') -> LoxValue:
    lhs = interp.evaluate(n.left)
    if not is_truthy(lhs):
        return lhs
    return interp.evaluate(n.right)

def eval_conditional(n: Conditional, interp: 'Interpreter') -> LoxValue:
    if is_truthy(interp.evaluate(n.condition)):
        return interp.evaluate(n.then_branch)

    return interp.evaluate(n.else_branch)

def eval_grouping(n: Grouping, interp: 'Interpreter') -> LoxValue:
    return interp.evaluate(n.expression)

def eval_number(n: Number, _interp: 'Interpreter') -> LoxNumber:
    return LoxNumber(n.value)

def eval_string(n: String, _interp: 'Interpreter') -> LoxString:
    return LoxString(n.value)

def eval_boolean(n: Boolean, _interp: 'Interpreter') -> LoxBool:
    return LoxBool(n.value)

def eval_nil(_n: Nil, _interp: 'Interpreter') -> LoxNil:
    return LoxNil()
