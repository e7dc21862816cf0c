from __future__ import annotations

from typing import Any

from typing_extensions import TypeGuard

from ..runtime import LoxNumber, LoxString, LoxTypeError
from ..token_types import Tok

def require_number(value: Any, operator: Tok) -> LoxNumber:
    if not isinstance(value, LoxNumber):
        raise LoxTypeError("Operand must be a number.", operator)
    return value

def require_numbers(lhs: Any, rhs: Any, operator: Tok) -> None:
    if not (isinstance(lhs, LoxNumber) and isinstance(rhs, LoxNumber)):
        raise LoxTypeError("Operands must be numbers.", operator)

def is_text_or_number(value: Any) -> TypeGuard[LoxNumber | LoxString]:
    return isinstance(value, (LoxNumber, LoxString))
