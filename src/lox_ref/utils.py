from __future__ import annotations

import math
import os as _os
from decimal import Decimal
from typing import Optional

from .types import (
    LoxValue,
    LoxNil,
    LoxNumber,
    LoxString,
    LoxBool,
    LoxInstance,
    is_callable,
)

DEBUG_PY_TRACE_ENV = "LOX_DEBUG_PY_TRACE"


def debug_py_trace_enabled() -> bool:
    """True when runtime errors should also show the Python traceback."""
    return _os.environ.get(DEBUG_PY_TRACE_ENV, "").strip().lower() in {"1", "true", "yes", "on"}


def lox_equals(lhs: LoxValue, rhs: LoxValue) -> bool:
    match (lhs, rhs):
        case (LoxNil(), LoxNil()):
            return True
        case (LoxNumber(value=a), LoxNumber(value=b)):
            return a == b
        case (LoxString(value=a), LoxString(value=b)):
            return a == b
        case (LoxBool(value=a), LoxBool(value=b)):
            return a == b
        case (LoxInstance(), LoxInstance()):
            return lhs is rhs
        case _:
            # Callables never compare equal, not even to themselves.
            return False


def format_number(value: float) -> str:
    """Shortest round-tripping decimal, never in exponent form."""
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))

    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


def stringify(value: Optional[LoxValue]) -> str:
    if isinstance(value, LoxString):
        return value.value

    if isinstance(value, LoxNumber):
        return format_number(value.value)

    if isinstance(value, LoxBool):
        return "true" if value.value else "false"

    if isinstance(value, LoxNil) or value is None:
        return "nil"

    if is_callable(value):
        return "function"

    return str(value)
