"""Built-in native functions registered via lox_ref.runtime."""

from __future__ import annotations

import time
from typing import List

from .runtime import register_stdlib, LoxNumber, LoxValue

@register_stdlib("clock", arity=0)
def std_clock(_interpreter, _args: List[LoxValue]) -> LoxNumber:
    return LoxNumber(time.time())
