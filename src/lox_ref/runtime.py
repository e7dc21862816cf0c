from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, List, Optional

from .environment import Environment
from .types import (
    LoxNil, LoxNumber, LoxString, LoxBool,
    NativeFunction, NativeFn, LoxFunction, LoxClass, LoxInstance,
    LoxValue, LoxCallable, Builtins, is_callable,
    LoxRuntimeError, LoxTypeError, LoxArityError, LoxNameError,
    LoxArithmeticError, LoxPropertyError, LoxReturnSignal,
)

if TYPE_CHECKING:
    from .evaluator import Interpreter
    from .token_types import Tok

_STDLIB_INITIALIZED = False

def init_stdlib() -> None:
    """Load stdlib modules (idempotent) so register_stdlib hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("lox_ref.stdlib")
    _STDLIB_INITIALIZED = True

def register_stdlib(name: str, *, arity: int = 0):
    def dec(fn: NativeFn):
        Builtins.stdlib_functions[name] = NativeFunction(name=name, fn=fn, params=arity)
        return fn

    return dec

def call_value(callee: LoxValue, arguments: List[LoxValue], paren: 'Tok', interpreter: 'Interpreter') -> LoxValue:
    """Checks callability and arity, then dispatches to the callee's call()."""
    if not is_callable(callee):
        raise LoxTypeError("Can only call functions and classes.", paren)

    expected = callee.arity()
    if len(arguments) != expected:
        raise LoxArityError(f"Expected {expected} arguments but got {len(arguments)}.", paren)

    return callee.call(interpreter, arguments)

def call_function(fn: LoxFunction, arguments: List[LoxValue], interpreter: 'Interpreter') -> LoxValue:
    callee_env = Environment(fn.closure)

    for param, value in zip(fn.declaration.params, arguments):
        callee_env.define(param.lexeme, value)

    try:
        interpreter.execute_block(fn.declaration.body, callee_env)
    except LoxReturnSignal as signal:
        return signal.value

    return LoxNil()

def bind_method(fn: LoxFunction, instance: LoxInstance) -> LoxFunction:
    env = Environment(fn.closure)
    env.define("this", instance)
    return LoxFunction(fn.declaration, env)

def instantiate(klass: LoxClass, arguments: List[LoxValue], interpreter: 'Interpreter') -> LoxInstance:
    instance = LoxInstance(klass)
    initializer: Optional[LoxFunction] = klass.find_method("init")

    if initializer is not None:
        bind_method(initializer, instance).call(interpreter, arguments)

    return instance

__all__ = [
    "LoxNil", "LoxNumber", "LoxString", "LoxBool",
    "NativeFunction", "LoxFunction", "LoxClass", "LoxInstance",
    "LoxValue", "LoxCallable", "Builtins",
    "LoxRuntimeError", "LoxTypeError", "LoxArityError", "LoxNameError",
    "LoxArithmeticError", "LoxPropertyError", "LoxReturnSignal",
    "Environment",
    "init_stdlib", "register_stdlib",
    "call_value", "call_function", "bind_method", "instantiate",
]
