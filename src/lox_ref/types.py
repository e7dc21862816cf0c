from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple
from typing_extensions import Protocol, TypeAlias, TypeGuard

from .errors import LoxError
from .token_types import Tok
from .tree import Function

if TYPE_CHECKING:
    from .environment import Environment
    from .evaluator import Interpreter

# ---------- Value Model ----------

@dataclass
class LoxNil:
    def __repr__(self) -> str:
        return "nil"

@dataclass
class LoxNumber:
    value: float
    def __repr__(self) -> str:
        v = self.value
        return str(int(v)) if v.is_integer() else str(v)

@dataclass
class LoxString:
    value: str
    def __repr__(self) -> str:
        return f'"{self.value}"'

@dataclass
class LoxBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"


class LoxCallable(Protocol):
    """Anything the call operator accepts: natives, functions and classes."""
    def arity(self) -> int: ...
    def call(self, interpreter: 'Interpreter', arguments: List['LoxValue']) -> 'LoxValue': ...


NativeFn = Callable[['Interpreter', List['LoxValue']], 'LoxValue']

@dataclass(eq=False)
class NativeFunction:
    name: str
    fn: NativeFn
    params: int = 0

    def arity(self) -> int:
        return self.params

    def call(self, interpreter: 'Interpreter', arguments: List['LoxValue']) -> 'LoxValue':
        return self.fn(interpreter, arguments)

    def __repr__(self) -> str:
        return f"<native fn {self.name}>"

@dataclass(eq=False)
class LoxFunction:
    declaration: Function
    closure: 'Environment'

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: 'Interpreter', arguments: List['LoxValue']) -> 'LoxValue':
        from . import runtime
        return runtime.call_function(self, arguments, interpreter)

    def bind(self, instance: 'LoxInstance') -> 'LoxFunction':
        from . import runtime
        return runtime.bind_method(self, instance)

    def __repr__(self) -> str:
        return f"<fn {self.name}>"

@dataclass(eq=False)
class LoxClass:
    name: str
    methods: Dict[str, LoxFunction] = field(default_factory=dict)

    def find_method(self, name: str) -> Optional[LoxFunction]:
        return self.methods.get(name)

    def arity(self) -> int:
        initializer = self.find_method("init")
        return initializer.arity() if initializer is not None else 0

    def call(self, interpreter: 'Interpreter', arguments: List['LoxValue']) -> 'LoxValue':
        from . import runtime
        return runtime.instantiate(self, arguments, interpreter)

    def __repr__(self) -> str:
        return f"<class {self.name}>"

@dataclass(eq=False)
class LoxInstance:
    klass: LoxClass
    fields: Dict[str, 'LoxValue'] = field(default_factory=dict)

    def get(self, name: Tok) -> 'LoxValue':
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]

        method = self.klass.find_method(name.lexeme)
        if method is not None:
            return method.bind(self)

        raise LoxPropertyError(f"Undefined property '{name.lexeme}'.", name)

    def set(self, name: Tok, value: 'LoxValue') -> None:
        self.fields[name.lexeme] = value

    def __repr__(self) -> str:
        return f"{self.klass.name} instance"


LoxValue: TypeAlias = (
    LoxNil
    | LoxNumber
    | LoxString
    | LoxBool
    | NativeFunction
    | LoxFunction
    | LoxClass
    | LoxInstance
)

_CALLABLE_TYPES: Tuple[type, ...] = (
    NativeFunction,
    LoxFunction,
    LoxClass,
)

def is_callable(value: object) -> TypeGuard[LoxCallable]:
    return isinstance(value, _CALLABLE_TYPES)

class Builtins:
    stdlib_functions: Dict[str, NativeFunction] = {}

# ---------- Exceptions ----------

class LoxRuntimeError(LoxError):
    category = "Runtime error"

class LoxTypeError(LoxRuntimeError):
    pass

class LoxArityError(LoxRuntimeError):
    pass

class LoxNameError(LoxRuntimeError):
    pass

class LoxArithmeticError(LoxRuntimeError):
    pass

class LoxPropertyError(LoxRuntimeError):
    pass

class LoxReturnSignal(Exception):
    """Internal control-flow exception used to implement `return`."""
    def __init__(self, value: LoxValue):
        self.value = value
