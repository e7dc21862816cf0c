from __future__ import annotations

from typing import TYPE_CHECKING, Dict

from ..runtime import LoxClass, LoxFunction
from ..tree import Class, Function

if TYPE_CHECKING:
    from ..evaluator import Interpreter

def eval_function_decl(n: Function, interp: 'Interpreter') -> None:
    fn = LoxFunction(declaration=n, closure=interp.environment)
    interp.environment.define(n.name.lexeme, fn)

def eval_class_decl(n: Class, interp: 'Interpreter') -> None:
    methods: Dict[str, LoxFunction] = {}

    for method in n.methods:
        methods[method.name.lexeme] = LoxFunction(declaration=method, closure=interp.environment)

    interp.environment.define(n.name.lexeme, LoxClass(n.name.lexeme, methods))
