from __future__ import annotations

import sys
from typing import Callable, Dict, List, Optional, TextIO, Type

from .runtime import (
    Environment,
    LoxValue,
    init_stdlib,
)
from .token_types import Tok
from .tree import (
    Assign,
    Binary,
    Block,
    Boolean,
    Call,
    Class,
    Conditional,
    Expr,
    Expression,
    Function,
    Get,
    Grouping,
    If,
    LogicAnd,
    LogicOr,
    Nil,
    Number,
    Print,
    Return,
    Set,
    Stmt,
    String,
    This,
    Unary,
    Var,
    Variable,
    While,
)

from .eval.bind import eval_assign, eval_this, eval_variable
from .eval.blocks import eval_block, eval_expression_stmt, eval_print
from .eval.chains import eval_call
from .eval.control import eval_return_stmt
from .eval.expr import (
    eval_binary,
    eval_boolean,
    eval_conditional,
    eval_grouping,
    eval_logic_and,
    eval_logic_or,
    eval_nil,
    eval_number,
    eval_string,
    eval_unary,
)
from .eval.fn import eval_class_decl, eval_function_decl
from .eval.let import eval_var_decl
from .eval.loops import eval_if_stmt, eval_while_stmt
from .eval.objects import eval_get, eval_set


class Interpreter:
    """Walks resolved statements against a chain of environments.

    ``globals`` lives as long as the interpreter and is seeded with the
    registered natives. ``environment`` is the scope currently executing;
    blocks and calls swap it through ``execute_block`` which always puts the
    previous one back. ``locals`` maps resolved node ids to hop counts and
    grows as new units are resolved against this interpreter.
    """

    def __init__(self, out: Optional[TextIO] = None):
        init_stdlib()
        self._out = out
        self.globals = Environment()
        self.environment = self.globals
        self.locals: Dict[int, int] = {}

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    # ---------------- Public API ----------------

    def resolve(self, depths: Dict[int, int]) -> None:
        self.locals.update(depths)

    def interpret(self, statements: List[Stmt]) -> None:
        for stmt in statements:
            self.execute(stmt)

    def execute(self, stmt: Stmt) -> None:
        handler = _STMT_DISPATCH.get(type(stmt))
        if handler is None:
            raise TypeError(f"No evaluator for statement {type(stmt).__name__}")
        handler(stmt, self)

    def evaluate(self, expr: Expr) -> LoxValue:
        handler = _EXPR_DISPATCH.get(type(expr))
        if handler is None:
            raise TypeError(f"No evaluator for expression {type(expr).__name__}")
        return handler(expr, self)

    def execute_block(self, statements: List[Stmt], environment: Environment) -> None:
        previous = self.environment
        self.environment = environment

        try:
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    # ---------------- Variables ----------------

    def look_up_variable(self, name: Tok, node_id: int) -> LoxValue:
        distance = self.locals.get(node_id)

        if distance is not None:
            return self.environment.get_at(distance, name)

        return self.globals.get(name)

    def assign_variable(self, name: Tok, node_id: int, value: LoxValue) -> None:
        distance = self.locals.get(node_id)

        if distance is not None:
            self.environment.assign_at(distance, name, value)
        else:
            self.globals.assign(name, value)


_EXPR_DISPATCH: Dict[Type[Expr], Callable[..., LoxValue]] = {
    Binary: eval_binary,
    Grouping: eval_grouping,
    Unary: eval_unary,
    Conditional: eval_conditional,
    LogicOr: eval_logic_or,
    LogicAnd: eval_logic_and,
    Call: eval_call,
    Get: eval_get,
    Set: eval_set,
    Variable: eval_variable,
    Assign: eval_assign,
    This: eval_this,
    Number: eval_number,
    String: eval_string,
    Boolean: eval_boolean,
    Nil: eval_nil,
}

_STMT_DISPATCH: Dict[Type[Stmt], Callable[..., None]] = {
    Block: eval_block,
    Expression: eval_expression_stmt,
    Print: eval_print,
    Var: eval_var_decl,
    If: eval_if_stmt,
    While: eval_while_stmt,
    Function: eval_function_decl,
    Return: eval_return_stmt,
    Class: eval_class_decl,
}
