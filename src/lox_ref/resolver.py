"""Static scope resolution.

One pass over the parsed statements that computes, for every variable read,
assignment and ``this`` node, how many environments the evaluator must hop
outward to reach the binding. The pass mirrors exactly where the evaluator
creates environments: blocks, function calls (parameters and body share one
scope) and bound methods (one scope holding ``this`` around each method).

Names that resolve to no scope get no entry and are looked up in the globals
at runtime. The first problem found raises ResolveError and aborts the pass;
a partial depth map is never returned.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional

from .errors import LoxError
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


class ResolveError(LoxError):
    category = "Resolution error"


class VarState(Enum):
    DECLARED = auto()
    DEFINED = auto()
    READ = auto()


class FunctionKind(Enum):
    NONE = auto()
    FUNCTION = auto()
    METHOD = auto()


class ClassKind(Enum):
    NONE = auto()
    CLASS = auto()


@dataclass
class Binding:
    token: Tok
    state: VarState


Scope = Dict[str, Binding]


class Resolver:
    def __init__(self) -> None:
        # The implicit top-level scope; it is the only one still alive when
        # the unused-variable check runs.
        self.scopes: List[Scope] = [{}]
        self.depths: Dict[int, int] = {}
        self.current_function = FunctionKind.NONE
        self.current_class = ClassKind.NONE

    def resolve(self, statements: List[Stmt], expression: Optional[Expr] = None) -> Dict[int, int]:
        """Resolve a whole program (plus an optional trailing REPL expression)."""
        self.resolve_stmts(statements)

        if expression is not None:
            self.resolve_expr(expression)

        self.check_unused()
        return self.depths

    # ---------------- Scopes ----------------

    def begin_scope(self) -> None:
        self.scopes.append({})

    def end_scope(self) -> None:
        self.scopes.pop()

    def declare(self, name: Tok) -> None:
        scope = self.scopes[-1]

        if name.lexeme in scope:
            raise ResolveError(f"Variable '{name.lexeme}' already declared in this scope.", name)

        scope[name.lexeme] = Binding(name, VarState.DECLARED)

    def define(self, name: Tok) -> None:
        binding = self.scopes[-1].get(name.lexeme)

        if binding is None:
            self.scopes[-1][name.lexeme] = Binding(name, VarState.DEFINED)
        elif binding.state is VarState.DECLARED:
            binding.state = VarState.DEFINED

    def resolve_local(self, node_id: int, name: Tok, read: bool) -> None:
        for hops, scope in enumerate(reversed(self.scopes)):
            binding = scope.get(name.lexeme)
            if binding is None:
                continue

            self.depths[node_id] = hops
            if read:
                binding.state = VarState.READ
            return

    def check_unused(self) -> None:
        for scope in self.scopes:
            for name, binding in scope.items():
                if binding.state is not VarState.READ:
                    raise ResolveError(f"Variable '{name}' declared and not used.", binding.token)

    # ---------------- Statements ----------------

    def resolve_stmts(self, statements: List[Stmt]) -> None:
        for stmt in statements:
            self.resolve_stmt(stmt)

    def resolve_stmt(self, stmt: Stmt) -> None:
        match stmt:
            case Block(statements=statements):
                self.begin_scope()
                self.resolve_stmts(statements)
                self.end_scope()
            case Expression(expression=expr) | Print(expression=expr):
                self.resolve_expr(expr)
            case Var(name=name, initializer=initializer):
                self.declare(name)
                if initializer is not None:
                    self.resolve_expr(initializer)
                self.define(name)
            case If():
                self.resolve_expr(stmt.condition)
                self.resolve_stmt(stmt.then_branch)
                if stmt.else_branch is not None:
                    self.resolve_stmt(stmt.else_branch)
            case While(condition=condition, body=body):
                self.resolve_expr(condition)
                self.resolve_stmt(body)
            case Function(name=name):
                self.declare(name)
                self.define(name)
                self.resolve_function(stmt, FunctionKind.FUNCTION)
            case Return(keyword=keyword, value=value):
                if self.current_function is FunctionKind.NONE:
                    raise ResolveError("Can't return from top-level code.", keyword)
                self.resolve_expr(value)
            case Class():
                self.resolve_class(stmt)
            case _:
                raise TypeError(f"Unknown statement node {type(stmt).__name__}")

    def resolve_function(self, function: Function, kind: FunctionKind) -> None:
        enclosing = self.current_function
        self.current_function = kind
        self.begin_scope()

        try:
            for param in function.params:
                self.declare(param)
                self.define(param)
            self.resolve_stmts(function.body)
        finally:
            self.end_scope()
            self.current_function = enclosing

    def resolve_class(self, klass: Class) -> None:
        self.declare(klass.name)
        self.define(klass.name)

        enclosing = self.current_class
        self.current_class = ClassKind.CLASS

        try:
            for method in klass.methods:
                self.begin_scope()
                self.scopes[-1]["this"] = Binding(method.name, VarState.READ)
                self.resolve_function(method, FunctionKind.METHOD)
                self.end_scope()
        finally:
            self.current_class = enclosing

    # ---------------- Expressions ----------------

    def resolve_expr(self, expr: Expr) -> None:
        match expr:
            case Variable(name=name):
                binding = self.scopes[-1].get(name.lexeme)
                if binding is not None and binding.state is VarState.DECLARED:
                    raise ResolveError("Can't read local variable in its own initializer.", name)
                self.resolve_local(expr.node_id, name, read=True)
            case Assign(name=name, value=value):
                self.resolve_expr(value)
                self.resolve_local(expr.node_id, name, read=False)
            case This(keyword=keyword):
                if self.current_class is ClassKind.NONE:
                    raise ResolveError("Can't use 'this' outside of a class.", keyword)
                self.resolve_local(expr.node_id, keyword, read=True)
            case Binary(left=left, right=right) | LogicOr(left=left, right=right) | LogicAnd(left=left, right=right):
                self.resolve_expr(left)
                self.resolve_expr(right)
            case Grouping(expression=inner) | Unary(right=inner):
                self.resolve_expr(inner)
            case Conditional():
                self.resolve_expr(expr.condition)
                self.resolve_expr(expr.then_branch)
                self.resolve_expr(expr.else_branch)
            case Call(callee=callee, arguments=arguments):
                self.resolve_expr(callee)
                for argument in arguments:
                    self.resolve_expr(argument)
            case Get(object=obj):
                self.resolve_expr(obj)
            case Set(object=obj, value=value):
                self.resolve_expr(value)
                self.resolve_expr(obj)
            case Number() | String() | Boolean() | Nil():
                pass
            case _:
                raise TypeError(f"Unknown expression node {type(expr).__name__}")


def resolve(statements: List[Stmt], expression: Optional[Expr] = None) -> Dict[int, int]:
    return Resolver().resolve(statements, expression)
