"""AST node classes produced by the parser and consumed by the resolver and evaluator.

Expression nodes that name a binding (``Variable``, ``Assign``, ``This``) carry a
``node_id`` minted from a process-wide counter. The resolver keys its depth map by
that id, which is how the static analysis result reaches the evaluator without
re-walking scopes. Ids never take part in equality, so structurally identical
trees compare equal.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import List, Optional

from typing_extensions import TypeAlias

from .token_types import Tok

_NODE_IDS = itertools.count(1)


def next_node_id() -> int:
    return next(_NODE_IDS)


def _node_id_field():
    return field(default_factory=next_node_id, compare=False, repr=False)


# ---------- Expressions ----------

@dataclass
class Expr:
    pass

@dataclass
class Binary(Expr):
    left: Expr
    operator: Tok
    right: Expr

@dataclass
class Grouping(Expr):
    expression: Expr

@dataclass
class Unary(Expr):
    operator: Tok
    right: Expr

@dataclass
class Conditional(Expr):
    condition: Expr
    then_branch: Expr
    else_branch: Expr

@dataclass
class Call(Expr):
    callee: Expr
    paren: Tok
    arguments: List[Expr]

@dataclass
class Get(Expr):
    object: Expr
    name: Tok

@dataclass
class Set(Expr):
    object: Expr
    name: Tok
    value: Expr

@dataclass
class Variable(Expr):
    name: Tok
    node_id: int = _node_id_field()

@dataclass
class Assign(Expr):
    name: Tok
    value: Expr
    node_id: int = _node_id_field()

@dataclass
class LogicOr(Expr):
    left: Expr
    operator: Tok
    right: Expr

@dataclass
class LogicAnd(Expr):
    left: Expr
    operator: Tok
    right: Expr

@dataclass
class This(Expr):
    keyword: Tok
    node_id: int = _node_id_field()

@dataclass
class Number(Expr):
    value: float

@dataclass
class String(Expr):
    value: str

@dataclass
class Boolean(Expr):
    value: bool

@dataclass
class Nil(Expr):
    pass


# ---------- Statements ----------

@dataclass
class Stmt:
    pass

@dataclass
class Block(Stmt):
    statements: List[Stmt]

@dataclass
class Expression(Stmt):
    expression: Expr

@dataclass
class Print(Stmt):
    expression: Expr

@dataclass
class Var(Stmt):
    name: Tok
    initializer: Optional[Expr] = None

@dataclass
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None

@dataclass
class While(Stmt):
    condition: Expr
    body: Stmt

@dataclass
class Function(Stmt):
    name: Tok
    params: List[Tok]
    body: List[Stmt]

@dataclass
class Return(Stmt):
    keyword: Tok
    value: Expr

@dataclass
class Class(Stmt):
    name: Tok
    methods: List[Function]


Node: TypeAlias = Expr | Stmt


def walk(node: Node):
    """Yield ``node`` and every node below it, depth first."""
    yield node

    for child in children(node):
        yield from walk(child)


def children(node: Node) -> List[Node]:
    match node:
        case Binary(left=left, right=right) | LogicOr(left=left, right=right) | LogicAnd(left=left, right=right):
            return [left, right]
        case Grouping(expression=inner) | Expression(expression=inner) | Print(expression=inner):
            return [inner]
        case Unary(right=right):
            return [right]
        case Conditional():
            return [node.condition, node.then_branch, node.else_branch]
        case Call():
            return [node.callee, *node.arguments]
        case Get():
            return [node.object]
        case Set():
            return [node.object, node.value]
        case Assign(value=value):
            return [value]
        case Block(statements=statements):
            return list(statements)
        case Var(initializer=init):
            return [init] if init is not None else []
        case If():
            out: List[Node] = [node.condition, node.then_branch]
            if node.else_branch is not None:
                out.append(node.else_branch)
            return out
        case While():
            return [node.condition, node.body]
        case Function(body=body):
            return list(body)
        case Return(value=value):
            return [value]
        case Class(methods=methods):
            return list(methods)
        case _:
            return []
