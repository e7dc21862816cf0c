"""Parenthesized prefix rendering of the AST, used by ``lox --ast``."""

from __future__ import annotations

from .tree import (
    Assign,
    Binary,
    Block,
    Boolean,
    Call,
    Class,
    Conditional,
    Expression,
    Function,
    Get,
    Grouping,
    If,
    LogicAnd,
    LogicOr,
    Nil,
    Node,
    Number,
    Print,
    Return,
    Set,
    String,
    This,
    Unary,
    Var,
    Variable,
    While,
)
from .utils import format_number


def render(node: Node) -> str:
    match node:
        case Binary(left=left, operator=op, right=right) | LogicOr(left=left, operator=op, right=right) | LogicAnd(left=left, operator=op, right=right):
            return _paren(op.lexeme, left, right)
        case Grouping(expression=inner):
            return _paren("group", inner)
        case Unary(operator=op, right=right):
            return _paren(op.lexeme, right)
        case Conditional():
            return _paren("?:", node.condition, node.then_branch, node.else_branch)
        case Call(callee=callee, arguments=arguments):
            return _paren("call", callee, *arguments)
        case Get(object=obj, name=name):
            return f"(. {render(obj)} {name.lexeme})"
        case Set(object=obj, name=name, value=value):
            return f"(= (. {render(obj)} {name.lexeme}) {render(value)})"
        case Variable(name=name):
            return name.lexeme
        case Assign(name=name, value=value):
            return f"(= {name.lexeme} {render(value)})"
        case This():
            return "this"
        case Number(value=value):
            return format_number(value)
        case String(value=value):
            return f'"{value}"'
        case Boolean(value=value):
            return "true" if value else "false"
        case Nil():
            return "nil"

        case Block(statements=statements):
            return _paren("block", *statements)
        case Expression(expression=expr):
            return _paren(";", expr)
        case Print(expression=expr):
            return _paren("print", expr)
        case Var(name=name, initializer=None):
            return f"(var {name.lexeme})"
        case Var(name=name, initializer=init):
            return f"(var {name.lexeme} {render(init)})"
        case If(else_branch=None):
            return _paren("if", node.condition, node.then_branch)
        case If():
            return _paren("if-else", node.condition, node.then_branch, node.else_branch)
        case While(condition=cond, body=body):
            return _paren("while", cond, body)
        case Function():
            return _render_function("fun", node)
        case Return(value=value):
            return _paren("return", value)
        case Class(name=name, methods=methods):
            parts = [f"class {name.lexeme}"]
            parts.extend(_render_function("method", m) for m in methods)
            return "(" + " ".join(parts) + ")"

    raise TypeError(f"Cannot render {type(node).__name__}")


def _paren(name: str, *parts: Node) -> str:
    rendered = [name, *(render(p) for p in parts)]
    return "(" + " ".join(rendered) + ")"


def _render_function(kind: str, fn: Function) -> str:
    params = " ".join(p.lexeme for p in fn.params)
    head = f"{kind} {fn.name.lexeme} ({params})"
    body = " ".join(render(s) for s in fn.body)
    return f"({head} {body})" if body else f"({head})"
