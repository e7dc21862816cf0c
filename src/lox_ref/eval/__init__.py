"""Evaluator helper modules for the Lox runtime."""

__all__ = [
    "bind",
    "blocks",
    "chains",
    "common",
    "control",
    "expr",
    "fn",
    "helpers",
    "let",
    "loops",
    "objects",
]
