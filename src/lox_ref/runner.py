from __future__ import annotations

import sys
import threading
import traceback
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, TextIO, TypeVar

from .errors import LoxError
from .evaluator import Interpreter
from .lexer import tokenize
from .parser import ParseError, Parser, ReplExpression
from .printer import render
from .resolver import ResolveError, resolve
from .tree import Stmt
from .types import LoxRuntimeError
from .utils import debug_py_trace_enabled, stringify

# sysexits.h
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

USAGE = "Usage: lox [--ast] [script]"

# Each Lox call costs about ten Python frames, so evaluation runs on a worker
# thread with a raised recursion limit and a stack big enough to back it.
RECURSION_LIMIT = 50_000
STACK_SIZE = 512 * 1024 * 1024

T = TypeVar("T")


@dataclass
class RunResult:
    """Outcome of one execution unit.

    ``errors`` holds every lexical and syntax error of the unit, or the single
    resolution or runtime error that stopped it. ``value`` is the rendering
    of a trailing REPL expression, if there was one and it ran.
    """
    errors: List[LoxError] = field(default_factory=list)
    value: Optional[str] = None

    @property
    def had_runtime_error(self) -> bool:
        return any(isinstance(err, LoxRuntimeError) for err in self.errors)

    @property
    def had_error(self) -> bool:
        return any(not isinstance(err, LoxRuntimeError) for err in self.errors)

    @property
    def exit_code(self) -> int:
        if self.had_runtime_error:
            return EX_SOFTWARE
        if self.had_error:
            return EX_DATAERR
        return EX_OK


class Session:
    """Runs source units against one interpreter so globals persist."""

    def __init__(self, out: Optional[TextIO] = None):
        self.interpreter = Interpreter(out=out)

    def run(self, source: str, repl: bool = False) -> RunResult:
        return run_deep(lambda: self._run(source, repl))

    def _run(self, source: str, repl: bool) -> RunResult:
        tokens, lex_errors = tokenize(source)
        results = Parser(tokens, repl=repl).parse()

        errors: List[LoxError] = list(lex_errors)
        errors.extend(r for r in results if isinstance(r, ParseError))
        if errors:
            errors.sort(key=lambda err: err.line or 0)
            return RunResult(errors=errors)

        statements = [r for r in results if isinstance(r, Stmt)]
        trailing = next((r.expression for r in results if isinstance(r, ReplExpression)), None)

        try:
            depths = resolve(statements, trailing)
        except ResolveError as err:
            return RunResult(errors=[err])

        self.interpreter.resolve(depths)

        try:
            self.interpreter.interpret(statements)
            value = None
            if trailing is not None:
                value = stringify(self.interpreter.evaluate(trailing))
        except LoxRuntimeError as err:
            return RunResult(errors=[err])

        return RunResult(value=value)


def run_deep(thunk: Callable[[], T]) -> T:
    """Run *thunk* on a thread with a deep stack; re-raise whatever it raised."""
    outcome: Dict[str, object] = {}

    def worker() -> None:
        try:
            outcome["value"] = thunk()
        except Exception as exc:
            outcome["error"] = exc

    old_limit = sys.getrecursionlimit()
    old_size = threading.stack_size(STACK_SIZE)
    sys.setrecursionlimit(max(old_limit, RECURSION_LIMIT))

    try:
        thread = threading.Thread(target=worker, daemon=True)
        thread.start()
        thread.join()
    finally:
        threading.stack_size(old_size)
        sys.setrecursionlimit(old_limit)

    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]


def run(source: str, out: Optional[TextIO] = None) -> RunResult:
    return Session(out=out).run(source)


def run_file(path: str, out: Optional[TextIO] = None) -> RunResult:
    return run(Path(path).read_text(encoding="utf-8"), out=out)


def report_errors(errors: List[LoxError], stream: Optional[TextIO] = None) -> None:
    """Print one diagnostic per line, plus Python tracebacks when enabled."""
    stream = stream if stream is not None else sys.stderr

    for err in errors:
        print(err, file=stream)

        if debug_py_trace_enabled() and isinstance(err, LoxRuntimeError) and err.__traceback__ is not None:
            print("\nPython traceback:", file=stream)
            print("".join(traceback.format_tb(err.__traceback__)), file=stream, end="")


def report_fatal(exc: BaseException, stream: Optional[TextIO] = None) -> None:
    stream = stream if stream is not None else sys.stderr

    if isinstance(exc, RecursionError):
        print("Fatal error: maximum recursion depth exceeded.", file=stream)
    else:
        print(f"Fatal error: {exc}", file=stream)


def _load_source(arg: str) -> str:
    """
    Resolve CLI input into source text.
    - "-" => read stdin.
    - Otherwise => read the file at that path.
    """

    if arg == "-":
        return sys.stdin.read()

    return Path(arg).read_text(encoding="utf-8")


def _print_ast(source: str) -> int:
    tokens, lex_errors = tokenize(source)
    results = Parser(tokens).parse()

    errors: List[LoxError] = list(lex_errors)
    errors.extend(r for r in results if isinstance(r, ParseError))
    if errors:
        report_errors(errors)
        return EX_DATAERR

    for stmt in results:
        print(render(stmt))

    return EX_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    show_ast = False
    script: Optional[str] = None

    for token in args:
        if token == "--ast":
            show_ast = True
            continue

        if script is None:
            script = token
        else:
            print(USAGE, file=sys.stderr)
            return EX_USAGE

    if script is None:
        if show_ast:
            print(USAGE, file=sys.stderr)
            return EX_USAGE

        from .repl import repl  # prompt_toolkit is only needed interactively
        repl()
        return EX_OK

    try:
        source = _load_source(script)
    except OSError as exc:
        print(f"Cannot read '{script}': {exc.strerror or exc}", file=sys.stderr)
        return EX_NOINPUT

    if show_ast:
        return _print_ast(source)

    try:
        result = Session().run(source)
    except RecursionError as exc:
        report_fatal(exc)
        return EX_SOFTWARE

    report_errors(result.errors)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
