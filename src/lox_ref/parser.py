"""
Recursive Descent Parser for Lox

Structure:
- Lexer: Token stream from source
- Parser: Recursive descent, one method per precedence level
- AST: dataclass nodes from ``tree``

Errors do not abort the parse. Each top-level declaration yields either a
statement or the ParseError that ended it; after an error the parser
synchronizes to the next statement boundary so one malformed statement costs
exactly one diagnostic.
"""

from dataclasses import dataclass
from typing import List, Optional, Union

from .errors import LoxError
from .token_types import TT, Tok
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

MAX_ARITY = 255

# ============================================================================
# Parser
# ============================================================================

class ParseError(LoxError):
    """Parse error with token context"""
    category = "Syntax error"


@dataclass
class ReplExpression:
    """Bare trailing expression typed at the prompt without a semicolon."""
    expression: Expr


ParseResult = Union[Stmt, ParseError, ReplExpression]


class Parser:
    """
    Recursive descent parser for Lox.

    Expression precedence (lowest to highest):
    1. assignment (=)
    2. conditional (? :), right-associative
    3. or
    4. and
    5. equality (==, !=)
    6. comparison (>, >=, <, <=)
    7. addition (+, -)
    8. multiplication (*, /)
    9. unary (!, -)
    10. call (f(...), obj.name)
    11. primary (literals, identifiers, this, parens)
    """

    # Tokens that start a statement; synchronization stops in front of them
    STATEMENT_STARTS = {
        TT.CLASS, TT.FUN, TT.VAR, TT.FOR, TT.IF, TT.WHILE, TT.PRINT, TT.RETURN,
    }

    def __init__(self, tokens: List[Tok], repl: bool = False):
        self.tokens = tokens
        self.pos = 0
        self.repl = repl
        # Errors that are reported without unwinding (bad assignment target,
        # too many arguments); they still fail the enclosing statement.
        self.pending: List[ParseError] = []

    # ========================================================================
    # Token Navigation
    # ========================================================================

    @property
    def current(self) -> Tok:
        return self.tokens[self.pos]

    def previous(self) -> Tok:
        return self.tokens[self.pos - 1]

    def at_end(self) -> bool:
        return self.current.type == TT.EOF

    def advance(self) -> Tok:
        """Consume current token and move to next"""
        if not self.at_end():
            self.pos += 1
        return self.previous()

    def check(self, *types: TT) -> bool:
        """Check if current token matches any of the given types"""
        return self.current.type in types

    def match(self, *types: TT) -> bool:
        """Check and consume if current token matches"""
        if self.check(*types):
            self.advance()
            return True
        return False

    def expect(self, token_type: TT, message: str) -> Tok:
        """Consume token of expected type or raise error"""
        if not self.check(token_type):
            raise ParseError(message, self.current)
        return self.advance()

    def report(self, message: str, token: Tok) -> None:
        """Record an error without unwinding the current rule"""
        self.pending.append(ParseError(message, token))

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse(self) -> List[ParseResult]:
        """Parse entire program"""
        results: List[ParseResult] = []

        while not self.at_end():
            results.append(self.parse_declaration())

        return results

    def parse_declaration(self) -> ParseResult:
        self.pending = []

        try:
            if self.match(TT.CLASS):
                stmt = self.parse_class_decl()
            elif self.match(TT.FUN):
                stmt = self.parse_function("function")
            elif self.match(TT.VAR):
                stmt = self.parse_var_decl()
            else:
                stmt = self.parse_statement()
        except ParseError as err:
            self.synchronize()
            # A statement reports only its first error
            return self.pending[0] if self.pending else err

        if self.pending:
            return self.pending[0]

        return stmt

    def synchronize(self, in_block: bool = False) -> None:
        """Discard tokens up to the next statement boundary

        Inside a block the closing brace is also a boundary and is left for
        the block to consume.
        """
        if in_block and self.check(TT.RBRACE):
            return

        self.advance()

        while not self.at_end():
            if self.previous().type == TT.SEMI:
                return
            if self.check(*self.STATEMENT_STARTS):
                return
            if in_block and self.check(TT.RBRACE):
                return
            self.advance()

    # ========================================================================
    # Declarations
    # ========================================================================

    def parse_class_decl(self) -> Class:
        """class Name { method* }"""
        name = self.expect(TT.IDENT, "Expect class name.")
        self.expect(TT.LBRACE, "Expect '{' before class body.")

        methods: List[Function] = []
        while not self.check(TT.RBRACE) and not self.at_end():
            methods.append(self.parse_function("method"))

        self.expect(TT.RBRACE, "Expect '}' after class body.")
        return Class(name, methods)

    def parse_function(self, kind: str) -> Function:
        """name ( params? ) { body } -- shared by fun declarations and methods"""
        name = self.expect(TT.IDENT, f"Expect {kind} name.")
        self.expect(TT.LPAR, f"Expect '(' after {kind} name.")

        params: List[Tok] = []
        if not self.check(TT.RPAR):
            while True:
                if len(params) >= MAX_ARITY:
                    self.report(f"Can't have more than {MAX_ARITY} parameters.", self.current)
                params.append(self.expect(TT.IDENT, "Expect parameter name."))
                if not self.match(TT.COMMA):
                    break

        self.expect(TT.RPAR, "Expect ')' after parameters.")
        self.expect(TT.LBRACE, f"Expect '{{' before {kind} body.")
        body = self.parse_block()
        return Function(name, params, body)

    def parse_var_decl(self) -> Var:
        name = self.expect(TT.IDENT, "Expect variable name.")

        initializer = None
        if self.match(TT.ASSIGN):
            initializer = self.parse_expr()

        self.expect(TT.SEMI, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self) -> Union[Stmt, ReplExpression]:
        if self.match(TT.FOR):
            return self.parse_for_stmt()
        if self.match(TT.IF):
            return self.parse_if_stmt()
        if self.match(TT.PRINT):
            return self.parse_print_stmt()
        if self.match(TT.RETURN):
            return self.parse_return_stmt()
        if self.match(TT.WHILE):
            return self.parse_while_stmt()
        if self.match(TT.LBRACE):
            return Block(self.parse_block())

        return self.parse_expr_stmt()

    def parse_block(self) -> List[Stmt]:
        """Statements up to the closing brace; the opening one is consumed"""
        statements: List[Stmt] = []

        while not self.check(TT.RBRACE) and not self.at_end():
            try:
                statements.append(self.parse_nested_declaration())
            except ParseError as err:
                # Recover here so the rest of the block stays inside it
                self.pending.append(err)
                self.synchronize(in_block=True)

        self.expect(TT.RBRACE, "Expect '}' after block.")
        return statements

    def parse_nested_declaration(self) -> Stmt:
        if self.match(TT.CLASS):
            return self.parse_class_decl()
        if self.match(TT.FUN):
            return self.parse_function("function")
        if self.match(TT.VAR):
            return self.parse_var_decl()

        stmt = self.parse_statement()
        if isinstance(stmt, ReplExpression):
            # Only a top-level trailing expression may drop its semicolon
            raise ParseError("Expect ';' after expression.", self.current)
        return stmt

    def parse_for_stmt(self) -> Stmt:
        """
        for (init; cond; incr) body

        Desugared into:
            { init; while (cond) { body; incr; } }
        """
        self.expect(TT.LPAR, "Expect '(' after 'for'.")

        initializer: Optional[Stmt]
        if self.match(TT.SEMI):
            initializer = None
        elif self.match(TT.VAR):
            initializer = self.parse_var_decl()
        else:
            initializer = self.parse_expr_stmt(allow_bare=False)

        condition: Optional[Expr] = None
        if not self.check(TT.SEMI):
            condition = self.parse_expr()
        self.expect(TT.SEMI, "Expect ';' after loop condition.")

        increment: Optional[Expr] = None
        if not self.check(TT.RPAR):
            increment = self.parse_expr()
        self.expect(TT.RPAR, "Expect ')' after for clauses.")

        body = self.parse_nested_statement()

        if increment is not None:
            body = Block([body, Expression(increment)])

        if condition is None:
            condition = Boolean(True)
        loop: Stmt = While(condition, body)

        if initializer is not None:
            loop = Block([initializer, loop])

        return loop

    def parse_if_stmt(self) -> If:
        self.expect(TT.LPAR, "Expect '(' after 'if'.")
        condition = self.parse_expr()
        self.expect(TT.RPAR, "Expect ')' after if condition.")

        then_branch = self.parse_nested_statement()
        else_branch = None
        if self.match(TT.ELSE):
            else_branch = self.parse_nested_statement()

        return If(condition, then_branch, else_branch)

    def parse_print_stmt(self) -> Print:
        value = self.parse_expr()
        self.expect(TT.SEMI, "Expect ';' after value.")
        return Print(value)

    def parse_return_stmt(self) -> Return:
        keyword = self.previous()

        value: Expr = Nil()
        if not self.check(TT.SEMI):
            value = self.parse_expr()

        self.expect(TT.SEMI, "Expect ';' after return value.")
        return Return(keyword, value)

    def parse_while_stmt(self) -> While:
        self.expect(TT.LPAR, "Expect '(' after 'while'.")
        condition = self.parse_expr()
        self.expect(TT.RPAR, "Expect ')' after condition.")
        body = self.parse_nested_statement()
        return While(condition, body)

    def parse_nested_statement(self) -> Stmt:
        stmt = self.parse_statement()
        if isinstance(stmt, ReplExpression):
            raise ParseError("Expect ';' after expression.", self.current)
        return stmt

    def parse_expr_stmt(self, allow_bare: bool = True) -> Union[Expression, ReplExpression]:
        expr = self.parse_expr()

        if allow_bare and self.repl and self.at_end():
            return ReplExpression(expr)

        self.expect(TT.SEMI, "Expect ';' after expression.")
        return Expression(expr)

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expr(self) -> Expr:
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        expr = self.parse_conditional()

        if self.match(TT.ASSIGN):
            equals = self.previous()
            value = self.parse_assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            if isinstance(expr, Get):
                return Set(expr.object, expr.name, value)

            self.report("Invalid assignment target.", equals)

        return expr

    def parse_conditional(self) -> Expr:
        """cond ? then : else (right-associative)"""
        expr = self.parse_or()

        if self.match(TT.QMARK):
            then_branch = self.parse_expr()
            self.expect(TT.COLON, "Expect ':' after then branch of conditional expression.")
            else_branch = self.parse_conditional()
            expr = Conditional(expr, then_branch, else_branch)

        return expr

    def parse_or(self) -> Expr:
        expr = self.parse_and()

        while self.match(TT.OR):
            operator = self.previous()
            right = self.parse_and()
            expr = LogicOr(expr, operator, right)

        return expr

    def parse_and(self) -> Expr:
        expr = self.parse_equality()

        while self.match(TT.AND):
            operator = self.previous()
            right = self.parse_equality()
            expr = LogicAnd(expr, operator, right)

        return expr

    def parse_equality(self) -> Expr:
        return self._parse_binary_level(self.parse_comparison, TT.EQ, TT.NEQ)

    def parse_comparison(self) -> Expr:
        return self._parse_binary_level(self.parse_addition, TT.GT, TT.GTE, TT.LT, TT.LTE)

    def parse_addition(self) -> Expr:
        return self._parse_binary_level(self.parse_multiplication, TT.PLUS, TT.MINUS)

    def parse_multiplication(self) -> Expr:
        return self._parse_binary_level(self.parse_unary, TT.STAR, TT.SLASH)

    def _parse_binary_level(self, operand, *operators: TT) -> Expr:
        """Left-associative binary level: operand (op operand)*"""
        expr = operand()

        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)

        return expr

    def parse_unary(self) -> Expr:
        if self.match(TT.NEG, TT.MINUS):
            operator = self.previous()
            right = self.parse_unary()
            return Unary(operator, right)

        return self.parse_call()

    def parse_call(self) -> Expr:
        expr = self.parse_primary()

        while True:
            if self.match(TT.LPAR):
                expr = self.finish_call(expr)
            elif self.match(TT.DOT):
                name = self.expect(TT.IDENT, "Expect property name after '.'.")
                expr = Get(expr, name)
            else:
                break

        return expr

    def finish_call(self, callee: Expr) -> Call:
        arguments: List[Expr] = []

        if not self.check(TT.RPAR):
            while True:
                if len(arguments) >= MAX_ARITY:
                    self.report(f"Can't have more than {MAX_ARITY} arguments.", self.current)
                arguments.append(self.parse_expr())
                if not self.match(TT.COMMA):
                    break

        paren = self.expect(TT.RPAR, "Expect ')' after arguments.")
        return Call(callee, paren, arguments)

    def parse_primary(self) -> Expr:
        if self.match(TT.FALSE):
            return Boolean(False)
        if self.match(TT.TRUE):
            return Boolean(True)
        if self.match(TT.NIL):
            return Nil()

        if self.match(TT.NUMBER):
            return Number(self.previous().literal)
        if self.match(TT.STRING):
            return String(self.previous().literal)

        if self.match(TT.THIS):
            return This(self.previous())
        if self.match(TT.IDENT):
            return Variable(self.previous())

        if self.match(TT.LPAR):
            expr = self.parse_expr()
            self.expect(TT.RPAR, "Expect ')' after expression.")
            return Grouping(expr)

        raise ParseError("Expect expression.", self.current)