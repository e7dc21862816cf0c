from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import render_program

PARSER_GRAMMAR_CASES = [
    # precedence and associativity
    ("prec-mul-over-add", "1 + 2 * 3;", "(; (+ 1 (* 2 3)))"),
    ("prec-group", "(1 + 2) * 3;", "(; (* (group (+ 1 2)) 3))"),
    ("assoc-sub-left", "1 - 2 - 3;", "(; (- (- 1 2) 3))"),
    ("assoc-div-left", "8 / 4 / 2;", "(; (/ (/ 8 4) 2))"),
    ("unary-nested", "-1 - -2;", "(; (- (- 1) (- 2)))"),
    ("unary-bang-bang", "!!true;", "(; (! (! true)))"),
    ("equality-over-comparison", "a == b < c + d;", "(; (== a (< b (+ c d))))"),
    ("comparison-chain", "a < b >= c;", "(; (>= (< a b) c))"),
    ("or-over-and", "a or b and c;", "(; (or a (and b c)))"),
    ("and-over-equality", "a and b != c;", "(; (and a (!= b c)))"),
    ("conditional-right-assoc", "a ? b : c ? d : e;", "(; (?: a b (?: c d e)))"),
    ("conditional-over-or", "a or b ? 1 : 2;", "(; (?: (or a b) 1 2))"),
    ("assign-right-assoc", "a = b = c;", "(; (= a (= b c)))"),
    ("assign-conditional", "a = b ? 1 : 2;", "(; (= a (?: b 1 2)))"),
    # literals
    ("literal-float", "1.5;", "(; 1.5)"),
    ("literal-int", "42;", "(; 42)"),
    ("literal-string", 'print "hi";', '(print "hi")'),
    ("literal-nil", "nil;", "(; nil)"),
    ("literal-bools", "true == false;", "(; (== true false))"),
    # calls and properties
    ("call-no-args", "f();", "(; (call f))"),
    ("call-chain", "f(1)(2);", "(; (call (call f 1) 2))"),
    ("call-args", "f(a, b + 1);", "(; (call f a (+ b 1)))"),
    ("get-chain", "a.b.c;", "(; (. (. a b) c))"),
    ("method-call", "a.b(1, 2);", "(; (call (. a b) 1 2))"),
    ("set-chain", "a.b.c = 1;", "(; (= (. (. a b) c) 1))"),
    ("set-on-call", "f().x = 2;", "(; (= (. (call f) x) 2))"),
    ("this-get", "this.x;", "(; (. this x))"),
    # statements
    ("var-init", "var a = 1;", "(var a 1)"),
    ("var-no-init", "var a;", "(var a)"),
    ("print", "print a + 1;", "(print (+ a 1))"),
    ("block", "{ var x = 1; print x; }", "(block (var x 1) (print x))"),
    ("block-empty", "{}", "(block)"),
    ("if", "if (a) print 1;", "(if a (print 1))"),
    ("if-else", "if (a) print 1; else print 2;", "(if-else a (print 1) (print 2))"),
    (
        "dangling-else",
        "if (a) if (b) print 1; else print 2;",
        "(if a (if-else b (print 1) (print 2)))",
    ),
    ("while", "while (x) x = x - 1;", "(while x (; (= x (- x 1))))"),
    # for desugaring
    (
        "for-full",
        "for (var i = 0; i < 3; i = i + 1) print i;",
        "(block (var i 0) (while (< i 3) (block (print i) (; (= i (+ i 1))))))",
    ),
    ("for-empty", "for (;;) print 1;", "(while true (print 1))"),
    (
        "for-expr-init-no-incr",
        "for (i = 0; i < 1;) print i;",
        "(block (; (= i 0)) (while (< i 1) (print i)))",
    ),
    (
        "for-incr-only",
        "for (; x; x = nil) {}",
        "(while x (block (block) (; (= x nil))))",
    ),
    # functions and classes
    ("fun", "fun add(a, b) { return a + b; }", "(fun add (a b) (return (+ a b)))"),
    ("fun-empty", "fun f() {}", "(fun f ())"),
    ("fun-bare-return", "fun f() { return; }", "(fun f () (return nil))"),
    ("class-empty", "class E {}", "(class E)"),
    (
        "class-methods",
        "class P { init(x) { this.x = x; } get() { return this.x; } }",
        "(class P (method init (x) (; (= (. this x) x))) (method get () (return (. this x))))",
    ),
]


@pytest.mark.parametrize(
    "source, expected",
    [pytest.param(source, expected, id=name) for name, source, expected in PARSER_GRAMMAR_CASES],
)
def test_parser_grammar(source: str, expected: str) -> None:
    assert render_program(source) == [expected]


def test_multiple_statements_keep_order() -> None:
    source = dedent(
        """\
        var a = 1;
        fun f() { return a; }
        print f();
        """
    )
    assert render_program(source) == [
        "(var a 1)",
        "(fun f () (return a))",
        "(print (call f))",
    ]


def test_comments_are_ignored() -> None:
    source = dedent(
        """\
        // leading comment
        print 1; /* inline */ print 2;
        /* multi
           line */
        """
    )
    assert render_program(source) == ["(print 1)", "(print 2)"]
