from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import (
    LoxArithmeticError,
    LoxTypeError,
    run_runtime_case,
)

SCENARIOS = [
    # arithmetic
    pytest.param("print 1 + 2 * 3;", ["7"], None, None, id="precedence-mul"),
    pytest.param("print (1 + 2) * 3;", ["9"], None, None, id="precedence-group"),
    pytest.param("print 10 - 4 - 3;", ["3"], None, None, id="sub-left-assoc"),
    pytest.param("print 8 / 4 / 2;", ["1"], None, None, id="div-left-assoc"),
    pytest.param("print 7 / 2;", ["3.5"], None, None, id="div-fraction"),
    pytest.param("print -3 * -2;", ["6"], None, None, id="negate-operands"),
    pytest.param("print --4;", ["4"], None, None, id="double-negate"),
    pytest.param("print 0.1 + 0.2;", ["0.30000000000000004"], None, None, id="ieee-float"),
    pytest.param("print 0 / 5;", ["0"], None, None, id="zero-numerator"),
    pytest.param("print 0 * 5;", ["0"], None, None, id="zero-left-factor"),
    # comparison
    pytest.param("print 1 < 2; print 2 <= 2; print 3 > 4; print 4 >= 5;", ["true", "true", "false", "false"], None, None, id="compare-numbers"),
    pytest.param('print "a" < "b"; print "b" <= "a"; print "abc" > "abd";', ["true", "false", "false"], None, None, id="compare-strings"),
    # equality
    pytest.param("print 1 == 1; print 1 != 2;", ["true", "true"], None, None, id="eq-numbers"),
    pytest.param('print "a" == "a"; print "a" == "b";', ["true", "false"], None, None, id="eq-strings"),
    pytest.param("print nil == nil; print true == true; print true != false;", ["true", "true", "true"], None, None, id="eq-nil-bool"),
    pytest.param('print 1 == "1"; print nil == false; print 0 == false;', ["false", "false", "false"], None, None, id="eq-mixed-kinds"),
    pytest.param("print clock == clock;", ["false"], None, None, id="eq-callables-never-equal"),
    pytest.param(
        dedent(
            """\
            class C {}
            var a = C();
            var b = C();
            print a == a;
            print a == b;
            print a != b;
            """
        ),
        ["true", "false", "true"],
        None,
        None,
        id="eq-instances-by-identity",
    ),
    # unary and truthiness
    pytest.param("print !true; print !nil; print !0; print !\"\";", ["false", "true", "false", "false"], None, None, id="bang-truthiness"),
    pytest.param("print !!nil;", ["false"], None, None, id="bang-bang"),
    # zero on the right
    pytest.param("print 10 / 0;", None, LoxArithmeticError, "Runtime error at '/': Division by zero. [line 1]", id="div-by-zero"),
    pytest.param("print 10 * 0;", None, LoxArithmeticError, "Runtime error at '*': Multiplication by zero. [line 1]", id="mul-by-zero"),
    pytest.param("print 1 * (2 - 2);", None, LoxArithmeticError, "Multiplication by zero.", id="mul-by-computed-zero"),
    pytest.param("print 0 / 0;", None, LoxArithmeticError, "Division by zero.", id="zero-over-zero"),
    # type errors
    pytest.param('print 1 - "a";', None, LoxTypeError, "Runtime error at '-': Operands must be numbers. [line 1]", id="sub-string"),
    pytest.param('print "a" * 2;', None, LoxTypeError, "Operands must be numbers.", id="mul-string"),
    pytest.param("print nil / 2;", None, LoxTypeError, "Operands must be numbers.", id="div-nil"),
    pytest.param("print true + 1;", None, LoxTypeError, "Runtime error at '+': Operands must be numbers or strings. [line 1]", id="add-bool"),
    pytest.param('print nil + "a";', None, LoxTypeError, "Operands must be numbers or strings.", id="add-nil-string"),
    pytest.param('print 1 < "2";', None, LoxTypeError, "Runtime error at '<': Operands must be two numbers or two strings. [line 1]", id="compare-mixed"),
    pytest.param("print nil >= nil;", None, LoxTypeError, "Operands must be two numbers or two strings.", id="compare-nil"),
    pytest.param('print -"a";', None, LoxTypeError, "Runtime error at '-': Operand must be a number. [line 1]", id="negate-string"),
    pytest.param("print -nil;", None, LoxTypeError, "Operand must be a number.", id="negate-nil"),
]


@pytest.mark.parametrize("source, expectation, expected_exc, msg", SCENARIOS)
def test_operators(source: str, expectation, expected_exc, msg) -> None:
    run_runtime_case(source, expectation, expected_exc, msg)
