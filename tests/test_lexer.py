from __future__ import annotations

from dataclasses import dataclass
from textwrap import dedent
from typing import List, Optional, Tuple

import pytest

from lox_ref.lexer import LexError, Lexer, tokenize
from lox_ref.token_types import TT, Tok


@dataclass(frozen=True)
class Case:
    """Unified lexer case payload."""

    name: str
    source: str
    expected: Optional[Tuple[Tuple[TT, object], ...]] = None
    expected_types: Optional[Tuple[TT, ...]] = None
    expected_lines: Optional[Tuple[Tuple[str, int], ...]] = None
    msg: Optional[str] = None
    err_line: Optional[int] = None


def _non_eof_tokens(source: str) -> List[Tok]:
    tokens, errors = tokenize(source)
    assert not errors, [str(err) for err in errors]
    return [token for token in tokens if token.type != TT.EOF]


LITERAL_CASES: List[Case] = [
    Case("number-int", "123", expected=((TT.NUMBER, 123.0),)),
    Case("number-float", "3.14", expected=((TT.NUMBER, 3.14),)),
    Case("number-zero", "0", expected=((TT.NUMBER, 0.0),)),
    Case("string-basic", '"hello"', expected=((TT.STRING, "hello"),)),
    Case("string-empty", '""', expected=((TT.STRING, ""),)),
    Case("string-with-spaces", '"a b  c"', expected=((TT.STRING, "a b  c"),)),
]

NUMBER_SHAPE_CASES: List[Case] = [
    Case("trailing-dot", "1.", expected_types=(TT.NUMBER, TT.DOT)),
    Case("leading-dot", ".5", expected_types=(TT.DOT, TT.NUMBER)),
    Case("method-on-number", "1.foo", expected_types=(TT.NUMBER, TT.DOT, TT.IDENT)),
    Case("two-dots", "1.2.3", expected_types=(TT.NUMBER, TT.DOT, TT.NUMBER)),
]

OPERATOR_CASES: List[Case] = [
    Case("plus", "+", expected_types=(TT.PLUS,)),
    Case("minus", "-", expected_types=(TT.MINUS,)),
    Case("star", "*", expected_types=(TT.STAR,)),
    Case("slash", "/", expected_types=(TT.SLASH,)),
    Case("bang", "!", expected_types=(TT.NEG,)),
    Case("eq", "==", expected_types=(TT.EQ,)),
    Case("neq", "!=", expected_types=(TT.NEQ,)),
    Case("assign", "=", expected_types=(TT.ASSIGN,)),
    Case("lt", "<", expected_types=(TT.LT,)),
    Case("lte", "<=", expected_types=(TT.LTE,)),
    Case("gt", ">", expected_types=(TT.GT,)),
    Case("gte", ">=", expected_types=(TT.GTE,)),
    Case("qmark", "?", expected_types=(TT.QMARK,)),
    Case("colon", ":", expected_types=(TT.COLON,)),
    Case("assign-eq", "= ==", expected_types=(TT.ASSIGN, TT.EQ)),
    Case("triple-eq", "===", expected_types=(TT.EQ, TT.ASSIGN)),
    Case("bang-bang", "!!=", expected_types=(TT.NEG, TT.NEQ)),
    Case(
        "punctuation",
        "(){},.;",
        expected_types=(TT.LPAR, TT.RPAR, TT.LBRACE, TT.RBRACE, TT.COMMA, TT.DOT, TT.SEMI),
    ),
]

KEYWORD_CASES: List[Case] = [
    Case(f"keyword-{word}", word, expected_types=(tt,))
    for word, tt in Lexer.KEYWORDS.items()
]

IDENT_CASES: List[Case] = [
    Case("ident-single", "x", expected=((TT.IDENT, None),)),
    Case("ident-snake", "foo_bar", expected=((TT.IDENT, None),)),
    Case("ident-underscore-start", "_tmp1", expected=((TT.IDENT, None),)),
    Case("ident-keyword-prefix", "classy", expected=((TT.IDENT, None),)),
    Case("ident-keyword-suffix", "myvar", expected=((TT.IDENT, None),)),
    Case("ident-keyword-case", "Print", expected=((TT.IDENT, None),)),
]

STRING_ESCAPE_CASES: List[Case] = [
    Case("escape-newline", r'"a\nb"', expected=((TT.STRING, "a\nb"),)),
    Case("escape-tab", r'"a\tb"', expected=((TT.STRING, "a\tb"),)),
    Case("escape-quote", r'"say \"hi\""', expected=((TT.STRING, 'say "hi"'),)),
    Case("escape-backslash", r'"a\\b"', expected=((TT.STRING, "a\\b"),)),
    Case("escape-unknown-kept", r'"a\qb"', expected=((TT.STRING, "a\\qb"),)),
]

POSITION_CASES: List[Case] = [
    Case("newlines", "a\nb\n\nc", expected_lines=(("a", 1), ("b", 2), ("c", 4))),
    Case("line-comment", "a // b\nc", expected_lines=(("a", 1), ("c", 2))),
    Case("block-comment", "a /* x\ny\n*/ c", expected_lines=(("a", 1), ("c", 3))),
    Case("multiline-string", 'a "x\ny" c', expected_lines=(("a", 1), ('"x\ny"', 1), ("c", 2))),
]

LEX_ERROR_CASES: List[Case] = [
    Case("unexpected-char", "var a = @;", msg="Unexpected character '@'.", err_line=1),
    Case("unexpected-hash", "\n#", msg="Unexpected character '#'.", err_line=2),
    Case("unterminated-string", 'print 1;\n"abc\ndef', msg="Unterminated string.", err_line=2),
    Case("unterminated-block-comment", "a\n/* never\nclosed", msg="Unterminated block comment.", err_line=2),
]


@pytest.mark.parametrize("case", LITERAL_CASES, ids=lambda case: case.name)
def test_literals(case: Case) -> None:
    tokens = _non_eof_tokens(case.source)

    assert case.expected is not None
    assert len(tokens) == len(case.expected)
    for token, (expected_type, expected_literal) in zip(tokens, case.expected):
        assert token.type == expected_type
        assert token.literal == expected_literal
        assert token.lexeme == case.source


@pytest.mark.parametrize("case", NUMBER_SHAPE_CASES, ids=lambda case: case.name)
def test_number_shapes(case: Case) -> None:
    tokens = _non_eof_tokens(case.source)
    assert case.expected_types is not None
    assert [token.type for token in tokens] == list(case.expected_types)


@pytest.mark.parametrize("case", OPERATOR_CASES, ids=lambda case: case.name)
def test_operators(case: Case) -> None:
    tokens = _non_eof_tokens(case.source)
    assert case.expected_types is not None
    assert [token.type for token in tokens] == list(case.expected_types)


@pytest.mark.parametrize("case", KEYWORD_CASES, ids=lambda case: case.name)
def test_keywords(case: Case) -> None:
    tokens = _non_eof_tokens(case.source)
    assert case.expected_types is not None
    assert [token.type for token in tokens] == list(case.expected_types)


@pytest.mark.parametrize("case", IDENT_CASES, ids=lambda case: case.name)
def test_identifiers(case: Case) -> None:
    tokens = _non_eof_tokens(case.source)
    assert case.expected is not None
    assert [(token.type, token.literal) for token in tokens] == list(case.expected)
    assert tokens[0].lexeme == case.source


@pytest.mark.parametrize("case", STRING_ESCAPE_CASES, ids=lambda case: case.name)
def test_string_escapes(case: Case) -> None:
    tokens = [token for token in _non_eof_tokens(case.source) if token.type == TT.STRING]
    assert case.expected is not None
    assert len(tokens) == 1
    assert tokens[0].literal == case.expected[0][1]


@pytest.mark.parametrize("case", POSITION_CASES, ids=lambda case: case.name)
def test_position_tracking(case: Case) -> None:
    assert case.expected_lines is not None
    tokens = _non_eof_tokens(case.source)
    actual_lines = {token.lexeme: token.line for token in tokens}

    for lexeme, expected_line in case.expected_lines:
        assert lexeme in actual_lines
        assert actual_lines[lexeme] == expected_line


@pytest.mark.parametrize("case", LEX_ERROR_CASES, ids=lambda case: case.name)
def test_lex_errors(case: Case) -> None:
    assert case.msg is not None
    _, errors = tokenize(case.source)

    assert len(errors) == 1
    err = errors[0]
    assert isinstance(err, LexError)
    assert case.msg in str(err)
    assert str(err).startswith("Lexical error")

    if case.err_line is not None:
        assert err.line == case.err_line, f"expected line {case.err_line}, got {err.line}"


def test_errors_accumulate_and_scanning_continues() -> None:
    tokens, errors = tokenize("a @ b # c $")

    assert [err.message for err in errors] == [
        "Unexpected character '@'.",
        "Unexpected character '#'.",
        "Unexpected character '$'.",
    ]
    assert [token.lexeme for token in tokens if token.type == TT.IDENT] == ["a", "b", "c"]


def test_unterminated_block_comment_emits_nothing() -> None:
    tokens, errors = tokenize("x /* dangling")

    assert [token.type for token in tokens] == [TT.IDENT, TT.EOF]
    assert len(errors) == 1


def test_block_comments_do_not_nest() -> None:
    tokens = _non_eof_tokens("/* a /* b */ c")
    assert [token.lexeme for token in tokens] == ["c"]


@pytest.mark.parametrize("source", ["", "   \n\t", "// only a comment", "/* */"], ids=["empty", "blank", "line-comment", "block-comment"])
def test_always_ends_with_eof(source: str) -> None:
    tokens, errors = tokenize(source)
    assert not errors
    assert [token.type for token in tokens] == [TT.EOF]


def test_eof_carries_last_line() -> None:
    tokens, _ = tokenize("a\nb\n")
    assert tokens[-1].type == TT.EOF
    assert tokens[-1].line == 3


def test_rescanning_lexemes_is_deterministic() -> None:
    source = dedent(
        """\
        class Counter {
          init(start) { this.n = start; }
          bump() { this.n = this.n + 1; return this.n >= 10 ? "done" : nil; }
        }
        for (var i = 0; i <= 3.5; i = i + 1) { print !(i != 2) and -i < 0 or i == 1; }
        """
    )
    first = _non_eof_tokens(source)
    rebuilt = " ".join(token.lexeme for token in first)
    second = _non_eof_tokens(rebuilt)

    assert [token.type for token in second] == [token.type for token in first]
    assert [token.literal for token in second] == [token.literal for token in first]
