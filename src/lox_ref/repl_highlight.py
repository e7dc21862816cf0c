"""prompt_toolkit lexer for live Lox syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer import Lexer as LoxLexer
from .token_types import TT, Tok

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "constant": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "function": "bold ansiyellow",
    "operator": "",
    "punctuation": "",
    "comment": "italic ansigray",
    "error": "bold ansired",
    "type": "bold ansiblue",
}

# Token type → highlight group.
_TT_GROUP = {
    TT.AND: "keyword",
    TT.CLASS: "keyword",
    TT.ELSE: "keyword",
    TT.FOR: "keyword",
    TT.FUN: "keyword",
    TT.IF: "keyword",
    TT.OR: "keyword",
    TT.PRINT: "keyword",
    TT.RETURN: "keyword",
    TT.SUPER: "keyword",
    TT.THIS: "keyword",
    TT.VAR: "keyword",
    TT.WHILE: "keyword",
    TT.TRUE: "boolean",
    TT.FALSE: "boolean",
    TT.NIL: "constant",
    TT.NUMBER: "number",
    TT.STRING: "string",
    TT.IDENT: "identifier",
    TT.PLUS: "operator",
    TT.MINUS: "operator",
    TT.STAR: "operator",
    TT.SLASH: "operator",
    TT.NEG: "operator",
    TT.EQ: "operator",
    TT.NEQ: "operator",
    TT.LT: "operator",
    TT.LTE: "operator",
    TT.GT: "operator",
    TT.GTE: "operator",
    TT.ASSIGN: "operator",
    TT.QMARK: "operator",
    TT.COLON: "operator",
    TT.LPAR: "punctuation",
    TT.RPAR: "punctuation",
    TT.LBRACE: "punctuation",
    TT.RBRACE: "punctuation",
    TT.DOT: "punctuation",
    TT.COMMA: "punctuation",
    TT.SEMI: "punctuation",
}


def _ident_group(tokens: list[Tok], idx: int) -> str:
    prev_type = tokens[idx - 1].type if idx > 0 else None
    next_type = tokens[idx + 1].type if idx + 1 < len(tokens) else None

    if prev_type == TT.CLASS:
        return "type"
    if prev_type == TT.FUN or next_type == TT.LPAR:
        return "function"
    return "identifier"


def _gap_fragments(gap: str) -> StyleAndTextTuples:
    """Style text the scanner skipped: whitespace, comments or bad characters."""
    body = gap.lstrip()
    lead = gap[:len(gap) - len(body)]

    if not body:
        return [("", gap)]

    group = "comment" if body.startswith(("//", "/*")) else "error"
    fragments: StyleAndTextTuples = []
    if lead:
        fragments.append(("", lead))
    fragments.append((GROUP_STYLE[group], body))
    return fragments


def _highlight_line(text: str) -> StyleAndTextTuples:
    """Tokenize a single line and return styled fragments."""
    if not text:
        return [("", "")]

    tokens = [tok for tok in LoxLexer(text).tokenize() if tok.type != TT.EOF]

    result: StyleAndTextTuples = []
    pos = 0

    for i, tok in enumerate(tokens):
        tok_text = tok.lexeme
        if not tok_text:
            continue

        idx = text.find(tok_text, pos)
        if idx < 0:
            continue

        if idx > pos:
            result.extend(_gap_fragments(text[pos:idx]))

        group = _TT_GROUP.get(tok.type, "")
        if tok.type == TT.IDENT:
            group = _ident_group(tokens, i)
        result.append((GROUP_STYLE.get(group, ""), tok_text))
        pos = idx + len(tok_text)

    if pos < len(text):
        result.extend(_gap_fragments(text[pos:]))

    return result if result else [("", text)]


class LoxReplLexer(Lexer):
    """prompt_toolkit Lexer that highlights Lox source using the scanner."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = _highlight_line(lines[lineno])
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
