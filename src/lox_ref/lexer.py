"""
Lexer for Lox

Tokenizes Lox source code into a stream of tokens.

Features:
- Single forward pass, no backtracking
- Line tracking for diagnostics
- Line comments and (non-nesting) block comments
- Error accumulation: bad input is reported and skipped, never fatal
"""

from typing import List, Tuple

from .errors import LoxError
from .token_types import TT, Tok

# ============================================================================
# Lexer Implementation
# ============================================================================

class LexError(LoxError):
    """Lexical analysis error"""
    category = "Lexical error"


class Lexer:
    """
    Lox lexer.

    Scanning never stops at the first problem: every unexpected character,
    unterminated string and unterminated block comment is recorded in
    ``errors`` and the scan resumes with the next character.
    """

    # Keyword mapping
    KEYWORDS = {
        'and': TT.AND,
        'class': TT.CLASS,
        'else': TT.ELSE,
        'false': TT.FALSE,
        'for': TT.FOR,
        'fun': TT.FUN,
        'if': TT.IF,
        'nil': TT.NIL,
        'or': TT.OR,
        'print': TT.PRINT,
        'return': TT.RETURN,
        'super': TT.SUPER,
        'this': TT.THIS,
        'true': TT.TRUE,
        'var': TT.VAR,
        'while': TT.WHILE,
    }

    # Operator mapping: longest matches first to handle prefixes correctly
    OPERATORS = [
        # Two-character operators
        ('==', TT.EQ),
        ('!=', TT.NEQ),
        ('<=', TT.LTE),
        ('>=', TT.GTE),

        # Single-character operators
        ('+', TT.PLUS),
        ('-', TT.MINUS),
        ('*', TT.STAR),
        ('/', TT.SLASH),
        ('<', TT.LT),
        ('>', TT.GT),
        ('!', TT.NEG),
        ('=', TT.ASSIGN),
        ('(', TT.LPAR),
        (')', TT.RPAR),
        ('{', TT.LBRACE),
        ('}', TT.RBRACE),
        ('.', TT.DOT),
        (',', TT.COMMA),
        (';', TT.SEMI),
        ('?', TT.QMARK),
        (':', TT.COLON),
    ]

    ESCAPES = {
        'n': '\n',
        't': '\t',
        'r': '\r',
        '"': '"',
        '\\': '\\',
        '0': '\0',
    }

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.start = 0
        self.line = 1
        self.tokens: List[Tok] = []
        self.errors: List[LexError] = []

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list ending in EOF"""
        while not self.at_end():
            self.start = self.pos
            self.scan_token()

        self.tokens.append(Tok(TT.EOF, "", None, self.line))
        return self.tokens

    def scan_token(self):
        """Scan next token"""
        ch = self.peek()

        if ch in (' ', '\t', '\r'):
            self.advance()
            return

        if ch == '\n':
            self.advance()
            self.line += 1
            return

        # Comments
        if ch == '/' and self.peek(1) == '/':
            self.skip_line_comment()
            return

        if ch == '/' and self.peek(1) == '*':
            self.skip_block_comment()
            return

        # String literals
        if ch == '"':
            self.scan_string()
            return

        # Numbers
        if _is_digit(ch):
            self.scan_number()
            return

        # Identifiers and keywords
        if ch.isalpha() or ch == '_':
            self.scan_identifier()
            return

        # Operators and punctuation
        self.scan_operator()

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_string(self):
        """Scan string literal: "..." with backslash escapes"""
        start_line = self.line
        self.advance()  # Opening quote
        chars: List[str] = []

        while not self.at_end() and self.peek() != '"':
            ch = self.advance()

            if ch == '\n':
                self.line += 1

            if ch == '\\' and not self.at_end():
                esc = self.advance()
                if esc == '\n':
                    self.line += 1
                decoded = self.ESCAPES.get(esc)
                chars.append(decoded if decoded is not None else ch + esc)
                continue

            chars.append(ch)

        if self.at_end():
            self.error("Unterminated string.", start_line)
            return

        self.advance()  # Closing quote
        self.emit(TT.STRING, ''.join(chars), line=start_line)

    def scan_number(self):
        """Scan number literal: digits with an optional fractional part"""
        while _is_digit(self.peek()):
            self.advance()

        # A trailing bare dot belongs to the next token
        if self.peek() == '.' and _is_digit(self.peek(1)):
            self.advance()
            while _is_digit(self.peek()):
                self.advance()

        self.emit(TT.NUMBER, float(self.current_lexeme()))

    def scan_identifier(self):
        """Scan identifier or keyword"""
        while self.peek().isalnum() or self.peek() == '_':
            self.advance()

        token_type = self.KEYWORDS.get(self.current_lexeme(), TT.IDENT)
        self.emit(token_type)

    def scan_operator(self):
        """Scan operators and punctuation"""
        for op_str, op_type in self.OPERATORS:
            if self.source.startswith(op_str, self.pos):
                self.advance(len(op_str))
                self.emit(op_type)
                return

        ch = self.advance()
        self.error(f"Unexpected character '{ch}'.")

    # ========================================================================
    # Comments
    # ========================================================================

    def skip_line_comment(self):
        """Skip comment until end of line"""
        while not self.at_end() and self.peek() != '\n':
            self.advance()

    def skip_block_comment(self):
        """Skip /* ... */; the first closing marker ends the comment"""
        start_line = self.line
        self.advance(2)

        while not self.at_end():
            if self.peek() == '*' and self.peek(1) == '/':
                self.advance(2)
                return
            if self.advance() == '\n':
                self.line += 1

        self.error("Unterminated block comment.", start_line)

    # ========================================================================
    # Utilities
    # ========================================================================

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self, n: int = 1) -> str:
        """Consume n characters and return them as a string"""
        if n < 0:
            raise ValueError(f"advance() requires n >= 0, got {n}")
        result = self.source[self.pos:self.pos + n]
        self.pos += n
        return result

    def current_lexeme(self) -> str:
        return self.source[self.start:self.pos]

    def emit(self, token_type: TT, literal=None, line=None):
        """Emit a token for the current lexeme"""
        tok = Tok(
            type=token_type,
            lexeme=self.current_lexeme(),
            literal=literal,
            line=self.line if line is None else line,
        )
        self.tokens.append(tok)

    def error(self, message: str, line=None):
        self.errors.append(LexError(message, line=self.line if line is None else line))


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def tokenize(source: str) -> Tuple[List[Tok], List[LexError]]:
    """Convenience function: tokens plus every lexical error found"""
    lexer = Lexer(source)
    tokens = lexer.tokenize()
    return tokens, lexer.errors
