"""Lexical scanner for tinylox.

The scanner is error tolerant: an unexpected character or an unterminated
string is recorded as a `ScanError` and scanning continues with the next
character, so a single pass reports every lexical problem in the source.
Callers check `had_error` once scanning is complete.
"""

from __future__ import annotations

from typing import Any, List, Tuple

from .errors import ScanError
from .tokens import KEYWORDS, Token, TokenKind


SINGLE_CHAR_TOKENS = {
    '(': TokenKind.LEFT_PAREN,
    ')': TokenKind.RIGHT_PAREN,
    '{': TokenKind.LEFT_BRACE,
    '}': TokenKind.RIGHT_BRACE,
    ',': TokenKind.COMMA,
    '.': TokenKind.DOT,
    '-': TokenKind.MINUS,
    '+': TokenKind.PLUS,
    ';': TokenKind.SEMICOLON,
    '*': TokenKind.STAR,
}

# operator -> (kind alone, kind when followed by '=')
EQUAL_SUFFIX_TOKENS = {
    '=': (TokenKind.EQUAL, TokenKind.EQUAL_EQUAL),
    '!': (TokenKind.BANG, TokenKind.BANG_EQUAL),
    '<': (TokenKind.LESS, TokenKind.LESS_EQUAL),
    '>': (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_identifier_start(c: str) -> bool:
    return c.isalpha() or c == '_'


def is_identifier_part(c: str) -> bool:
    return c.isalnum() or c == '_'


class Scanner:
    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.errors: List[ScanError] = []
        self.start = 0
        self.pos = 0
        self.line = 1

    @property
    def had_error(self) -> bool:
        return bool(self.errors)

    def scan_tokens(self) -> List[Token]:
        """Scan the whole source from the beginning.

        The returned list always ends with exactly one EOF token carrying
        the line count reached at the end of input.
        """
        self.tokens = []
        self.errors = []
        self.start = 0
        self.pos = 0
        self.line = 1
        while not self.at_end():
            self.start = self.pos
            self.scan_token()
        self.tokens.append(Token(TokenKind.EOF, '', None, self.line))
        return self.tokens

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def advance(self) -> str:
        c = self.source[self.pos]
        self.pos += 1
        return c

    def peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        if i < len(self.source):
            return self.source[i]
        return ''

    def add_token(self, kind: TokenKind, literal: Any = None):
        lexeme = self.source[self.start:self.pos]
        self.tokens.append(Token(kind, lexeme, literal, self.line))

    def report(self, line: int, message: str):
        self.errors.append(ScanError(line, message))

    def scan_token(self):
        c = self.advance()
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
            return
        if c in EQUAL_SUFFIX_TOKENS:
            single, double = EQUAL_SUFFIX_TOKENS[c]
            if self.peek() == '=':
                self.advance()
                self.add_token(double)
            else:
                self.add_token(single)
            return
        if c == '/':
            if self.peek() == '/':
                self.skip_line_comment()
            else:
                self.add_token(TokenKind.SLASH)
            return
        if c in (' ', '\r', '\t'):
            return
        if c == '\n':
            self.line += 1
            return
        if c == '"':
            self.scan_string()
            return
        if is_digit(c):
            self.scan_number()
            return
        if is_identifier_start(c):
            self.scan_identifier()
            return
        self.report(self.line, f"Unexpected character: {c}")

    def skip_line_comment(self):
        # the newline itself is left for scan_token so the line count stays in one place
        while not self.at_end() and self.peek() != '\n':
            self.advance()

    def scan_string(self):
        start_line = self.line
        while not self.at_end() and self.peek() != '"':
            if self.peek() == '\n':
                self.line += 1
            self.advance()
        if self.at_end():
            self.report(start_line, 'Unterminated string.')
            return
        self.advance()  # closing quote
        value = self.source[self.start + 1:self.pos - 1]
        # multi-line strings are reported on the line they start on
        self.tokens.append(Token(TokenKind.STRING, self.source[self.start:self.pos], value, start_line))

    def scan_number(self):
        while is_digit(self.peek()):
            self.advance()
        # a trailing '.' is only part of the number when a digit follows it
        if self.peek() == '.' and is_digit(self.peek(1)):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        self.add_token(TokenKind.NUMBER, float(self.source[self.start:self.pos]))

    def scan_identifier(self):
        while is_identifier_part(self.peek()):
            self.advance()
        text = self.source[self.start:self.pos]
        self.add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER))


def scan_tokens(source: str) -> Tuple[List[Token], List[ScanError]]:
    """Scan `source` and return its tokens together with any lexical errors."""
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    return tokens, scanner.errors
