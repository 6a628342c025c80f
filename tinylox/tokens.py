"""Token vocabulary for the tinylox language.

The scanner turns source text into a list of `Token` records. Every
token carries its kind, the raw lexeme it was scanned from, an optional
literal value (only for STRING and NUMBER) and the source line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict

from .types import to_string


class TokenKind(Enum):
    # Single-character punctuation
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One- or two-character operators
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    BANG = auto()
    BANG_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FOR = auto()
    FUN = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS: Dict[str, TokenKind] = {
    'and': TokenKind.AND,
    'class': TokenKind.CLASS,
    'else': TokenKind.ELSE,
    'false': TokenKind.FALSE,
    'for': TokenKind.FOR,
    'fun': TokenKind.FUN,
    'if': TokenKind.IF,
    'nil': TokenKind.NIL,
    'or': TokenKind.OR,
    'print': TokenKind.PRINT,
    'return': TokenKind.RETURN,
    'super': TokenKind.SUPER,
    'this': TokenKind.THIS,
    'true': TokenKind.TRUE,
    'var': TokenKind.VAR,
    'while': TokenKind.WHILE,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    literal: Any
    line: int

    def __str__(self) -> str:
        literal = 'null' if self.literal is None else to_string(self.literal)
        return f"{self.kind.name} {self.lexeme} {literal}"
