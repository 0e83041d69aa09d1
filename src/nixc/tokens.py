"""Token kinds and token representation for the nixc lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nixc.source import Span


class TokenKind(Enum):
    # Whitespace
    SPACE = auto()

    # Literals
    INTEGER = auto()
    HEX_INTEGER = auto()
    OCTAL_INTEGER = auto()
    BINARY_INTEGER = auto()
    FLOAT = auto()
    HEX_FLOAT = auto()
    BOOLEAN = auto()

    # Punctuation
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    COLON = auto()
    COMMA = auto()
    SEMICOLON = auto()
    EQUALS = auto()

    # Keywords
    NULL = auto()
    LET = auto()
    IN = auto()

    # Identifiers
    IDENTIFIER = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    span: Span
    literal: int | float | bool | None = None


KEYWORDS: dict[str, TokenKind] = {
    "true": TokenKind.BOOLEAN,
    "false": TokenKind.BOOLEAN,
    "null": TokenKind.NULL,
    "let": TokenKind.LET,
    "in": TokenKind.IN,
}

PUNCTUATION: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "=": TokenKind.EQUALS,
}

# Recognized by the lexer but never converted to a number.
UNCONVERTED_LITERALS: frozenset[TokenKind] = frozenset({
    TokenKind.HEX_INTEGER,
    TokenKind.OCTAL_INTEGER,
    TokenKind.BINARY_INTEGER,
    TokenKind.HEX_FLOAT,
})
