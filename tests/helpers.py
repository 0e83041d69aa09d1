"""Shared test helpers for the nixc test suite."""

from __future__ import annotations

import pytest

from nixc.errors import LexError, LexErrorKind, ParseError, ParseErrorKind
from nixc.lexer import Lexer
from nixc.parser import parse
from nixc.tokens import TokenKind


def kinds(source: str) -> list[TokenKind]:
    """Lex source and return just the token kinds."""
    return [t.kind for t in Lexer(source).lex()]


def parse_fails(source: str, kind: ParseErrorKind) -> ParseError:
    """Parse source, asserting a parse error of the given kind."""
    with pytest.raises(ParseError) as excinfo:
        parse(source, "<test>")
    assert excinfo.value.kind is kind, excinfo.value.diagnostic.message
    return excinfo.value


def lex_fails(source: str, kind: LexErrorKind) -> LexError:
    """Lex source, asserting a lexical error of the given kind."""
    with pytest.raises(LexError) as excinfo:
        Lexer(source, "<test>").lex()
    assert excinfo.value.kind is kind, excinfo.value.diagnostic.message
    return excinfo.value
