"""Lexer for the nixc value language.

Produces a lazy stream of tokens from source text. A lone space is
significant (it separates list elements); every other run of
whitespace, and every ``//`` line comment, is dropped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from nixc.errors import LexError, LexErrorKind
from nixc.source import SourceFile
from nixc.tokens import KEYWORDS, PUNCTUATION, Token, TokenKind

logger = logging.getLogger(__name__)

INT64_MAX = 2**63 - 1

_WHITESPACE = frozenset(" \t\n\f")
_NUMBER_START = frozenset("0123456789+-.")
_FLOAT_SUFFIXES = "fFdD"

_DECIMAL = r"[0-9][_0-9]*"
_HEX = r"[0-9a-fA-F][_0-9a-fA-F]*"
_EXP = rf"[eE][+-]?{_DECIMAL}"

# Each rule is matched at the current position; the longest match wins.
_NUMBER_RULES: tuple[tuple[TokenKind, re.Pattern[str]], ...] = (
    (TokenKind.INTEGER, re.compile(_DECIMAL)),
    (TokenKind.HEX_INTEGER, re.compile(rf"0[xX]{_HEX}")),
    (TokenKind.OCTAL_INTEGER, re.compile(r"0[oO][0-7][_0-7]*")),
    (TokenKind.BINARY_INTEGER, re.compile(r"0[bB][01][_01]*")),
    (
        TokenKind.FLOAT,
        re.compile(
            rf"[+-]?(?:{_DECIMAL}\.(?:{_DECIMAL})?(?:{_EXP})?[fFdD]?"
            rf"|\.{_DECIMAL}(?:{_EXP})?[fFdD]?"
            rf"|{_DECIMAL}{_EXP}[fFdD]?"
            rf"|{_DECIMAL}(?:{_EXP})?[fFdD])"
        ),
    ),
    (
        TokenKind.HEX_FLOAT,
        re.compile(
            rf"0[xX](?:{_HEX}\.?|(?:{_HEX})?\.{_HEX})[pP][+-]?{_DECIMAL}[fFdD]?"
        ),
    ),
)


def _is_ident_start(ch: str) -> bool:
    return ch.isidentifier()


def _is_ident_continue(ch: str) -> bool:
    return ("_" + ch).isidentifier()


class Lexer:
    """Tokenizes nixc source text, one token at a time."""

    def __init__(self, source: str, filename: str = "<stdin>") -> None:
        self.file = SourceFile(source, filename)
        self.source = source
        self.pos = 0

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        return list(self.tokens())

    def tokens(self) -> Iterator[Token]:
        """Yield tokens until the source is exhausted.

        Raises:
            LexError: at the first position that matches no token rule,
                or when a decimal integer does not fit in 64 bits.
        """
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch in _WHITESPACE:
                tok = self._lex_whitespace()
            elif ch == "/" and self._peek(1) == "/":
                self._skip_line_comment()
                continue
            elif ch in _NUMBER_START:
                tok = self._lex_number()
            elif _is_ident_start(ch):
                tok = self._lex_identifier()
            else:
                tok = self._lex_punct()
            if tok is not None:
                logger.debug("lexed %s %r at %s", tok.kind.name, tok.value, tok.span)
                yield tok

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return "\0"

    def _emit(self, kind: TokenKind, start: int, literal: int | float | bool | None = None) -> Token:
        return Token(kind, self.source[start : self.pos], self.file.span(start, self.pos), literal)

    def _error(
        self,
        kind: LexErrorKind,
        message: str,
        start: int,
        end: int,
        notes: list[str] | None = None,
    ) -> LexError:
        logger.debug("%s at offset %d: %s", kind.name, start, message)
        return LexError(kind, message, self.file.span(start, end), self.file, notes)

    # ── Whitespace and comments ───────────────────────────────────

    def _lex_whitespace(self) -> Token | None:
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in _WHITESPACE:
            self.pos += 1
        if self.source[start : self.pos] == " ":
            return self._emit(TokenKind.SPACE, start)
        return None

    def _skip_line_comment(self) -> None:
        end = self.source.find("\n", self.pos)
        self.pos = len(self.source) if end == -1 else end + 1

    # ── Numbers ──────────────────────────────────────────────────

    def _lex_number(self) -> Token:
        start = self.pos
        best_kind: TokenKind | None = None
        best_end = start
        for kind, pattern in _NUMBER_RULES:
            m = pattern.match(self.source, start)
            if m is not None and m.end() > best_end:
                best_kind, best_end = kind, m.end()

        if best_kind is None:
            raise self._error(
                LexErrorKind.INVALID_TOKEN,
                f"unexpected character: {self.source[start]!r}",
                start, start + 1,
            )

        self.pos = best_end
        text = self.source[start:best_end]
        match best_kind:
            case TokenKind.INTEGER:
                value = int(text.replace("_", ""))
                if value > INT64_MAX:
                    raise self._error(
                        LexErrorKind.INTEGER_OVERFLOW,
                        f"integer literal {text} does not fit in a signed 64-bit integer",
                        start, best_end,
                        [f"the largest integer literal is {INT64_MAX}"],
                    )
                return self._emit(TokenKind.INTEGER, start, value)
            case TokenKind.FLOAT:
                digits = text.replace("_", "")
                if digits[-1] in _FLOAT_SUFFIXES:
                    digits = digits[:-1]
                return self._emit(TokenKind.FLOAT, start, float(digits))
            case _:
                return self._emit(best_kind, start)

    # ── Identifiers and Keywords ─────────────────────────────────

    def _lex_identifier(self) -> Token:
        start = self.pos
        self.pos += 1
        while self.pos < len(self.source) and _is_ident_continue(self.source[self.pos]):
            self.pos += 1
        word = self.source[start : self.pos]

        kind = KEYWORDS.get(word)
        if kind is TokenKind.BOOLEAN:
            return self._emit(kind, start, word == "true")
        if kind is not None:
            return self._emit(kind, start)
        return self._emit(TokenKind.IDENTIFIER, start)

    # ── Punctuation ──────────────────────────────────────────────

    def _lex_punct(self) -> Token:
        start = self.pos
        ch = self.source[start]
        kind = PUNCTUATION.get(ch)
        if kind is None:
            raise self._error(
                LexErrorKind.INVALID_TOKEN, f"unexpected character: {ch!r}", start, start + 1,
            )
        self.pos += 1
        return self._emit(kind, start)
