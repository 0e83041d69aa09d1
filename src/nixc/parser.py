"""Parser for the nixc value language.

Recursive descent over the lexer's token stream. Each token is read
exactly once; there is no lookahead buffer and no error recovery, so the
first failure aborts the parse.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import cast

from nixc.errors import ParseError, ParseErrorKind
from nixc.lexer import Lexer
from nixc.source import SourceFile, Span
from nixc.tokens import UNCONVERTED_LITERALS, Token, TokenKind
from nixc.values import AttrSet, Bool, Float, Integer, List, Null, Value

logger = logging.getLogger(__name__)

_SCALARS = frozenset({
    TokenKind.NULL,
    TokenKind.BOOLEAN,
    TokenKind.INTEGER,
    TokenKind.FLOAT,
}) | UNCONVERTED_LITERALS

# Lists and attrsets may nest this many levels; each level is one Python frame.
MAX_DEPTH = 256

_LIST_SEPARATOR_NOTE = "list elements are separated by exactly one space"


class Parser:
    """Parses a token stream into a single nixc value.

    Error spans are the span of the last token consumed before the
    failing production started: the opening bracket or brace for lists
    and attrsets, the preceding token (or an empty span at offset 0) for
    a bare value.
    """

    def __init__(self, tokens: Iterable[Token], file: SourceFile) -> None:
        self._tokens = iter(tokens)
        self.file = file
        self._span = file.span(0, 0)
        self._depth = 0

    # ── Token access ─────────────────────────────────────────────

    def _next(self) -> Token | None:
        tok = next(self._tokens, None)
        if tok is not None:
            self._span = tok.span
        return tok

    def _error(
        self,
        kind: ParseErrorKind,
        message: str,
        span: Span,
        notes: list[str] | None = None,
    ) -> ParseError:
        logger.debug("%s at %s: %s", kind.name, span, message)
        return ParseError(kind, message, span, self.file, notes)

    def _enter(self, span: Span) -> None:
        if self._depth >= MAX_DEPTH:
            raise self._error(
                ParseErrorKind.NESTING_TOO_DEEP,
                f"lists and attrsets nest deeper than {MAX_DEPTH} levels",
                span,
            )
        self._depth += 1

    # ── Productions ──────────────────────────────────────────────

    def parse_value(self) -> Value:
        """Parse exactly one value from the stream."""
        span = self._span
        tok = self._next()
        if tok is None:
            raise self._error(ParseErrorKind.EMPTY_VALUE, "empty values are not allowed", span)

        match tok.kind:
            case TokenKind.LBRACE:
                return self.parse_attrset()
            case TokenKind.LBRACKET:
                return self.parse_list()
            case kind if kind in _SCALARS:
                return self._scalar(tok, span)
            case _:
                raise self._error(
                    ParseErrorKind.UNEXPECTED_TOKEN,
                    f"unexpected token {tok.value!r} (context: value)",
                    span,
                )

    def parse_list(self) -> List:
        """Parse the elements of a list whose ``[`` was just consumed."""
        span = self._span
        logger.debug("entering list at %s", span)
        self._enter(span)
        items: list[Value] = []
        awaits_space = False
        awaits_value = False

        while (tok := self._next()) is not None:
            match tok.kind:
                case TokenKind.RBRACKET if not awaits_value:
                    self._depth -= 1
                    return List(items)
                case TokenKind.SPACE if awaits_space:
                    awaits_value = True
                case TokenKind.LBRACKET if not awaits_space:
                    items.append(self.parse_list())
                    awaits_value = False
                case TokenKind.LBRACE if not awaits_space:
                    items.append(self.parse_attrset())
                    awaits_value = False
                case kind if kind in _SCALARS and not awaits_space:
                    items.append(self._scalar(tok, span))
                    awaits_value = False
                case _:
                    notes = []
                    if awaits_space or awaits_value or tok.kind is TokenKind.SPACE:
                        notes.append(_LIST_SEPARATOR_NOTE)
                    raise self._error(
                        ParseErrorKind.UNEXPECTED_TOKEN,
                        f"unexpected token {tok.value!r} (context: list)",
                        span,
                        notes,
                    )
            awaits_space = not awaits_value

        raise self._error(
            ParseErrorKind.UNTERMINATED_LIST,
            "unmatched opening bracket (context: list)",
            span,
        )

    def parse_attrset(self) -> AttrSet:
        """Parse the bindings of an attrset whose ``{`` was just consumed."""
        span = self._span
        logger.debug("entering attrset at %s", span)
        self._enter(span)
        bindings: dict[str, Value] = {}
        awaits_comma = False
        awaits_key = False

        while (tok := self._next()) is not None:
            match tok.kind:
                case TokenKind.RBRACE if not awaits_key:
                    self._depth -= 1
                    return AttrSet(bindings)
                case TokenKind.COMMA if awaits_comma:
                    awaits_key = True
                case TokenKind.IDENTIFIER if not awaits_comma:
                    equals = self._next()
                    if equals is None or equals.kind is not TokenKind.EQUALS:
                        raise self._error(
                            ParseErrorKind.EXPECTED_EQUALS,
                            f"expected '=' after {tok.value!r} (context: attrset)",
                            span,
                        )
                    bindings[tok.value] = self.parse_value()
                    awaits_key = False
                case _:
                    notes = []
                    if awaits_key and tok.kind is TokenKind.RBRACE:
                        notes.append("trailing commas are not allowed")
                    raise self._error(
                        ParseErrorKind.UNEXPECTED_TOKEN,
                        f"unexpected token {tok.value!r} (context: attrset)",
                        span,
                        notes,
                    )
            awaits_comma = not awaits_key

        raise self._error(
            ParseErrorKind.UNTERMINATED_ATTRSET,
            "unmatched opening brace (context: attrset)",
            span,
        )

    def _scalar(self, tok: Token, span: Span) -> Value:
        match tok.kind:
            case TokenKind.NULL:
                return Null()
            case TokenKind.BOOLEAN:
                return Bool(bool(tok.literal))
            case TokenKind.INTEGER:
                return Integer(cast(int, tok.literal))
            case TokenKind.FLOAT:
                return Float(cast(float, tok.literal))
            case _:
                raise self._error(
                    ParseErrorKind.UNSUPPORTED_LITERAL,
                    f"unsupported literal {tok.value!r}",
                    span,
                    ["hexadecimal, octal and binary integers and hexadecimal "
                     "floats are recognized but not converted"],
                )


def parse(source: str, filename: str = "<stdin>") -> Value:
    """Lex and parse ``source`` into a single value.

    Raises:
        LexError: If the source contains text that matches no token.
        ParseError: If the tokens do not form a value.
    """
    lexer = Lexer(source, filename)
    return Parser(lexer, lexer.file).parse_value()
