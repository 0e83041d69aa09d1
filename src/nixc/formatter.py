"""Value-tree printer producing nixc source text.

The output always parses back to an equal tree. Values the grammar has
no spelling for (negative integers, non-finite floats, strings, let-in
expressions, keys that are not plain identifiers) raise ``FormatError``.
"""

from __future__ import annotations

import math

from nixc.errors import CompileError
from nixc.lexer import INT64_MAX, Lexer
from nixc.tokens import TokenKind
from nixc.values import AttrSet, Bool, Float, Integer, LetIn, List, Null, String, Value


class FormatError(ValueError):
    """Raised when a value has no textual form."""


class ValueFormatter:
    """Format a value tree back to canonical source text."""

    def format(self, value: Value) -> str:
        if isinstance(value, Null):
            return "null"
        if isinstance(value, Bool):
            return "true" if value.value else "false"
        if isinstance(value, Integer):
            return self._format_integer(value.value)
        if isinstance(value, Float):
            return self._format_float(value.value)
        if isinstance(value, List):
            return "[" + " ".join(self.format(item) for item in value.items) + "]"
        if isinstance(value, AttrSet):
            return "{" + ",".join(
                f"{self._format_key(key)}={self.format(v)}"
                for key, v in value.bindings.items()
            ) + "}"
        if isinstance(value, (String, LetIn)):
            raise FormatError(f"{type(value).__name__} values have no literal syntax")
        raise FormatError(f"not a value: {value!r}")

    def _format_integer(self, n: int) -> str:
        if n < 0:
            raise FormatError(f"negative integer {n} has no literal syntax")
        if n > INT64_MAX:
            raise FormatError(f"integer {n} does not fit in a signed 64-bit integer")
        return str(n)

    def _format_float(self, x: float) -> str:
        if not math.isfinite(x):
            raise FormatError(f"float {x!r} has no literal syntax")
        # repr always carries a '.' or an exponent, so it never reads back as an integer
        return repr(x)

    def _format_key(self, key: str) -> str:
        try:
            tokens = Lexer(key).lex()
        except CompileError:
            tokens = []
        if len(tokens) != 1 or tokens[0].kind is not TokenKind.IDENTIFIER:
            raise FormatError(f"attribute name {key!r} is not an identifier")
        return key
