"""nixc: parser for a Nix-like literal value language."""

from __future__ import annotations

__version__ = "0.1.0"

from nixc.errors import CompileError, LexError, ParseError  # noqa: E402
from nixc.parser import Parser, parse  # noqa: E402
from nixc.values import Value  # noqa: E402

__all__ = [
    "CompileError",
    "LexError",
    "ParseError",
    "Parser",
    "Value",
    "__version__",
    "parse",
]
