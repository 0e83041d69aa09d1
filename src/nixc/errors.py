"""Rust-style colored diagnostic rendering and the errors that carry it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nixc.source import SourceFile, Span


# ANSI color codes
_RED = "\033[1;31m"
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a specific source location."""

    span: Span
    message: str


@dataclass
class Diagnostic:
    """A single error message with the source it points into."""

    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    source: SourceFile | None = None


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic) -> str:
        lines: list[str] = []

        # Header: error[E201]: message
        lines.append(
            f"{self._c(_RED)}error[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            span = label.span
            lines.append(f"  {self._c(_BLUE)}-->{self._c(_RESET)} {span}")
            gutter = f"{span.start_line:>4}"
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")

            if diag.source is not None:
                source_line = diag.source.line_at(span.start_line)
                lines.append(
                    f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} {source_line}"
                )
                # Multi-line spans are underlined to the end of their first line
                if span.start_line == span.end_line:
                    last_col = span.end_col
                else:
                    last_col = len(source_line)
                caret_len = max(1, last_col - span.start_col + 1)
                padding = " " * (span.start_col - 1)
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                    f"{padding}{self._c(_RED)}{'^' * caret_len}{self._c(_RESET)}"
                )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(_RED)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


class CompileError(Exception):
    """Error carrying the diagnostics that stopped lexing or parsing."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")

    @property
    def diagnostic(self) -> Diagnostic:
        return self.diagnostics[0]

    @property
    def span(self) -> Span:
        return self.diagnostics[0].labels[0].span


class LexErrorKind(Enum):
    INVALID_TOKEN = "E100"
    INTEGER_OVERFLOW = "E101"


class LexError(CompileError):
    """The source text matches no token rule at some position."""

    def __init__(
        self,
        kind: LexErrorKind,
        message: str,
        span: Span,
        source: SourceFile,
        notes: list[str] | None = None,
    ) -> None:
        self.kind = kind
        super().__init__([
            Diagnostic(
                code=kind.value,
                message=f"lexer error: {message}",
                labels=[DiagnosticLabel(span=span, message="this bit here")],
                notes=notes or [],
                source=source,
            )
        ])


class ParseErrorKind(Enum):
    EMPTY_VALUE = "E200"
    UNEXPECTED_TOKEN = "E201"
    UNTERMINATED_LIST = "E202"
    UNTERMINATED_ATTRSET = "E203"
    EXPECTED_EQUALS = "E204"
    UNSUPPORTED_LITERAL = "E205"
    NESTING_TOO_DEEP = "E206"


class ParseError(CompileError):
    """The token stream does not form a value."""

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        span: Span,
        source: SourceFile,
        notes: list[str] | None = None,
    ) -> None:
        self.kind = kind
        super().__init__([
            Diagnostic(
                code=kind.value,
                message=f"parse error: {message}",
                labels=[DiagnosticLabel(span=span, message="this right here")],
                notes=notes or [],
                source=source,
            )
        ])
