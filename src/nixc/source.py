"""Source text representation and span tracking for diagnostics."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Span:
    """A range within a source text.

    ``start``/``end`` are offsets into the text (end exclusive); the
    line/column fields are 1-based and ``end_col`` is inclusive.
    """

    file: str
    start: int
    end: int
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.file}:{self.start_line}:{self.start_col}"

    def __len__(self) -> int:
        return self.end - self.start


class SourceFile:
    """A named source text with line access for diagnostics."""

    def __init__(self, content: str, name: str = "<stdin>") -> None:
        self.name = name
        self.content = content
        self.lines = content.split("\n")
        self._line_starts = [0]
        for i, ch in enumerate(content):
            if ch == "\n":
                self._line_starts.append(i + 1)

    @classmethod
    def from_path(cls, path: Path) -> SourceFile:
        return cls(path.read_text(encoding="utf-8"), str(path))

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1]
        return ""

    def location(self, offset: int) -> tuple[int, int]:
        """Map an offset to a 1-based (line, column) pair."""
        line = bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1

    def span(self, start: int, end: int) -> Span:
        start_line, start_col = self.location(start)
        if end > start:
            end_line, end_col = self.location(end - 1)
        else:
            end_line, end_col = start_line, start_col - 1
        return Span(self.name, start, end, start_line, start_col, end_line, end_col)

    def span_text(self, span: Span) -> str:
        """Extract the text covered by a span."""
        return self.content[span.start : span.end]
