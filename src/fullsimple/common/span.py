"""Character offsets into program text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """Half-open ``[start, end)`` range of character offsets."""

    start: int
    end: int

    def extract(self, source: str) -> str:
        return source[self.start : self.end]

    def line_col(self, source: str) -> tuple[int, int]:
        """1-based line and column of ``start`` in ``source``."""

        before = source[: self.start]
        line = before.count("\n") + 1
        col = self.start - (before.rfind("\n") + 1) + 1
        return line, col
