"""Errors raised while reading surface syntax."""

from __future__ import annotations

from dataclasses import dataclass

from fullsimple.common.span import Span
from fullsimple.core.errors import FullSimpleError


@dataclass
class SurfaceError(FullSimpleError):
    span: Span
    source: str | None = None

    def __str__(self) -> str:
        if self.source is None:
            return f"{self.message} at offset {self.span.start}"
        line, col = self.span.line_col(self.source)
        snippet = self.span.extract(self.source)
        if not snippet:
            return f"{self.message} at line {line}, column {col}"
        return f"{self.message} at line {line}, column {col}: {snippet!r}"


class LexError(SurfaceError):
    """A character sequence that is not a token."""


class ParseError(SurfaceError):
    """A token sequence the grammar does not accept."""


__all__ = ["SurfaceError", "LexError", "ParseError"]
