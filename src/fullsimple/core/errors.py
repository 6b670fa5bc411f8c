"""Error types raised by name resolution, type checking, and evaluation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FullSimpleError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


class ResolveError(FullSimpleError):
    """A surface name could not be turned into a De Bruijn index."""


class UnboundIdentifier(ResolveError):
    pass


class UnboundTypeIdentifier(ResolveError):
    pass


class TypingError(FullSimpleError, TypeError):
    """Base class for ill-typed terms."""


@dataclass
class TypeMismatch(TypingError):
    expected: str | None = None
    actual: str | None = None

    def __str__(self) -> str:
        if self.expected is None and self.actual is None:
            return self.message
        return (
            f"{self.message}:\n"
            f"  expected = {self.expected}\n"
            f"  actual   = {self.actual}"
        )


class LabelNotFound(TypingError):
    pass


class NonFunctionApplied(TypingError):
    pass


class NonRecordProjected(TypingError):
    pass


class NonVariantCased(TypingError):
    pass


class WrongBindingKind(TypingError):
    """A variable refers to a context entry that carries no term type."""


class NoRuleApplies(Exception):
    """Raised by the one-step evaluator when no reduction rule matches.

    This is how the normalizer recognises a normal form; it never reaches
    callers of ``normalize`` or ``evaluate``.
    """


__all__ = [
    "FullSimpleError",
    "ResolveError",
    "UnboundIdentifier",
    "UnboundTypeIdentifier",
    "TypingError",
    "TypeMismatch",
    "LabelNotFound",
    "NonFunctionApplied",
    "NonRecordProjected",
    "NonVariantCased",
    "WrongBindingKind",
    "NoRuleApplies",
]
