"""Value predicates for the call-by-value evaluators."""

from __future__ import annotations

from ..ast import (
    TmAbs,
    TmFalse,
    TmRecord,
    TmSucc,
    TmTag,
    TmTrue,
    TmUnit,
    TmZero,
    Term,
)


def is_numeric_value(term: Term) -> bool:
    """Return ``True`` for ``0``, ``succ 0``, ``succ (succ 0)``..."""

    while isinstance(term, TmSucc):
        term = term.term
    return isinstance(term, TmZero)


def is_value(term: Term) -> bool:
    match term:
        case TmTrue() | TmFalse() | TmUnit() | TmAbs():
            return True
        case TmRecord(fields):
            return all(is_value(f.term) for f in fields)
        case TmTag(_, payload, _):
            return is_value(payload)
        case _:
            return is_numeric_value(term)


__all__ = ["is_numeric_value", "is_value"]
