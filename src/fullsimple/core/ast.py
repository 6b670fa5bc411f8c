"""Abstract syntax tree nodes for terms and types of the extended STLC."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TyBool:
    """The type of booleans."""


@dataclass(frozen=True)
class TyUnit:
    """The type with the single value ``unit``."""


@dataclass(frozen=True)
class TyNat:
    """The type of natural numbers."""


@dataclass(frozen=True)
class TyArrow:
    """Function type ``dom -> cod``."""

    dom: Type
    cod: Type


@dataclass(frozen=True)
class TyField:
    """A labelled component of a record or variant type.

    Args:
        name: Field label. ``None`` marks a positional record field.
        ty: Type of the component.
    """

    name: str | None
    ty: Type


@dataclass(frozen=True)
class TyRecord:
    """Record type. Field order is kept but does not matter for equality."""

    fields: tuple[TyField, ...] = ()


@dataclass(frozen=True)
class TyVariant:
    """Variant (tagged sum) type. Field order matters for equality."""

    fields: tuple[TyField, ...] = ()

    def __post_init__(self) -> None:
        if any(f.name is None for f in self.fields):
            raise ValueError("Variant fields must be labelled")


@dataclass(frozen=True)
class TyNamed:
    """A type name as written in the source, before resolution."""

    name: str


@dataclass(frozen=True)
class TyVar:
    """De Bruijn reference to a type variable or type abbreviation binding."""

    index: int

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("De Bruijn indices must be non-negative")


type Type = TyBool | TyUnit | TyNat | TyArrow | TyRecord | TyVariant | TyNamed | TyVar


# ---------------------------------------------------------------------------
# Terms
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TmTrue:
    pass


@dataclass(frozen=True)
class TmFalse:
    pass


@dataclass(frozen=True)
class TmIf:
    cond: Term
    then: Term
    else_: Term


@dataclass(frozen=True)
class TmVar:
    """De Bruijn variable pointing to the binder at ``index``.

    Args:
        index: Zero-based index counting binders outward from the use site.
            ``0`` refers to the innermost binder, ``1`` to the next, etc.
    """

    index: int

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("De Bruijn indices must be non-negative")


@dataclass(frozen=True)
class TmFreeIdent:
    """A variable name as written in the source, before resolution."""

    name: str


@dataclass(frozen=True)
class TmAbs:
    """Lambda abstraction with an explicitly typed parameter.

    Args:
        name: Source name of the parameter, kept for printing only.
        ty: Type of the parameter.
        body: Term with the parameter in scope at index 0.
    """

    name: str
    ty: Type
    body: Term


@dataclass(frozen=True)
class TmApp:
    fn: Term
    arg: Term


@dataclass(frozen=True)
class TmAscribe:
    term: Term
    ty: Type


@dataclass(frozen=True)
class TmTag:
    """Injection ``<label=term> as ty`` into a variant type."""

    label: str
    term: Term
    ty: Type


@dataclass(frozen=True)
class CaseBranch:
    """One ``<label=name> => body`` alternative of a case expression.

    ``body`` has the payload bound at index 0.
    """

    label: str
    name: str
    body: Term


@dataclass(frozen=True)
class TmCase:
    scrutinee: Term
    branches: tuple[CaseBranch, ...]

    def branch(self, label: str) -> CaseBranch | None:
        for branch in self.branches:
            if branch.label == label:
                return branch
        return None


@dataclass(frozen=True)
class TmUnit:
    pass


@dataclass(frozen=True)
class TmLet:
    """``let name = bound in body``; ``body`` sees the binding at index 0."""

    name: str
    bound: Term
    body: Term


@dataclass(frozen=True)
class Field:
    """A record component. ``name`` is ``None`` for positional fields."""

    name: str | None
    term: Term


@dataclass(frozen=True)
class TmRecord:
    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class TmProj:
    term: Term
    label: str


@dataclass(frozen=True)
class TmFix:
    term: Term


@dataclass(frozen=True)
class TmZero:
    pass


@dataclass(frozen=True)
class TmSucc:
    term: Term


@dataclass(frozen=True)
class TmPred:
    term: Term


@dataclass(frozen=True)
class TmIsZero:
    term: Term


type Term = (
    TmTrue
    | TmFalse
    | TmIf
    | TmVar
    | TmFreeIdent
    | TmAbs
    | TmApp
    | TmAscribe
    | TmTag
    | TmCase
    | TmUnit
    | TmLet
    | TmRecord
    | TmProj
    | TmFix
    | TmZero
    | TmSucc
    | TmPred
    | TmIsZero
)


# ---------------------------------------------------------------------------
# Labels and numerals
# ---------------------------------------------------------------------------


def effective_label(position: int, name: str | None) -> str:
    """Return the label a field answers to.

    Named fields answer to their name; positional fields answer to their
    1-based position, so ``{0, true}.2`` selects ``true``.
    """

    return name if name is not None else str(position + 1)


def find_label(fields: Sequence[Field | TyField], label: str) -> int | None:
    """Return the position of the field labelled ``label``, if any."""

    for i, f in enumerate(fields):
        if effective_label(i, f.name) == label:
            return i
    return None


def numeral(n: int) -> Term:
    """Build the numeral ``succ (succ ... 0)`` for ``n``."""

    if n < 0:
        raise ValueError("Numerals must be non-negative")
    term: Term = TmZero()
    for _ in range(n):
        term = TmSucc(term)
    return term


__all__ = [
    "Type",
    "TyBool",
    "TyUnit",
    "TyNat",
    "TyArrow",
    "TyField",
    "TyRecord",
    "TyVariant",
    "TyNamed",
    "TyVar",
    "Term",
    "TmTrue",
    "TmFalse",
    "TmIf",
    "TmVar",
    "TmFreeIdent",
    "TmAbs",
    "TmApp",
    "TmAscribe",
    "TmTag",
    "CaseBranch",
    "TmCase",
    "TmUnit",
    "TmLet",
    "Field",
    "TmRecord",
    "TmProj",
    "TmFix",
    "TmZero",
    "TmSucc",
    "TmPred",
    "TmIsZero",
    "effective_label",
    "find_label",
    "numeral",
]
