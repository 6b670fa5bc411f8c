"""Shifting and substitution over De Bruijn indexed terms and types."""

from __future__ import annotations

from .ast import (
    CaseBranch,
    Field,
    TmAbs,
    TmApp,
    TmAscribe,
    TmCase,
    TmFalse,
    TmFix,
    TmFreeIdent,
    TmIf,
    TmIsZero,
    TmLet,
    TmPred,
    TmProj,
    TmRecord,
    TmSucc,
    TmTag,
    TmTrue,
    TmUnit,
    TmVar,
    TmZero,
    Term,
    TyArrow,
    TyBool,
    TyField,
    TyNamed,
    TyNat,
    TyRecord,
    TyUnit,
    TyVar,
    TyVariant,
    Type,
)


def type_shift(ty: Type, by: int, cutoff: int = 0) -> Type:
    """Shift free type variables in ``ty`` by ``by`` starting at ``cutoff``."""

    match ty:
        case TyVar(k):
            return TyVar(k + by) if k >= cutoff else ty
        case TyArrow(dom, cod):
            return TyArrow(type_shift(dom, by, cutoff), type_shift(cod, by, cutoff))
        case TyRecord(fields):
            return TyRecord(
                tuple(TyField(f.name, type_shift(f.ty, by, cutoff)) for f in fields)
            )
        case TyVariant(fields):
            return TyVariant(
                tuple(TyField(f.name, type_shift(f.ty, by, cutoff)) for f in fields)
            )
        case TyBool() | TyUnit() | TyNat() | TyNamed():
            return ty

    raise TypeError(f"Unexpected type in type_shift: {ty!r}")


def shift(term: Term, by: int, cutoff: int = 0) -> Term:
    """Shift free variables in ``term`` by ``by`` starting at ``cutoff``.

    Types embedded in the term share the index space and are shifted too.
    """

    match term:
        case TmVar(k):
            return TmVar(k + by) if k >= cutoff else term
        case TmAbs(name, ty, body):
            return TmAbs(name, type_shift(ty, by, cutoff), shift(body, by, cutoff + 1))
        case TmApp(fn, arg):
            return TmApp(shift(fn, by, cutoff), shift(arg, by, cutoff))
        case TmIf(cond, then, else_):
            return TmIf(
                shift(cond, by, cutoff),
                shift(then, by, cutoff),
                shift(else_, by, cutoff),
            )
        case TmAscribe(t, ty):
            return TmAscribe(shift(t, by, cutoff), type_shift(ty, by, cutoff))
        case TmTag(label, t, ty):
            return TmTag(label, shift(t, by, cutoff), type_shift(ty, by, cutoff))
        case TmCase(scrutinee, branches):
            return TmCase(
                shift(scrutinee, by, cutoff),
                tuple(
                    CaseBranch(b.label, b.name, shift(b.body, by, cutoff + 1))
                    for b in branches
                ),
            )
        case TmLet(name, bound, body):
            return TmLet(name, shift(bound, by, cutoff), shift(body, by, cutoff + 1))
        case TmRecord(fields):
            return TmRecord(
                tuple(Field(f.name, shift(f.term, by, cutoff)) for f in fields)
            )
        case TmProj(t, label):
            return TmProj(shift(t, by, cutoff), label)
        case TmFix(t):
            return TmFix(shift(t, by, cutoff))
        case TmSucc(t):
            return TmSucc(shift(t, by, cutoff))
        case TmPred(t):
            return TmPred(shift(t, by, cutoff))
        case TmIsZero(t):
            return TmIsZero(shift(t, by, cutoff))
        case TmTrue() | TmFalse() | TmUnit() | TmZero() | TmFreeIdent():
            return term

    raise TypeError(f"Unexpected term in shift: {term!r}")


def subst(term: Term, sub: Term, j: int = 0) -> Term:
    """Replace every ``TmVar(j)`` in ``term`` with ``sub``.

    Going under a binder bumps ``j`` and shifts ``sub`` up by one so its own
    free variables keep pointing at the same binders. Other indices are left
    alone; closing the gap is ``subst_top``'s job.
    """

    match term:
        case TmVar(k):
            return sub if k == j else term
        case TmAbs(name, ty, body):
            return TmAbs(name, ty, subst(body, shift(sub, 1), j + 1))
        case TmApp(fn, arg):
            return TmApp(subst(fn, sub, j), subst(arg, sub, j))
        case TmIf(cond, then, else_):
            return TmIf(subst(cond, sub, j), subst(then, sub, j), subst(else_, sub, j))
        case TmAscribe(t, ty):
            return TmAscribe(subst(t, sub, j), ty)
        case TmTag(label, t, ty):
            return TmTag(label, subst(t, sub, j), ty)
        case TmCase(scrutinee, branches):
            under = shift(sub, 1)
            return TmCase(
                subst(scrutinee, sub, j),
                tuple(
                    CaseBranch(b.label, b.name, subst(b.body, under, j + 1))
                    for b in branches
                ),
            )
        case TmLet(name, bound, body):
            return TmLet(name, subst(bound, sub, j), subst(body, shift(sub, 1), j + 1))
        case TmRecord(fields):
            return TmRecord(tuple(Field(f.name, subst(f.term, sub, j)) for f in fields))
        case TmProj(t, label):
            return TmProj(subst(t, sub, j), label)
        case TmFix(t):
            return TmFix(subst(t, sub, j))
        case TmSucc(t):
            return TmSucc(subst(t, sub, j))
        case TmPred(t):
            return TmPred(subst(t, sub, j))
        case TmIsZero(t):
            return TmIsZero(subst(t, sub, j))
        case TmTrue() | TmFalse() | TmUnit() | TmZero() | TmFreeIdent():
            return term

    raise TypeError(f"Unexpected term in subst: {term!r}")


def subst_top(value: Term, body: Term) -> Term:
    """Beta-reduce: substitute ``value`` for index 0 of ``body``.

    ``value`` is shifted up past the binder being removed, substituted, and the
    result shifted down to close the gap the binder leaves behind.
    """

    return shift(subst(body, shift(value, 1), 0), -1)


__all__ = ["type_shift", "shift", "subst", "subst_top"]
