"""Single-step call-by-value reduction."""

from __future__ import annotations

from ..ast import (
    Field,
    TmAbs,
    TmApp,
    TmAscribe,
    TmCase,
    TmFalse,
    TmFix,
    TmIf,
    TmIsZero,
    TmLet,
    TmPred,
    TmProj,
    TmRecord,
    TmSucc,
    TmTag,
    TmTrue,
    TmVar,
    TmZero,
    Term,
    find_label,
)
from ..context import Context, TmAbbBind
from ..debruijn import subst_top
from ..errors import NoRuleApplies
from .values import is_numeric_value, is_value


def _step_record(ctx: Context, fields: tuple[Field, ...]) -> TmRecord:
    # Advance the leftmost non-value field; the others are shared, not copied.
    for i, f in enumerate(fields):
        if not is_value(f.term):
            advanced = Field(f.name, step(ctx, f.term))
            return TmRecord(fields[:i] + (advanced,) + fields[i + 1 :])
    raise NoRuleApplies()


def step(ctx: Context, term: Term) -> Term:
    """Perform one call-by-value reduction step on ``term``.

    Raises:
        NoRuleApplies: ``term`` is a value, or a stuck non-value.
    """

    match term:
        case TmIf(TmTrue(), then, _):
            return then
        case TmIf(TmFalse(), _, else_):
            return else_
        case TmIf(cond, then, else_):
            return TmIf(step(ctx, cond), then, else_)

        case TmVar(k):
            if k < len(ctx):
                binding = ctx.lookup(k)
                if isinstance(binding, TmAbbBind):
                    return binding.term
            raise NoRuleApplies()

        case TmApp(TmAbs(_, _, body), arg) if is_value(arg):
            return subst_top(arg, body)
        case TmApp(fn, arg) if is_value(fn):
            return TmApp(fn, step(ctx, arg))
        case TmApp(fn, arg):
            return TmApp(step(ctx, fn), arg)

        case TmLet(_, bound, body) if is_value(bound):
            return subst_top(bound, body)
        case TmLet(name, bound, body):
            return TmLet(name, step(ctx, bound), body)

        case TmAscribe(t, _) if is_value(t):
            return t
        case TmAscribe(t, ty):
            return TmAscribe(step(ctx, t), ty)

        case TmRecord(fields):
            return _step_record(ctx, fields)

        case TmProj(TmRecord(fields) as record, label) if is_value(record):
            i = find_label(fields, label)
            if i is None:
                raise NoRuleApplies()
            return fields[i].term
        case TmProj(t, label):
            return TmProj(step(ctx, t), label)

        case TmTag(label, t, ty) if not is_value(t):
            return TmTag(label, step(ctx, t), ty)

        case TmCase(TmTag(label, payload, _) as tag, branches) if is_value(tag):
            for branch in branches:
                if branch.label == label:
                    return subst_top(payload, branch.body)
            raise NoRuleApplies()
        case TmCase(scrutinee, branches):
            return TmCase(step(ctx, scrutinee), branches)

        case TmFix(TmAbs(_, _, body)):
            return subst_top(term, body)
        case TmFix(t) if not is_value(t):
            return TmFix(step(ctx, t))

        case TmSucc(t):
            return TmSucc(step(ctx, t))
        case TmPred(TmZero()):
            return TmZero()
        case TmPred(TmSucc(nv)) if is_numeric_value(nv):
            return nv
        case TmPred(t):
            return TmPred(step(ctx, t))
        case TmIsZero(TmZero()):
            return TmTrue()
        case TmIsZero(TmSucc(nv)) if is_numeric_value(nv):
            return TmFalse()
        case TmIsZero(t):
            return TmIsZero(step(ctx, t))

    raise NoRuleApplies()


__all__ = ["step"]
