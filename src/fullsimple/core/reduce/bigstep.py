"""Big-step (natural semantics) call-by-value evaluation."""

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
from .values import is_numeric_value, is_value


def big_step(ctx: Context, term: Term) -> Term:
    """Evaluate ``term`` to a value in one recursive descent.

    When a subterm gets stuck the enclosing node is rebuilt around the stuck
    result, with the operands to its right left unevaluated. The result is
    therefore the same normal form ``normalize`` reaches one step at a time.
    """

    match term:
        case TmVar(k):
            if k < len(ctx):
                binding = ctx.lookup(k)
                if isinstance(binding, TmAbbBind):
                    return big_step(ctx, binding.term)
            return term

        case TmIf(cond, then, else_):
            match big_step(ctx, cond):
                case TmTrue():
                    return big_step(ctx, then)
                case TmFalse():
                    return big_step(ctx, else_)
                case stuck:
                    return TmIf(stuck, then, else_)

        case TmApp(fn, arg):
            fn_v = big_step(ctx, fn)
            if not is_value(fn_v):
                return TmApp(fn_v, arg)
            arg_v = big_step(ctx, arg)
            if isinstance(fn_v, TmAbs) and is_value(arg_v):
                return big_step(ctx, subst_top(arg_v, fn_v.body))
            return TmApp(fn_v, arg_v)

        case TmLet(name, bound, body):
            bound_v = big_step(ctx, bound)
            if is_value(bound_v):
                return big_step(ctx, subst_top(bound_v, body))
            return TmLet(name, bound_v, body)

        case TmAscribe(t, ty):
            v = big_step(ctx, t)
            return v if is_value(v) else TmAscribe(v, ty)

        case TmRecord(fields):
            evaluated: list[Field] = []
            for i, f in enumerate(fields):
                v = big_step(ctx, f.term)
                evaluated.append(Field(f.name, v))
                if not is_value(v):
                    return TmRecord(tuple(evaluated) + fields[i + 1 :])
            return TmRecord(tuple(evaluated))

        case TmProj(t, label):
            v = big_step(ctx, t)
            if isinstance(v, TmRecord) and is_value(v):
                i = find_label(v.fields, label)
                if i is not None:
                    return v.fields[i].term
            return TmProj(v, label)

        case TmTag(label, t, ty):
            return TmTag(label, big_step(ctx, t), ty)

        case TmCase(scrutinee, branches):
            v = big_step(ctx, scrutinee)
            if isinstance(v, TmTag) and is_value(v):
                branch = TmCase(v, branches).branch(v.label)
                if branch is not None:
                    return big_step(ctx, subst_top(v.term, branch.body))
            return TmCase(v, branches)

        case TmFix(t):
            v = big_step(ctx, t)
            if isinstance(v, TmAbs):
                return big_step(ctx, subst_top(TmFix(v), v.body))
            return TmFix(v)

        case TmSucc(t):
            return TmSucc(big_step(ctx, t))

        case TmPred(t):
            v = big_step(ctx, t)
            match v:
                case TmZero():
                    return v
                case TmSucc(nv) if is_numeric_value(nv):
                    return nv
            return TmPred(v)

        case TmIsZero(t):
            v = big_step(ctx, t)
            match v:
                case TmZero():
                    return TmTrue()
                case TmSucc(nv) if is_numeric_value(nv):
                    return TmFalse()
            return TmIsZero(v)

        case _:
            return term


__all__ = ["big_step"]
