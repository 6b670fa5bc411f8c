"""Pretty-printing of terms and types, by index or by name."""

from __future__ import annotations

from enum import Enum

from .ast import (
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
    TyNamed,
    TyNat,
    TyRecord,
    TyUnit,
    TyVar,
    TyVariant,
    Type,
)
from .context import Context, pick_fresh_name


class RenderStyle(Enum):
    DEBRUIJN = "debruijn"
    NAMED = "named"


def _index_name(ctx: Context | None, k: int) -> str:
    if ctx is None:
        return str(k)
    if k < len(ctx):
        return ctx.name_of(k)
    return f"#{k}"


def _fmt_type(ty: Type, ctx: Context | None) -> str:
    match ty:
        case TyBool():
            return "Bool"
        case TyNat():
            return "Nat"
        case TyUnit():
            return "Unit"
        case TyVar(k):
            return _index_name(ctx, k)
        case TyNamed(name):
            return name
        case TyArrow(dom, cod):
            dom_text = _fmt_type(dom, ctx)
            if isinstance(dom, TyArrow):
                dom_text = f"({dom_text})"
            return f"{dom_text}->{_fmt_type(cod, ctx)}"
        case TyRecord(fields):
            parts = [
                _fmt_type(f.ty, ctx) if f.name is None else f"{f.name}:{_fmt_type(f.ty, ctx)}"
                for f in fields
            ]
            return "{" + ", ".join(parts) + "}"
        case TyVariant(fields):
            parts = [f"{f.name}:{_fmt_type(f.ty, ctx)}" for f in fields]
            return "<" + ", ".join(parts) + ">"

    raise TypeError(f"Cannot pretty-print unknown type: {ty!r}")


def _bind(ctx: Context | None, name: str) -> tuple[Context | None, str]:
    if ctx is None:
        return None, name
    return pick_fresh_name(ctx, name)


def _fmt(t: Term, ctx: Context | None) -> str:
    match t:
        case TmTrue():
            return "true"
        case TmFalse():
            return "false"
        case TmUnit():
            return "unit"
        case TmZero():
            return "0"
        case TmVar(k):
            return _index_name(ctx, k)
        case TmFreeIdent(name):
            return name
        case TmIf(cond, then, else_):
            return f"if {_fmt(cond, ctx)} then {_fmt(then, ctx)} else {_fmt(else_, ctx)}"
        case TmAbs(name, ty, body):
            inner, fresh = _bind(ctx, name)
            binder = "" if ctx is None else fresh
            return f"(λ{binder}:{_fmt_type(ty, ctx)}.{_fmt(body, inner)})"
        case TmApp(fn, arg):
            return f"({_fmt(fn, ctx)} {_fmt(arg, ctx)})"
        case TmAscribe(term, ty):
            return f"{_fmt(term, ctx)} as {_fmt_type(ty, ctx)}"
        case TmTag(label, term, ty):
            return f"<{label}={_fmt(term, ctx)}> as {_fmt_type(ty, ctx)}"
        case TmCase(scrutinee, branches):
            alts = []
            for branch in branches:
                inner, fresh = _bind(ctx, branch.name)
                alts.append(f"<{branch.label}={fresh}>=>{_fmt(branch.body, inner)}")
            return f"case {_fmt(scrutinee, ctx)} of {" | ".join(alts)}"
        case TmLet(name, bound, body):
            inner, fresh = _bind(ctx, name)
            return f"let {fresh}={_fmt(bound, ctx)} in {_fmt(body, inner)}"
        case TmRecord(fields):
            parts = [
                _fmt(f.term, ctx) if f.name is None else f"{f.name}={_fmt(f.term, ctx)}"
                for f in fields
            ]
            return "{" + ", ".join(parts) + "}"
        case TmProj(term, label):
            return f"{_fmt(term, ctx)}.{label}"
        case TmFix(term):
            return f"fix {_fmt(term, ctx)}"
        case TmSucc(term):
            return f"succ {_fmt(term, ctx)}"
        case TmPred(term):
            return f"pred {_fmt(term, ctx)}"
        case TmIsZero(term):
            return f"iszero {_fmt(term, ctx)}"

    raise TypeError(f"Cannot pretty-print unknown term: {t!r}")


def render(ctx: Context, term: Term) -> str:
    """Render ``term`` with source names, renaming binders that would clash."""

    return _fmt(term, ctx)


def render_debruijn(term: Term) -> str:
    """Render ``term`` with raw De Bruijn indices."""

    return _fmt(term, None)


def render_type(ctx: Context, ty: Type) -> str:
    return _fmt_type(ty, ctx)


def render_type_debruijn(ty: Type) -> str:
    return _fmt_type(ty, None)


def render_in(ctx: Context, node: Term | Type, style: RenderStyle) -> str:
    """Render a term or a type in the requested ``style``."""

    named = None if style is RenderStyle.DEBRUIJN else ctx
    if isinstance(node, (TyBool, TyNat, TyUnit, TyVar, TyNamed, TyArrow, TyRecord, TyVariant)):
        return _fmt_type(node, named)
    return _fmt(node, named)


__all__ = [
    "RenderStyle",
    "render",
    "render_debruijn",
    "render_type",
    "render_type_debruijn",
    "render_in",
]
