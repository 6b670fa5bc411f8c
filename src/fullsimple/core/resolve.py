"""Name resolution: turn named terms and types into De Bruijn indexed ones."""

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
from .commands import Bind, Command, Eval
from .context import (
    Binding,
    Context,
    NameBind,
    TmAbbBind,
    TyAbbBind,
    TyVarBind,
    VarBind,
)
from .errors import UnboundIdentifier, UnboundTypeIdentifier


def resolve_type(ctx: Context, ty: Type) -> Type:
    """Replace every ``TyNamed`` in ``ty`` with a ``TyVar`` index into ``ctx``."""

    match ty:
        case TyNamed(name):
            i = ctx.index_of(name)
            if i is None:
                raise UnboundTypeIdentifier(f"Undefined type {name}")
            if not isinstance(ctx[i].binding, (TyVarBind, TyAbbBind)):
                raise UnboundTypeIdentifier(f"{name} is not a type name")
            return TyVar(i)
        case TyArrow(dom, cod):
            return TyArrow(resolve_type(ctx, dom), resolve_type(ctx, cod))
        case TyRecord(fields):
            return TyRecord(tuple(TyField(f.name, resolve_type(ctx, f.ty)) for f in fields))
        case TyVariant(fields):
            return TyVariant(tuple(TyField(f.name, resolve_type(ctx, f.ty)) for f in fields))
        case TyBool() | TyNat() | TyUnit() | TyVar():
            return ty

    raise TypeError(f"Unexpected type in resolve_type: {ty!r}")


def resolve_term(ctx: Context, term: Term) -> Term:
    """Replace every ``TmFreeIdent`` in ``term`` with a ``TmVar`` index.

    Binders extend ``ctx`` with a bare name for their own body only. In
    ``let x = fix (λf:T. b) in ...`` the name ``x`` is also in scope in ``b``,
    where it stands for the fixpoint parameter.
    """

    match term:
        case TmFreeIdent(name):
            i = ctx.index_of(name)
            if i is None:
                raise UnboundIdentifier(f"Undefined variable {name}")
            if isinstance(ctx[i].binding, (TyVarBind, TyAbbBind)):
                raise UnboundIdentifier(f"{name} is a type, not a variable")
            return TmVar(i)
        case TmAbs(name, ty, body):
            return TmAbs(name, resolve_type(ctx, ty), resolve_term(ctx.add_name(name), body))
        case TmApp(fn, arg):
            return TmApp(resolve_term(ctx, fn), resolve_term(ctx, arg))
        case TmIf(cond, then, else_):
            return TmIf(
                resolve_term(ctx, cond),
                resolve_term(ctx, then),
                resolve_term(ctx, else_),
            )
        case TmAscribe(t, ty):
            return TmAscribe(resolve_term(ctx, t), resolve_type(ctx, ty))
        case TmTag(label, t, ty):
            return TmTag(label, resolve_term(ctx, t), resolve_type(ctx, ty))
        case TmCase(scrutinee, branches):
            return TmCase(
                resolve_term(ctx, scrutinee),
                tuple(
                    CaseBranch(b.label, b.name, resolve_term(ctx.add_name(b.name), b.body))
                    for b in branches
                ),
            )
        case TmLet(name, TmFix(TmAbs(param, ty, fn_body)), body):
            # let x = fix (λf:T. b): the fixpoint's parameter answers to x in b
            inner = ctx.add_name(name)
            return TmLet(
                name,
                TmFix(TmAbs(param, resolve_type(ctx, ty), resolve_term(inner, fn_body))),
                resolve_term(inner, body),
            )
        case TmLet(name, bound, body):
            return TmLet(
                name, resolve_term(ctx, bound), resolve_term(ctx.add_name(name), body)
            )
        case TmRecord(fields):
            return TmRecord(tuple(Field(f.name, resolve_term(ctx, f.term)) for f in fields))
        case TmProj(t, label):
            return TmProj(resolve_term(ctx, t), label)
        case TmFix(t):
            return TmFix(resolve_term(ctx, t))
        case TmSucc(t):
            return TmSucc(resolve_term(ctx, t))
        case TmPred(t):
            return TmPred(resolve_term(ctx, t))
        case TmIsZero(t):
            return TmIsZero(resolve_term(ctx, t))
        case TmTrue() | TmFalse() | TmUnit() | TmZero() | TmVar():
            return term

    raise TypeError(f"Unexpected term in resolve_term: {term!r}")


def resolve_binding(ctx: Context, binding: Binding) -> Binding:
    match binding:
        case NameBind() | TyVarBind():
            return binding
        case VarBind(ty):
            return VarBind(resolve_type(ctx, ty))
        case TyAbbBind(ty):
            return TyAbbBind(resolve_type(ctx, ty))
        case TmAbbBind(t, ty):
            return TmAbbBind(
                resolve_term(ctx, t), None if ty is None else resolve_type(ctx, ty)
            )

    raise TypeError(f"Unexpected binding in resolve_binding: {binding!r}")


def resolve_command(ctx: Context, command: Command) -> tuple[Context, Command]:
    """Resolve one top-level command against ``ctx``.

    Returns the context for the next command (extended by one entry for a
    ``Bind``) together with the index-resolved command.
    """

    match command:
        case Eval(term):
            return ctx, Eval(resolve_term(ctx, term))
        case Bind(name, binding):
            resolved = resolve_binding(ctx, binding)
            return ctx.add_binding(name, resolved), Bind(name, resolved)

    raise TypeError(f"Unexpected command in resolve_command: {command!r}")


__all__ = ["resolve_type", "resolve_term", "resolve_binding", "resolve_command"]
