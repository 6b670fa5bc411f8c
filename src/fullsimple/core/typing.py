"""Type checking for the extended simply-typed lambda calculus."""

from __future__ import annotations

from .ast import (
    CaseBranch,
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
    TyNat,
    TyRecord,
    TyUnit,
    TyVariant,
    Type,
    find_label,
)
from .context import Context, TmAbbBind, VarBind
from .debruijn import type_shift
from .equality import simplify, type_equals
from .errors import (
    LabelNotFound,
    NonFunctionApplied,
    NonRecordProjected,
    NonVariantCased,
    TypeMismatch,
    UnboundIdentifier,
    WrongBindingKind,
)
from .pretty import render, render_type


def _mismatch(ctx: Context, message: str, expected: Type, actual: Type) -> TypeMismatch:
    return TypeMismatch(message, render_type(ctx, expected), render_type(ctx, actual))


def _expect(ctx: Context, term: Term, expected: Type, message: str) -> None:
    actual = type_of(ctx, term)
    if not type_equals(ctx, actual, expected):
        raise _mismatch(ctx, message, expected, actual)


def type_of_var(ctx: Context, k: int) -> Type:
    """Return the type of ``TmVar(k)`` as seen from ``ctx``."""

    if k >= len(ctx):
        raise UnboundIdentifier(f"Unbound variable index {k} in context of length {len(ctx)}")
    match ctx.lookup(k):
        case VarBind(ty):
            return ty
        case TmAbbBind(_, ty) if ty is not None:
            return ty
        case TmAbbBind():
            raise WrongBindingKind(f"No type recorded for variable {ctx.name_of(k)}")
        case _:
            raise WrongBindingKind(f"Wrong kind of binding for variable {ctx.name_of(k)}")


def type_of(ctx: Context, term: Term) -> Type:
    """Compute the type of ``term`` under ``ctx``, raising on ill-typed input."""

    match term:
        case TmTrue() | TmFalse():
            return TyBool()
        case TmUnit():
            return TyUnit()
        case TmZero():
            return TyNat()
        case TmSucc(t):
            _expect(ctx, t, TyNat(), "Argument of succ is not a number")
            return TyNat()
        case TmPred(t):
            _expect(ctx, t, TyNat(), "Argument of pred is not a number")
            return TyNat()
        case TmIsZero(t):
            _expect(ctx, t, TyNat(), "Argument of iszero is not a number")
            return TyBool()
        case TmIf(cond, then, else_):
            _expect(ctx, cond, TyBool(), "Guard of conditional not a boolean")
            then_ty = type_of(ctx, then)
            else_ty = type_of(ctx, else_)
            if not type_equals(ctx, then_ty, else_ty):
                raise _mismatch(
                    ctx, "Arms of conditional have different types", then_ty, else_ty
                )
            return then_ty
        case TmVar(k):
            return type_of_var(ctx, k)
        case TmFreeIdent(name):
            raise UnboundIdentifier(f"Unresolved identifier {name}")
        case TmAbs(name, ty, body):
            body_ty = type_of(ctx.add_binding(name, VarBind(ty)), body)
            return TyArrow(ty, type_shift(body_ty, -1))
        case TmApp(fn, arg):
            fn_ty = simplify(ctx, type_of(ctx, fn))
            if not isinstance(fn_ty, TyArrow):
                raise NonFunctionApplied(
                    f"Arrow type expected, got {render_type(ctx, fn_ty)} for {render(ctx, fn)}"
                )
            arg_ty = type_of(ctx, arg)
            if not type_equals(ctx, arg_ty, fn_ty.dom):
                raise _mismatch(ctx, "Parameter type mismatch", fn_ty.dom, arg_ty)
            return fn_ty.cod
        case TmAscribe(t, ty):
            _expect(ctx, t, ty, "Body of as-term does not have the expected type")
            return ty
        case TmLet(name, bound, body):
            bound_ty = type_of(ctx, bound)
            body_ty = type_of(ctx.add_binding(name, VarBind(bound_ty)), body)
            return type_shift(body_ty, -1)
        case TmRecord(fields):
            return TyRecord(tuple(TyField(f.name, type_of(ctx, f.term)) for f in fields))
        case TmProj(t, label):
            record_ty = simplify(ctx, type_of(ctx, t))
            if not isinstance(record_ty, TyRecord):
                raise NonRecordProjected(
                    f"Expected record type, got {render_type(ctx, record_ty)}"
                )
            i = find_label(record_ty.fields, label)
            if i is None:
                raise LabelNotFound(f"Label {label} not found in {render_type(ctx, record_ty)}")
            return record_ty.fields[i].ty
        case TmTag(label, t, ty):
            variant_ty = simplify(ctx, ty)
            if not isinstance(variant_ty, TyVariant):
                raise TypeMismatch(
                    "Annotation is not a variant type", "a variant type", render_type(ctx, ty)
                )
            i = find_label(variant_ty.fields, label)
            if i is None:
                raise LabelNotFound(f"Label {label} not found in {render_type(ctx, ty)}")
            _expect(ctx, t, variant_ty.fields[i].ty, "Field does not have expected type")
            return ty
        case TmCase(scrutinee, branches):
            return _type_of_case(ctx, scrutinee, branches)
        case TmFix(t):
            fn_ty = simplify(ctx, type_of(ctx, t))
            if not isinstance(fn_ty, TyArrow):
                raise NonFunctionApplied(
                    f"Arrow type expected for fix, got {render_type(ctx, fn_ty)}"
                )
            if not type_equals(ctx, fn_ty.cod, fn_ty.dom):
                raise _mismatch(
                    ctx, "Result of body not compatible with domain", fn_ty.dom, fn_ty.cod
                )
            return fn_ty.cod

    raise TypeError(f"Unexpected term in type_of: {term!r}")


def _type_of_case(
    ctx: Context, scrutinee: Term, branches: tuple[CaseBranch, ...]
) -> Type:
    variant_ty = simplify(ctx, type_of(ctx, scrutinee))
    if not isinstance(variant_ty, TyVariant):
        raise NonVariantCased(f"Expected variant type, got {render_type(ctx, variant_ty)}")

    labels = {f.name for f in variant_ty.fields}
    for branch in branches:
        if branch.label not in labels:
            raise LabelNotFound(
                f"Label {branch.label} not in type {render_type(ctx, variant_ty)}"
            )
    covered = {branch.label for branch in branches}
    for f in variant_ty.fields:
        if f.name not in covered:
            raise LabelNotFound(f"No case branch for label {f.name}")

    branch_tys: list[Type] = []
    for branch in branches:
        i = find_label(variant_ty.fields, branch.label)
        assert i is not None
        inner = ctx.add_binding(branch.name, VarBind(variant_ty.fields[i].ty))
        branch_tys.append(type_shift(type_of(inner, branch.body), -1))

    if not branch_tys:
        raise NonVariantCased("Case expression has no branches")
    first = branch_tys[0]
    for other in branch_tys[1:]:
        if not type_equals(ctx, first, other):
            raise _mismatch(ctx, "Case branches do not have the same type", first, other)
    return first


__all__ = ["type_of", "type_of_var"]
