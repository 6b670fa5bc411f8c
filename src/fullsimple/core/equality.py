"""Type simplification and abbreviation-aware type equality."""

from __future__ import annotations

from .ast import (
    TyArrow,
    TyBool,
    TyNamed,
    TyNat,
    TyRecord,
    TyUnit,
    TyVar,
    TyVariant,
    Type,
    effective_label,
    find_label,
)
from .context import Context, TyAbbBind


def simplify(ctx: Context, ty: Type) -> Type:
    """Unfold type abbreviations at the head of ``ty``.

    Abbreviation chains are assumed acyclic; a cyclic chain does not
    terminate.
    """

    while isinstance(ty, TyVar) and ty.index < len(ctx):
        binding = ctx.lookup(ty.index)
        if not isinstance(binding, TyAbbBind):
            break
        ty = binding.ty
    return ty


def type_equals(ctx: Context, left: Type, right: Type) -> bool:
    """Structural equality of ``left`` and ``right`` up to abbreviations.

    Records compare by label regardless of field order; variants compare
    position by position.
    """

    left = simplify(ctx, left)
    right = simplify(ctx, right)

    match left, right:
        case (TyBool(), TyBool()) | (TyNat(), TyNat()) | (TyUnit(), TyUnit()):
            return True
        case (TyVar(i), TyVar(j)):
            return i == j
        case (TyNamed(a), TyNamed(b)):
            return a == b
        case (TyArrow(dom1, cod1), TyArrow(dom2, cod2)):
            return type_equals(ctx, dom1, dom2) and type_equals(ctx, cod1, cod2)
        case (TyRecord(fields1), TyRecord(fields2)):
            if len(fields1) != len(fields2):
                return False
            for i, f in enumerate(fields1):
                j = find_label(fields2, effective_label(i, f.name))
                if j is None or not type_equals(ctx, f.ty, fields2[j].ty):
                    return False
            return True
        case (TyVariant(fields1), TyVariant(fields2)):
            if len(fields1) != len(fields2):
                return False
            return all(
                f1.name == f2.name and type_equals(ctx, f1.ty, f2.ty)
                for f1, f2 in zip(fields1, fields2, strict=True)
            )
        case _:
            return False


__all__ = ["simplify", "type_equals"]
