import pytest

from fullsimple.core.ast import (
    CaseBranch,
    Field,
    TmAbs,
    TmApp,
    TmAscribe,
    TmCase,
    TmLet,
    TmRecord,
    TmSucc,
    TmTag,
    TmTrue,
    TmVar,
    TmZero,
    TyArrow,
    TyBool,
    TyField,
    TyNat,
    TyRecord,
    TyVar,
    TyVariant,
)
from fullsimple.core.debruijn import shift, subst, subst_top, type_shift


# ------------- Shift: basic behavior -------------


def test_shift_var_at_or_above_cutoff_is_bumped() -> None:
    assert shift(TmVar(0), 1) == TmVar(1)
    assert shift(TmVar(2), 3, cutoff=2) == TmVar(5)


def test_shift_var_below_cutoff_unchanged() -> None:
    assert shift(TmVar(0), 2, cutoff=1) == TmVar(0)
    assert shift(TmVar(1), 2, cutoff=2) == TmVar(1)


def test_shift_by_zero_is_identity() -> None:
    t = TmApp(TmVar(2), TmAbs("x", TyBool(), TmApp(TmVar(0), TmVar(1))))
    assert shift(t, 0) == t


def test_shift_abs_body_uses_cutoff_plus_1() -> None:
    # λx:Bool. Var(1) refers to the first free variable
    assert shift(TmAbs("x", TyBool(), TmVar(1)), 1) == TmAbs("x", TyBool(), TmVar(2))
    assert shift(TmAbs("x", TyBool(), TmVar(0)), 1) == TmAbs("x", TyBool(), TmVar(0))


def test_shift_let_and_case_bind_in_body_only() -> None:
    let = TmLet("x", TmVar(0), TmApp(TmVar(0), TmVar(1)))
    assert shift(let, 1) == TmLet("x", TmVar(1), TmApp(TmVar(0), TmVar(2)))

    ty = TyVariant((TyField("a", TyNat()),))
    case = TmCase(TmVar(0), (CaseBranch("a", "y", TmApp(TmVar(0), TmVar(1))),))
    assert shift(case, 2) == TmCase(
        TmVar(2), (CaseBranch("a", "y", TmApp(TmVar(0), TmVar(3))),)
    )
    tag = TmTag("a", TmVar(0), ty)
    assert shift(tag, 1) == TmTag("a", TmVar(1), ty)


def test_shift_moves_embedded_types() -> None:
    t = TmAbs("x", TyVar(0), TmAscribe(TmVar(0), TyVar(1)))
    assert shift(t, 1) == TmAbs("x", TyVar(1), TmAscribe(TmVar(0), TyVar(2)))


def test_shift_down_below_zero_is_rejected() -> None:
    with pytest.raises(ValueError):
        shift(TmVar(0), -1)


def test_type_shift_distributes_over_structure() -> None:
    ty = TyArrow(TyVar(0), TyRecord((TyField("a", TyVar(2)), TyField(None, TyBool()))))
    assert type_shift(ty, 1, cutoff=1) == TyArrow(
        TyVar(0), TyRecord((TyField("a", TyVar(3)), TyField(None, TyBool())))
    )


# ------------- Substitution -------------


def test_subst_replaces_matching_index_only() -> None:
    t = TmApp(TmVar(0), TmVar(1))
    assert subst(t, TmTrue(), 0) == TmApp(TmTrue(), TmVar(1))
    assert subst(t, TmTrue(), 1) == TmApp(TmVar(0), TmTrue())


def test_subst_under_binder_shifts_replacement() -> None:
    t = TmAbs("y", TyBool(), TmApp(TmVar(0), TmVar(1)))
    assert subst(t, TmVar(3), 0) == TmAbs("y", TyBool(), TmApp(TmVar(0), TmVar(4)))


def test_subst_descends_into_records() -> None:
    t = TmRecord((Field("a", TmVar(0)), Field(None, TmSucc(TmVar(0)))))
    assert subst(t, TmZero(), 0) == TmRecord(
        (Field("a", TmZero()), Field(None, TmSucc(TmZero())))
    )


def test_subst_top_beta_reduces() -> None:
    # (λx. x y) with y = Var(0) outside, applied to true
    body = TmApp(TmVar(0), TmVar(1))
    assert subst_top(TmTrue(), body) == TmApp(TmTrue(), TmVar(0))


def test_subst_top_keeps_open_value_pointing_outward() -> None:
    # substituting a free Var(0) under an inner binder must not capture it
    body = TmAbs("z", TyBool(), TmVar(1))
    assert subst_top(TmVar(0), body) == TmAbs("z", TyBool(), TmVar(1))


def test_subst_top_of_shifted_body_is_identity() -> None:
    t = TmAbs("x", TyBool(), TmApp(TmVar(0), TmVar(1)))
    assert subst_top(TmTrue(), shift(t, 1)) == t
