from fullsimple.core.ast import (
    CaseBranch,
    Field,
    TmAbs,
    TmApp,
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
    TyArrow,
    TyBool,
    TyField,
    TyNat,
    TyVariant,
    numeral,
)
from fullsimple.core.context import Context, TmAbbBind, VarBind
from fullsimple.core.reduce import big_step

EMPTY = Context.empty()
IDENT = TmAbs("x", TyBool(), TmVar(0))


def test_beta_and_if() -> None:
    t = TmIf(TmApp(IDENT, TmTrue()), TmFalse(), TmTrue())
    assert big_step(EMPTY, t) == TmFalse()


def test_nested_application() -> None:
    const = TmAbs("x", TyBool(), TmAbs("y", TyBool(), TmVar(1)))
    assert big_step(EMPTY, TmApp(TmApp(const, TmTrue()), TmFalse())) == TmTrue()


def test_let_record_projection() -> None:
    rec = TmRecord((Field("a", TmZero()), Field("b", TmTrue())))
    t = TmLet("x", rec, TmProj(TmVar(0), "b"))
    assert big_step(EMPTY, t) == TmTrue()


def test_case_selects_branch() -> None:
    ty = TyVariant((TyField("a", TyNat()), TyField("b", TyBool())))
    t = TmCase(
        TmTag("a", TmZero(), ty),
        (CaseBranch("a", "x", TmSucc(TmVar(0))), CaseBranch("b", "y", TmZero())),
    )
    assert big_step(EMPTY, t) == TmSucc(TmZero())


def test_fix_computes_recursive_function() -> None:
    # fix (λf:Nat->Nat. λn:Nat. if iszero n then 0 else f (pred n)) 3
    nat_to_nat = TyArrow(TyNat(), TyNat())
    body = TmIf(
        TmIsZero(TmVar(0)),
        TmZero(),
        TmApp(TmVar(1), TmPred(TmVar(0))),
    )
    countdown = TmFix(TmAbs("f", nat_to_nat, TmAbs("n", TyNat(), body)))
    assert big_step(EMPTY, TmApp(countdown, numeral(3))) == TmZero()


def test_stuck_results_keep_their_surroundings() -> None:
    ctx = Context.of(("b", VarBind(TyBool())))
    t = TmIf(TmVar(0), TmApp(IDENT, TmTrue()), TmFalse())
    assert big_step(ctx, t) == TmIf(TmVar(0), TmApp(IDENT, TmTrue()), TmFalse())
    app = TmApp(TmApp(IDENT, TmVar(0)), TmApp(IDENT, TmTrue()))
    # the inner application is stuck on a variable argument
    assert big_step(ctx, app) == app


def test_abbreviations_unfold() -> None:
    ctx = Context.of(("id", TmAbbBind(IDENT, TyArrow(TyBool(), TyBool()))))
    assert big_step(ctx, TmApp(TmVar(0), TmFalse())) == TmFalse()
