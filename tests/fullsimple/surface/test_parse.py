import pytest

from fullsimple.core.ast import (
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
    TmProj,
    TmRecord,
    TmSucc,
    TmTag,
    TmTrue,
    TmUnit,
    TmZero,
    TyArrow,
    TyBool,
    TyField,
    TyNamed,
    TyNat,
    TyRecord,
    TyUnit,
    TyVariant,
)
from fullsimple.core.commands import Bind, Eval
from fullsimple.core.context import TmAbbBind, TyAbbBind, TyVarBind, VarBind
from fullsimple.surface.errors import LexError, ParseError, SurfaceError
from fullsimple.surface.parse import parse_program, parse_term, parse_type


# ------------- Terms -------------


def test_constants_and_numerals() -> None:
    assert parse_term("true") == TmTrue()
    assert parse_term("unit") == TmUnit()
    assert parse_term("0") == TmZero()
    assert parse_term("2") == TmSucc(TmSucc(TmZero()))


def test_lambda_both_spellings() -> None:
    expected = TmAbs("x", TyBool(), TmFreeIdent("x"))
    assert parse_term("λx:Bool. x") == expected
    assert parse_term("lambda x:Bool. x") == expected


def test_application_is_left_associative() -> None:
    f, a, b = TmFreeIdent("f"), TmFreeIdent("a"), TmFreeIdent("b")
    assert parse_term("f a b") == TmApp(TmApp(f, a), b)
    assert parse_term("f (a b)") == TmApp(f, TmApp(a, b))


def test_lambda_body_extends_right() -> None:
    t = parse_term("λx:Nat. succ x")
    assert t == TmAbs("x", TyNat(), TmSucc(TmFreeIdent("x")))


def test_if_and_nat_operators() -> None:
    t = parse_term("if iszero 0 then false else true")
    assert t == TmIf(TmIsZero(TmZero()), TmFalse(), TmTrue())


def test_let_and_letrec() -> None:
    assert parse_term("let x = 0 in x") == TmLet("x", TmZero(), TmFreeIdent("x"))
    t = parse_term("letrec f:Nat->Nat = λn:Nat. f n in f 0")
    fn = TmAbs("n", TyNat(), TmApp(TmFreeIdent("f"), TmFreeIdent("n")))
    assert t == TmLet(
        "f",
        TmFix(TmAbs("f", TyArrow(TyNat(), TyNat()), fn)),
        TmApp(TmFreeIdent("f"), TmZero()),
    )


def test_records_and_projections() -> None:
    rec = TmRecord((Field("a", TmZero()), Field(None, TmTrue())))
    assert parse_term("{a=0, true}") == rec
    assert parse_term("{a=0, true}.a") == TmProj(rec, "a")
    assert parse_term("{a=0, true}.2") == TmProj(rec, "2")
    assert parse_term("{}") == TmRecord(())


def test_ascription() -> None:
    assert parse_term("true as Bool") == TmAscribe(TmTrue(), TyBool())


def test_tags_and_case() -> None:
    ty = TyVariant((TyField("a", TyNat()), TyField("b", TyBool())))
    tag = TmTag("a", TmZero(), ty)
    assert parse_term("<a=0> as <a:Nat, b:Bool>") == tag
    t = parse_term("case <a=0> as <a:Nat, b:Bool> of <a=x> => succ x | <b=y> => 0")
    assert t == TmCase(
        tag,
        (
            CaseBranch("a", "x", TmSucc(TmFreeIdent("x"))),
            CaseBranch("b", "y", TmZero()),
        ),
    )


def test_fix_takes_a_path_term() -> None:
    t = parse_term("fix (λf:Bool. f)")
    assert t == TmFix(TmAbs("f", TyBool(), TmFreeIdent("f")))


def test_comments_are_ignored() -> None:
    assert parse_term("/* a\n comment */ true") == TmTrue()


# ------------- Types -------------


def test_arrow_is_right_associative() -> None:
    assert parse_type("Nat->Nat->Bool") == TyArrow(TyNat(), TyArrow(TyNat(), TyBool()))
    assert parse_type("(Nat->Nat)->Bool") == TyArrow(TyArrow(TyNat(), TyNat()), TyBool())


def test_record_variant_and_named_types() -> None:
    assert parse_type("{a:Nat, Unit}") == TyRecord(
        (TyField("a", TyNat()), TyField(None, TyUnit()))
    )
    assert parse_type("<some:Nat, none:Unit>") == TyVariant(
        (TyField("some", TyNat()), TyField("none", TyUnit()))
    )
    assert parse_type("Option") == TyNamed("Option")


# ------------- Programs -------------


def test_program_commands() -> None:
    src = """
    T;
    O = <some:Nat, none:Unit>;
    x : Bool;
    two = succ 1;
    if x then two else 0;
    """
    assert parse_program(src) == (
        Bind("T", TyVarBind()),
        Bind("O", TyAbbBind(TyVariant((TyField("some", TyNat()), TyField("none", TyUnit()))))),
        Bind("x", VarBind(TyBool())),
        Bind("two", TmAbbBind(TmSucc(TmSucc(TmZero())))),
        Eval(TmIf(TmFreeIdent("x"), TmFreeIdent("two"), TmZero())),
    )


def test_empty_program() -> None:
    assert parse_program("") == ()
    assert parse_program("/* nothing */") == ()


# ------------- Errors -------------


def test_unexpected_character() -> None:
    with pytest.raises(LexError, match="Unexpected character '#'"):
        parse_term("true # false")


def test_unexpected_token() -> None:
    with pytest.raises(ParseError, match="Unexpected token"):
        parse_term("λx. x")


def test_unexpected_end_of_input() -> None:
    with pytest.raises(ParseError, match="Unexpected end of input"):
        parse_term("if true then false")
    with pytest.raises(ParseError, match="Unexpected end of input"):
        parse_program("true")


def test_errors_carry_span_and_source() -> None:
    with pytest.raises(SurfaceError) as info:
        parse_term("succ )")
    assert info.value.span.start == 5
    assert info.value.source == "succ )"
    assert "')'" in str(info.value)


def test_errors_report_line_and_column() -> None:
    with pytest.raises(LexError) as info:
        parse_program("true;\nfalse;\n  0 #;")
    assert str(info.value) == "Unexpected character '#' at line 3, column 5: '#'"
    with pytest.raises(ParseError) as eof:
        parse_program("true;\nfalse")
    assert str(eof.value) == "Unexpected end of input at line 2, column 6"
