"""Lexer and parser for the surface language.

A program is a sequence of ``;``-terminated commands::

    T = <some:Nat, none:Unit>;       /* type abbreviation */
    x : Bool;                        /* variable binding */
    two = succ (succ 0);             /* term abbreviation */
    (λy:Nat. iszero y) two;          /* evaluate */

Lowercase identifiers are term variables and labels; capitalised identifiers
name types. The parser produces named terms (``TmFreeIdent`` / ``TyNamed``);
``fullsimple.core.resolve`` turns them into De Bruijn form.
"""

from __future__ import annotations

from typing import cast

import ply.lex as lex  # type: ignore[import-untyped]
import ply.yacc as yacc  # type: ignore[import-untyped]

from fullsimple.common.span import Span
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
    TmPred,
    TmProj,
    TmRecord,
    TmSucc,
    TmTag,
    TmTrue,
    TmUnit,
    Term,
    TyArrow,
    TyBool,
    TyField,
    TyNamed,
    TyNat,
    TyRecord,
    TyUnit,
    TyVariant,
    Type,
    numeral,
)
from fullsimple.core.commands import Bind, Command, Eval
from fullsimple.core.context import TmAbbBind, TyAbbBind, TyVarBind, VarBind
from fullsimple.surface.errors import LexError, ParseError

_SOURCE: str = ""

reserved = {
    "if": "IF",
    "then": "THEN",
    "else": "ELSE",
    "true": "TRUE",
    "false": "FALSE",
    "lambda": "LAMBDA",
    "succ": "SUCC",
    "pred": "PRED",
    "iszero": "ISZERO",
    "let": "LET",
    "letrec": "LETREC",
    "in": "IN",
    "fix": "FIX",
    "case": "CASE",
    "of": "OF",
    "as": "AS",
    "unit": "UNIT",
    "Bool": "BOOL",
    "Nat": "NAT",
    "Unit": "UNITTYPE",
}

tokens = (
    "LCID",
    "UCID",
    "INTV",
    "ARROW",
    "DARROW",
    "EQ",
    "COLON",
    "SEMI",
    "DOT",
    "COMMA",
    "PIPE",
    "LPAREN",
    "RPAREN",
    "LBRACE",
    "RBRACE",
    "LT",
    "GT",
    *tuple(dict.fromkeys(reserved.values())),
)

t_ARROW = r"->"
t_DARROW = r"=>"
t_EQ = r"="
t_COLON = r":"
t_SEMI = r";"
t_DOT = r"\."
t_COMMA = r","
t_PIPE = r"\|"
t_LPAREN = r"\("
t_RPAREN = r"\)"
t_LBRACE = r"\{"
t_RBRACE = r"\}"
t_LT = r"<"
t_GT = r">"

t_ignore = " \t\r"


def t_comment(t: lex.LexToken) -> None:
    r"/\*(.|\n)*?\*/"
    t.lexer.lineno += t.value.count("\n")


def t_newline(t: lex.LexToken) -> None:
    r"\n+"
    t.lexer.lineno += len(t.value)


def t_LAMBDA(t: lex.LexToken) -> lex.LexToken:
    r"λ"
    return t


def t_INTV(t: lex.LexToken) -> lex.LexToken:
    r"\d+"
    t.value = int(t.value)
    return t


def t_UCID(t: lex.LexToken) -> lex.LexToken:
    r"[A-Z][A-Za-z0-9_']*"
    t.type = reserved.get(t.value, "UCID")
    return t


def t_LCID(t: lex.LexToken) -> lex.LexToken:
    r"[a-z_][A-Za-z0-9_']*"
    t.type = reserved.get(t.value, "LCID")
    return t


def t_error(t: lex.LexToken) -> None:
    span = Span(t.lexpos, t.lexpos + 1)
    raise LexError(f"Unexpected character {t.value[0]!r}", span, _SOURCE)


# ---- commands ----


def p_program(p: yacc.YaccProduction) -> None:
    "program : commands"
    p[0] = tuple(p[1])


def p_commands_empty(p: yacc.YaccProduction) -> None:
    "commands : empty"
    p[0] = []


def p_commands_multi(p: yacc.YaccProduction) -> None:
    "commands : commands command SEMI"
    p[0] = p[1] + [p[2]]


def p_command_eval(p: yacc.YaccProduction) -> None:
    "command : term"
    p[0] = Eval(p[1])


def p_command_var_bind(p: yacc.YaccProduction) -> None:
    "command : LCID COLON type"
    p[0] = Bind(p[1], VarBind(p[3]))


def p_command_term_abbrev(p: yacc.YaccProduction) -> None:
    "command : LCID EQ term"
    p[0] = Bind(p[1], TmAbbBind(p[3]))


def p_command_type_abbrev(p: yacc.YaccProduction) -> None:
    "command : UCID EQ type"
    p[0] = Bind(p[1], TyAbbBind(p[3]))


def p_command_type_var(p: yacc.YaccProduction) -> None:
    "command : UCID"
    p[0] = Bind(p[1], TyVarBind())


# ---- terms ----


def p_term_app(p: yacc.YaccProduction) -> None:
    "term : app_term"
    p[0] = p[1]


def p_term_if(p: yacc.YaccProduction) -> None:
    "term : IF term THEN term ELSE term"
    p[0] = TmIf(p[2], p[4], p[6])


def p_term_lambda(p: yacc.YaccProduction) -> None:
    "term : LAMBDA LCID COLON type DOT term"
    p[0] = TmAbs(p[2], p[4], p[6])


def p_term_let(p: yacc.YaccProduction) -> None:
    "term : LET LCID EQ term IN term"
    p[0] = TmLet(p[2], p[4], p[6])


def p_term_letrec(p: yacc.YaccProduction) -> None:
    "term : LETREC LCID COLON type EQ term IN term"
    # letrec x:T = t in b  ==>  let x = fix (λx:T. t) in b
    p[0] = TmLet(p[2], TmFix(TmAbs(p[2], p[4], p[6])), p[8])


def p_term_case(p: yacc.YaccProduction) -> None:
    "term : CASE term OF branches"
    p[0] = TmCase(p[2], tuple(p[4]))


def p_branches_single(p: yacc.YaccProduction) -> None:
    "branches : branch"
    p[0] = [p[1]]


def p_branches_multi(p: yacc.YaccProduction) -> None:
    "branches : branches PIPE branch"
    p[0] = p[1] + [p[3]]


def p_branch(p: yacc.YaccProduction) -> None:
    "branch : LT LCID EQ LCID GT DARROW app_term"
    p[0] = CaseBranch(p[2], p[4], p[7])


def p_app_term_path(p: yacc.YaccProduction) -> None:
    "app_term : path_term"
    p[0] = p[1]


def p_app_term_app(p: yacc.YaccProduction) -> None:
    "app_term : app_term path_term"
    p[0] = TmApp(p[1], p[2])


def p_app_term_succ(p: yacc.YaccProduction) -> None:
    "app_term : SUCC path_term"
    p[0] = TmSucc(p[2])


def p_app_term_pred(p: yacc.YaccProduction) -> None:
    "app_term : PRED path_term"
    p[0] = TmPred(p[2])


def p_app_term_iszero(p: yacc.YaccProduction) -> None:
    "app_term : ISZERO path_term"
    p[0] = TmIsZero(p[2])


def p_app_term_fix(p: yacc.YaccProduction) -> None:
    "app_term : FIX path_term"
    p[0] = TmFix(p[2])


def p_path_term_label(p: yacc.YaccProduction) -> None:
    "path_term : path_term DOT LCID"
    p[0] = TmProj(p[1], p[3])


def p_path_term_index(p: yacc.YaccProduction) -> None:
    "path_term : path_term DOT INTV"
    p[0] = TmProj(p[1], str(p[3]))


def p_path_term_ascribe(p: yacc.YaccProduction) -> None:
    "path_term : ascribe_term"
    p[0] = p[1]


def p_ascribe_term_as(p: yacc.YaccProduction) -> None:
    "ascribe_term : atom AS type"
    p[0] = TmAscribe(p[1], p[3])


def p_ascribe_term_atom(p: yacc.YaccProduction) -> None:
    "ascribe_term : atom"
    p[0] = p[1]


def p_atom_paren(p: yacc.YaccProduction) -> None:
    "atom : LPAREN term RPAREN"
    p[0] = p[2]


def p_atom_true(p: yacc.YaccProduction) -> None:
    "atom : TRUE"
    p[0] = TmTrue()


def p_atom_false(p: yacc.YaccProduction) -> None:
    "atom : FALSE"
    p[0] = TmFalse()


def p_atom_unit(p: yacc.YaccProduction) -> None:
    "atom : UNIT"
    p[0] = TmUnit()


def p_atom_ident(p: yacc.YaccProduction) -> None:
    "atom : LCID"
    p[0] = TmFreeIdent(p[1])


def p_atom_int(p: yacc.YaccProduction) -> None:
    "atom : INTV"
    p[0] = numeral(p[1])


def p_atom_record(p: yacc.YaccProduction) -> None:
    "atom : LBRACE fields RBRACE"
    p[0] = TmRecord(tuple(p[2]))


def p_atom_record_empty(p: yacc.YaccProduction) -> None:
    "atom : LBRACE RBRACE"
    p[0] = TmRecord(())


def p_atom_tag(p: yacc.YaccProduction) -> None:
    "atom : LT LCID EQ term GT AS type"
    p[0] = TmTag(p[2], p[4], p[7])


def p_fields_single(p: yacc.YaccProduction) -> None:
    "fields : field"
    p[0] = [p[1]]


def p_fields_multi(p: yacc.YaccProduction) -> None:
    "fields : fields COMMA field"
    p[0] = p[1] + [p[3]]


def p_field_named(p: yacc.YaccProduction) -> None:
    "field : LCID EQ term"
    p[0] = Field(p[1], p[3])


def p_field_positional(p: yacc.YaccProduction) -> None:
    "field : term"
    p[0] = Field(None, p[1])


# ---- types ----


def p_type_arrow(p: yacc.YaccProduction) -> None:
    "type : atype ARROW type"
    p[0] = TyArrow(p[1], p[3])


def p_type_atype(p: yacc.YaccProduction) -> None:
    "type : atype"
    p[0] = p[1]


def p_atype_paren(p: yacc.YaccProduction) -> None:
    "atype : LPAREN type RPAREN"
    p[0] = p[2]


def p_atype_bool(p: yacc.YaccProduction) -> None:
    "atype : BOOL"
    p[0] = TyBool()


def p_atype_nat(p: yacc.YaccProduction) -> None:
    "atype : NAT"
    p[0] = TyNat()


def p_atype_unit(p: yacc.YaccProduction) -> None:
    "atype : UNITTYPE"
    p[0] = TyUnit()


def p_atype_named(p: yacc.YaccProduction) -> None:
    "atype : UCID"
    p[0] = TyNamed(p[1])


def p_atype_record(p: yacc.YaccProduction) -> None:
    "atype : LBRACE ty_fields RBRACE"
    p[0] = TyRecord(tuple(p[2]))


def p_atype_record_empty(p: yacc.YaccProduction) -> None:
    "atype : LBRACE RBRACE"
    p[0] = TyRecord(())


def p_atype_variant(p: yacc.YaccProduction) -> None:
    "atype : LT variant_fields GT"
    p[0] = TyVariant(tuple(p[2]))


def p_ty_fields_single(p: yacc.YaccProduction) -> None:
    "ty_fields : ty_field"
    p[0] = [p[1]]


def p_ty_fields_multi(p: yacc.YaccProduction) -> None:
    "ty_fields : ty_fields COMMA ty_field"
    p[0] = p[1] + [p[3]]


def p_ty_field_named(p: yacc.YaccProduction) -> None:
    "ty_field : LCID COLON type"
    p[0] = TyField(p[1], p[3])


def p_ty_field_positional(p: yacc.YaccProduction) -> None:
    "ty_field : type"
    p[0] = TyField(None, p[1])


def p_variant_fields_single(p: yacc.YaccProduction) -> None:
    "variant_fields : variant_field"
    p[0] = [p[1]]


def p_variant_fields_multi(p: yacc.YaccProduction) -> None:
    "variant_fields : variant_fields COMMA variant_field"
    p[0] = p[1] + [p[3]]


def p_variant_field(p: yacc.YaccProduction) -> None:
    "variant_field : LCID COLON type"
    p[0] = TyField(p[1], p[3])


def p_empty(p: yacc.YaccProduction) -> None:
    "empty :"
    p[0] = None


def p_error(p: lex.LexToken | None) -> None:
    if p is None:
        span = Span(len(_SOURCE), len(_SOURCE))
        raise ParseError("Unexpected end of input", span, _SOURCE)
    tok = cast(lex.LexToken, p)
    span = Span(tok.lexpos, tok.lexpos + len(str(tok.value)))
    raise ParseError(f"Unexpected token {tok.value!r}", span, _SOURCE)


_PARSERS: dict[str, yacc.LRParser] = {}


def _parse(source: str, start: str) -> object:
    global _SOURCE
    _SOURCE = source
    lexer = lex.lex()
    parser = _PARSERS.get(start)
    if parser is None:
        parser = yacc.yacc(
            start=start, debug=False, write_tables=False, errorlog=yacc.NullLogger()
        )
        _PARSERS[start] = parser
    return parser.parse(source, lexer=lexer)


def parse_program(source: str) -> tuple[Command, ...]:
    """Parse a whole program into its list of named commands."""

    return cast(tuple[Command, ...], _parse(source, "program"))


def parse_term(source: str) -> Term:
    """Parse a single term (no trailing ``;``)."""

    term = _parse(source, "term")
    if term is None:
        span = Span(len(source), len(source))
        raise ParseError("Unexpected end of input", span, source)
    return cast(Term, term)


def parse_type(source: str) -> Type:
    """Parse a single type."""

    ty = _parse(source, "type")
    if ty is None:
        span = Span(len(source), len(source))
        raise ParseError("Unexpected end of input", span, source)
    return cast(Type, ty)


__all__ = ["parse_program", "parse_term", "parse_type"]
