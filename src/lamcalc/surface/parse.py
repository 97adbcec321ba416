"""Parser for the concrete syntax of terms, definitions and library files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

import ply.lex as lex  # type: ignore[import-untyped]
import ply.yacc as yacc  # type: ignore[import-untyped]

from lamcalc.core.ast import App, Lam, Term, Var
from lamcalc.core.types import Arrow, Base, Type
from lamcalc.errors import ParseError, Span

_SOURCE: str = ""


@dataclass(frozen=True)
class Definition:
    """``name = term;``"""

    name: str
    term: Term


@dataclass(frozen=True)
class Binder:
    name: str
    ty: Type | None = None


tokens = (
    "IDENT",
    "LAMBDA",
    "DOT",
    "COLON",
    "ARROW",
    "EQUALS",
    "SEMI",
    "LPAREN",
    "RPAREN",
)

t_LAMBDA = r"λ|\\"
t_DOT = r"\."
t_COLON = r":"
t_ARROW = r"->|→"
t_EQUALS = r"="
t_SEMI = r";"
t_LPAREN = r"\("
t_RPAREN = r"\)"

t_ignore = " \t\r"
t_ignore_COMMENT = r"\#[^\n]*"


def t_newline(t: lex.LexToken) -> None:
    r"\n+"
    t.lexer.lineno += len(t.value)


def t_IDENT(t: lex.LexToken) -> lex.LexToken:
    r"[A-Za-z_][A-Za-z0-9_']*"
    t.end = t.lexpos + len(t.value)
    return t


def t_error(t: lex.LexToken) -> None:
    span = Span(t.lexpos, t.lexpos + 1)
    raise ParseError(f"Unexpected character {t.value[0]!r}", span, _SOURCE)


# ---- library / statements ----


def p_library(p: yacc.YaccProduction) -> None:
    "library : definitions"
    p[0] = p[1]


def p_definitions_multi(p: yacc.YaccProduction) -> None:
    "definitions : definitions definition"
    p[0] = p[1] + (p[2],)


def p_definitions_empty(p: yacc.YaccProduction) -> None:
    "definitions : empty"
    p[0] = ()


def p_definition(p: yacc.YaccProduction) -> None:
    "definition : IDENT EQUALS term SEMI"
    p[0] = Definition(p[1], p[3])


def p_statement_definition(p: yacc.YaccProduction) -> None:
    "statement : IDENT EQUALS term opt_semi"
    p[0] = Definition(p[1], p[3])


def p_statement_term(p: yacc.YaccProduction) -> None:
    "statement : term opt_semi"
    p[0] = p[1]


def p_opt_semi(p: yacc.YaccProduction) -> None:
    """opt_semi : SEMI
    | empty"""


# ---- terms ----


def p_term_lam(p: yacc.YaccProduction) -> None:
    "term : lam"
    p[0] = p[1]


def p_term_app_lam(p: yacc.YaccProduction) -> None:
    "term : app lam"
    p[0] = App(p[1], p[2])


def p_term_app(p: yacc.YaccProduction) -> None:
    "term : app"
    p[0] = p[1]


def p_lam(p: yacc.YaccProduction) -> None:
    "lam : LAMBDA binders DOT term"
    body = p[4]
    for binder in reversed(p[2]):
        body = Lam(binder.name, body, binder.ty)
    p[0] = body


def p_binders_multi(p: yacc.YaccProduction) -> None:
    "binders : binders binder"
    p[0] = p[1] + (p[2],)


def p_binders_single(p: yacc.YaccProduction) -> None:
    "binders : binder"
    p[0] = (p[1],)


def p_binder_ident(p: yacc.YaccProduction) -> None:
    "binder : IDENT"
    p[0] = Binder(p[1])


def p_binder_annotated(p: yacc.YaccProduction) -> None:
    "binder : IDENT COLON type"
    p[0] = Binder(p[1], p[3])


def p_binder_paren(p: yacc.YaccProduction) -> None:
    "binder : LPAREN IDENT COLON type RPAREN"
    p[0] = Binder(p[2], p[4])


def p_app_chain(p: yacc.YaccProduction) -> None:
    "app : app atom"
    p[0] = App(p[1], p[2])


def p_app_atom(p: yacc.YaccProduction) -> None:
    "app : atom"
    p[0] = p[1]


def p_atom_ident(p: yacc.YaccProduction) -> None:
    "atom : IDENT"
    p[0] = Var(p[1])


def p_atom_paren(p: yacc.YaccProduction) -> None:
    "atom : LPAREN term RPAREN"
    p[0] = p[2]


# ---- types ----


def p_type_arrow(p: yacc.YaccProduction) -> None:
    "type : atype ARROW type"
    p[0] = Arrow(p[1], p[3])


def p_type_atom(p: yacc.YaccProduction) -> None:
    "type : atype"
    p[0] = p[1]


def p_atype_base(p: yacc.YaccProduction) -> None:
    "atype : IDENT"
    p[0] = Base(p[1])


def p_atype_paren(p: yacc.YaccProduction) -> None:
    "atype : LPAREN type RPAREN"
    p[0] = p[2]


def p_empty(p: yacc.YaccProduction) -> None:
    "empty :"
    p[0] = ()


def p_error(p: lex.LexToken | None) -> None:
    if p is None:
        span = Span(len(_SOURCE), len(_SOURCE))
        raise ParseError("Unexpected end of input", span, _SOURCE)
    tok = cast(lex.LexToken, p)
    end = getattr(tok, "end", tok.lexpos + len(str(tok.value)))
    raise ParseError("Unexpected token", Span(tok.lexpos, end), _SOURCE)


_PARSERS: dict[str, Any] = {}


def _parse(source: str, start: str) -> Any:
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


def parse_term(source: str) -> Term:
    """Parse a single term such as ``(λx. x) y``."""

    term = _parse(source, "term")
    if term is None:
        span = Span(len(source), len(source))
        raise ParseError("Unexpected end of input", span, source)
    return cast(Term, term)


def parse_statement(source: str) -> Definition | Term:
    """Parse a REPL line: either ``name = term`` or a bare term."""

    statement = _parse(source, "statement")
    if statement is None:
        span = Span(len(source), len(source))
        raise ParseError("Unexpected end of input", span, source)
    return cast(Definition | Term, statement)


def parse_type(source: str) -> Type:
    ty = _parse(source, "type")
    if ty is None:
        span = Span(len(source), len(source))
        raise ParseError("Unexpected end of input", span, source)
    return cast(Type, ty)


def parse_library(source: str) -> tuple[Definition, ...]:
    """Parse the contents of a library file into its definitions, in order."""

    if not source.strip():
        return ()
    return cast(tuple[Definition, ...], _parse(source, "library"))


__all__ = [
    "Definition",
    "Binder",
    "parse_term",
    "parse_statement",
    "parse_type",
    "parse_library",
]
