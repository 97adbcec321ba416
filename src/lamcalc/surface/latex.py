"""LaTeX rendering of typing derivations and textual De Bruijn forms."""

from __future__ import annotations

from lamcalc.core.ast import App, Lam, Term, Var
from lamcalc.core.debruijn import DBApp, DBFree, DBLam, DBTerm, DBVar
from lamcalc.core.types import Arrow, Base, ErrorType, Type
from lamcalc.core.typing import Ctx, Derivation

_ESCAPES = {"_": r"\_", "&": r"\&", "%": r"\%", "$": r"\$", "#": r"\#"}


def _escape(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def _ident(name: str) -> str:
    escaped = _escape(name)
    if len(name) > 1:
        return rf"\mathit{{{escaped}}}"
    return escaped


def latex_type(ty: Type) -> str:
    match ty:
        case Base(name):
            return _ident(name)
        case Arrow(Arrow() as domain, codomain):
            return rf"({latex_type(domain)}) \to {latex_type(codomain)}"
        case Arrow(domain, codomain):
            return rf"{latex_type(domain)} \to {latex_type(codomain)}"
        case ErrorType(message):
            return rf"\mathbf{{error}}(\text{{{_escape(message)}}})"

    raise TypeError(f"Cannot render unknown type: {ty!r}")


def latex_term(term: Term) -> str:
    match term:
        case Var(name):
            return _ident(name)
        case Lam(name, body, ty):
            binder = _ident(name) if ty is None else rf"{_ident(name)}{{:}}{latex_type(ty)}"
            return rf"\lambda {binder}.\, {latex_term(body)}"
        case App(fn, arg):
            fn_text = latex_term(fn)
            if isinstance(fn, Lam):
                fn_text = f"({fn_text})"
            arg_text = latex_term(arg)
            if not isinstance(arg, Var):
                arg_text = f"({arg_text})"
            return rf"{fn_text}\ {arg_text}"

    raise TypeError(f"Cannot render unknown term: {term!r}")


def latex_ctx(ctx: Ctx) -> str:
    if not ctx:
        return r"\emptyset"
    return ", ".join(f"{_ident(name)} : {latex_type(ty)}" for name, ty in ctx.items())


def _judgment(deriv: Derivation) -> str:
    return (
        f"${latex_ctx(deriv.ctx)} \\vdash {latex_term(deriv.term)} : "
        f"{latex_type(deriv.ty)}$"
    )


def _proof_lines(deriv: Derivation) -> list[str]:
    lines: list[str] = []
    for premise in deriv.premises:
        lines.extend(_proof_lines(premise))
    match len(deriv.premises):
        case 0:
            lines.append(r"\AxiomC{}")
            inference = r"\UnaryInfC"
        case 1:
            inference = r"\UnaryInfC"
        case 2:
            inference = r"\BinaryInfC"
        case n:
            raise ValueError(f"Derivation node with {n} premises")
    lines.append(rf"\RightLabel{{\scriptsize {deriv.rule}}}")
    lines.append(f"{inference}{{{_judgment(deriv)}}}")
    return lines


def derivation_to_latex(deriv: Derivation) -> str:
    """Render ``deriv`` as a ``bussproofs`` ``prooftree`` environment."""

    body = "\n".join(_proof_lines(deriv))
    return f"\\begin{{prooftree}}\n{body}\n\\end{{prooftree}}"


def debruijn_to_str(term: DBTerm) -> str:
    """Render a nameless term, e.g. ``λ. λ. 1 0``."""

    match term:
        case DBVar(index):
            return str(index)
        case DBFree(name):
            return name
        case DBLam(body):
            return f"λ. {debruijn_to_str(body)}"
        case DBApp(fn, arg):
            fn_text = debruijn_to_str(fn)
            if isinstance(fn, DBLam):
                fn_text = f"({fn_text})"
            arg_text = debruijn_to_str(arg)
            if isinstance(arg, (DBLam, DBApp)):
                arg_text = f"({arg_text})"
            return f"{fn_text} {arg_text}"

    raise TypeError(f"Cannot render unknown De Bruijn term: {term!r}")


__all__ = [
    "latex_type",
    "latex_term",
    "latex_ctx",
    "derivation_to_latex",
    "debruijn_to_str",
]
