"""Pretty-printing of terms and types, optionally folding known aliases."""

from __future__ import annotations

from lamcalc.core.ast import App, Lam, Term, Var
from lamcalc.core.environment import Environment
from lamcalc.core.subst import free_vars
from lamcalc.core.types import Arrow, Base, ErrorType, Type

ATOM_PREC = 2
APP_PREC = 1
LAM_PREC = 0

LAMBDA = "λ"


def _maybe_paren(
    text: str, child_prec: int, parent_prec: int, *, allow_equal: bool
) -> str:
    if child_prec < parent_prec or (child_prec == parent_prec and not allow_equal):
        return f"({text})"
    return text


def pretty_type(ty: Type) -> str:
    """Render ``ty`` with right-associative arrows."""

    match ty:
        case Base(name):
            return name
        case Arrow(Arrow() as domain, codomain):
            return f"({pretty_type(domain)}) -> {pretty_type(codomain)}"
        case Arrow(domain, codomain):
            return f"{pretty_type(domain)} -> {pretty_type(codomain)}"
        case ErrorType(message):
            return f"error: {message}"

    raise TypeError(f"Cannot pretty-print unknown type: {ty!r}")


def _binder(lam: Lam) -> str:
    if lam.ty is None:
        return lam.name
    return f"{lam.name}:{pretty_type(lam.ty)}"


def pretty(term: Term, aliases: Environment | None = None) -> str:
    """Return a human-friendly string for ``term``.

    With ``aliases``, any closed subterm alpha-equivalent to a definition is
    shown by the definition's name instead.
    """

    def alias(t: Term, bound: frozenset[str]) -> str | None:
        if aliases is None or isinstance(t, Var):
            return None
        if free_vars(t) & bound:
            return None
        return aliases.alias_of(t)

    def fmt(t: Term, bound: frozenset[str]) -> tuple[str, int]:
        name = alias(t, bound)
        if name is not None:
            return name, ATOM_PREC

        match t:
            case Var(name):
                return name, ATOM_PREC

            case App(f, a):
                func_text, func_prec = fmt(f, bound)
                arg_text, arg_prec = fmt(a, bound)
                func_disp = _maybe_paren(
                    func_text, func_prec, APP_PREC, allow_equal=True
                )
                arg_disp = _maybe_paren(arg_text, arg_prec, APP_PREC, allow_equal=False)
                return f"{func_disp} {arg_disp}", APP_PREC

            case Lam(binder, body, _):
                body_text, _ = fmt(body, bound | {binder})
                return f"{LAMBDA}{_binder(t)}. {body_text}", LAM_PREC

        raise TypeError(f"Cannot pretty-print unknown term: {t!r}")

    return fmt(term, frozenset())[0]


__all__ = ["pretty", "pretty_type", "LAMBDA"]
