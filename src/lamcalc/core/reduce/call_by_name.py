"""Call-by-name: arguments are substituted unevaluated."""

from __future__ import annotations

from ..ast import App, Lam, Term, Var
from ..subst import substitute


def cbn_step(term: Term) -> Term | None:
    """One call-by-name step, or ``None`` when the head is not a redex.

    Only the function position is ever reduced; arguments and abstraction
    bodies are left alone.
    """

    match term:
        case App(Lam(name, body, _), arg):
            return substitute(body, name, arg)
        case App(fn, arg):
            fn1 = cbn_step(fn)
            if fn1 is None:
                return None
            return App(fn1, arg)
        case Lam() | Var():
            return None

    raise TypeError(f"Unexpected term in cbn_step: {term!r}")
