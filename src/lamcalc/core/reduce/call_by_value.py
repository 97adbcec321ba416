"""Call-by-value: arguments are reduced to values before being substituted."""

from __future__ import annotations

from ..ast import App, Lam, Term, Var
from ..subst import substitute


def cbv_step(term: Term) -> Term | None:
    """One call-by-value step, or ``None`` when ``term`` is a value or stuck.

    The function position is reduced first. Once it is an abstraction the
    argument is reduced one step at a time, and the redex is contracted only
    when the argument no longer steps.
    """

    match term:
        case App(Lam(name, body, _) as fn, arg):
            arg1 = cbv_step(arg)
            if arg1 is not None:
                return App(fn, arg1)
            return substitute(body, name, arg)
        case App(fn, arg):
            fn1 = cbv_step(fn)
            if fn1 is None:
                return None
            return App(fn1, arg)
        case Lam() | Var():
            return None

    raise TypeError(f"Unexpected term in cbv_step: {term!r}")
