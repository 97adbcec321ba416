"""Normal order: leftmost-outermost reduction to full beta-normal form."""

from __future__ import annotations

from ..ast import App, Lam, Term, Var
from ..subst import substitute


def normal_order_step(term: Term) -> Term | None:
    """Contract the leftmost-outermost redex of ``term``.

    Returns ``None`` only when no redex remains anywhere in the term, under
    binders included.
    """

    match term:
        case App(Lam(name, body, _), arg):
            return substitute(body, name, arg)
        case App(fn, arg):
            fn1 = normal_order_step(fn)
            if fn1 is not None:
                return App(fn1, arg)
            arg1 = normal_order_step(arg)
            if arg1 is not None:
                return App(fn, arg1)
            return None
        case Lam(name, body, ty):
            body1 = normal_order_step(body)
            if body1 is None:
                return None
            return Lam(name, body1, ty)
        case Var():
            return None

    raise TypeError(f"Unexpected term in normal_order_step: {term!r}")
