"""Abstract syntax tree nodes for lambda terms with named variables."""

from __future__ import annotations

from dataclasses import dataclass

from .types import Type


@dataclass(frozen=True)
class Var:
    """Reference to a binder or to a free (global) name."""

    name: str


@dataclass(frozen=True)
class Lam:
    """Abstraction ``λname. body``.

    Args:
        name: Bound variable, scoping over ``body``.
        body: Term evaluated with ``name`` in scope.
        ty: Declared domain type (``λname:ty. body``), used only by the type
            checker. Reduction and alpha-equivalence ignore it.
    """

    name: str
    body: Term
    ty: Type | None = None


@dataclass(frozen=True)
class App:
    """Function application.

    Args:
        fn: Term in function position.
        arg: Argument supplied to ``fn``.
    """

    fn: Term
    arg: Term


type Term = Var | Lam | App


def lams(*names: str, body: Term) -> Term:
    """Curry ``names`` over ``body``: ``lams("x", "y", body=b)`` is ``λx. λy. b``."""

    result = body
    for name in reversed(names):
        result = Lam(name, result)
    return result


def apps(fn: Term, *args: Term) -> Term:
    """Left-nested application ``fn a1 a2 ... an``."""

    result = fn
    for arg in args:
        result = App(result, arg)
    return result


__all__ = ["Term", "Var", "Lam", "App", "lams", "apps"]
