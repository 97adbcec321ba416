"""Nameless (De Bruijn) forms of terms, used to compare terms up to renaming."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .ast import App, Lam, Term, Var


@dataclass(frozen=True)
class DBVar:
    """Bound variable pointing ``index`` binders outward (``0`` = innermost)."""

    index: int

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("De Bruijn indices must be non-negative")


@dataclass(frozen=True)
class DBFree:
    """Free variable; keeps its name."""

    name: str


@dataclass(frozen=True)
class DBLam:
    body: DBTerm


@dataclass(frozen=True)
class DBApp:
    fn: DBTerm
    arg: DBTerm


type DBTerm = DBVar | DBFree | DBLam | DBApp


def to_debruijn(term: Term, context: Sequence[str] = ()) -> DBTerm:
    """Convert ``term`` to its nameless form.

    ``context`` lists the names bound around ``term``, innermost first. A
    variable becomes the position of its nearest binder in that list, or stays
    a named free variable when no binder matches.
    """

    match term:
        case Var(name):
            for index, bound in enumerate(context):
                if bound == name:
                    return DBVar(index)
            return DBFree(name)
        case Lam(name, body, _):
            return DBLam(to_debruijn(body, (name, *context)))
        case App(fn, arg):
            return DBApp(to_debruijn(fn, context), to_debruijn(arg, context))

    raise TypeError(f"Unexpected term in to_debruijn: {term!r}")


def alpha_equivalent(left: Term, right: Term) -> bool:
    """Return ``True`` when the terms differ at most by bound variable names."""

    return to_debruijn(left) == to_debruijn(right)


__all__ = [
    "DBTerm",
    "DBVar",
    "DBFree",
    "DBLam",
    "DBApp",
    "to_debruijn",
    "alpha_equivalent",
]
