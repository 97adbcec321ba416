"""Free variables, fresh names and capture-avoiding substitution."""

from __future__ import annotations

import re
from collections.abc import Collection

from .ast import App, Lam, Term, Var

_SUFFIX = re.compile(r"\d+$")


def free_vars(term: Term) -> frozenset[str]:
    """Names occurring free in ``term``."""

    match term:
        case Var(name):
            return frozenset((name,))
        case Lam(name, body, _):
            return free_vars(body) - {name}
        case App(fn, arg):
            return free_vars(fn) | free_vars(arg)

    raise TypeError(f"Unexpected term in free_vars: {term!r}")


def bound_vars(term: Term) -> frozenset[str]:
    """Names introduced by some binder inside ``term``."""

    match term:
        case Var(_):
            return frozenset()
        case Lam(name, body, _):
            return bound_vars(body) | {name}
        case App(fn, arg):
            return bound_vars(fn) | bound_vars(arg)

    raise TypeError(f"Unexpected term in bound_vars: {term!r}")


def fresh_name(base: str, avoid: Collection[str]) -> str:
    """Return ``base`` with the smallest numeric suffix not present in ``avoid``.

    Any digits already ending ``base`` are dropped first, so renaming ``x1``
    yields ``x2`` rather than ``x11``.
    """

    stem = _SUFFIX.sub("", base) or base
    suffix = 1
    while f"{stem}{suffix}" in avoid:
        suffix += 1
    return f"{stem}{suffix}"


def rename(lam: Lam, new_name: str) -> Lam:
    """Alpha-rename the binder of ``lam`` to ``new_name``.

    ``new_name`` must not occur free in the body, otherwise it gets captured.
    """

    return Lam(new_name, substitute(lam.body, lam.name, Var(new_name)), lam.ty)


def substitute(target: Term, name: str, replacement: Term) -> Term:
    """Replace every free occurrence of ``name`` in ``target`` with ``replacement``.

    Binders that would capture a free variable of ``replacement`` are renamed
    on the way down.
    """

    match target:
        case Var(n):
            return replacement if n == name else target
        case App(fn, arg):
            fn1 = substitute(fn, name, replacement)
            arg1 = substitute(arg, name, replacement)
            if fn1 is fn and arg1 is arg:
                return target
            return App(fn1, arg1)
        case Lam(bound, body, ty):
            if bound == name or name not in free_vars(body):
                return target
            replacement_fv = free_vars(replacement)
            if bound in replacement_fv:
                avoid = replacement_fv | free_vars(body) | bound_vars(body)
                renamed = rename(target, fresh_name(bound, avoid))
                bound, body = renamed.name, renamed.body
            return Lam(bound, substitute(body, name, replacement), ty)

    raise TypeError(f"Unexpected term in substitute: {target!r}")


__all__ = ["free_vars", "bound_vars", "fresh_name", "rename", "substitute"]
