"""Named definitions (aliases) shared by the evaluations of a session."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from ..errors import CyclicDefinitionError
from .ast import Term
from .debruijn import DBTerm, to_debruijn
from .subst import free_vars, substitute

logger = logging.getLogger(__name__)


class Environment:
    """
    Ordered mapping from alias names to the terms they stand for.

    Notes:
        - Insertion order is kept so that listings and saved libraries are
          deterministic; rebinding a name keeps its original position.
        - One instance per session; nothing here is global.
    """

    def __init__(self, definitions: dict[str, Term] | None = None) -> None:
        self._bindings: dict[str, Term] = {}
        self._nameless: dict[str, DBTerm] = {}
        for name, term in (definitions or {}).items():
            self.bind(name, term)

    # ---- mutation ----
    def bind(self, name: str, term: Term) -> None:
        """Define ``name``, replacing any previous definition."""

        logger.debug("bind %s = %r", name, term)
        self._bindings[name] = term
        self._nameless[name] = to_debruijn(term)

    def unbind(self, name: str) -> None:
        """Remove ``name``; removing an unknown name does nothing."""

        if self._bindings.pop(name, None) is not None:
            logger.debug("unbind %s", name)
        self._nameless.pop(name, None)

    def clear(self) -> None:
        self._bindings.clear()
        self._nameless.clear()

    # ---- queries ----
    def lookup(self, name: str) -> Term | None:
        return self._bindings.get(name)

    def definitions(self) -> list[tuple[str, Term]]:
        """All ``(name, term)`` pairs in insertion order."""

        return list(self._bindings.items())

    def alias_of(self, term: Term) -> str | None:
        """Return the first name bound to a term alpha-equivalent to ``term``."""

        nameless = to_debruijn(term)
        for name, candidate in self._nameless.items():
            if candidate == nameless:
                return name
        return None

    def contains_expr(self, term: Term) -> bool:
        """Whether some definition is alpha-equivalent to ``term``."""

        return self.alias_of(term) is not None

    # ---- alias expansion ----
    def expand(self, term: Term) -> Term:
        """Replace every free variable naming a definition by that definition.

        Definitions may refer to earlier (or later) ones; expansion continues
        until no free variable names a binding. A definition that reaches
        itself raises :class:`CyclicDefinitionError`.
        """

        return self._expand(term, ())

    def _expand(self, term: Term, chain: tuple[str, ...]) -> Term:
        for name in sorted(free_vars(term)):
            definition = self._bindings.get(name)
            if definition is None:
                continue
            if name in chain:
                raise CyclicDefinitionError((*chain, name))
            expanded = self._expand(definition, (*chain, name))
            term = substitute(term, name, expanded)
        return term

    # ---- container protocol ----
    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __repr__(self) -> str:
        return f"Environment({list(self._bindings)!r})"


__all__ = ["Environment"]
