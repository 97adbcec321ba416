"""Drive a reduction strategy until a normal form or an immediate cycle."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

from .ast import Term
from .debruijn import alpha_equivalent
from .reduce import Strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reduced:
    """One transition; ``term`` is the reduct."""

    term: Term


@dataclass(frozen=True)
class NormalForm:
    """The strategy has nothing left to reduce in ``term``."""

    term: Term


@dataclass(frozen=True)
class Diverges:
    """``term`` reduced to itself up to renaming under ``strategy``."""

    term: Term
    strategy: str


type Step = Reduced | NormalForm | Diverges


def steps(term: Term, strategy: Strategy) -> Iterator[Step]:
    """Yield every transition of ``term`` under ``strategy``.

    The sequence ends with exactly one ``NormalForm`` or ``Diverges`` event.
    Divergence is only noticed when a step reproduces the previous term up to
    alpha-equivalence; any other non-terminating reduction makes the iterator
    infinite, so callers wanting a bound should use :func:`evaluate`.
    """

    current = term
    while True:
        reduct = strategy(current)
        if reduct is None:
            yield NormalForm(current)
            return
        if alpha_equivalent(current, reduct):
            logger.debug("%s: cycle detected at %r", strategy.name, current)
            yield Diverges(current, strategy.name)
            return
        logger.debug("%s: %r -> %r", strategy.name, current, reduct)
        current = reduct
        yield Reduced(current)


class OutcomeKind(Enum):
    NORMAL_FORM = "normal-form"
    DIVERGES = "diverges"
    STEP_LIMIT = "step-limit"
    TOO_DEEP = "too-deep"


@dataclass(frozen=True)
class Outcome:
    """Summary of a finished evaluation.

    Args:
        kind: How the evaluation stopped.
        term: The normal form, the diverging term, or the last reduct reached
            before the step budget ran out or the term grew too deep to recurse
            over.
        trace: Every term visited, starting with the input.
    """

    kind: OutcomeKind
    term: Term
    trace: tuple[Term, ...]

    @property
    def step_count(self) -> int:
        return len(self.trace) - 1


def evaluate(
    term: Term,
    strategy: Strategy,
    max_steps: int | None = None,
    on_step: Callable[[Term], None] | None = None,
) -> Outcome:
    """Run ``strategy`` on ``term`` and report how the evaluation ended.

    ``max_steps`` bounds the number of reductions; ``None`` means no bound.
    ``on_step`` is called with each reduct as soon as it is produced. A term
    nested beyond the interpreter's recursion limit ends the run with
    ``OutcomeKind.TOO_DEEP`` instead of raising.
    """

    trace = [term]
    try:
        for event in steps(term, strategy):
            match event:
                case NormalForm(result):
                    return Outcome(OutcomeKind.NORMAL_FORM, result, tuple(trace))
                case Diverges(result, _):
                    return Outcome(OutcomeKind.DIVERGES, result, tuple(trace))
                case Reduced(reduct):
                    if max_steps is not None and len(trace) > max_steps:
                        logger.warning(
                            "Stopped %s evaluation after %d steps", strategy.name, max_steps
                        )
                        return Outcome(OutcomeKind.STEP_LIMIT, trace[-1], tuple(trace))
                    trace.append(reduct)
                    if on_step is not None:
                        on_step(reduct)
    except RecursionError:
        logger.warning(
            "Stopped %s evaluation after %d steps: term nested too deeply",
            strategy.name,
            len(trace) - 1,
        )
        return Outcome(OutcomeKind.TOO_DEEP, trace[-1], tuple(trace))

    raise AssertionError("steps() ended without a terminal event")


__all__ = [
    "Step",
    "Reduced",
    "NormalForm",
    "Diverges",
    "steps",
    "OutcomeKind",
    "Outcome",
    "evaluate",
]
