"""Well-formedness checks run on a term before it is evaluated."""

from __future__ import annotations

from dataclasses import dataclass

from .ast import Term
from .subst import free_vars


@dataclass(frozen=True)
class WellFormednessIssue:
    name: str
    message: str

    def __str__(self) -> str:
        return self.message


def check(term: Term) -> list[WellFormednessIssue]:
    """Return the problems preventing ``term`` from being evaluated.

    Evaluation expects closed terms once aliases have been expanded, so every
    remaining free variable is reported.
    """

    return [
        WellFormednessIssue(name, f"unknown name '{name}'")
        for name in sorted(free_vars(term))
    ]


def is_well_formed(term: Term) -> bool:
    return not check(term)


__all__ = ["WellFormednessIssue", "check", "is_well_formed"]
