"""Simple types: base types, arrows and the absorbing error type."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Base:
    """An atomic type such as ``A`` or ``Nat``."""

    name: str


@dataclass(frozen=True)
class Arrow:
    """Function type ``domain -> codomain``.

    Args:
        domain: Type of the argument.
        codomain: Type of the result.
    """

    domain: Type
    codomain: Type

    def __post_init__(self) -> None:
        if isinstance(self.domain, ErrorType) or isinstance(self.codomain, ErrorType):
            raise ValueError("ErrorType cannot be used to build an arrow")


@dataclass(frozen=True)
class ErrorType:
    """The result of checking an ill-typed term.

    Error types are absorbing: any rule that would combine one with another
    type returns the error unchanged instead.
    """

    message: str


type Type = Base | Arrow | ErrorType


def is_error(ty: Type) -> bool:
    return isinstance(ty, ErrorType)


def arrows(*types: Type) -> Type:
    """Build the right-nested arrow ``t1 -> t2 -> ... -> tn``."""

    if not types:
        raise ValueError("arrows() needs at least one type")
    result = types[-1]
    for ty in reversed(types[:-1]):
        result = Arrow(ty, result)
    return result


__all__ = ["Type", "Base", "Arrow", "ErrorType", "is_error", "arrows"]
