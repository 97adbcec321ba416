"""Exceptions raised by the outer layers of the interpreter.

Typing errors and divergence are ordinary values in the core and never show up
here.
"""

from __future__ import annotations

from dataclasses import dataclass


class LambdaError(Exception):
    """Base class for every error the interpreter reports to the user."""


@dataclass(frozen=True)
class Span:
    start: int
    end: int

    def extract(self, source: str) -> str:
        return source[self.start : self.end]


@dataclass
class ParseError(LambdaError):
    message: str
    span: Span
    source: str | None = None

    def __str__(self) -> str:
        if self.source is None:
            return f"{self.message} @ {self.span.start}:{self.span.end}"
        snippet = self.span.extract(self.source)
        return f"{self.message} @ {self.span.start}:{self.span.end}: {snippet!r}"


class LibraryError(LambdaError):
    """A library file could not be read, parsed or written."""


class UnknownStrategyError(LambdaError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown strategy {name!r}")
        self.name = name


class CyclicDefinitionError(LambdaError):
    """Alias expansion reached a definition that refers back to itself."""

    def __init__(self, chain: tuple[str, ...]) -> None:
        super().__init__(f"Cyclic definition: {' -> '.join(chain)}")
        self.chain = chain


class ConfigError(LambdaError, ValueError):
    """A setting has an invalid value."""


__all__ = [
    "LambdaError",
    "Span",
    "ParseError",
    "LibraryError",
    "UnknownStrategyError",
    "CyclicDefinitionError",
    "ConfigError",
]
