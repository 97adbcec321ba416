"""Interpreter settings, with overrides read from environment variables.

Recognized variables:
    LAMCALC_STRATEGY   reduction strategy (normal-order, call-by-name, call-by-value)
    LAMCALC_LIB_PATH   directory holding ``.lbd`` library files
    LAMCALC_MAX_STEPS  reduction budget per evaluation (0 = unbounded)
    LAMCALC_LOG_LEVEL  logging level name (DEBUG, INFO, ...)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .core.reduce import CALL_BY_VALUE, STRATEGIES
from .errors import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Options controlling a REPL session."""

    strategy: str = CALL_BY_VALUE
    show_steps: bool = True
    show_aliases: bool = True
    check_types: bool = False
    lib_path: Path = Path(".")
    # 0 = unbounded
    max_steps: int = 1000
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ConfigError(
                f"Unknown strategy {self.strategy!r}; expected one of {', '.join(STRATEGIES)}"
            )
        if self.max_steps < 0:
            raise ConfigError("max_steps must be non-negative")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level {self.log_level!r}")

    @property
    def step_budget(self) -> int | None:
        return self.max_steps or None

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    def with_overrides(self, **changes: object) -> Settings:
        """Return a copy with every non-``None`` entry of ``changes`` applied."""

        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        environ = os.environ if environ is None else environ
        changes: dict[str, object] = {}
        if "LAMCALC_STRATEGY" in environ:
            changes["strategy"] = environ["LAMCALC_STRATEGY"]
        if "LAMCALC_LIB_PATH" in environ:
            changes["lib_path"] = Path(environ["LAMCALC_LIB_PATH"])
        if "LAMCALC_MAX_STEPS" in environ:
            changes["max_steps"] = parse_max_steps(environ["LAMCALC_MAX_STEPS"])
        if "LAMCALC_LOG_LEVEL" in environ:
            changes["log_level"] = environ["LAMCALC_LOG_LEVEL"]
        return replace(Settings(), **changes)


def parse_max_steps(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ConfigError(f"max steps must be an integer, got {text!r}") from None
    if value < 0:
        raise ConfigError("max steps must be non-negative")
    return value


__all__ = ["Settings", "parse_max_steps"]
