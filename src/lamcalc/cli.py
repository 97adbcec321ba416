"""Command-line entry point for the λ interpreter."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .config import Settings, parse_max_steps
from .core.reduce import STRATEGIES
from .errors import LambdaError
from .repl import Repl


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lamcalc", description="Evaluate lambda terms interactively."
    )
    parser.add_argument(
        "libraries", nargs="*", help="libraries to load into the environment at startup"
    )
    parser.add_argument("--strategy", choices=list(STRATEGIES), help="reduction strategy")
    parser.add_argument("--lib-path", type=Path, help="directory holding .lbd libraries")
    parser.add_argument(
        "--max-steps",
        type=parse_max_steps,
        help="reduction budget per evaluation (0 for unbounded)",
    )
    parser.add_argument(
        "--typing", action="store_true", default=None, help="type check before evaluating"
    )
    parser.add_argument("--log-level", help="logging level (DEBUG, INFO, ...)")
    parser.add_argument(
        "-e",
        "--eval",
        dest="statements",
        action="append",
        metavar="STATEMENT",
        help="run STATEMENT (a term, definition or :command) and exit; repeatable",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Runs the interpreter. Called from the ``lamcalc`` console script."""

    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env().with_overrides(
            strategy=args.strategy,
            lib_path=args.lib_path,
            max_steps=args.max_steps,
            check_types=args.typing,
            log_level=args.log_level,
        )
    except LambdaError as exc:
        print(f"lamcalc: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    repl = Repl(settings)
    for name in args.libraries:
        repl.onecmd(f":load {name}")

    if args.statements:
        for statement in args.statements:
            if repl.onecmd(statement):
                break
        return 0

    repl.cmdloop()
    return 0


__all__ = ["build_parser", "main"]
