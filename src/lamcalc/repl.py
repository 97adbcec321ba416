"""Interactive read-eval-print loop. Uses cmd as backend."""

from __future__ import annotations

import cmd
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import IO

from .config import Settings
from .core.ast import Term
from .core.checks import check
from .core.debruijn import to_debruijn
from .core.environment import Environment
from .core.evaluate import OutcomeKind, evaluate
from .core.reduce import CALL_BY_NAME, CALL_BY_VALUE, NORMAL_ORDER, get_strategy
from .core.types import ErrorType
from .core.typing import derive, type_of
from .errors import LambdaError
from .library import load_library, save_library
from .surface.latex import debruijn_to_str, derivation_to_latex
from .surface.parse import Definition, parse_statement, parse_term
from .surface.pretty import pretty, pretty_type

logger = logging.getLogger(__name__)

BANNER = "λ Interpreter\ntype :help for help and :quit to quit"

HELP = """Available commands:
 :help               Display this help
 :quit               Quit the λ Interpreter
 :normal-order       Use normal order strategy to reduce the terms
 :call-by-name       Use call by name strategy to reduce the terms
 :call-by-value      Use call by value strategy to reduce the terms (default)
 :strategy           Show the current strategy
 :show-steps         Show the steps when reducing (enabled by default)
 :hide-steps         Do not show steps when reducing
 :env                Show the current environment
 :rm <n1> [<n2> ...] Removes the given names from the environment
 :load <name>        Load the definitions from the given library to environment
 :save <name>        Save the current environment to the given library
 :save! <name>       Same as :save, overwriting an existing library
 :show-aliases       Display alias when an expression is known as an alias (default)
 :hide-aliases       Do not display aliases
 :de-bruijn <expr>   Show the De Bruijn representation of the given lambda term
 :enable-typing      Enable type checking of lambda terms
 :disable-typing     Disable type checking of lambda terms (default)
 :type <expr>        Display the type of the expression
 :derivation <expr>  Creates a LaTeX representation of the typing derivation tree"""


class Repl(cmd.Cmd):
    """Lambda calculus interpreter shell.

    Every input line is either a ``:command`` or a statement (a term to
    evaluate, or ``name = term`` to define an alias). Errors are printed and
    the session carries on.
    """

    intro = BANNER
    prompt = "λ > "

    def __init__(
        self,
        settings: Settings | None = None,
        env: Environment | None = None,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
    ) -> None:
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False
        self.settings = settings or Settings()
        self.env = env if env is not None else Environment()
        self._commands: dict[str, Callable[[str], bool | None]] = {
            "help": self.cmd_help,
            "quit": self.cmd_quit,
            NORMAL_ORDER: lambda _: self.switch_to(NORMAL_ORDER),
            CALL_BY_NAME: lambda _: self.switch_to(CALL_BY_NAME),
            CALL_BY_VALUE: lambda _: self.switch_to(CALL_BY_VALUE),
            "strategy": self.cmd_strategy,
            "show-steps": lambda _: self.configure(show_steps=True),
            "hide-steps": lambda _: self.configure(show_steps=False),
            "show-aliases": lambda _: self.configure(show_aliases=True),
            "hide-aliases": lambda _: self.configure(show_aliases=False),
            "enable-typing": lambda _: self.configure(check_types=True),
            "disable-typing": lambda _: self.configure(check_types=False),
            "env": self.cmd_env,
            "rm": self.cmd_rm,
            "load": self.cmd_load,
            "save": self.cmd_save,
            "save!": lambda arg: self.cmd_save(arg, overwrite=True),
            "de-bruijn": self.cmd_de_bruijn,
            "type": self.cmd_type,
            "derivation": self.cmd_derivation,
        }

    # ---- output ----
    def echo(self, text: str) -> None:
        self.stdout.write(text + "\n")

    def show(self, term: Term) -> str:
        return pretty(term, self.env if self.settings.show_aliases else None)

    # ---- cmd.Cmd hooks ----
    def emptyline(self) -> bool:
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg: str) -> bool:
        """Exits interpreter."""
        self.echo("")
        return True

    def onecmd(self, line: str) -> bool:
        line = line.strip()
        if not line:
            return self.emptyline()
        if line == "EOF":
            return self.do_EOF("")
        try:
            if line.startswith(":"):
                return self.run_command(line[1:])
            self.run_statement(line)
        except LambdaError as exc:
            logger.debug("command failed", exc_info=True)
            self.echo(str(exc))
        except RecursionError:
            logger.debug("command failed", exc_info=True)
            self.echo("Term nested too deeply to process.")
        return False

    # ---- dispatch ----
    def run_command(self, text: str) -> bool:
        name, _, arg = text.strip().partition(" ")
        handler = self._commands.get(name)
        if handler is None:
            self.echo(f"Unknown command :{name}. Type :help for the list of commands.")
            return False
        return bool(handler(arg.strip()))

    def run_statement(self, line: str) -> None:
        match parse_statement(line):
            case Definition(name, term):
                self.env.bind(name, term)
                self.echo(f"{name} added to the environment.")
            case term:
                self.evaluate_term(term)

    def evaluate_term(self, term: Term) -> None:
        """Print the reduction of ``term`` under the current strategy."""

        # an input that is itself a known definition is echoed as typed
        folds = self.settings.show_aliases and not self.env.contains_expr(term)
        self.echo("   " + pretty(term, self.env if folds else None))
        expanded = self.env.expand(term)
        issues = check(expanded)
        if issues:
            for issue in issues:
                self.echo(str(issue))
            return
        if self.settings.check_types:
            ty = type_of(None, expanded)
            if isinstance(ty, ErrorType):
                self.echo(pretty_type(ty))
                return

        strategy = get_strategy(self.settings.strategy)
        on_step = self._print_step if self.settings.show_steps else None
        outcome = evaluate(expanded, strategy, self.settings.step_budget, on_step)
        match outcome.kind:
            case OutcomeKind.NORMAL_FORM:
                if not self.settings.show_steps:
                    self._print_step(outcome.term)
                self.echo(" ⇸")
            case OutcomeKind.DIVERGES:
                self.echo(
                    f"The term '{pretty(outcome.term)}' diverges using the "
                    f"{strategy.name} strategy."
                )
            case OutcomeKind.STEP_LIMIT:
                if not self.settings.show_steps:
                    self._print_step(outcome.term)
                self.echo(
                    f"Gave up after {outcome.step_count} steps using the "
                    f"{strategy.name} strategy."
                )
            case OutcomeKind.TOO_DEEP:
                self.echo(
                    f"Gave up after {outcome.step_count} steps using the "
                    f"{strategy.name} strategy: the term is nested too deeply."
                )

    def _print_step(self, term: Term) -> None:
        self.echo(" → " + self.show(term))

    # ---- settings ----
    def configure(self, **changes: object) -> None:
        self.settings = replace(self.settings, **changes)

    def switch_to(self, strategy: str) -> None:
        self.configure(strategy=get_strategy(strategy).name)
        self.echo(f"Using the {strategy} strategy.")

    # ---- commands ----
    def cmd_help(self, arg: str) -> None:
        self.echo(HELP)

    def cmd_quit(self, arg: str) -> bool:
        return True

    def cmd_strategy(self, arg: str) -> None:
        self.echo(self.settings.strategy)

    def cmd_env(self, arg: str) -> None:
        for name, term in self.env.definitions():
            self.echo(f"{name} = {pretty(term)}")

    def cmd_rm(self, arg: str) -> None:
        names = arg.split()
        for name in names:
            self.env.unbind(name)
        self.echo(f"[{', '.join(names)}] removed from the environment")

    def cmd_load(self, arg: str) -> None:
        for name in arg.split():
            load_library(self.env, name, self.settings.lib_path)
            self.echo(f"Library {name} loaded in the environment")

    def cmd_save(self, arg: str, overwrite: bool = False) -> None:
        if not arg:
            self.echo("Usage: :save <name>")
            return
        save_library(self.env, arg, self.settings.lib_path, overwrite=overwrite)
        self.echo(f"Environment saved to library {arg}")

    def cmd_de_bruijn(self, arg: str) -> None:
        term = self.env.expand(parse_term(arg))
        self.echo(debruijn_to_str(to_debruijn(term)))

    def cmd_type(self, arg: str) -> None:
        term = self.env.expand(parse_term(arg))
        self.echo(pretty_type(type_of(None, term)))

    def cmd_derivation(self, arg: str) -> None:
        term = self.env.expand(parse_term(arg))
        derivation, _ = derive(None, term)
        self.echo(derivation_to_latex(derivation))


__all__ = ["Repl", "BANNER", "HELP"]
