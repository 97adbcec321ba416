import io

import pytest

from lamcalc.config import Settings
from lamcalc.core.ast import Lam, Var
from lamcalc.repl import Repl


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


def _run(repl: Repl, *lines: str) -> list[str]:
    for line in lines:
        repl.onecmd(line)
    return repl.stdout.getvalue().splitlines()


def test_definition_is_added_to_environment(out) -> None:
    repl = Repl(stdout=out)

    assert _run(repl, "I = λx. x") == ["I added to the environment."]
    assert repl.env.lookup("I") == Lam("x", Var("x"))


def test_evaluation_prints_each_step(out) -> None:
    lines = _run(Repl(stdout=out), "(λx. x) (λy. y)")

    assert lines == ["   (λx. x) (λy. y)", " → λy. y", " ⇸"]


def test_results_are_shown_through_aliases(out) -> None:
    lines = _run(Repl(stdout=out), "I = λx. x", "I I")

    assert lines[1:] == ["   I I", " → I", " ⇸"]


def test_hide_aliases(out) -> None:
    lines = _run(Repl(stdout=out), "I = λx. x", ":hide-aliases", "I I")

    assert lines[-2] == " → λx. x"


def test_hidden_steps_print_only_the_result(out) -> None:
    repl = Repl(stdout=out)
    lines = _run(repl, ":hide-steps", "(λx. x) ((λy. y) (λz. z))")

    assert lines == ["   (λx. x) ((λy. y) (λz. z))", " → λz. z", " ⇸"]


def test_divergence_is_reported(out) -> None:
    lines = _run(Repl(stdout=out), ":normal-order", "(λx. x x) (λx. x x)")

    assert lines[-1] == (
        "The term '(λx. x x) (λx. x x)' diverges using the normal-order strategy."
    )


def test_call_by_name_ignores_unused_argument(out) -> None:
    repl = Repl(stdout=out)
    lines = _run(repl, ":call-by-name", "(λx. λy. y) ((λz. z z) (λz. z z))")

    assert lines[-2:] == [" → λy. y", " ⇸"]
    assert repl.settings.strategy == "call-by-name"


def test_step_budget(out) -> None:
    repl = Repl(Settings(max_steps=3, show_steps=False), stdout=out)
    lines = _run(repl, "(λx. x x x) (λx. x x x)")

    assert lines[-1] == "Gave up after 3 steps using the call-by-value strategy."


def test_input_echo_folds_known_subterms(out) -> None:
    lines = _run(Repl(stdout=out), "I = λx. x", "(λx. x) (λy. y)", "λz. z")

    assert lines[1] == "   I I"
    assert lines[-2:] == ["   λz. z", " ⇸"]


def test_input_echo_is_literal_when_aliases_are_hidden(out) -> None:
    lines = _run(Repl(stdout=out), "I = λx. x", ":hide-aliases", "(λx. x) (λy. y)")

    assert lines[1] == "   (λx. x) (λy. y)"


def test_deeply_nested_terms_stop_and_session_continues(out) -> None:
    repl = Repl(Settings(max_steps=0, show_steps=False), stdout=out)
    lines = _run(repl, "(λx. x x x) (λx. x x x)", "(λx. x) (λy. y)")

    assert lines[1].startswith("Gave up after ")
    assert lines[1].endswith("call-by-value strategy: the term is nested too deeply.")
    assert lines[2:] == ["   (λx. x) (λy. y)", " → λy. y", " ⇸"]


def test_unknown_names_block_evaluation(out) -> None:
    lines = _run(Repl(stdout=out), "(λx. x) y")

    assert lines == ["   (λx. x) y", "unknown name 'y'"]


def test_typing_rejects_ill_typed_terms(out) -> None:
    lines = _run(Repl(stdout=out), ":enable-typing", "(λx:A. x) (λy. y)")

    assert lines[-1] == "error: missing type annotation for y"


def test_typing_accepts_well_typed_terms(out) -> None:
    lines = _run(Repl(stdout=out), ":enable-typing", "λx:A. x")

    assert lines[-1] == " ⇸"


def test_type_command(out) -> None:
    assert _run(Repl(stdout=out), ":type λf:A -> B. λx:A. f x") == ["(A -> B) -> A -> B"]


def test_derivation_command(out) -> None:
    lines = _run(Repl(stdout=out), ":derivation λx:A. x")

    assert lines[0] == r"\begin{prooftree}"
    assert lines[-1] == r"\end{prooftree}"


def test_de_bruijn_command_expands_aliases(out) -> None:
    lines = _run(Repl(stdout=out), "K = λx y. x", ":de-bruijn K")

    assert lines[-1] == "λ. λ. 1"


def test_env_and_rm(out) -> None:
    repl = Repl(stdout=out)
    lines = _run(repl, "I = λx. x", "K = λx y. x", ":env", ":rm I", ":env")

    assert lines[2:] == [
        "I = λx. x",
        "K = λx. λy. x",
        "[I] removed from the environment",
        "K = λx. λy. x",
    ]


def test_save_and_load(tmp_path, out) -> None:
    settings = Settings(lib_path=tmp_path)
    first = Repl(settings, stdout=out)
    _run(first, "I = λx. x", ":save std")

    second = Repl(settings, stdout=io.StringIO())
    lines = _run(second, ":load std", ":env")

    assert lines == ["Library std loaded in the environment", "I = λx. x"]


def test_errors_are_reported_and_session_continues(out) -> None:
    repl = Repl(stdout=out)
    lines = _run(repl, "λ.", ":load missing", "I = λx. x")

    assert lines[0].startswith("Unexpected token")
    assert lines[1].startswith("Unable to load missing")
    assert lines[2] == "I added to the environment."


def test_unknown_command(out) -> None:
    assert _run(Repl(stdout=out), ":frobnicate") == [
        "Unknown command :frobnicate. Type :help for the list of commands."
    ]


def test_quit_stops_the_loop(out) -> None:
    repl = Repl(stdout=out)

    assert repl.onecmd(":quit") is True
    assert repl.onecmd("I = λx. x") is False


def test_cmdloop_reads_from_stdin(out) -> None:
    stdin = io.StringIO("I = λx. x\n:env\n:quit\n")
    Repl(stdin=stdin, stdout=out).cmdloop()

    text = out.getvalue()
    assert "λ Interpreter" in text
    assert "I = λx. x" in text
