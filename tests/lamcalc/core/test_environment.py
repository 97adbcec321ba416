import pytest

from lamcalc.core.ast import App, Lam, Var, lams
from lamcalc.core.debruijn import alpha_equivalent
from lamcalc.core.environment import Environment
from lamcalc.errors import CyclicDefinitionError

I = Lam("x", Var("x"))
K = lams("x", "y", body=Var("x"))


def test_bind_then_lookup() -> None:
    env = Environment()
    env.bind("I", I)

    assert env.lookup("I") == I
    assert env.lookup("K") is None
    assert "I" in env and len(env) == 1


def test_binding_twice_is_idempotent() -> None:
    env = Environment()
    env.bind("I", I)
    env.bind("I", I)

    assert env.lookup("I") == I
    assert env.definitions() == [("I", I)]


def test_rebinding_overwrites_and_keeps_position() -> None:
    env = Environment({"I": I, "K": K})
    env.bind("I", Lam("y", Var("y")))

    assert env.definitions() == [("I", Lam("y", Var("y"))), ("K", K)]


def test_unbind_twice_is_a_no_op() -> None:
    env = Environment({"I": I})
    env.unbind("I")
    env.unbind("I")

    assert env.lookup("I") is None
    assert len(env) == 0


def test_definitions_keep_insertion_order() -> None:
    env = Environment()
    for name in ("c", "a", "b"):
        env.bind(name, Var(name))

    assert [name for name, _ in env.definitions()] == ["c", "a", "b"]
    assert list(env) == ["c", "a", "b"]


def test_contains_expr_uses_alpha_equivalence() -> None:
    env = Environment({"I": I})

    assert env.contains_expr(Lam("z", Var("z")))
    assert not env.contains_expr(K)


def test_alias_of_returns_first_matching_name() -> None:
    env = Environment({"I": I, "Id": Lam("y", Var("y"))})

    assert env.alias_of(Lam("q", Var("q"))) == "I"
    assert env.alias_of(K) is None


def test_clear_removes_everything() -> None:
    env = Environment({"I": I, "K": K})
    env.clear()

    assert env.definitions() == []
    assert not env.contains_expr(I)


def test_expand_replaces_free_alias_names() -> None:
    env = Environment({"I": I, "K": K})
    expanded = env.expand(App(Var("K"), Var("I")))

    assert expanded == App(K, I)


def test_expand_follows_definitions_referring_to_others() -> None:
    env = Environment({"I": I, "II": App(Var("I"), Var("I"))})

    assert env.expand(Var("II")) == App(I, I)


def test_expand_respects_shadowing_binders() -> None:
    env = Environment({"I": I})
    term = Lam("I", Var("I"))

    assert env.expand(term) == term


def test_expand_avoids_capture() -> None:
    env = Environment({"Y": Var("y")})
    expanded = env.expand(Lam("y", App(Var("Y"), Var("y"))))

    assert alpha_equivalent(expanded, Lam("z", App(Var("y"), Var("z"))))


def test_expand_detects_cycles() -> None:
    env = Environment({"A": App(Var("B"), Var("x")), "B": Var("A")})

    with pytest.raises(CyclicDefinitionError, match="A -> B -> A"):
        env.expand(Var("A"))


def test_environments_are_independent() -> None:
    first, second = Environment(), Environment()
    first.bind("I", I)

    assert second.lookup("I") is None
