import pytest

from lamcalc.core.ast import App, Lam, Var, apps, lams
from lamcalc.core.reduce import (
    STRATEGIES,
    cbn_step,
    cbv_step,
    get_strategy,
    normal_order_step,
)
from lamcalc.errors import UnknownStrategyError

I = Lam("x", Var("x"))
SELF_APP = Lam("x", App(Var("x"), Var("x")))
OMEGA = App(SELF_APP, SELF_APP)
ALL_STEPS = [cbv_step, cbn_step, normal_order_step]


@pytest.mark.parametrize("step", ALL_STEPS)
def test_values_do_not_step(step) -> None:
    assert step(Var("x")) is None
    assert step(I) is None


@pytest.mark.parametrize("step", ALL_STEPS)
def test_stuck_application_does_not_step(step) -> None:
    assert step(App(Var("f"), Var("x"))) is None


@pytest.mark.parametrize("step", ALL_STEPS)
def test_beta_contracts_redex_with_value_argument(step) -> None:
    assert step(App(I, Lam("y", Var("y")))) == Lam("y", Var("y"))


# ------------- call-by-value -------------


def test_cbv_reduces_argument_before_substituting() -> None:
    term = App(Lam("x", Var("y")), App(I, Var("z")))
    assert cbv_step(term) == App(Lam("x", Var("y")), Var("z"))


def test_cbv_reduces_function_position_first() -> None:
    term = App(App(I, I), App(I, Var("z")))
    assert cbv_step(term) == App(I, App(I, Var("z")))


def test_cbv_does_not_touch_argument_of_stuck_application() -> None:
    assert cbv_step(App(Var("f"), App(I, Var("z")))) is None


def test_cbv_does_not_reduce_under_binder() -> None:
    assert cbv_step(Lam("y", App(I, Var("y")))) is None


# ------------- call-by-name -------------


def test_cbn_substitutes_unreduced_argument() -> None:
    term = App(Lam("x", Var("y")), App(I, Var("z")))
    assert cbn_step(term) == Var("y")


def test_cbn_never_reduces_argument_alone() -> None:
    assert cbn_step(App(Var("f"), App(I, Var("z")))) is None


def test_cbn_reduces_head_to_abstraction() -> None:
    term = App(App(I, I), Var("z"))
    assert cbn_step(term) == App(I, Var("z"))


def test_cbn_does_not_reduce_under_binder() -> None:
    assert cbn_step(Lam("y", App(I, Var("y")))) is None


# ------------- normal order -------------


def test_normal_order_contracts_outermost_redex_first() -> None:
    term = App(Lam("x", Var("y")), OMEGA)
    assert normal_order_step(term) == Var("y")


def test_normal_order_prefers_leftmost_redex() -> None:
    term = App(App(I, I), App(I, Var("z")))
    assert normal_order_step(term) == App(I, App(I, Var("z")))


def test_normal_order_reduces_argument_of_stuck_application() -> None:
    assert normal_order_step(App(Var("f"), App(I, Var("z")))) == App(Var("f"), Var("z"))


def test_normal_order_reduces_under_binder() -> None:
    assert normal_order_step(Lam("y", App(I, Var("y")))) == Lam("y", Var("y"))


def test_normal_order_none_only_for_full_normal_form() -> None:
    assert normal_order_step(lams("f", "x", body=apps(Var("f"), Var("x")))) is None


# ------------- registry -------------


def test_strategies_are_registered_by_identifier() -> None:
    assert set(STRATEGIES) == {"normal-order", "call-by-name", "call-by-value"}
    assert get_strategy("call-by-name").step is cbn_step
    assert get_strategy("normal-order")(App(I, Var("z"))) == Var("z")


def test_unknown_strategy_is_rejected() -> None:
    with pytest.raises(UnknownStrategyError, match="lazy"):
        get_strategy("lazy")
