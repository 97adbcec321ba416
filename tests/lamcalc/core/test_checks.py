from lamcalc.core.ast import App, Lam, Var
from lamcalc.core.checks import check, is_well_formed


def test_closed_term_is_well_formed() -> None:
    assert check(Lam("x", App(Var("x"), Var("x")))) == []
    assert is_well_formed(Lam("x", Var("x")))


def test_free_variables_are_reported_in_order() -> None:
    issues = check(App(Var("y"), Lam("x", Var("a"))))

    assert [issue.name for issue in issues] == ["a", "y"]
    assert str(issues[0]) == "unknown name 'a'"
    assert not is_well_formed(Var("y"))
