import pytest

from glenisp.types.value import Lambda


@pytest.fixture
def add(interp):
    interp.eval("(def {add} (\\ {a b} {+ a b}))")
    return interp


def test_lambda_prints_params_and_body(run):
    assert run("(\\ {x} {* x 2})") == "(\\ {x} {* x 2})"


def test_full_application(add):
    assert str(add.eval("(add 2 3)")) == "5"


def test_partial_application_returns_lambda(add):
    partial = add.eval("(add 1)")
    assert isinstance(partial, Lambda)
    assert str(partial) == "(\\ {b} {+ a b})"


def test_currying(add):
    assert str(add.eval("((add 1) 2)")) == "3"


def test_partial_application_leaves_original_alone(add):
    add.eval("(def {inc} (add 1))")
    assert str(add.eval("(inc 41)")) == "42"
    assert str(add.eval("(add 2 3)")) == "5"
    assert str(add.eval("add")) == "(\\ {a b} {+ a b})"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(((\\ {a b c} {+ a b c}) 1) 2 3)", "6"),
        ("(((\\ {a b c} {+ a b c}) 1 2) 3)", "6"),
        ("((((\\ {a b c} {list a b c}) 1) 2) 3)", "{1 2 3}"),
    ],
)
def test_nested_currying(run, source, expected):
    assert run(source) == expected


@pytest.fixture
def variadic(interp):
    interp.eval("(def {f} (\\ {a & b} {b}))")
    return interp


def test_variadic_collects_rest(variadic):
    assert str(variadic.eval("(f 1 2 3)")) == "{2 3}"


def test_variadic_with_no_rest(variadic):
    assert str(variadic.eval("(f 1)")) == "{}"


def test_variadic_only(run):
    assert run("((\\ {& xs} {xs}) 1 2)") == "{1 2}"
    assert run("((\\ {& xs} {xs}))") == "{}"


def test_too_many_arguments(interp):
    result = interp.eval("((\\ {x} {x}) 1 2)")
    assert result.kind == "TooManyArguments"
    assert str(result) == "Error: Function passed too many arguments. Got 2, expected 1"


@pytest.mark.parametrize("params", ["{x &}", "{& a b}", "{& a & b}"])
def test_malformed_variadic(interp, params):
    result = interp.eval(f"(\\ {params} {{x}})")
    assert result.kind == "MalformedVariadic"
    assert str(result) == "Error: Function format invalid. Symbol '&' not followed by single symbol"


@pytest.mark.parametrize(
    "source,message",
    [
        ("(\\ {1} {1})", "Cannot define non-symbol. Got Number, expected Symbol"),
        ("(\\ {x} 1)", "Wrong type for arg 1 in '\\'. Got Number, expected Qexp"),
        ("(\\ {x})", "Wrong arg count for '\\'. Got 1, expected 2"),
    ],
)
def test_lambda_construction_errors(interp, source, message):
    assert str(interp.eval(source)) == f"Error: {message}"


def test_zero_parameter_lambda(interp):
    interp.eval("(def {k} (\\ {} {42}))")
    assert str(interp.eval("(k)")) == "42"
    assert str(interp.eval("k")) == "(\\ {} {42})"


def test_recursion(interp):
    interp.eval("(def {fact} (\\ {n} {if (= n 0) {1} {* n (fact (- n 1))}}))")
    assert str(interp.eval("(fact 10)")) == "3628800"


def test_parameters_shadow_globals(interp):
    interp.eval("(def {x} 1)")
    assert str(interp.eval("((\\ {x} {x}) 9)")) == "9"
    assert str(interp.eval("x")) == "1"


def test_free_names_resolve_at_call_site(interp):
    interp.eval("(def {g} (\\ {} {z}))")
    interp.eval("(def {h} (\\ {z} {g}))")
    assert str(interp.eval("(h 5)")) == "5"
    assert str(interp.eval("(g)")) == "Error: Unbound symbol 'z'"


def test_lambda_result_of_body_error(interp):
    assert interp.eval("((\\ {x} {/ x 0}) 3)").kind == "DivisionByZero"
