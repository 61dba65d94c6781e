import pytest

from glenisp.evaluation import apply, evaluate
from glenisp.types.value import Error, Number, Qexp, Sexp, Symbol


@pytest.mark.parametrize(
    "value",
    [Number(3), Qexp([Symbol("x"), Number(1)]), Error("boom")],
    ids=["number", "qexp", "error"],
)
def test_self_evaluating(env, value):
    assert evaluate(env, value) is value


def test_symbol_lookup(env):
    env.put("x", Number(4))
    assert evaluate(env, Symbol("x")) == Number(4)


def test_unbound_symbol_is_error_value(env):
    result = evaluate(env, Symbol("nope"))
    assert isinstance(result, Error)
    assert result.kind == "UnboundSymbol"
    assert str(result) == "Error: Unbound symbol 'nope'"


def test_evaluate_sexp_does_not_mutate_input(env):
    sexp = Sexp([Symbol("+"), Number(1), Number(2)])
    assert evaluate(env, sexp) == Number(3)
    assert str(sexp) == "(+ 1 2)"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("()", "()"),
        ("(5)", "5"),
        ("({1 2})", "{1 2}"),
        ("((+ 1 2))", "3"),
        ("(((5)))", "5"),
        ("(id {1 2 3})", "{1 2 3}"),
        ("(id 7)", "7"),
        ("+", "<fn +>"),
        ("(if #t {1} {(/ 1 0)})", "1"),
        ("(if #f {(/ 1 0)} {2})", "2"),
        ("(if (< 1 2) {+ 1 1} {undefined})", "2"),
        ("(if #t {} {1})", "()"),
    ],
)
def test_evaluation(run, source, expected):
    assert run(source) == expected


def test_head_must_be_callable(interp):
    result = interp.eval("(1 2)")
    assert result.kind == "NotCallable"
    assert str(result) == "Error: Expected sexp to begin with Function, got Number"


def test_apply_rejects_non_function(env):
    result = apply(env, Number(1), Sexp())
    assert result.kind == "NotCallable"


def test_first_error_wins(interp):
    result = interp.eval("(+ (/ 1 0) undefined (head {}))")
    assert result.kind == "DivisionByZero"


def test_error_in_nested_sexp_propagates(interp):
    result = interp.eval("(list 1 (list 2 (+ 1 missing)))")
    assert str(result) == "Error: Unbound symbol 'missing'"


def test_arguments_evaluate_before_error_check(interp):
    # Every item is evaluated first, so the def takes effect.
    result = interp.eval("(list (def {seen} 1) (/ 1 0))")
    assert result.kind == "DivisionByZero"
    assert str(interp.eval("seen")) == "1"


@pytest.mark.parametrize(
    "source,kind",
    [
        ("(if 1 {1} {2})", "WrongArgType"),
        ("(if #t 1 {2})", "WrongArgType"),
        ("(if #t {1})", "WrongArgCount"),
        ("(id)", "WrongArgCount"),
    ],
)
def test_control_flow_checks(interp, source, kind):
    assert interp.eval(source).kind == kind


def test_id_leaves_binding_untouched(interp):
    interp.eval("(def {xs} {1 2 3})")
    assert str(interp.eval("(id xs)")) == "{1 2 3}"
    assert str(interp.eval("xs")) == "{1 2 3}"


def test_stored_values_are_not_aliased(interp):
    interp.eval("(def {a} {1 2})")
    interp.eval("(def {b} a)")
    interp.env.vars["b"].add(Number(3))
    assert str(interp.eval("a")) == "{1 2}"
    assert str(interp.eval("b")) == "{1 2 3}"
