import pytest


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(list 1 2 (+ 1 2))", "{1 2 3}"),
        ("(list)", "{}"),
        ("(head {1 2 3})", "{1}"),
        ("(last {1 2 3})", "{3}"),
        ("(tail {1 2 3})", "{2 3}"),
        ("(init {1 2 3})", "{1 2}"),
        ("(tail {1})", "{}"),
        ("(head {{1 2} 3})", "{{1 2}}"),
        ("(join {1} {2 3} {})", "{1 2 3}"),
        ("(join {1 2})", "{1 2}"),
        ("(join (head {1 2}) (tail {1 2}))", "{1 2}"),
        ("(cons 1 {2 3})", "{1 2 3}"),
        ("(cons {1} {})", "{{1}}"),
        ("(len {1 2 3})", "3"),
        ("(len {})", "0"),
        ("(eval (list + 1 2))", "3"),
        ("(eval {head {4 5}})", "{4}"),
        ("(eval {})", "()"),
    ],
)
def test_list_operations(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize("name", ["head", "last", "tail", "init"])
def test_empty_qexp_rejected(interp, name):
    result = interp.eval(f"({name} {{}})")
    assert result.kind == "NonEmptyQexpRequired"
    assert str(result) == f"Error: '{name}' expects arg 0 to be a non-empty qexp"


@pytest.mark.parametrize(
    "source,message",
    [
        ("(head {1} {2})", "Wrong arg count for 'head'. Got 2, expected 1"),
        ("(join)", "Wrong arg count for 'join'. Got 0, expected at least 1"),
        ("(join {1} 2)", "Wrong type for arg 1 in 'join'. Got Number, expected Qexp"),
        ("(cons 1 2)", "Wrong type for arg 1 in 'cons'. Got Number, expected Qexp"),
        ("(len 5)", "Wrong type for arg 0 in 'len'. Got Number, expected Qexp"),
        ("(eval 5)", "Wrong type for arg 0 in 'eval'. Got Number, expected Qexp"),
        ("(head 1)", "'head' expects arg 0 to be a non-empty qexp"),
    ],
)
def test_list_errors(interp, source, message):
    assert str(interp.eval(source)) == f"Error: {message}"


def test_list_operations_leave_bindings_untouched(interp):
    interp.eval("(def {q} {1 2 3})")
    assert str(interp.eval("(tail q)")) == "{2 3}"
    assert str(interp.eval("(cons 0 q)")) == "{0 1 2 3}"
    assert str(interp.eval("q")) == "{1 2 3}"
