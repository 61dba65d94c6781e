import pytest

from glenisp.interpreter import Interpreter
from glenisp.modules.prelude_loader import prelude_files


@pytest.fixture
def std(monkeypatch):
    monkeypatch.delenv("GLENISP_PRELUDE_PATH", raising=False)
    return Interpreter()


@pytest.mark.parametrize(
    "source,expected",
    [
        ("nil", "{}"),
        ("(fst {1 2 3})", "1"),
        ("(snd {1 2 3})", "2"),
        ("(trd {1 2 3})", "3"),
        ("(nth 1 {10 20 30})", "20"),
        ("(take 2 {1 2 3})", "{1 2}"),
        ("(drop 2 {1 2 3})", "{3}"),
        ("(split 1 {1 2 3})", "{{1} {2 3}}"),
        ("(elem 2 {1 2 3})", "#t"),
        ("(elem 5 {1 2 3})", "#f"),
        ("(map (\\ {x} {* x 2}) {1 2 3})", "{2 4 6}"),
        ("(map - {1 2})", "{-1 -2}"),
        ("(filter (\\ {x} {> x 1}) {1 2 3})", "{2 3}"),
        ("(foldl + 0 {1 2 3 4})", "10"),
        ("(sum {1 2 3})", "6"),
        ("(product {1 2 3 4})", "24"),
        ("(reverse {1 2 3})", "{3 2 1}"),
        ("(reverse nil)", "{}"),
        ("(unpack + {1 2 3})", "6"),
        ("(curry * {2 3})", "6"),
        ("(pack head 1 2 3)", "{1}"),
        ("(uncurry len 1 2)", "2"),
        ("(do 1 2 3)", "3"),
        ("(do)", "{}"),
    ],
)
def test_prelude_functions(std, source, expected):
    assert str(std.eval(source)) == expected


def test_fun_defines_named_function(std):
    assert str(std.eval("(fun {double x} {* x 2})")) == "{double}"
    assert str(std.eval("(double 21)")) == "42"


def test_fun_supports_recursion(std):
    std.eval("(fun {count n} {if (= n 0) {0} {+ 1 (count (- n 1))}})")
    assert str(std.eval("(count 20)")) == "20"


def test_do_runs_side_effects_in_order(std):
    assert str(std.eval("(do (def {w} 4) (+ w 1))")) == "5"


def test_prelude_names_can_be_redefined(std):
    std.eval("(def {sum} 0)")
    assert str(std.eval("sum")) == "0"


def test_prelude_files_core_first(tmp_path):
    std_dir = tmp_path / "std"
    std_dir.mkdir()
    for name in ("zz.gl", "core.gl", "alpha.gl"):
        (std_dir / name).write_text("")
    assert [p.name for p in prelude_files(tmp_path)] == ["core.gl", "alpha.gl", "zz.gl"]


def test_prelude_path_from_environment(tmp_path, monkeypatch):
    std_dir = tmp_path / "std"
    std_dir.mkdir()
    (std_dir / "core.gl").write_text("(def {answer} 42)\n")
    (std_dir / "more.gl").write_text("(def {next} (+ answer 1))\n")
    monkeypatch.setenv("GLENISP_PRELUDE_PATH", str(tmp_path))
    interp = Interpreter()
    assert str(interp.eval("next")) == "43"
    assert interp.eval("map").kind == "UnboundSymbol"


def test_missing_prelude_logs_warning(tmp_path, monkeypatch, caplog):
    monkeypatch.setenv("GLENISP_PRELUDE_PATH", str(tmp_path))
    with caplog.at_level("WARNING", logger="glenisp.interpreter"):
        interp = Interpreter()
    assert "prelude not loaded" in caplog.text
    assert str(interp.eval("(+ 1 1)")) == "2"


def test_failing_prelude_form_logs_warning(caplog):
    with caplog.at_level("WARNING", logger="glenisp.interpreter"):
        interp = Interpreter(prelude="(def {ok} 1) (def {+} 2)")
    assert "Cannot redefine builtin function '+'" in caplog.text
    assert str(interp.eval("ok")) == "1"
