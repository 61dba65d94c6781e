"""Built-in functions for the glenisp root environment.

Every builtin has the signature `(env, args) -> Value`, where `args` is a Sexp of
already-evaluated values owned by the builtin. Failures raise a GlenispError
subclass; `glenisp.evaluation.apply` turns it into an Error value.
"""

from __future__ import annotations

import logging
from typing import Callable

from glenisp.errors import (
    DivisionByZero,
    MalformedVariadic,
    NoArguments,
    NonEmptyQexpRequired,
    RedefineBuiltin,
    UnknownOperator,
    WrongArgCount,
    WrongArgType,
)
from glenisp.evaluation.evaluator import evaluate
from glenisp.types.environment import Environment
from glenisp.types.value import Boolean, Builtin, Lambda, Number, Qexp, Sexp, Symbol, Value, wrap_int64

logger = logging.getLogger(__name__)


# -------------------------------
# Argument checks
# -------------------------------
def _check_count(args: Sexp, n: int, name: str) -> None:
    if len(args) != n:
        raise WrongArgCount(f"Wrong arg count for '{name}'. Got {len(args)}, expected {n}")


def _check_min_count(args: Sexp, n: int, name: str) -> None:
    if len(args) < n:
        raise WrongArgCount(
            f"Wrong arg count for '{name}'. Got {len(args)}, expected at least {n}"
        )


def _check_type(args: Sexp, i: int, cls: type, name: str) -> None:
    arg = args.cells[i]
    if not isinstance(arg, cls):
        raise WrongArgType(
            f"Wrong type for arg {i} in '{name}'. Got {arg.type_name}, expected {cls.type_name}"
        )


def _check_nonempty(args: Sexp, i: int, name: str) -> None:
    arg = args.cells[i]
    if not isinstance(arg, Qexp) or not arg.cells:
        raise NonEmptyQexpRequired(f"'{name}' expects arg {i} to be a non-empty qexp")


# -------------------------------
# Arithmetic
# -------------------------------
def _div(a: int, b: int) -> int:
    """C-style integer division, truncating toward zero."""
    if b == 0:
        raise DivisionByZero("Division by 0")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _mod(a: int, b: int) -> int:
    """C-style remainder: takes the sign of the dividend."""
    return a - b * _div(a, b)


def _pow(a: int, b: int) -> int:
    if b >= 0:
        return pow(a, b, 1 << 64)
    # Negative exponents truncate the real-valued power toward zero.
    if a == 0:
        raise DivisionByZero("Division by 0")
    if a == 1:
        return 1
    if a == -1:
        return -1 if b % 2 else 1
    return 0


OPERATORS: dict[str, Callable[[int, int], int]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _div,
    "%": _mod,
    "^": _pow,
    "min": min,
    "max": max,
}


def builtin_op(env: Environment, op: str, args: Sexp) -> Value:
    """Left-fold `op` over numeric arguments; a single argument to '-' negates it."""
    fn = OPERATORS.get(op)
    if fn is None:
        raise UnknownOperator(f"Unknown operator {op}")
    if not args.cells:
        raise NoArguments(f"'{op}' expects at least one argument")
    for i in range(len(args)):
        _check_type(args, i, Number, op)

    nums = [cell.num for cell in args.cells]
    if len(nums) == 1:
        return Number(-nums[0] if op == "-" else nums[0])

    result = nums[0]
    for n in nums[1:]:
        result = wrap_int64(fn(result, n))
    return Number(result)


def add(env: Environment, args: Sexp) -> Value:
    return builtin_op(env, "+", args)


def sub(env: Environment, args: Sexp) -> Value:
    return builtin_op(env, "-", args)


def mul(env: Environment, args: Sexp) -> Value:
    return builtin_op(env, "*", args)


def div(env: Environment, args: Sexp) -> Value:
    return builtin_op(env, "/", args)


def mod(env: Environment, args: Sexp) -> Value:
    return builtin_op(env, "%", args)


def power(env: Environment, args: Sexp) -> Value:
    return builtin_op(env, "^", args)


def minimum(env: Environment, args: Sexp) -> Value:
    return builtin_op(env, "min", args)


def maximum(env: Environment, args: Sexp) -> Value:
    return builtin_op(env, "max", args)


# -------------------------------
# Comparison
# -------------------------------
def _compare_numbers(name: str, args: Sexp, test: Callable[[int, int], bool]) -> Value:
    """Chainable comparison: #t if `test` holds for every adjacent pair."""
    for i in range(len(args)):
        _check_type(args, i, Number, name)
    cells = args.cells
    for a, b in zip(cells, cells[1:]):
        if not test(a.num, b.num):
            return Boolean(False)
    return Boolean(True)


def lt(env: Environment, args: Sexp) -> Value:
    return _compare_numbers("<", args, lambda a, b: a < b)


def lte(env: Environment, args: Sexp) -> Value:
    return _compare_numbers("<=", args, lambda a, b: a <= b)


def gt(env: Environment, args: Sexp) -> Value:
    return _compare_numbers(">", args, lambda a, b: a > b)


def gte(env: Environment, args: Sexp) -> Value:
    return _compare_numbers(">=", args, lambda a, b: a >= b)


def equals(env: Environment, args: Sexp) -> Value:
    """Structural equality across adjacent pairs; accepts any value type."""
    cells = args.cells
    return Boolean(all(a == b for a, b in zip(cells, cells[1:])))


def not_equals(env: Environment, args: Sexp) -> Value:
    cells = args.cells
    return Boolean(all(a != b for a, b in zip(cells, cells[1:])))


def logical_not(env: Environment, args: Sexp) -> Value:
    _check_count(args, 1, "!")
    _check_type(args, 0, Boolean, "!")
    return Boolean(not args.cells[0].flag)


# -------------------------------
# List operations
# -------------------------------
def list_builtin(env: Environment, args: Sexp) -> Value:
    """Relabel the argument Sexp as a Qexp; the elements are not copied."""
    return Qexp(args.cells)


def head(env: Environment, args: Sexp) -> Value:
    _check_count(args, 1, "head")
    _check_nonempty(args, 0, "head")
    return Qexp([args.cells[0].cells[0]])


def last(env: Environment, args: Sexp) -> Value:
    _check_count(args, 1, "last")
    _check_nonempty(args, 0, "last")
    return Qexp([args.cells[0].cells[-1]])


def tail(env: Environment, args: Sexp) -> Value:
    _check_count(args, 1, "tail")
    _check_nonempty(args, 0, "tail")
    return Qexp(args.cells[0].cells[1:])


def init(env: Environment, args: Sexp) -> Value:
    _check_count(args, 1, "init")
    _check_nonempty(args, 0, "init")
    return Qexp(args.cells[0].cells[:-1])


def join(env: Environment, args: Sexp) -> Value:
    _check_min_count(args, 1, "join")
    for i in range(len(args)):
        _check_type(args, i, Qexp, "join")
    result: list[Value] = []
    for q in args.cells:
        result.extend(q.cells)
    return Qexp(result)


def cons(env: Environment, args: Sexp) -> Value:
    _check_count(args, 2, "cons")
    _check_type(args, 1, Qexp, "cons")
    return Qexp([args.cells[0], *args.cells[1].cells])


def length(env: Environment, args: Sexp) -> Value:
    _check_count(args, 1, "len")
    _check_type(args, 0, Qexp, "len")
    return Number(len(args.cells[0]))


# -------------------------------
# Evaluation and control flow
# -------------------------------
def eval_builtin(env: Environment, args: Sexp) -> Value:
    _check_count(args, 1, "eval")
    _check_type(args, 0, Qexp, "eval")
    return evaluate(env, Sexp(args.cells[0].cells))


def identity(env: Environment, args: Sexp) -> Value:
    _check_count(args, 1, "id")
    return evaluate(env, args.cells[0])


def if_builtin(env: Environment, args: Sexp) -> Value:
    """(if cond {then} {else}): only the selected branch is ever evaluated."""
    _check_count(args, 3, "if")
    _check_type(args, 0, Boolean, "if")
    _check_type(args, 1, Qexp, "if")
    _check_type(args, 2, Qexp, "if")
    branch = args.cells[1] if args.cells[0].flag else args.cells[2]
    return evaluate(env, Sexp(branch.cells))


# -------------------------------
# Definitions and functions
# -------------------------------
def define(env: Environment, args: Sexp) -> Value:
    """(def {a b} 1 2) binds each symbol in the root frame; returns the symbol Qexp.

    All targets are checked before any binding is made.
    """
    _check_min_count(args, 1, "def")
    _check_type(args, 0, Qexp, "def")
    syms = args.cells[0]
    for i, sym in enumerate(syms.cells):
        if not isinstance(sym, Symbol):
            raise WrongArgType(
                f"'def' expects variable {i} to be symbol. Got {sym.type_name}"
            )
    values = args.cells[1:]
    if len(syms) != len(values):
        raise WrongArgCount(
            "'def' expects same variable & value count. "
            f"Got {len(syms)} variables and {len(values)} values"
        )
    for sym in syms.cells:
        if isinstance(env.root().vars.get(sym.name), Builtin):
            raise RedefineBuiltin(f"Cannot redefine builtin function '{sym.name}'")

    for sym, value in zip(syms.cells, values):
        env.define_global(sym.name, value)
    return syms


def lambda_builtin(env: Environment, args: Sexp) -> Value:
    r"""(\ {params} {body}) builds a Lambda with a fresh private frame."""
    _check_count(args, 2, "\\")
    _check_type(args, 0, Qexp, "\\")
    _check_type(args, 1, Qexp, "\\")
    params, body = args.cells
    for sym in params.cells:
        if not isinstance(sym, Symbol):
            raise WrongArgType(f"Cannot define non-symbol. Got {sym.type_name}, expected Symbol")
    names = [sym.name for sym in params.cells]
    if "&" in names and (names.count("&") != 1 or names.index("&") != len(names) - 2):
        raise MalformedVariadic(
            "Function format invalid. Symbol '&' not followed by single symbol"
        )
    return Lambda(Environment(), params, body)


# -------------------------------
# Diagnostics and process control
# -------------------------------
def env_builtin(env: Environment, args: Sexp) -> Value:
    """Print every binding visible from the calling frame; returns ()."""
    _check_count(args, 0, "env")
    print(env.dump(), end="")
    return Sexp()


def exit_builtin(env: Environment, args: Sexp) -> Value:
    _check_count(args, 0, "exit")
    logger.info("exit requested")
    raise SystemExit(0)


BUILTINS: dict[str, Callable[[Environment, Sexp], Value]] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "%": mod,
    "^": power,
    "min": minimum,
    "max": maximum,
    "<": lt,
    "<=": lte,
    ">": gt,
    ">=": gte,
    "=": equals,
    "!=": not_equals,
    "!": logical_not,
    "list": list_builtin,
    "head": head,
    "tail": tail,
    "last": last,
    "init": init,
    "join": join,
    "cons": cons,
    "len": length,
    "eval": eval_builtin,
    "id": identity,
    "if": if_builtin,
    "def": define,
    "\\": lambda_builtin,
    "env": env_builtin,
    "exit": exit_builtin,
}


def register(env: Environment) -> None:
    """Register all builtin functions into the given environment."""
    for name, op in BUILTINS.items():
        env.put(name, Builtin(name, op))
