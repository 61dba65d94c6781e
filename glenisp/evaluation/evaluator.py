"""Core evaluator for glenisp.

Reduces a value to normal form: symbols are looked up, Sexps are evaluated item by
item and applied, everything else evaluates to itself. Errors are values; the first
Error among a Sexp's evaluated items becomes the result of the whole Sexp.
"""

from __future__ import annotations

import logging

from glenisp.errors import GlenispError, NotCallable
from glenisp.evaluation.apply import apply
from glenisp.types.environment import Environment
from glenisp.types.value import Error, Function, Sexp, Symbol, Value

logger = logging.getLogger(__name__)


def evaluate(env: Environment, value: Value) -> Value:
    match value:
        case Symbol():
            try:
                return env.get(value.name)
            except GlenispError as err:
                return err.to_value()
        case Sexp():
            return evaluate_sexp(env, value)
    # Numbers, booleans, errors, qexps and functions are self-evaluating.
    return value


def evaluate_sexp(env: Environment, sexp: Sexp) -> Value:
    cells = [evaluate(env, cell) for cell in sexp.cells]

    for cell in cells:
        if isinstance(cell, Error):
            return cell

    if not cells:
        return Sexp()

    head, args = cells[0], cells[1:]

    # A lone non-function, e.g. the `(b)` made from a lambda body `{b}`, is its own value.
    if not args and not isinstance(head, Function):
        return head

    if not isinstance(head, Function):
        return NotCallable(
            f"Expected sexp to begin with Function, got {head.type_name}"
        ).to_value()

    return apply(env, head, Sexp(args))
