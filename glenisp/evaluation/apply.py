"""Application engine for glenisp.

Builtins receive `(env, args)` directly. Lambdas bind their arguments positionally
into a copy of their private frame:

- `&` in the params collects every remaining argument into one Qexp.
- Fewer arguments than params yields a partially applied Lambda holding the bound
  values and the unconsumed params; the body is not evaluated.
- Once every param is bound the frame is linked to the *calling* environment and
  the body is evaluated there.

Raised GlenispErrors are converted to Error values here, at the application boundary.
"""

from __future__ import annotations

import logging

from glenisp.errors import GlenispError, MalformedVariadic, NotCallable, TooManyArguments
from glenisp.types.environment import Environment
from glenisp.types.value import Builtin, Lambda, Qexp, Sexp, Value

logger = logging.getLogger(__name__)

VARIADIC = "&"


def apply_lambda(env: Environment, fn: Lambda, args: Sexp) -> Value:
    """Apply a Lambda to already-evaluated arguments.

    The passed Lambda is left untouched; binding happens in a copy of its frame.
    """
    from glenisp.evaluation.evaluator import evaluate_sexp

    frame = fn.env.copy()
    params = list(fn.params.cells)
    given = len(args)
    total = len(params)
    remaining = list(args.cells)

    while remaining:
        if not params:
            raise TooManyArguments(
                f"Function passed too many arguments. Got {given}, expected {total}"
            )
        sym = params.pop(0)
        if sym.name == VARIADIC:
            if len(params) != 1:
                raise MalformedVariadic(
                    "Function format invalid. Symbol '&' not followed by single symbol"
                )
            rest = params.pop(0)
            frame.put(rest.name, Qexp(remaining))
            logger.debug("bound %d variadic argument(s) to '%s'", len(remaining), rest.name)
            remaining = []
            break
        frame.put(sym.name, remaining.pop(0))

    # Arguments ran out exactly at the variadic marker: bind the rest param to {}.
    if params and params[0].name == VARIADIC:
        if len(params) != 2:
            raise MalformedVariadic(
                "Function format invalid. Symbol '&' not followed by single symbol"
            )
        frame.put(params[1].name, Qexp())
        params = []

    if params:
        logger.debug("partial application: %d of %d param(s) remaining", len(params), total)
        return Lambda(frame, Qexp([p.copy() for p in params]), fn.body.copy())

    frame.outer = env
    return evaluate_sexp(frame, Sexp(list(fn.body.cells)))


def apply(env: Environment, fn: Value, args: Sexp) -> Value:
    """Apply a Builtin or Lambda; any raised GlenispError becomes an Error value."""
    try:
        if isinstance(fn, Builtin):
            return fn.op(env, args)
        if isinstance(fn, Lambda):
            return apply_lambda(env, fn, args)
        raise NotCallable(f"Expected sexp to begin with Function, got {fn.type_name}")
    except GlenispError as err:
        logger.debug("%s raised %s: %s", fn, err.kind, err)
        return err.to_value()
