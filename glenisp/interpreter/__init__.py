from __future__ import annotations

import logging
from typing import Iterator, Literal

from glenisp.builtin.env_builtin import register
from glenisp.evaluation.evaluator import evaluate
from glenisp.reader.parser import parse
from glenisp.reader.reader import read, top_level_forms
from glenisp.types.environment import Environment
from glenisp.types.value import Error, Sexp, Value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates parsing, reading and evaluating glenisp code.
    Maintains one long-lived root Environment across calls.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = Environment()
        register(self.env)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            try:
                # Lazy import keeps config lookups out of module import time
                from glenisp.modules.prelude_loader import load_prelude
                load_prelude(self)
            except FileNotFoundError as err:
                logger.warning("prelude not loaded: %s", err)
        elif prelude:
            self.eval_prelude(prelude)

    def forms(self, code: str) -> Iterator[Value]:
        """Parse `code` and yield one read Value per top-level form.

        Raises GlenispSyntaxError before anything is yielded if the text does not parse.
        """
        root = parse(code)
        for node in top_level_forms(root):
            yield read(node)

    def eval_prelude(self, code: str) -> None:
        for form in self.forms(code):
            result = evaluate(self.env, form)
            if isinstance(result, Error):
                logger.warning("prelude form %s failed: %s", form, result.message)

    def eval_all(self, code: str) -> list[Value]:
        return [evaluate(self.env, form) for form in self.forms(code)]

    def eval(self, code: str) -> Value:
        """Evaluate every form in `code` and return the last result (() when empty)."""
        results = self.eval_all(code)
        if not results:
            return Sexp()
        return results[-1]
