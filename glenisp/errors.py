"""Error hierarchy for glenisp.

Builtins and the environment raise these; the application boundary turns each one
into an `Error` value so that, at the language level, errors stay ordinary values.
"""

from __future__ import annotations


class GlenispError(Exception):
    """Base class for all glenisp runtime errors."""

    kind = "Error"

    def to_value(self):
        from glenisp.types.value import Error

        return Error(str(self), kind=self.kind)


class UnboundSymbol(GlenispError):
    """Raised when a symbol is looked up before it is bound."""

    kind = "UnboundSymbol"

    def __init__(self, name: str):
        super().__init__(f"Unbound symbol '{name}'")
        self.name = name


class BadNumber(GlenispError):
    """Raised when a number literal does not fit a 64-bit signed integer."""

    kind = "BadNumber"


class MalformedNode(GlenispError):
    """Raised when the reader meets a parse node it does not understand."""

    kind = "MalformedNode"


class WrongArgCount(GlenispError):
    kind = "WrongArgCount"


class WrongArgType(GlenispError):
    kind = "WrongArgType"


class NonEmptyQexpRequired(GlenispError):
    kind = "NonEmptyQexpRequired"


class DivisionByZero(GlenispError):
    kind = "DivisionByZero"


class NoArguments(GlenispError):
    kind = "NoArguments"


class UnknownOperator(GlenispError):
    kind = "UnknownOperator"


class NotCallable(GlenispError):
    kind = "NotCallable"


class RedefineBuiltin(GlenispError):
    kind = "RedefineBuiltin"


class TooManyArguments(GlenispError):
    kind = "TooManyArguments"


class MalformedVariadic(GlenispError):
    kind = "MalformedVariadic"


class GlenispSyntaxError(Exception):
    """Raised by the parser when source text does not match the grammar."""

    def __init__(self, message: str, line: int = 1, col: int = 1):
        super().__init__(f"{message} at {line}:{col}")
        self.message = message
        self.line = line
        self.col = col
