"""Runtime values for glenisp.

Every runtime entity is one of a closed family of classes:

    Error, Number, Symbol, Boolean, Builtin, Lambda, Sexp, Qexp

Values are never shared between two owners. Anything stored in an Environment or
captured by a Lambda is a deep copy (`Value.copy`), so mutating or discarding a
value can never be observed through another binding.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Callable, Iterator, Optional

if TYPE_CHECKING:
    from glenisp.types.environment import Environment


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap_int64(n: int) -> int:
    """Reduce an int to the signed 64-bit range with two's complement wrap-around."""
    n &= (1 << 64) - 1
    return n - (1 << 64) if n > INT64_MAX else n


class Value:
    __slots__ = ()

    type_name = "Value"

    def copy(self) -> Value:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


class Error(Value):
    """Terminal failure marker; propagates instead of being evaluated further."""

    __slots__ = ("message", "kind")

    type_name = "Error"

    def __init__(self, message: str, kind: str = "Error"):
        self.message = message
        self.kind = kind

    def copy(self) -> Error:
        return Error(self.message, self.kind)

    def __eq__(self, other: object) -> bool:
        # An error is never equal to anything, itself included.
        return False

    def __str__(self) -> str:
        return f"Error: {self.message}"


class Number(Value):
    __slots__ = ("num",)

    type_name = "Number"

    def __init__(self, num: int):
        self.num = wrap_int64(num)

    def copy(self) -> Number:
        return Number(self.num)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.num == other.num

    def __str__(self) -> str:
        return str(self.num)


class Symbol(Value):
    __slots__ = ("name",)

    type_name = "Symbol"

    def __init__(self, name: str):
        self.name = name

    def copy(self) -> Symbol:
        return Symbol(self.name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __str__(self) -> str:
        return self.name


class Boolean(Value):
    __slots__ = ("flag",)

    type_name = "Boolean"

    def __init__(self, flag: bool):
        self.flag = bool(flag)

    def copy(self) -> Boolean:
        return Boolean(self.flag)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Boolean) and self.flag == other.flag

    def __str__(self) -> str:
        return "#t" if self.flag else "#f"


class Function(Value):
    __slots__ = ()

    type_name = "Function"


BuiltinOp = Callable[["Environment", "Sexp"], Value]


class Builtin(Function):
    """A native operation. Two builtins are equal iff they share the same operation."""

    __slots__ = ("name", "op")

    def __init__(self, name: str, op: BuiltinOp):
        self.name = name
        self.op = op

    def copy(self) -> Builtin:
        # The operation is an immutable function identity, shared by value.
        return Builtin(self.name, self.op)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Builtin) and self.op is other.op

    def __str__(self) -> str:
        return f"<fn {self.name}>"


class Lambda(Function):
    """A user-defined function: private frame, parameter Qexp and body Qexp.

    Equality compares params and body only; the private frame is ignored.
    """

    __slots__ = ("env", "params", "body")

    def __init__(self, env: Environment, params: Qexp, body: Qexp):
        self.env = env
        self.params = params
        self.body = body

    def copy(self) -> Lambda:
        return Lambda(self.env.copy(), self.params.copy(), self.body.copy())

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Lambda)
            and self.params == other.params
            and self.body == other.body
        )

    def __str__(self) -> str:
        return f"(\\ {self.params} {self.body})"


class Cells(Value):
    """Ordered container that exclusively owns its items."""

    __slots__ = ("cells",)

    open_char = ""
    close_char = ""

    def __init__(self, cells: Optional[list[Value]] = None):
        self.cells: list[Value] = cells if cells is not None else []

    def add(self, value: Value) -> Cells:
        self.cells.append(value)
        return self

    def pop(self, index: int = 0) -> Value:
        return self.cells.pop(index)

    def copy(self) -> Cells:
        return type(self)([cell.copy() for cell in self.cells])

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.cells)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other) or len(self.cells) != len(other.cells):
            return False
        return all(a == b for a, b in zip(self.cells, other.cells))

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(self.open_char)
            buffer.write(" ".join(str(cell) for cell in self.cells))
            buffer.write(self.close_char)
            return buffer.getvalue()


class Sexp(Cells):
    """An expression: `()` evaluates to itself, `(f a b)` applies f."""

    __slots__ = ()

    type_name = "Sexp"
    open_char = "("
    close_char = ")"


class Qexp(Cells):
    """Quoted data, never evaluated automatically."""

    __slots__ = ()

    type_name = "Qexp"
    open_char = "{"
    close_char = "}"
