"""Scope frames for glenisp.

An Environment maps symbol names to values and links to at most one parent frame.
Values go in and come out as copies, so no two frames ever share a value.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from glenisp.errors import UnboundSymbol
from glenisp.types.value import Value


class Environment:
    """Ordered name -> Value bindings chained to an optional parent frame."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: str) -> Value:
        """Return a copy of the value bound to `name` in this frame or an ancestor.

        Raises UnboundSymbol if no frame in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise UnboundSymbol(name)
        return env.vars[name].copy()

    def put(self, name: str, value: Value) -> None:
        """Bind a copy of `value` in this frame only, replacing any existing binding."""
        self.vars[name] = value.copy()

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def define_global(self, name: str, value: Value) -> None:
        """Bind `name` in the root frame regardless of how deep this frame is."""
        self.root().put(name, value)

    def copy(self) -> Environment:
        """New frame with the same parent and independently copied bindings."""
        env = Environment(self.outer)
        for name, value in self.vars.items():
            env.vars[name] = value.copy()
        return env

    def _write_vars(self, buffer: StringIO) -> None:
        for name, value in self.vars.items():
            buffer.write(f"{name} - {value}\n")

    def dump(self) -> str:
        """Listing of `name - value` lines for this frame, then each ancestor."""
        with StringIO() as buffer:
            env: Optional[Environment] = self
            while env is not None:
                env._write_vars(buffer)
                env = env.outer
            return buffer.getvalue()

    def __repr__(self) -> str:
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return f"<Environment {len(self.vars)} bindings, {depth} ancestors>"
