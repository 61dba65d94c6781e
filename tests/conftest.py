import pytest

from glenisp.builtin.env_builtin import register
from glenisp.interpreter import Interpreter
from glenisp.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def interp():
    """Interpreter with builtins only, no prelude."""
    return Interpreter(prelude=None)


@pytest.fixture
def run(interp):
    """Evaluate source text and return the printed form of the last result."""
    def _run(source: str) -> str:
        return str(interp.eval(source))
    return _run
