from __future__ import annotations
import logging
from pathlib import Path
from typing import Protocol

from glenisp.config import get_prelude_root

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def prelude_files(root: Path) -> list[Path]:
    """Prelude sources under `root`, core first."""
    std = root / 'std'
    if not std.is_dir():
        return []
    core = std / 'core.gl'
    rest = sorted(p for p in std.glob('*.gl') if p != core)
    return ([core] if core.exists() else []) + rest


def load_prelude(itp: _HasEvalPrelude) -> None:
    root = get_prelude_root()
    files = prelude_files(root)
    if not files:
        raise FileNotFoundError(f"No prelude found under {root}")
    for path in files:
        logger.debug("loading prelude %s", path)
        itp.eval_prelude(path.read_text(encoding='utf-8'))
