"""Command line entry point and interactive loop for glenisp.

    glenisp                 start the REPL
    glenisp a.gl b.gl       evaluate the files in order, printing any errors
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from glenisp import __version__
from glenisp.config import get_history_file, get_log_level, get_recursion_limit
from glenisp.debug_utils.pprint import DEFAULT_OPTIONS, PLAIN_OPTIONS, pprint_value
from glenisp.errors import GlenispSyntaxError
from glenisp.interpreter import Interpreter
from glenisp.types.value import Error

try:
    import readline
except ImportError:  # readline is not available on every platform
    readline = None

logger = logging.getLogger(__name__)

PROMPT = "glenisp> "


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glenisp", description="Evaluate glenisp source files or start a REPL."
    )
    parser.add_argument("files", nargs="*", type=Path, help="source files to evaluate")
    parser.add_argument(
        "--no-prelude", action="store_true", help="do not load the standard prelude"
    )
    parser.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="colour REPL output (default: when stdout is a terminal)",
    )
    parser.add_argument(
        "--log-level",
        default=get_log_level(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="logging level (default from GLENISP_LOG_LEVEL)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def report_syntax_error(err: GlenispSyntaxError, source: str, out: Optional[TextIO]) -> None:
    print(f"{source}:{err.line}:{err.col}: error: {err.message}", file=out)


def run_file(interp: Interpreter, path: Path, out: Optional[TextIO] = None) -> int:
    """Evaluate every form in `path`; error values are printed, other results are not."""
    try:
        code = path.read_text(encoding="utf-8")
    except OSError as err:
        print(f"{path}: {err.strerror}", file=sys.stderr)
        return 1
    try:
        results = interp.eval_all(code)
    except GlenispSyntaxError as err:
        report_syntax_error(err, str(path), sys.stderr)
        return 1
    for result in results:
        if isinstance(result, Error):
            print(result, file=out)
    return 0


def eval_line(interp: Interpreter, line: str, options: dict, out: Optional[TextIO] = None) -> None:
    """Evaluate one line of input and print each result."""
    try:
        results = interp.eval_all(line)
    except GlenispSyntaxError as err:
        report_syntax_error(err, "<stdin>", out)
        return
    for result in results:
        print(pprint_value(result, options=options), file=out)


def _load_history(history_file: Path) -> None:
    if readline is None:
        return
    try:
        readline.read_history_file(history_file)
    except OSError:
        logger.debug("no history at %s", history_file)


def _save_history(history_file: Path) -> None:
    if readline is None:
        return
    try:
        readline.write_history_file(history_file)
    except OSError as err:
        logger.warning("could not save history to %s: %s", history_file, err)


def repl(interp: Interpreter, options: dict, history_file: Optional[Path] = None) -> int:
    print(f"Welcome to gLenISP Version {__version__}")
    print("Press Ctrl+c to Exit\n")

    if history_file is not None:
        _load_history(history_file)
    try:
        while True:
            try:
                line = input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                print()
                return 0
            if not line.strip():
                continue
            try:
                eval_line(interp, line, options)
            except KeyboardInterrupt:
                print("\nInterrupted")
    finally:
        if history_file is not None:
            _save_history(history_file)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.setrecursionlimit(get_recursion_limit())

    interp = Interpreter(prelude=None if args.no_prelude else "auto")
    try:
        if args.files:
            status = 0
            for path in args.files:
                status = run_file(interp, path) or status
            return status

        color = sys.stdout.isatty() if args.color is None else args.color
        return repl(interp, DEFAULT_OPTIONS if color else PLAIN_OPTIONS, get_history_file())
    except RecursionError:
        print("Fatal: maximum recursion depth exceeded", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
