import json
from typing import Optional

from glenisp.types.value import Boolean, Builtin, Cells, Error, Lambda, Number, Qexp, Symbol, Value

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_SYMBOL = "\033[94m"
COLOR_NUMBER = "\033[96m"
COLOR_BOOLEAN = "\033[93m"
COLOR_LAMBDA = "\033[92m"
COLOR_BUILTIN = "\033[95m"
COLOR_ERROR = "\033[91m"
COLOR_QEXP = "\033[90m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "max_depth": 32,
    "display_legend": False,
    "color": True,
    "color_symbols": True,
    "color_numbers": True,
    "color_booleans": True,
    "color_lambda": True,
    "color_builtins": True,
    "color_errors": True,
    "color_qexp_brackets": True,
}

PLAIN_OPTIONS = {**DEFAULT_OPTIONS, "color": False}


# ----------------- Colorize utility -----------------
def colorize(value: Value, options: dict = DEFAULT_OPTIONS) -> str:
    """Render an atom (anything but Sexp/Qexp) with its ANSI colour, if enabled."""
    text = str(value)
    if not options.get("color", True):
        return text
    if isinstance(value, Symbol) and options.get("color_symbols", True):
        return f"{COLOR_SYMBOL}{text}{RESET}"
    if isinstance(value, Number) and options.get("color_numbers", True):
        return f"{COLOR_NUMBER}{text}{RESET}"
    if isinstance(value, Boolean) and options.get("color_booleans", True):
        return f"{COLOR_BOOLEAN}{text}{RESET}"
    if isinstance(value, Lambda) and options.get("color_lambda", True):
        return f"{COLOR_LAMBDA}{text}{RESET}"
    if isinstance(value, Builtin) and options.get("color_builtins", True):
        return f"{COLOR_BUILTIN}{text}{RESET}"
    if isinstance(value, Error) and options.get("color_errors", True):
        return f"{COLOR_ERROR}{text}{RESET}"
    return text


def _brackets(value: Cells, options: dict) -> tuple[str, str]:
    open_char, close_char = value.open_char, value.close_char
    if (
        isinstance(value, Qexp)
        and options.get("color", True)
        and options.get("color_qexp_brackets", True)
    ):
        return f"{COLOR_QEXP}{open_char}{RESET}", f"{COLOR_QEXP}{close_char}{RESET}"
    return open_char, close_char


def legend() -> str:
    legend_items = [
        f"{COLOR_SYMBOL}Symbol{RESET}",
        f"{COLOR_NUMBER}Number{RESET}",
        f"{COLOR_BOOLEAN}Boolean{RESET}",
        f"{COLOR_LAMBDA}Lambda{RESET}",
        f"{COLOR_BUILTIN}Builtin{RESET}",
        f"{COLOR_ERROR}Error{RESET}",
        f"{COLOR_QEXP}{{Qexp}}{RESET}",
    ]
    return "Color Key: " + " | ".join(legend_items) + "\n"


# ----------------- Pretty printer -----------------
def pprint_value(
    value: Value,
    indent: int = 0,
    options: Optional[dict] = None,
    _current_depth: int = 0,
) -> str:
    """Render `value` per the printing contract, wrapping long lists across lines.

    Plain (uncoloured) output of a value that fits on one line equals `str(value)`.
    """
    if options is None:
        options = DEFAULT_OPTIONS

    legend_str = ""
    if options.get("display_legend", False) and indent == 0 and options.get("color", True):
        legend_str = legend()

    if not isinstance(value, Cells):
        return legend_str + colorize(value, options)

    open_char, close_char = _brackets(value, options)
    if _current_depth >= options.get("max_depth", 32):
        return legend_str + f"{open_char}...{close_char}"
    if not value.cells:
        return legend_str + open_char + close_char

    parts = [
        pprint_value(cell, indent + 1, options, _current_depth + 1)
        for cell in value.cells
    ]

    # Measure without colour codes so wrapping is independent of colouring.
    plain_width = len(str(value))
    if plain_width + indent * 2 <= options.get("max_line_length", 80) and not any(
        "\n" in p for p in parts
    ):
        return legend_str + open_char + " ".join(parts) + close_char

    aligned_lines = [open_char + parts[0]]
    for part in parts[1:]:
        aligned_lines.append("  " * (indent + 1) + part)
    aligned_lines[-1] += close_char
    return legend_str + "\n".join(aligned_lines)


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    try:
        user_opts = json.loads(json_str)
    except json.JSONDecodeError:
        return dict(DEFAULT_OPTIONS)
    if not isinstance(user_opts, dict):
        return dict(DEFAULT_OPTIONS)
    return {**DEFAULT_OPTIONS, **user_opts}
