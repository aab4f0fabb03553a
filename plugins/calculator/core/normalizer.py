"""Textual rewriting applied to keypad expressions before evaluation."""

from __future__ import annotations

from typing import Literal

LogMode = Literal["faithful", "corrected"]

LOG_MODES = ("faithful", "corrected")

MODULO_TOKEN = "mod"
MODULO_OPERATOR = "%"


def count_unbalanced(expression: str) -> int:
    """Return how many ``)`` are missing to close every ``(``."""

    return max(expression.count("(") - expression.count(")"), 0)


def _rewrite_logarithms(expression: str, log_mode: LogMode) -> str:
    if log_mode == "faithful":
        # ln( and log( both end up as the base-10 logarithm.
        expression = expression.replace("ln(", "log(")
        return expression.replace("log(", "log10(")
    if log_mode == "corrected":
        return expression.replace("log(", "log10(")
    raise ValueError(f"log_mode must be one of {', '.join(LOG_MODES)}")


def normalize_expression(raw: str, *, log_mode: LogMode = "faithful") -> str:
    """Rewrite *raw* keypad text into something the math engine accepts.

    ``mod`` becomes ``%``, logarithm tokens are rewritten according to
    *log_mode* and missing closing parentheses are appended. Unknown tokens
    pass through untouched.
    """

    expression = raw.replace(MODULO_TOKEN, MODULO_OPERATOR)
    expression = _rewrite_logarithms(expression, log_mode)
    missing = count_unbalanced(expression)
    if missing:
        expression += ")" * missing
    return expression


__all__ = [
    "LOG_MODES",
    "LogMode",
    "count_unbalanced",
    "normalize_expression",
]
