"""Keypad tokens and keyboard bindings for the calculator."""

from __future__ import annotations

from typing import Mapping

EVALUATE = "="
CLEAR = "AC"
CLEAR_SHORT = "C"
DELETE = "DEL"

CONTROL_TOKENS = frozenset({EVALUATE, CLEAR, CLEAR_SHORT, DELETE})

BUTTON_TOKENS: tuple[str, ...] = (
    "7", "8", "9", "/", "sin(",
    "4", "5", "6", "*", "cos(",
    "1", "2", "3", "-", "tan(",
    "0", ".", DELETE, "+", EVALUATE,
    "(", ")", "mod", "pi", "e",
    "log(", "ln(", "sqrt(", "^", "exp(",
    "abs(", "!", CLEAR_SHORT, CLEAR,
)

_TYPED_KEYS = "0123456789.+-*/()^"

KEY_BINDINGS: Mapping[str, str] = {
    **{key: key for key in _TYPED_KEYS},
    "Enter": EVALUATE,
    "Backspace": DELETE,
    "Escape": CLEAR,
}


def token_for_key(key: str) -> str | None:
    """Map a physical key name to a keypad token, ``None`` for unbound keys."""

    return KEY_BINDINGS.get(key)


__all__ = [
    "BUTTON_TOKENS",
    "CLEAR",
    "CLEAR_SHORT",
    "CONTROL_TOKENS",
    "DELETE",
    "EVALUATE",
    "KEY_BINDINGS",
    "token_for_key",
]
