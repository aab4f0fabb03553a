"""Exports for calculator core."""

from .engine import AngleUnit, ExpressionError, MathEngine, evaluate_expression
from .history import DEFAULT_HISTORY_CAPACITY, HistoryEntry, HistoryLedger
from .keymap import BUTTON_TOKENS, KEY_BINDINGS, token_for_key
from .normalizer import LOG_MODES, LogMode, count_unbalanced, normalize_expression
from .session import (
    ERROR_SENTINEL,
    INITIAL_RESULT,
    CalculatorSession,
    EvaluationOutcome,
    evaluate_once,
)
from .settings import CalculatorSettings, load_settings
from .store import (
    SessionLimitError,
    SessionNotFoundError,
    SessionStore,
)

__all__ = [
    "AngleUnit",
    "ExpressionError",
    "MathEngine",
    "evaluate_expression",
    "DEFAULT_HISTORY_CAPACITY",
    "HistoryEntry",
    "HistoryLedger",
    "BUTTON_TOKENS",
    "KEY_BINDINGS",
    "token_for_key",
    "LOG_MODES",
    "LogMode",
    "count_unbalanced",
    "normalize_expression",
    "ERROR_SENTINEL",
    "INITIAL_RESULT",
    "CalculatorSession",
    "EvaluationOutcome",
    "evaluate_once",
    "CalculatorSettings",
    "load_settings",
    "SessionLimitError",
    "SessionNotFoundError",
    "SessionStore",
]
