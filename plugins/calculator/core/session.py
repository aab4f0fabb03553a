"""Expression buffer, evaluation and history for one calculator user."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from common.logging import get_logger

from .engine import ExpressionError, MathEngine
from .history import DEFAULT_HISTORY_CAPACITY, HistoryEntry, HistoryLedger
from .keymap import CLEAR, CLEAR_SHORT, DELETE, EVALUATE
from .normalizer import LOG_MODES, LogMode, normalize_expression

ERROR_SENTINEL = "Error"
INITIAL_RESULT = "0"

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class EvaluationOutcome:
    """Result of a single evaluation attempt."""

    ok: bool
    expression: str
    normalized: str
    result: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "expression": self.expression,
            "normalized": self.normalized,
            "result": self.result,
        }


def _attempt(expression: str, engine: MathEngine, log_mode: LogMode) -> EvaluationOutcome:
    normalized = normalize_expression(expression, log_mode=log_mode)
    try:
        value = engine.evaluate(normalized)
    except ExpressionError as exc:
        logger.debug("evaluation failed for %r: %s", normalized, exc)
        return EvaluationOutcome(ok=False, expression=expression, normalized=normalized, result=ERROR_SENTINEL)
    return EvaluationOutcome(ok=True, expression=expression, normalized=normalized, result=engine.render(value))


def evaluate_once(
    expression: str,
    *,
    engine: MathEngine | None = None,
    log_mode: LogMode = "faithful",
) -> EvaluationOutcome | None:
    """Evaluate *expression* without any session state.

    Returns ``None`` for blank input.
    """

    if not expression or not expression.strip():
        return None
    return _attempt(expression, engine or MathEngine(), log_mode)


class CalculatorSession:
    """Mutable calculator state driven by keypad tokens.

    A successful evaluation replaces the expression with its result so the
    next token keeps computing from the previous answer.
    """

    def __init__(
        self,
        *,
        history_capacity: int = DEFAULT_HISTORY_CAPACITY,
        log_mode: LogMode = "faithful",
        engine: MathEngine | None = None,
    ) -> None:
        if log_mode not in LOG_MODES:
            raise ValueError(f"log_mode must be one of {', '.join(LOG_MODES)}")
        self.expression = ""
        self.result = INITIAL_RESULT
        self.history = HistoryLedger(history_capacity)
        self.log_mode: LogMode = log_mode
        self.engine = engine or MathEngine()

    def append(self, token: str) -> None:
        self.expression += token

    def delete_last(self) -> None:
        self.expression = self.expression[:-1]

    def clear(self) -> None:
        self.expression = ""
        self.result = INITIAL_RESULT

    def evaluate(self) -> EvaluationOutcome | None:
        if not self.expression.strip():
            return None
        outcome = _attempt(self.expression, self.engine, self.log_mode)
        self.result = outcome.result
        if outcome.ok:
            self.history.record(HistoryEntry(expression=outcome.normalized, result=outcome.result))
            self.expression = outcome.result
        return outcome

    def press(self, token: str) -> EvaluationOutcome | None:
        """Dispatch a keypad token; only ``=`` returns an outcome."""

        if token == EVALUATE:
            return self.evaluate()
        if token in (CLEAR, CLEAR_SHORT):
            self.clear()
        elif token == DELETE:
            self.delete_last()
        else:
            self.append(token)
        return None

    def restore(self, index: int) -> None:
        self.expression, self.result = self.history.restore(index)

    def clear_history(self) -> None:
        self.history.clear()

    def snapshot(self) -> dict[str, Any]:
        return {
            "expression": self.expression,
            "result": self.result,
            "history": self.history.to_list(),
            "history_capacity": self.history.capacity,
            "log_mode": self.log_mode,
        }


__all__ = [
    "CalculatorSession",
    "ERROR_SENTINEL",
    "EvaluationOutcome",
    "INITIAL_RESULT",
    "evaluate_once",
]
