import pytest

from plugins.calculator.core import (
    BUTTON_TOKENS,
    ERROR_SENTINEL,
    CalculatorSession,
    evaluate_once,
    token_for_key,
)


def test_chained_result_becomes_expression():
    session = CalculatorSession()
    session.append("2+2")
    outcome = session.evaluate()
    assert outcome is not None and outcome.ok
    assert session.result == "4"
    assert session.expression == "4"

    session.append("*3")
    session.evaluate()
    assert session.result == "12"
    assert session.expression == "12"
    assert [entry.to_dict() for entry in session.history] == [
        {"expression": "4*3", "result": "12"},
        {"expression": "2+2", "result": "4"},
    ]


def test_unbalanced_expression_is_closed_before_evaluation():
    session = CalculatorSession()
    session.append("(1+2")
    outcome = session.evaluate()
    assert outcome.normalized == "(1+2)"
    assert session.result == "3"
    assert session.history.entries()[0].expression == "(1+2)"


def test_blank_expression_is_a_no_op():
    session = CalculatorSession()
    assert session.evaluate() is None
    assert session.result == "0"

    session.append("2+2")
    session.evaluate()
    session.expression = "   "
    assert session.evaluate() is None
    assert session.result == "4"
    assert len(session.history) == 1


def test_fault_sets_error_and_keeps_expression():
    session = CalculatorSession()
    session.append("2+*3")
    outcome = session.evaluate()
    assert outcome is not None and not outcome.ok
    assert session.result == ERROR_SENTINEL
    assert session.expression == "2+*3"
    assert len(session.history) == 0


def test_deep_unary_chain_sets_error_sentinel():
    session = CalculatorSession()
    session.append("-" * 1000 + "1")
    outcome = session.evaluate()
    assert outcome is not None and not outcome.ok
    assert session.result == ERROR_SENTINEL
    assert session.expression == "-" * 1000 + "1"


def test_clear_and_delete_last():
    session = CalculatorSession()
    session.delete_last()
    assert session.expression == ""

    session.append("12")
    session.delete_last()
    assert session.expression == "1"

    session.append("+1")
    session.evaluate()
    session.clear()
    assert session.expression == ""
    assert session.result == "0"
    assert len(session.history) == 1


def test_press_dispatches_control_tokens():
    session = CalculatorSession()
    for token in ["7", "*", "6", "="]:
        session.press(token)
    assert session.result == "42"

    session.press("DEL")
    assert session.expression == "4"
    session.press("C")
    assert (session.expression, session.result) == ("", "0")
    session.press("9")
    session.press("AC")
    assert session.expression == ""


def test_restore_reseeds_state_without_touching_history():
    session = CalculatorSession()
    session.append("2+2")
    session.evaluate()
    session.append("*3")
    session.evaluate()

    session.restore(1)
    assert session.expression == "2+2"
    assert session.result == "4"
    assert len(session.history) == 2

    with pytest.raises(IndexError):
        session.restore(5)


def test_history_capacity_is_respected():
    session = CalculatorSession(history_capacity=5)
    for n in range(6):
        session.clear()
        session.append(f"{n}+1")
        session.evaluate()
    assert len(session.history) == 5
    assert session.history.entries()[0].result == "6"
    assert all(entry.expression != "0+1" for entry in session.history)


def test_log_modes():
    faithful = CalculatorSession()
    faithful.append("ln(100")
    faithful.evaluate()
    assert faithful.result == "2"

    corrected = CalculatorSession(log_mode="corrected")
    corrected.append("ln(e)+log(100)")
    corrected.evaluate()
    assert corrected.result == "3"


def test_mod_token():
    session = CalculatorSession()
    for token in ["1", "0", "mod", "4", "="]:
        session.press(token)
    assert session.result == "2"


def test_invalid_log_mode_rejected():
    with pytest.raises(ValueError):
        CalculatorSession(log_mode="natural")  # type: ignore[arg-type]


def test_snapshot_shape():
    session = CalculatorSession(history_capacity=5)
    snapshot = session.snapshot()
    assert snapshot == {
        "expression": "",
        "result": "0",
        "history": [],
        "history_capacity": 5,
        "log_mode": "faithful",
    }


def test_evaluate_once():
    assert evaluate_once("") is None
    assert evaluate_once("  ") is None
    outcome = evaluate_once("2^10")
    assert outcome.result == "1024"
    assert evaluate_once("1/0").result == ERROR_SENTINEL


def test_key_bindings():
    assert token_for_key("Enter") == "="
    assert token_for_key("Backspace") == "DEL"
    assert token_for_key("Escape") == "AC"
    assert token_for_key("^") == "^"
    assert token_for_key("a") is None
    assert {"sin(", "!", "mod", "pi", "AC"}.issubset(BUTTON_TOKENS)
