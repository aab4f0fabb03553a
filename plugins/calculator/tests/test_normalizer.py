import pytest

from plugins.calculator.core import count_unbalanced, normalize_expression


def test_mod_becomes_percent():
    assert normalize_expression("10mod3") == "10%3"
    assert normalize_expression("7 mod 2 mod 1") == "7 % 2 % 1"


def test_faithful_mode_collapses_ln_and_log_to_base_ten():
    assert normalize_expression("ln(5)+log(100)") == "log10(5)+log10(100)"


def test_corrected_mode_keeps_natural_log():
    assert normalize_expression("ln(5)+log(100)", log_mode="corrected") == "ln(5)+log10(100)"


def test_missing_closing_parentheses_are_appended():
    assert normalize_expression("(1+2") == "(1+2)"
    assert normalize_expression("sqrt(abs(-4") == "sqrt(abs(-4))"
    balanced = normalize_expression("((2*(3+4")
    assert balanced.count("(") == balanced.count(")")


def test_surplus_closing_parentheses_are_left_alone():
    assert normalize_expression("1+2)") == "1+2)"


def test_already_normalized_input_is_unchanged():
    expression = "log10(100)+(2*3)%4"
    once = normalize_expression(expression)
    assert once == expression
    assert normalize_expression(once) == once


def test_unknown_tokens_pass_through():
    assert normalize_expression("foo(1)+@") == "foo(1)+@"


def test_count_unbalanced():
    assert count_unbalanced("((1") == 2
    assert count_unbalanced("1)") == 0
    assert count_unbalanced("") == 0


def test_unknown_log_mode_rejected():
    with pytest.raises(ValueError):
        normalize_expression("ln(2)", log_mode="natural")
