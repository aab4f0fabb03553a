"""Whitelisted numeric evaluation of calculator expressions."""

from __future__ import annotations

import ast
import math
import re
from dataclasses import dataclass
from typing import Callable, Literal, Mapping


class ExpressionError(ValueError):
    """Raised when an expression cannot be parsed or evaluated."""


AngleUnit = Literal["radian", "degree"]

_ALLOWED_ANGLE_UNITS = {"radian", "degree"}
_MAX_EXPR_LENGTH = 1024
_MAX_FACTORIAL = 170
_MIN_PRECISION = 1
_MAX_PRECISION = 17

CONSTANTS: Mapping[str, float] = {"pi": math.pi, "e": math.e, "tau": math.tau}

_TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    r"|(?P<name>[A-Za-z_][A-Za-z_0-9]*)"
    r"|(?P<op>\*\*|\S)"
    r")"
)


def _validate_angle_unit(angle_unit: str) -> AngleUnit:
    if angle_unit not in _ALLOWED_ANGLE_UNITS:
        raise ExpressionError("angle_unit must be 'radian' or 'degree'")
    return angle_unit  # type: ignore[return-value]


def _tokenize(expression: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    position = 0
    stripped = expression.rstrip()
    while position < len(stripped):
        match = _TOKEN_RE.match(stripped, position)
        if match is None:  # pragma: no cover - \S always matches
            raise ExpressionError(f"Unexpected input at position {position}")
        kind = match.lastgroup or "op"
        text = match.group(kind)
        if kind == "op" and text == "(":
            kind = "open"
        elif kind == "op" and text == ")":
            kind = "close"
        tokens.append((kind, text))
        position = match.end()
    return tokens


def _operand_start(out: list[tuple[str, str]]) -> int:
    """Index in *out* where the operand preceding a postfix ``!`` begins."""

    if not out:
        raise ExpressionError("Factorial needs an operand")
    kind, _ = out[-1]
    if kind in {"number", "name"}:
        return len(out) - 1
    if kind != "close":
        raise ExpressionError("Factorial needs an operand")
    depth = 0
    for index in range(len(out) - 1, -1, -1):
        token_kind = out[index][0]
        if token_kind == "close":
            depth += 1
        elif token_kind == "open":
            depth -= 1
            if depth == 0:
                if index > 0 and out[index - 1][0] == "call":
                    return index - 1
                return index
    raise ExpressionError("Unbalanced parentheses before '!'")


def _needs_implicit_product(previous: tuple[str, str] | None, current: tuple[str, str]) -> bool:
    if previous is None:
        return False
    prev_kind, _ = previous
    kind, _ = current
    if prev_kind not in {"number", "name", "close"}:
        return False
    if kind not in {"number", "name", "call", "open"}:
        return False
    # Two adjacent literals such as "1.2.3" stay a syntax error.
    return not (prev_kind == "number" and kind == "number")


def _to_python_source(expression: str) -> str:
    tokens = _tokenize(expression)
    out: list[tuple[str, str]] = []
    for index, (kind, text) in enumerate(tokens):
        if kind == "op" and text == "!":
            start = _operand_start(out)
            operand = out[start:]
            out[start:] = [("call", "factorial"), ("open", "("), *operand, ("close", ")")]
            continue
        if kind == "name":
            following = tokens[index + 1] if index + 1 < len(tokens) else None
            if following is not None and following[0] == "open" and text not in CONSTANTS:
                kind = "call"
        if kind == "op" and text == "^":
            text = "**"
        current = (kind, text)
        if _needs_implicit_product(out[-1] if out else None, current):
            out.append(("op", "*"))
        out.append(current)
    return " ".join(text for _, text in out)


def _validate_ast(node: ast.AST) -> None:
    if isinstance(node, ast.Expression):
        _validate_ast(node.body)
        return
    if isinstance(node, ast.BinOp):
        if not isinstance(node.op, (ast.Add, ast.Sub, ast.Mult, ast.Div, ast.Mod, ast.Pow)):
            raise ExpressionError("Operator not permitted")
        _validate_ast(node.left)
        _validate_ast(node.right)
        return
    if isinstance(node, ast.UnaryOp):
        if not isinstance(node.op, (ast.UAdd, ast.USub)):
            raise ExpressionError("Unary operator not permitted")
        _validate_ast(node.operand)
        return
    if isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name):
            raise ExpressionError("Only named functions are permitted")
        if node.keywords:
            raise ExpressionError("Keyword arguments are not supported")
        for arg in node.args:
            _validate_ast(arg)
        return
    if isinstance(node, ast.Name):
        return
    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ExpressionError("Only numeric literals are allowed")
        return
    raise ExpressionError("Unsupported syntax")


def _wrap_trig(fn: Callable[[float], float], *, use_degrees: bool) -> Callable[[float], float]:
    def wrapped(value: float) -> float:
        rad = math.radians(value) if use_degrees else value
        return fn(rad)

    return wrapped


def _wrap_inverse_trig(fn: Callable[[float], float], *, use_degrees: bool) -> Callable[[float], float]:
    def wrapped(value: float) -> float:
        angle = fn(value)
        return math.degrees(angle) if use_degrees else angle

    return wrapped


def _factorial(value: float) -> float:
    if value > _MAX_FACTORIAL:
        raise ExpressionError("Factorial argument is too large")
    if float(value).is_integer():
        if value < 0:
            raise ExpressionError("Factorial of a negative integer is undefined")
        return float(math.factorial(int(value)))
    return math.gamma(value + 1)


def _make_function_table(angle_unit: AngleUnit) -> dict[str, Callable[..., float]]:
    use_degrees = angle_unit == "degree"
    funcs: dict[str, Callable[..., float]] = {
        "sin": _wrap_trig(math.sin, use_degrees=use_degrees),
        "cos": _wrap_trig(math.cos, use_degrees=use_degrees),
        "tan": _wrap_trig(math.tan, use_degrees=use_degrees),
        "asin": _wrap_inverse_trig(math.asin, use_degrees=use_degrees),
        "acos": _wrap_inverse_trig(math.acos, use_degrees=use_degrees),
        "atan": _wrap_inverse_trig(math.atan, use_degrees=use_degrees),
        "sinh": math.sinh,
        "cosh": math.cosh,
        "tanh": math.tanh,
        "log": lambda x, base=math.e: math.log(x, base),
        "ln": lambda x: math.log(x),
        "log10": math.log10,
        "exp": math.exp,
        "sqrt": math.sqrt,
        "abs": abs,
        "floor": math.floor,
        "ceil": math.ceil,
        "min": min,
        "max": max,
        "factorial": _factorial,
    }
    return funcs


def _eval_node(
    node: ast.AST,
    context: Mapping[str, float],
    functions: Mapping[str, Callable[..., float]],
) -> float:
    if isinstance(node, ast.Constant):
        value = float(node.value)
    elif isinstance(node, ast.Name):
        if node.id in context:
            value = context[node.id]
        else:
            raise ExpressionError(f"Unknown variable '{node.id}'")
    elif isinstance(node, ast.UnaryOp):
        operand = _eval_node(node.operand, context, functions)
        value = +operand if isinstance(node.op, ast.UAdd) else -operand
    elif isinstance(node, ast.BinOp):
        left = _eval_node(node.left, context, functions)
        right = _eval_node(node.right, context, functions)
        op = node.op
        if isinstance(op, ast.Add):
            value = left + right
        elif isinstance(op, ast.Sub):
            value = left - right
        elif isinstance(op, ast.Mult):
            value = left * right
        elif isinstance(op, ast.Div):
            value = left / right
        elif isinstance(op, ast.Mod):
            value = left % right
        elif isinstance(op, ast.Pow):
            value = left ** right
        else:  # pragma: no cover - guarded by _validate_ast
            raise ExpressionError("Operator not permitted")
    elif isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name):
            raise ExpressionError("Only simple function calls are allowed")
        func_name = node.func.id
        func = functions.get(func_name)
        if func is None:
            raise ExpressionError(f"Function '{func_name}' is not allowed")
        args = [_eval_node(arg, context, functions) for arg in node.args]
        value = func(*args)
    else:  # pragma: no cover - guarded by _validate_ast
        raise ExpressionError("Unsupported syntax")

    if isinstance(value, complex):
        raise ExpressionError("Complex results are not supported")
    if not isinstance(value, (int, float)):
        raise ExpressionError("Expression returned a non-numeric value")
    if math.isnan(value) or math.isinf(value):
        raise ExpressionError("Result is not finite")
    return float(value)


def evaluate_expression(expression: str, *, angle_unit: str = "radian") -> float:
    """Evaluate *expression* and return its value as a finite float."""

    angle_unit = _validate_angle_unit(angle_unit)
    if not expression or not isinstance(expression, str) or not expression.strip():
        raise ExpressionError("Expression is required")
    if len(expression) > _MAX_EXPR_LENGTH:
        raise ExpressionError("Expression is too long")

    source = _to_python_source(expression)
    try:
        parsed = ast.parse(source, mode="eval")
        _validate_ast(parsed)
    except SyntaxError as exc:
        raise ExpressionError(f"Could not parse expression: {exc.msg}") from exc
    except (RecursionError, MemoryError) as exc:
        raise ExpressionError("Expression is nested too deeply") from exc

    functions = _make_function_table(angle_unit)
    try:
        return _eval_node(parsed.body, CONSTANTS, functions)
    except ExpressionError:
        raise
    except ZeroDivisionError as exc:
        raise ExpressionError("Division by zero") from exc
    except OverflowError as exc:
        raise ExpressionError("Result is too large") from exc
    except (ValueError, TypeError) as exc:
        raise ExpressionError(f"Could not evaluate expression: {exc}") from exc
    except RecursionError as exc:
        raise ExpressionError("Expression is nested too deeply") from exc


@dataclass(frozen=True, slots=True)
class MathEngine:
    """Evaluate expressions and render results so they can be typed back in."""

    angle_unit: AngleUnit = "radian"
    precision: int = 15

    def __post_init__(self) -> None:
        _validate_angle_unit(self.angle_unit)
        if not _MIN_PRECISION <= int(self.precision) <= _MAX_PRECISION:
            raise ValueError(f"precision must be {_MIN_PRECISION}..{_MAX_PRECISION}")

    def evaluate(self, expression: str) -> float:
        return evaluate_expression(expression, angle_unit=self.angle_unit)

    def render(self, value: float) -> str:
        if value == 0:
            value = 0.0
        return format(value, f".{self.precision}g")


__all__ = [
    "AngleUnit",
    "CONSTANTS",
    "ExpressionError",
    "MathEngine",
    "evaluate_expression",
]
