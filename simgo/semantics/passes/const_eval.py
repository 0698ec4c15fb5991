# semantics/passes/const_eval.py
"""Compile-time expression evaluator.

Folds the initializers of witnesses and constants into literal text for the
generated module. This is a deliberately small evaluator, not constant
propagation:

- Literals (integers, strings, runes, true/false) pass through as written.
- Binary + - * / and == != < <= > >= are folded when both operands evaluate
  to signed 64-bit decimal integers. Arithmetic wraps like Go int64 and
  division truncates toward zero. Division by zero is not folded.
- `!x` gives "false" when x evaluates to "true", "true" otherwise.
- Everything else (identifiers, calls, selectors, unfoldable operands)
  evaluates to the fallback value "true".

The fallback is a known approximation: `ok := amount > 0` yields "true"
whatever `amount` is. Passing an environment switches identifier references
and integer conversions such as uint64(5000) to real lookups; names missing
from the environment still fall back.
"""
from __future__ import annotations
from typing import Mapping, Optional, Tuple
import re

from simgo.semantics.ast import Expr, BasicLit, BinaryExpr, UnaryExpr, Ident, CallExpr

FALLBACK = "true"

_INT64 = re.compile(r"^[+-]?[0-9]+$")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

# Conversions folded in environment mode, with the bit width of the target
_CONVERSIONS = {"uint8": 8, "byte": 8, "uint16": 16, "uint32": 32, "uint64": 64}


def parse_int64(text: str) -> Optional[int]:
    if not _INT64.match(text):
        return None
    value = int(text)
    if value < _INT64_MIN or value > _INT64_MAX:
        return None
    return value


def _wrap64(value: int) -> int:
    value &= (1 << 64) - 1
    return value - (1 << 64) if value > _INT64_MAX else value


def _quo(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _bool(value: bool) -> str:
    return "true" if value else "false"


_ARITH = {
    "+": lambda a, b: str(_wrap64(a + b)),
    "-": lambda a, b: str(_wrap64(a - b)),
    "*": lambda a, b: str(_wrap64(a * b)),
    "/": lambda a, b: str(_wrap64(_quo(a, b))),
}

_COMPARE = {
    "==": lambda a, b: _bool(a == b),
    "!=": lambda a, b: _bool(a != b),
    "<": lambda a, b: _bool(a < b),
    "<=": lambda a, b: _bool(a <= b),
    ">": lambda a, b: _bool(a > b),
    ">=": lambda a, b: _bool(a >= b),
}


class ConstantEvaluator:
    """Folds expressions to literal text.

    Stateless apart from the optional environment (Go name -> folded value),
    which the analyzer fills as it records witnesses and constants.
    """

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        self.env = env

    def evaluate(self, expr: Expr) -> str:
        """Folded text for `expr`; never raises."""
        return self.evaluate_with_status(expr)[0]

    def evaluate_with_status(self, expr: Expr) -> Tuple[str, bool]:
        """Return (value, exact). `exact` is False when the fallback was used anywhere."""
        match expr:
            case BasicLit():
                return expr.value, True
            case BinaryExpr():
                return self._binary(expr)
            case UnaryExpr(op="!"):
                operand, exact = self.evaluate_with_status(expr.x)
                return ("false" if operand == "true" else "true"), exact
            case Ident() if self.env is not None and expr.name in self.env:
                return self.env[expr.name], True
            case CallExpr() if self.env is not None:
                return self._conversion(expr)
            case _:
                return FALLBACK, False

    def _binary(self, expr: BinaryExpr) -> Tuple[str, bool]:
        left, left_exact = self.evaluate_with_status(expr.x)
        right, right_exact = self.evaluate_with_status(expr.y)
        a, b = parse_int64(left), parse_int64(right)
        if a is None or b is None:
            return FALLBACK, False

        if expr.op in _COMPARE:
            return _COMPARE[expr.op](a, b), left_exact and right_exact
        if expr.op in _ARITH and not (expr.op == "/" and b == 0):
            return _ARITH[expr.op](a, b), left_exact and right_exact
        return FALLBACK, False

    def _conversion(self, call: CallExpr) -> Tuple[str, bool]:
        """uint64(5000) and friends; other calls fall back."""
        if not (isinstance(call.fun, Ident) and call.fun.name in _CONVERSIONS and len(call.args) == 1):
            return FALLBACK, False

        value, exact = self.evaluate_with_status(call.args[0])
        n = parse_int64(value)
        if not exact or n is None or n < 0 or n >= (1 << _CONVERSIONS[call.fun.name]):
            return FALLBACK, False
        return str(n), True
