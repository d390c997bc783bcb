# src/stackcalc/evaluator/arithmetic.py
import logging
import math

from ..calc_token import OPERATOR
from ..diagnostics import ErrorKind, IntegerDivisionByZero
from ..object import Integer, Float, NUMERIC_TYPES, in_int64_range

logger = logging.getLogger(__name__)


def truncating_div(left, right):
    """Integer quotient rounded toward zero, as a C compiler computes it."""
    if right == 0:
        raise IntegerDivisionByZero(left)
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def ieee_div(left, right):
    """Float division that yields inf/nan for zero divisors instead of raising."""
    if right != 0.0:
        return left / right
    if left == 0.0 or math.isnan(left):
        return math.nan
    sign = math.copysign(1.0, left) * math.copysign(1.0, right)
    return math.copysign(math.inf, sign)


def value_kind(value):
    return value.type() if isinstance(value, NUMERIC_TYPES) else type(value).__name__


class ArithmeticMixin:
    """Reduction of two operands and one operator token."""

    def apply(self, left, right, op, diagnostics):
        if (not isinstance(left, NUMERIC_TYPES)
                or not isinstance(right, NUMERIC_TYPES)
                or getattr(op, "type", None) != OPERATOR):
            diagnostics.push(
                f"apply: unexpected operand types: {value_kind(left)} {value_kind(right)} "
                f"{getattr(op, 'type', type(op).__name__)}",
                ErrorKind.SYNTAX,
            )
            return None

        if isinstance(left, Float) and isinstance(right, Integer):
            logger.debug("promoting %s to float", right.value)
            right = right.promote()
        elif isinstance(left, Integer) and isinstance(right, Float):
            logger.debug("promoting %s to float", left.value)
            left = left.promote()

        operator = op.literal[:1]
        if isinstance(left, Integer):
            result = self.eval_integer_infix(operator, left, right, diagnostics)
        else:
            result = self.eval_float_infix(operator, left, right, diagnostics)

        if result is None:
            if operator not in "+-*/":
                diagnostics.push(f"operator '{op.literal}' not implemented", ErrorKind.UNSUPPORTED)
            diagnostics.push(f"binary expression {left.inspect()} {op.literal} {right.inspect()} failed")
            return None

        logger.debug("%s %s %s = %s", left.inspect(), operator, right.inspect(), result.inspect())
        return result

    def eval_integer_infix(self, operator, left, right, diagnostics):
        left_val = left.value
        right_val = right.value

        if operator == "+":
            value = left_val + right_val
        elif operator == "-":
            value = left_val - right_val
        elif operator == "*":
            value = left_val * right_val
        elif operator == "/":
            value = truncating_div(left_val, right_val)
        else:
            return None

        if not in_int64_range(value):
            diagnostics.push(f"integer overflow: {left_val} {operator} {right_val}", ErrorKind.ARITHMETIC)
            return None
        return Integer(value)

    def eval_float_infix(self, operator, left, right, diagnostics):
        left_val = left.value
        right_val = right.value

        if operator == "+":
            return Float(left_val + right_val)
        elif operator == "-":
            return Float(left_val - right_val)
        elif operator == "*":
            return Float(left_val * right_val)
        elif operator == "/":
            return Float(ieee_div(left_val, right_val))
        return None
