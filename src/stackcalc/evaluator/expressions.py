# src/stackcalc/evaluator/expressions.py
"""Two-stack operator precedence evaluation.

Operands go on one stack and pending operators (plus ``(`` markers) on the
other. A new operator first reduces every stacked operator that binds
strictly tighter than itself; operators of equal rank stay stacked and are
applied by the final drain, last pair first. ``1 - 2 - 3`` therefore
evaluates as ``1 - (2 - 3)``.
"""

import logging
import math

from ..calc_token import INT, FLOAT, IDENT, STRING, OPERATOR, LPAREN, RPAREN
from ..diagnostics import ErrorKind
from ..object import Integer, Float, in_int64_range

logger = logging.getLogger(__name__)

# Precedence ranks
SUM, PRODUCT, PAREN = 1, 2, 128

precedences = {
    "+": SUM, "-": SUM,
    "*": PRODUCT, "/": PRODUCT,
    "(": PAREN, ")": PAREN,
}

# Unknown operators rank with the tightest real operators so they are
# reduced promptly and rejected by apply().
UNKNOWN_RANK = PRODUCT


def operator_precedence(token):
    return precedences.get(token.literal[:1], UNKNOWN_RANK)


class ExpressionEvaluatorMixin:

    def parse_integer_literal(self, diagnostics):
        tok = self.cur_token
        try:
            value = int(tok.literal, 10)
        except ValueError:
            diagnostics.push(f"failed to parse int: {tok.literal!r}", ErrorKind.LEXICAL)
            return None
        if not in_int64_range(value):
            diagnostics.push(f"integer literal out of range: {tok.literal}", ErrorKind.LEXICAL)
            return None
        return Integer(value)

    def parse_float_literal(self, diagnostics):
        tok = self.cur_token
        try:
            value = float(tok.literal)
        except ValueError:
            diagnostics.push(f"failed to parse float: {tok.literal!r}", ErrorKind.LEXICAL)
            return None
        if math.isinf(value):
            diagnostics.push(f"float literal out of range: {tok.literal}", ErrorKind.LEXICAL)
            return None
        return Float(value)

    def eval_expression(self, diagnostics):
        """Consume tokens up to the end of one expression and return its value."""
        operands = []
        operators = []
        logger.debug("expression start at %d:%d", self.cur_token.line, self.cur_token.column)

        while True:
            tok = self.cur_token

            if tok.type in (INT, FLOAT):
                if tok.type == INT:
                    value = self.parse_integer_literal(diagnostics)
                else:
                    value = self.parse_float_literal(diagnostics)
                if value is None:
                    break
                if not self._push(operands, value, diagnostics):
                    break

            elif tok.type == LPAREN:
                if not self._push(operators, tok, diagnostics):
                    break

            elif tok.type == RPAREN:
                while operators and operators[-1].type != LPAREN:
                    if not self._reduce(operands, operators, diagnostics):
                        break
                if diagnostics:
                    break
                if not operators:
                    diagnostics.push("mismatched parentheses: unexpected ')'", ErrorKind.SYNTAX)
                    break
                operators.pop()

            elif tok.type == OPERATOR:
                rank = operator_precedence(tok)
                while (operators and operators[-1].type != LPAREN
                       and rank < operator_precedence(operators[-1])):
                    if not self._reduce(operands, operators, diagnostics):
                        break
                if diagnostics:
                    break
                if not self._push(operators, tok, diagnostics):
                    break

            elif tok.type == IDENT:
                diagnostics.push(f"identifiers not implemented: {tok.literal}", ErrorKind.UNSUPPORTED)
                break

            elif tok.type == STRING:
                diagnostics.push(f"string values not implemented: {tok.literal}", ErrorKind.UNSUPPORTED)
                break

            else:
                # terminator, EOF or an invalid token ends the expression
                break

            if not self.advance(diagnostics):
                break

        if diagnostics:
            diagnostics.push("eval_expression failed")
            return None

        while operands and operators:
            if operators[-1].type == LPAREN:
                diagnostics.push("mismatched parentheses: missing ')'", ErrorKind.SYNTAX)
                break
            if not self._reduce(operands, operators, diagnostics):
                break

        if not diagnostics and (len(operands) != 1 or operators):
            diagnostics.push(
                f"bad expression: {len(operands)} operand(s) and {len(operators)} operator(s) left",
                ErrorKind.SYNTAX,
            )
        if diagnostics:
            diagnostics.push("eval_expression failed")
            return None

        logger.debug("expression result %s", operands[0].inspect())
        return operands[0]

    def _push(self, stack, item, diagnostics):
        limit = self.config.max_stack_depth
        if len(stack) >= limit:
            diagnostics.push(f"expression too complex (depth limit {limit})", ErrorKind.RESOURCE)
            return False
        stack.append(item)
        return True

    def _reduce(self, operands, operators, diagnostics):
        """Pop two operands and one operator, apply, push the result."""
        if len(operands) < 2:
            op = operators[-1]
            diagnostics.push(
                f"bad expression: operator '{op.literal}' at line {op.line}, column {op.column} is missing an operand",
                ErrorKind.SYNTAX,
            )
            return False
        op = operators.pop()
        right = operands.pop()
        left = operands.pop()
        result = self.apply(left, right, op, diagnostics)
        if result is None:
            return False
        operands.append(result)
        return True
