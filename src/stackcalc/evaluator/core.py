# src/stackcalc/evaluator/core.py
import logging

from ..calc_token import INT, FLOAT, IDENT, STRING, LPAREN, SEMICOLON, EOF
from ..config import config as default_config
from ..diagnostics import Diagnostics, ErrorKind, EvaluationError
from ..lexer import Lexer
from ..source import SourceCursor
from .arithmetic import ArithmeticMixin
from .expressions import ExpressionEvaluatorMixin

logger = logging.getLogger(__name__)


class Evaluator(ArithmeticMixin, ExpressionEvaluatorMixin):
    """Evaluates ``expr ;`` statements straight off a token stream.

    The evaluator keeps a current and a lookahead token. Lexical errors found
    while reading the lookahead are held back until that token becomes
    current, so a statement is never failed by the one that follows it.
    """

    def __init__(self, cursor, config=None):
        self.cursor = cursor
        self.config = config or default_config
        self.lexer = Lexer(cursor, trace=self.config.trace_tokens)
        self.cur_token = None
        self.peek_token = None
        self._cur_errors = Diagnostics()
        self._peek_errors = Diagnostics()
        self.statements = 0
        # prime current and lookahead
        self._shift()
        self._shift()

    @classmethod
    def from_text(cls, text, config=None, filename="<stdin>"):
        return cls(SourceCursor.from_text(text, filename=filename), config=config)

    # -- token stream ------------------------------------------------------

    def _shift(self):
        self.cur_token = self.peek_token
        self._cur_errors = self._peek_errors
        self._peek_errors = Diagnostics()
        if self.cur_token is not None and self.cur_token.type == EOF:
            self.peek_token = self.cur_token
            return
        self.peek_token = self.lexer.next_token(self._peek_errors)

    def _check_current(self, diagnostics):
        if self._cur_errors:
            diagnostics.extend(self._cur_errors)
            return False
        return True

    def advance(self, diagnostics):
        self._shift()
        if not self._check_current(diagnostics):
            diagnostics.push("advance failed")
            return False
        return True

    def at_end(self):
        return self.cur_token.type == EOF and not self._cur_errors

    def position(self):
        """Line and column of the current token, rescanned from the buffer start."""
        return self.cursor.line_column(self.cur_token.start)

    # -- statements --------------------------------------------------------

    def evaluate_statement(self, diagnostics):
        """Evaluate one statement. Returns its value, or None at EOF or on failure."""
        if diagnostics:
            return None
        if not self._check_current(diagnostics):
            diagnostics.push("evaluate_statement failed")
            return None

        tok = self.cur_token
        if tok.type == EOF:
            return None

        if tok.type in (INT, FLOAT, LPAREN):
            result = self.eval_expression(diagnostics)
            if result is None:
                diagnostics.push("evaluate_statement failed")
                return None
        elif tok.type == IDENT:
            diagnostics.push(
                f"identifiers not implemented: {tok.literal} (variables and assignment are not supported)",
                ErrorKind.UNSUPPORTED,
            )
            return None
        elif tok.type == STRING:
            diagnostics.push(f"string values not implemented: {tok.literal}", ErrorKind.UNSUPPORTED)
            return None
        else:
            diagnostics.push(
                f"syntax error: unexpected token {tok.type} ({tok.literal})", ErrorKind.SYNTAX
            )
            return None

        if self.cur_token.type != SEMICOLON:
            tok = self.cur_token
            found = "end of input" if tok.type == EOF else f"{tok.type} ({tok.literal})"
            diagnostics.push(f"expected ';', got {found}", ErrorKind.SYNTAX)
            return None

        self._shift()
        self.statements += 1
        logger.debug("statement %d = %s", self.statements, result.inspect())
        return result

    def synchronize(self):
        """Skip to just past the next ';' (or to EOF) after a failed statement."""
        while self.cur_token.type not in (SEMICOLON, EOF):
            self._shift()
        if self.cur_token.type == SEMICOLON:
            self._shift()
        logger.debug("resynchronized at offset %d", self.cur_token.start)

    def evaluate_all(self, diagnostics):
        """Yield each statement's value until EOF or the first failure."""
        while not diagnostics and not self.at_end():
            value = self.evaluate_statement(diagnostics)
            if value is None:
                return
            yield value


def evaluate_source(text, config=None, filename="<stdin>"):
    """Evaluate every statement in ``text``; raise EvaluationError on the first failure."""
    evaluator = Evaluator.from_text(text, config=config, filename=filename)
    diagnostics = Diagnostics()
    results = list(evaluator.evaluate_all(diagnostics))
    if diagnostics:
        line, column = evaluator.position()
        raise EvaluationError(diagnostics, line, column)
    return results
