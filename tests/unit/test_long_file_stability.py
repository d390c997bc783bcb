"""Regression tests for long inputs.

Neither the tokenizer nor the evaluator may recurse per token or per
statement; both must get through 10k+ line sources and deep (but permitted)
nesting with a low recursion limit.
"""

import sys

from stackcalc.config import Config
from stackcalc.diagnostics import Diagnostics
from stackcalc.evaluator import Evaluator, evaluate_source
from stackcalc.lexer import Lexer
from stackcalc.object import Integer
from stackcalc.source import SourceCursor
from stackcalc.calc_token import EOF


def _lex_all(lexer, *, hard_cap: int = 200_000):
    """Consume tokens until EOF, guarding against infinite loops."""
    diagnostics = Diagnostics()
    steps = 0
    while True:
        tok = lexer.next_token(diagnostics)
        steps += 1
        assert diagnostics.is_empty(), diagnostics.render()
        if tok.type == EOF:
            return steps
        if steps > hard_cap:
            raise AssertionError("Lexer did not reach EOF (possible infinite loop)")


def test_long_file_lex_and_evaluate_no_recursion():
    prev_limit = sys.getrecursionlimit()
    try:
        sys.setrecursionlimit(min(prev_limit, 1000))

        code = "1 + 1 ;\n" * 10_000
        steps = _lex_all(Lexer(SourceCursor.from_text(code), trace=False))
        assert steps == 40_001

        results = evaluate_source(code, config=Config())
        assert len(results) == 10_000
        assert results[-1] == Integer(2)
    finally:
        sys.setrecursionlimit(prev_limit)


def test_blank_lines_before_statement():
    code = ("\n" * 10_000) + "  7 ;"
    evaluator = Evaluator.from_text(code, config=Config())
    diagnostics = Diagnostics()
    assert evaluator.evaluate_statement(diagnostics) == Integer(7)
    assert evaluator.cursor.line_column(evaluator.cursor.size - 3) == (10_001, 3)


def test_deep_nesting_within_limit():
    depth = 200
    code = "(" * depth + "1" + ")" * depth + " ;"
    assert evaluate_source(code, config=Config(max_stack_depth=256)) == [Integer(1)]
