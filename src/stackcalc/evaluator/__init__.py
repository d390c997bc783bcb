# src/stackcalc/evaluator/__init__.py
from .core import Evaluator, evaluate_source
from .expressions import precedences, operator_precedence

__all__ = ['Evaluator', 'evaluate_source', 'precedences', 'operator_precedence']
