# src/stackcalc/__init__.py
"""Tokenizer and two-stack evaluator for semicolon-terminated arithmetic."""

__version__ = "0.1.0"

from .diagnostics import (
    Diagnostics,
    ErrorKind,
    StackcalcError,
    SourceError,
    EvaluationError,
    FatalEvaluationError,
    IntegerDivisionByZero,
)
from .evaluator import Evaluator, evaluate_source
from .lexer import Lexer
from .object import Integer, Float
from .runner import run
from .source import SourceCursor

__all__ = [
    "Diagnostics",
    "ErrorKind",
    "StackcalcError",
    "SourceError",
    "EvaluationError",
    "FatalEvaluationError",
    "IntegerDivisionByZero",
    "Evaluator",
    "evaluate_source",
    "Lexer",
    "Integer",
    "Float",
    "run",
    "SourceCursor",
]
