# src/stackcalc/runner.py
"""File driver: evaluate every statement of a source file."""

import logging

from rich.console import Console

from .config import config as default_config
from .diagnostics import Diagnostics, ErrorKind, FatalEvaluationError, SourceError
from .evaluator import Evaluator
from .object import format_value
from .source import SourceCursor

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_FATAL = 2


def _console(stderr=False):
    return Console(stderr=stderr, highlight=False, soft_wrap=True)


def report_failure(diagnostics, line, column, console=None):
    console = console or _console(stderr=True)
    console.print(diagnostics.render(), markup=False)
    console.print(f"\nLine: {line}\nCol: {column}", markup=False)


def run(source_path, config=None, console=None, err_console=None):
    """Evaluate ``source_path`` statement by statement and return an exit code."""
    config = config or default_config
    console = console or _console()
    err_console = err_console or _console(stderr=True)
    diagnostics = Diagnostics()

    try:
        cursor = SourceCursor.open(source_path)
    except SourceError as e:
        diagnostics.push(str(e), ErrorKind.IO)
        diagnostics.push("open failed")
        err_console.print(diagnostics.render(), markup=False)
        return EXIT_FAILURE

    status = EXIT_OK
    try:
        evaluator = Evaluator(cursor, config=config)
        while not evaluator.at_end():
            try:
                value = evaluator.evaluate_statement(diagnostics)
            except FatalEvaluationError as e:
                line, column = evaluator.position()
                logger.debug("fatal fault in statement %d: %s", evaluator.statements + 1, e)
                err_console.print(f"fatal: {e}", markup=False)
                err_console.print(f"\nLine: {line}\nCol: {column}", markup=False)
                return EXIT_FATAL

            if value is not None:
                console.print(format_value(value, config.float_format), markup=False)
                continue
            if not diagnostics:
                break  # end of input

            line, column = evaluator.position()
            report_failure(diagnostics, line, column, err_console)
            status = EXIT_FAILURE
            if not config.keep_going:
                break
            diagnostics.clear()
            evaluator.synchronize()
        logger.info("evaluated %d statement(s) from %s", evaluator.statements, source_path)
    finally:
        try:
            cursor.close()
        except SourceError as e:
            close_diagnostics = Diagnostics()
            close_diagnostics.push(str(e), ErrorKind.IO)
            close_diagnostics.push("close failed")
            err_console.print(close_diagnostics.render(), markup=False)
            status = EXIT_FAILURE

    return status
