"""Diagnostics chain semantics."""

from stackcalc.diagnostics import Diagnostics, ErrorKind, EvaluationError


def _failing_helper(diagnostics):
    diagnostics.push("allocation refused", ErrorKind.RESOURCE)


def _failing_caller(diagnostics):
    _failing_helper(diagnostics)
    if not diagnostics.is_empty():
        diagnostics.push("caller failed")


def test_new_chain_is_empty():
    diagnostics = Diagnostics()
    assert diagnostics.is_empty()
    assert not diagnostics
    assert diagnostics.render() == ""
    assert diagnostics.root_cause is None


def test_failure_is_visible_to_caller():
    diagnostics = Diagnostics()
    _failing_caller(diagnostics)
    assert not diagnostics.is_empty()
    assert len(diagnostics) == 2
    assert diagnostics.kinds == [ErrorKind.RESOURCE, ErrorKind.CONTEXT]


def test_render_is_most_recent_first():
    diagnostics = Diagnostics()
    for message in ("first", "second", "third"):
        diagnostics.push(message)
    assert diagnostics.render() == "third\n - second\n - first"


def test_clear_allows_reuse():
    diagnostics = Diagnostics()
    _failing_caller(diagnostics)
    diagnostics.clear()
    assert diagnostics.is_empty()
    diagnostics.push("fresh")
    assert diagnostics.render() == "fresh"


def test_root_cause_is_earliest_message():
    diagnostics = Diagnostics()
    _failing_caller(diagnostics)
    assert diagnostics.root_cause.message == "allocation refused"
    assert [str(d) for d in diagnostics] == ["allocation refused", "caller failed"]


def test_extend_keeps_order():
    inner = Diagnostics()
    inner.push("inner", ErrorKind.LEXICAL)
    outer = Diagnostics()
    outer.extend(inner)
    outer.push("outer")
    assert outer.render() == "outer\n - inner"


def test_evaluation_error_message_includes_position():
    diagnostics = Diagnostics()
    diagnostics.push("expected ';'", ErrorKind.SYNTAX)
    error = EvaluationError(diagnostics, line=3, column=9)
    assert str(error) == "expected ';'\nLine: 3\nCol: 9"
    assert error.kind == ErrorKind.SYNTAX
