"""Source cursor over in-memory and memory-mapped buffers."""

import pytest

from stackcalc.diagnostics import SourceError
from stackcalc.source import SourceCursor


def test_peek_does_not_advance():
    cursor = SourceCursor.from_text("ab")
    assert cursor.peek_byte() == ord("a")
    assert cursor.peek_byte(1) == ord("b")
    assert cursor.position == 0


def test_read_byte_advances_until_end():
    cursor = SourceCursor.from_text("ab")
    assert cursor.read_byte() == ord("a")
    assert cursor.read_byte() == ord("b")
    assert cursor.at_end()
    assert cursor.read_byte() is None
    assert cursor.peek_byte() is None


def test_end_sentinel_is_distinct_from_nul_byte():
    cursor = SourceCursor.from_text(b"\x00")
    assert cursor.read_byte() == 0
    assert cursor.read_byte() is None


def test_skip_while_returns_count():
    cursor = SourceCursor.from_text("   42")
    assert cursor.skip_while(lambda ch: ch == ord(" ")) == 3
    assert cursor.peek_byte() == ord("4")
    assert cursor.skip_while(lambda ch: True) == 2
    assert cursor.at_end()


def test_line_column_rescans_from_start():
    cursor = SourceCursor.from_text("1 ;\n22 ;\n  3")
    assert cursor.line_column(0) == (1, 1)
    assert cursor.line_column(4) == (2, 1)
    assert cursor.line_column(11) == (3, 3)


def test_open_maps_file(tmp_path):
    path = tmp_path / "prog.calc"
    path.write_bytes(b"1 + 2 ;\n")
    with SourceCursor.open(path) as cursor:
        assert cursor.size == 8
        assert cursor.slice(0, 5) == b"1 + 2"
        assert cursor.read_byte() == ord("1")
    assert cursor.closed


def test_open_empty_file(tmp_path):
    path = tmp_path / "empty.calc"
    path.write_bytes(b"")
    cursor = SourceCursor.open(path)
    assert cursor.at_end()
    assert cursor.peek_byte() is None
    cursor.close()
    cursor.close()


def test_open_missing_file(tmp_path):
    with pytest.raises(SourceError) as excinfo:
        SourceCursor.open(tmp_path / "missing.calc")
    assert "failed to open file" in str(excinfo.value)
