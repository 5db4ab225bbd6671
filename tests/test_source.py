from __future__ import annotations

import pytest

from templine.source import Source, SourceSpan


def test_pos_to_line_col_basic():
    s = Source("ab\nc\r\nd\n")
    # indexes: 0 1 2 3 4 5 6 7  (len=8)
    assert s.pos_to_line_col(0) == (1, 1)
    assert s.pos_to_line_col(2) == (1, 3)     # '\n' at end of line 1
    assert s.pos_to_line_col(3) == (2, 1)     # 'c'
    assert s.pos_to_line_col(5) == (2, 3)     # end of CRLF line
    assert s.pos_to_line_col(8) == (4, 1)     # caret at EOF (line 4 start)


def test_no_phantom_line_without_trailing_newline():
    assert Source("ab").line_starts == (0,)
    assert Source("ab\n").line_starts == (0, 3)
    assert Source("ab").pos_to_line_col(2) == (1, 3)
    assert Source("").pos_to_line_col(0) == (1, 1)


def test_pos_out_of_range():
    with pytest.raises(ValueError):
        Source("ab").pos_to_line_col(3)
    with pytest.raises(ValueError):
        Source("ab").pos_to_line_col(-1)


def test_lines_keep_terminators():
    s = Source("one\ntwo\r\nthree")
    assert [s.slice(sp) for sp in s.lines()] == ["one\n", "two\r\n", "three"]
    assert Source("").lines() == ()


def test_slice_bounds():
    s = Source("abc")
    assert s.slice(SourceSpan(1, 3)) == "bc"
    assert s.slice(SourceSpan.point(3)) == ""
    with pytest.raises(ValueError):
        s.slice(SourceSpan(1, 4))


def test_span_invariants():
    assert len(SourceSpan(2, 5)) == 3
    assert SourceSpan(2, 5).shifted(10) == SourceSpan(12, 15)
    with pytest.raises(ValueError):
        SourceSpan(5, 2)
    with pytest.raises(ValueError):
        SourceSpan(-1, 2)


def test_line_text_strips_terminators():
    s = Source("one\ntwo\r\n\x0bfour\n")
    assert [s.line_text(n) for n in range(1, len(s.line_starts) + 1)] == [
        "one", "two", "", "four", "",
    ]
