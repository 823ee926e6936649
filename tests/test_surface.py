"""Tests for drawing surfaces."""

import pytest

import termwidgets as tw
from conftest import FakeWindow


class TestPrinting:
    """Test text output and clipping."""

    def test_clip_right(self) -> None:
        window = FakeWindow(5, 2)
        surface = tw.Surface(window)
        assert surface.print_at(0, 3, 'hello') == 5
        assert window.line(0) == '   he'

    def test_clip_left(self) -> None:
        window = FakeWindow(5, 2)
        surface = tw.Surface(window)
        surface.print_at(1, -2, 'hello')
        assert window.line(1) == 'llo  '

    def test_outside_lines_ignored(self) -> None:
        window = FakeWindow(5, 2)
        surface = tw.Surface(window)
        surface.print_at(2, 0, 'hello')
        surface.print_at(-1, 0, 'hello')
        assert window.calls == []

    def test_sub_surface(self) -> None:
        window = FakeWindow(5, 2)
        sub = tw.Surface(window).make_sub(1, 1, 3, 1)
        sub.print_at(0, 0, 'abcdef')
        assert window.line(1) == ' abc '
        assert sub.abspos == (1, 1)

    def test_dirty_flag(self) -> None:
        window = FakeWindow(5, 2)
        root = tw.Surface(window)
        sub = root.make_sub(0, 0, 2, 2)
        assert not root.dirty
        sub.erase_at(0, 0, 2)
        assert root.dirty

    def test_lines(self) -> None:
        window = FakeWindow(4, 3)
        surface = tw.Surface(window)
        surface.hline_at(0, 0, 4, 'ascii')
        surface.vline_at(1, 1, 2, 'double')
        assert window.text() == ['----', ' ║  ', ' ║  ']

    def test_withdrawn(self) -> None:
        window = FakeWindow(5, 2)
        sub = tw.Surface(window).make_sub(0, 0, 2, 2)
        sub.withdraw()
        with pytest.raises(tw.SurfaceError):
            sub.print_at(0, 0, 'x')
        with pytest.raises(ValueError):
            sub.clear()


class TestShiftLine:
    """Test in-place line shifting."""

    def test_insert(self) -> None:
        window = FakeWindow(5, 1)
        surface = tw.Surface(window)
        surface.print_at(0, 0, 'abcde')
        assert surface.shift_line(0, 1, 2)
        assert window.line(0) == 'a  bc'

    def test_delete(self) -> None:
        window = FakeWindow(5, 1)
        surface = tw.Surface(window)
        surface.print_at(0, 0, 'abcde')
        assert surface.shift_line(0, 1, -2)
        assert window.line(0) == 'ade  '

    def test_requires_right_edge(self) -> None:
        window = FakeWindow(5, 1)
        sub = tw.Surface(window).make_sub(0, 0, 3, 1)
        assert not sub.shift_line(0, 0, 1)
        assert window.calls == []
