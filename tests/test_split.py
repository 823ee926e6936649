"""Tests for the split containers."""

import curses

import termwidgets as tw
from termwidgets import MouseEvent
from conftest import Sized, make_root, settle


def mouse(kind, line, col, button=1):
    return (MouseEvent, kind, button, line, col)


class TestSplitLayout:
    """Test the geometry of split containers."""

    def test_request(self) -> None:
        split = tw.HSplit(tw.Label('top'), tw.Label('bottom'))
        assert split.prefsize == (6, 3)

    def test_missing_child_counts_as_one_cell(self) -> None:
        assert tw.HSplit(tw.Label('abc')).prefsize == (3, 3)
        assert tw.VSplit().prefsize == (3, 1)

    def test_spacing_in_request(self) -> None:
        split = tw.VSplit(Sized(2, 1), Sized(3, 2), style={'spacing': 3})
        assert split.prefsize == (8, 2)

    def test_initial_split(self) -> None:
        top, bottom = tw.Label('top'), tw.Label('bottom')
        split = tw.HSplit(top, bottom)
        root, window = make_root(split, cols=10, lines=11)
        assert split.split_at == 5
        assert top.surface.rect == (0, 0, 10, 5)
        assert bottom.surface.rect == (0, 6, 10, 5)
        assert window.line(5) == '─' * 10
        assert window.line(0).startswith('top')
        assert window.line(6).startswith('bottom')

    def test_vertical_divider(self) -> None:
        left, right = Sized(1, 1), Sized(1, 1)
        split = tw.VSplit(left, right, style={'linetype': 'ascii'})
        root, window = make_root(split, cols=11, lines=3)
        assert left.surface.rect == (0, 0, 5, 3)
        assert right.surface.rect == (6, 0, 5, 3)
        assert [line[5] for line in window.text()] == ['|', '|', '|']

    def test_fraction_survives_resize(self) -> None:
        top, bottom = Sized(1, 1), Sized(1, 1)
        split = tw.HSplit(top, bottom)
        root, window = make_root(split, cols=10, lines=11)
        split.set_split(8)
        settle(root)
        assert split.split_at == 8
        window.resize(10, 21)
        root.invalidate_layout()
        settle(root)
        assert split.split_at == 16

    def test_too_small(self) -> None:
        top, bottom = Sized(1, 1), Sized(1, 1)
        split = tw.HSplit(top, bottom, style={'spacing': 3})
        root, window = make_root(split, cols=4, lines=2)
        assert split.split_at is None
        assert top.surface is None and bottom.surface is None

    def test_replace_child(self) -> None:
        first, second = Sized(1, 1), Sized(1, 1)
        split = tw.VSplit(first)
        split.set_left_child(second)
        assert split.left_child is second
        assert first.parent is None
        assert split.children == [second]


class TestSplitDragging:
    """Test moving the divider with the mouse."""

    def setup_split(self):
        top, bottom = tw.Label('top'), tw.Label('bottom')
        split = tw.HSplit(top, bottom)
        root, window = make_root(split, cols=10, lines=11)
        return root, window, split, top, bottom

    def test_drag(self) -> None:
        root, window, split, top, bottom = self.setup_split()
        assert root.event(mouse('press', 5, 3))
        assert split.dragging
        assert 'active' in split.style_tags
        settle(root)
        assert window.attrs[5][0] == curses.A_BOLD
        assert root.event(mouse('drag', 8, 3))
        settle(root)
        assert top.surface.rect == (0, 0, 10, 8)
        assert bottom.surface.rect == (0, 9, 10, 2)
        assert root.event(mouse('release', 8, 3))
        assert not split.dragging
        settle(root)
        assert window.attrs[8][0] == 0

    def test_drag_clamped(self) -> None:
        root, window, split, top, bottom = self.setup_split()
        root.event(mouse('press', 5, 0))
        root.event(mouse('drag', 50, 0))
        settle(root)
        assert split.split_at == 10
        assert bottom.surface is None
        root.event(mouse('drag', -5, 0))
        settle(root)
        assert split.split_at == 0
        assert top.surface is None
        assert bottom.surface.rect == (0, 1, 10, 10)

    def test_release_away_from_divider(self) -> None:
        root, window, split, top, bottom = self.setup_split()
        root.event(mouse('press', 5, 0))
        root.event(mouse('release', 1, 1))
        assert not split.dragging
        assert 'active' not in split.style_tags

    def test_press_elsewhere_goes_to_children(self) -> None:
        root, window, split, top, bottom = self.setup_split()
        assert not root.event(mouse('press', 2, 0))
        assert not split.dragging

    def test_other_buttons_ignored(self) -> None:
        root, window, split, top, bottom = self.setup_split()
        assert not root.event(mouse('press', 5, 0, button=3))
        assert not split.dragging

    def test_wheel_not_consumed(self) -> None:
        root, window, split, top, bottom = self.setup_split()
        assert not root.event(mouse('wheel', 5, 0, button=4))


class TestSplitAccessors:
    """Test the named child accessors."""

    def test_named_children(self) -> None:
        top, bottom = Sized(1, 1), Sized(1, 1)
        split = tw.HSplit(top, bottom)
        assert (split.top_child, split.bottom_child) == (top, bottom)
        left = Sized(1, 1)
        split = tw.VSplit(left_child=left)
        assert split.left_child is left and split.right_child is None
        for name in ('top_child', 'bottom_child', 'set_top_child',
                     'set_bottom_child'):
            assert getattr(tw.HSplit, name).__doc__
        for name in ('left_child', 'right_child', 'set_left_child',
                     'set_right_child'):
            assert getattr(tw.VSplit, name).__doc__
