"""Tests for style resolution and style-driven invalidation."""

import pytest

import termwidgets as tw
from conftest import Sized, make_root


class TestStyle:
    """Test the Style class."""

    def test_tagged_values_override_base(self) -> None:
        style = tw.Style({'attr': 0, 'x': 1, ':active': {'x': 2}})
        assert style.get('x') == 1
        assert style.get('x', {'active'}) == 2
        assert style.get('attr', {'active'}) == 0

    def test_overrides(self) -> None:
        style = tw.Style({'x': 1}, {'x': 5, ':focus': {'x': 6}})
        assert style.get('x') == 5
        assert style.get('x', {'focus'}) == 6

    def test_unknown_key(self) -> None:
        with pytest.raises(KeyError):
            tw.Style({'a': 1}, {'b': 2})

    def test_checks_apply_to_tagged_values(self) -> None:
        with pytest.raises(ValueError):
            tw.Frame(style={':active': {'linetype': 'wavy'}})


class TestWidgetStyle:
    """Test how widgets react to style changes."""

    def test_invalid_linetype(self) -> None:
        with pytest.raises(ValueError):
            tw.Frame(linetype='bogus')
        frame = tw.Frame()
        frame.set_linetype('double')
        assert frame.get_style_values('linetype') == 'double'
        with pytest.raises(ValueError):
            frame.set_linetype('bogus')
        assert frame.get_style_values('linetype') == 'double'

    def test_reshape_key_remakes_layout(self) -> None:
        grid = tw.GridBox()
        grid.add(0, 0, Sized(2, 1))
        grid.add(0, 1, Sized(2, 1))
        root, window = make_root(grid)
        assert grid.prefsize == (4, 1)
        grid.set_style(col_spacing=3)
        assert not root.valid_layout
        assert grid.prefsize == (7, 1)

    def test_other_keys_only_redraw(self) -> None:
        grid = tw.GridBox()
        root, window = make_root(grid)
        grid.set_style(attr=1)
        assert root.valid_layout
        assert not grid.valid_display
        assert not root.valid_display

    def test_style_tag(self) -> None:
        split = tw.HSplit()
        assert split.get_style_values('attr_split') == 0
        split.set_style_tag('active', True)
        assert split.get_style_values('attr_split') != 0
        split.set_style_tag('active', False)
        assert split.get_style_values('attr_split') == 0
