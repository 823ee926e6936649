"""Tests for input translation and logging at the widget root."""

import curses
import io
import logging

import termwidgets as tw
from termwidgets import KeyEvent, MouseEvent, TextEvent
from conftest import FakeWindow, Recorder, make_root


class TestKeyNames:
    """Test key code translation."""

    def test_table(self) -> None:
        assert tw.key_name(9) == 'Tab'
        assert tw.key_name(127) == 'Backspace'
        assert tw.key_name(curses.KEY_LEFT) == 'Left'
        assert tw.key_name(curses.KEY_BTAB) == 'S-Tab'

    def test_control_keys(self) -> None:
        assert tw.key_name(1) == 'C-a'
        assert tw.key_name(23) == 'C-w'

    def test_function_keys(self) -> None:
        assert tw.key_name(curses.KEY_F0 + 5) == 'F5'


class TestInput:
    """Test translation of curses input into events."""

    def setup_root(self):
        widget = Recorder()
        root = tw.WidgetRoot(FakeWindow(10, 2))
        root.add(widget)
        return root, widget

    def test_text(self) -> None:
        root, widget = self.setup_root()
        root._process_input(ord('a'))
        assert widget.events == [(TextEvent, 'a')]

    def test_meta(self) -> None:
        root, widget = self.setup_root()
        root._process_input(27)
        root._process_input(ord('f'))
        root._flush_escape()
        assert widget.events == [(KeyEvent, 'M-f')]

    def test_lone_escape(self) -> None:
        root, widget = self.setup_root()
        root._process_input(27)
        assert widget.events == []
        root._flush_escape()
        assert widget.events == [(KeyEvent, 'Escape')]

    def test_special_keys(self) -> None:
        root, widget = self.setup_root()
        root._process_input(curses.KEY_LEFT)
        root._process_input(1)
        root._process_input(10)
        assert widget.events == [(KeyEvent, 'Left'), (KeyEvent, 'C-a'),
                                 (KeyEvent, 'Enter')]

    def test_resize(self) -> None:
        root, widget = self.setup_root()
        root.make()
        assert root.valid_layout
        root._process_input(curses.KEY_RESIZE)
        assert not root.valid_layout

    def test_mouse_sequence(self) -> None:
        root, widget = self.setup_root()
        assert root._translate_mouse((0, 3, 1, 0, curses.BUTTON1_PRESSED)) \
            == [(MouseEvent, 'press', 1, 1, 3)]
        assert root._translate_mouse(
            (0, 5, 1, 0, curses.REPORT_MOUSE_POSITION)) \
            == [(MouseEvent, 'drag', 1, 1, 5)]
        assert root._translate_mouse((0, 6, 0, 0, curses.BUTTON1_RELEASED)) \
            == [(MouseEvent, 'release', 1, 0, 6)]
        assert root._translate_mouse(
            (0, 7, 0, 0, curses.REPORT_MOUSE_POSITION)) == []

    def test_wheel(self) -> None:
        root, widget = self.setup_root()
        assert root._translate_mouse((0, 2, 1, 0, curses.BUTTON4_PRESSED)) \
            == [(MouseEvent, 'wheel', 4, 1, 2)]


class TestRoot:
    """Test widget management at the root."""

    def test_replace_widget(self) -> None:
        first = tw.Label('first')
        root, window = make_root(first, cols=10, lines=1)
        surface = first.surface
        second = root.add(tw.Label('second'))
        assert first.parent is None
        assert surface.withdrawn
        assert root.widget is second
        assert not root.valid_layout


class TestDeferredLog:
    """Test the log handler holding records back."""

    def test_capacity_and_dump(self) -> None:
        handler = tw.DeferredLog(capacity=2)
        logger = logging.getLogger('termwidgets.tests.deferred')
        logger.propagate = False
        logger.setLevel(logging.DEBUG)
        logger.addHandler(handler)
        try:
            logger.info('one')
            logger.info('two')
            logger.warning('three')
        finally:
            logger.removeHandler(handler)
        assert len(handler) == 2
        stream = io.StringIO()
        handler.dump(stream)
        output = stream.getvalue()
        assert 'one' not in output
        assert 'two' in output and 'WARNING' in output
        assert len(handler) == 0
