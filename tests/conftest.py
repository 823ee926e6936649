"""Pytest configuration: an in-memory stand-in for a curses window."""

import pytest

import termwidgets as tw


class FakeWindow:
    """A character grid implementing the curses window methods in use."""

    def __init__(self, cols, lines):
        self.cols = cols
        self.lines = lines
        self.cells = [[' '] * cols for _ in range(lines)]
        self.attrs = [[0] * cols for _ in range(lines)]
        self.calls = []
        self.cursor = (0, 0)

    def getmaxyx(self):
        return (self.lines, self.cols)

    def resize(self, cols, lines):
        """Change the size, keeping the contents where possible."""
        self.cells = [(row + [' '] * cols)[:cols] for row in self.cells]
        self.attrs = [(row + [0] * cols)[:cols] for row in self.attrs]
        while len(self.cells) < lines:
            self.cells.append([' '] * cols)
            self.attrs.append([0] * cols)
        del self.cells[lines:], self.attrs[lines:]
        self.cols, self.lines = cols, lines

    def addstr(self, y, x, text, attr=0):
        self.calls.append(('addstr', y, x, text, attr))
        assert 0 <= y < self.lines, 'line %d out of window' % y
        assert 0 <= x and x + tw.textwidth(text) <= self.cols, \
            'columns %d+%r out of window' % (x, text)
        for ch in text:
            w = tw.charwidth(ch)
            if w == 0:
                self.cells[y][max(x - 1, 0)] += ch
                continue
            for i in range(w):
                self._split_wide(y, x + i)
            self.cells[y][x] = ch
            self.attrs[y][x] = attr
            if w == 2:
                self.cells[y][x + 1] = ''
                self.attrs[y][x + 1] = attr
            x += w

    def _split_wide(self, y, x):
        """Blank the other half of a wide character about to be cut."""
        row = self.cells[y]
        if row[x] == '' and x > 0:
            row[x - 1] = row[x] = ' '
        elif tw.textwidth(row[x]) == 2 and x + 1 < self.cols:
            row[x + 1] = ' '

    def move(self, y, x):
        self.calls.append(('move', y, x))
        self.cursor = (y, x)

    def insch(self, ch):
        self.calls.append(('insch', ch))
        y, x = self.cursor
        if self.cells[y][x] == '':
            self._split_wide(y, x)
        self.cells[y].insert(x, ch)
        self.attrs[y].insert(x, 0)
        self.attrs[y].pop()
        if self.cells[y].pop() == '':
            self.cells[y][-1] = ' '

    def delch(self):
        self.calls.append(('delch',))
        y, x = self.cursor
        self._split_wide(y, x)
        self.cells[y].pop(x)
        self.cells[y].append(' ')
        self.attrs[y].pop(x)
        self.attrs[y].append(0)

    def line(self, y):
        """Return the text of the given line."""
        return ''.join(self.cells[y])

    def text(self):
        """Return all lines of the window."""
        return [self.line(y) for y in range(self.lines)]

    def drawn_calls(self):
        """Return the recorded calls and forget them."""
        ret, self.calls = self.calls, []
        return ret


def make_root(widget, cols=20, lines=5):
    """Lay out and draw widget as the only widget on a fresh window."""
    window = FakeWindow(cols, lines)
    root = tw.WidgetRoot(window)
    root.add(widget)
    settle(root)
    return root, window


def settle(root):
    """Redo the layout if necessary, and draw what needs to be drawn."""
    if not root.valid_layout:
        root.make()
    root.render()


@pytest.fixture
def window():
    """A small fake window."""
    return FakeWindow(20, 5)


class Sized(tw.Widget):
    """A blank widget requesting a fixed size."""

    def __init__(self, cols, lines, **kwds):
        tw.Widget.__init__(self, **kwds)
        self.requested = (cols, lines)

    def getprefsize(self):
        return self.requested


class Recorder(tw.Widget):
    """A widget remembering the events it receives."""

    def __init__(self, **kwds):
        tw.Widget.__init__(self, **kwds)
        self.events = []

    def event(self, event):
        self.events.append(event)
        return True
