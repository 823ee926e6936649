#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
A curses-based widget library with grid, split, and text entry layouts

termwidgets implements a set of widget classes that are composed into a
tree and rendered onto a curses window. Every widget is handed a rectangular
drawing surface by its parent; containers partition their own surface into
disjoint sub-surfaces for their children, and withdraw a child's surface
entirely when a layout pass leaves it no space.

A typical use (a small form) would look like this:
>>> # window is a curses window obtained from, for example, initscr().
... root = WidgetRoot(window)
>>> # A frame with a title around everything.
... frame = root.add(Frame(title='termwidgets demo', linetype='single'))
>>> # Lay the content out as a grid with a blank column between cells.
... grid = frame.add(GridBox(col_spacing=2, row_spacing=1))
>>> grid.add(0, 0, Label('Name:'))
>>> # The entry takes all horizontal space left over.
... entry = grid.add(0, 1, Entry(), col_expand=1)
>>> grid.add(1, 1, Button('OK', on_click=lambda b: sys.exit()))
>>> # Run it.
... root.main()

init() should be called before the curses session is set up; log records
emitted while the UI runs are held back and can be written out with
dump_log() after curses has released the terminal.
"""

import re as _re
import time as _time
import curses as _curses
import codecs as _codecs
import locale as _locale
import logging as _logging
import logging.handlers as _logging_handlers
import unicodedata as _unicodedata

_ENCODING = None
_LOGGER = _logging.getLogger('termwidgets')

def zbound(v, m):
    "Return x such that 0 <= x <= m"
    return max(0, min(v, m))
def addpos(p1, p2):
    "Return the sum of the 2-vectors p1 and p2"
    return (p1[0] + p2[0], p1[1] + p2[1])
def maxpos(p1, p2):
    "Return the component-by-component maximum of p1 and p2"
    return (max(p1[0], p2[0]), max(p1[1], p2[1]))

def parse_quad(v, default=(None, None, None, None)):
    """
    Expand a scalar or tuple into a 4-tuple

    If v is a tuple with less than four elements, it is expanded similarly to
    a CSS margin value. Elements of the result that are None are substituted
    by corresponding values from default.
    """
    try:
        v = tuple(v)
    except TypeError:
        v = (v, v, v, v)
    if len(v) == 0:
        raise ValueError('Too few values to parse_quad()!')
    elif len(v) == 1:
        v *= 4
    elif len(v) == 2:
        v *= 2
    elif len(v) == 3:
        v = (v[0], v[1], v[2], v[1])
    elif len(v) > 4:
        raise ValueError('Too many values to parse_quad()!')
    return (default[0] if v[0] is None else v[0],
            default[1] if v[1] is None else v[1],
            default[2] if v[2] is None else v[2],
            default[3] if v[3] is None else v[3])

def inflate(size, margin, mul=1):
    """
    Increase size (a size or rect) by mul multiples of margin

    margin's items are interpreted as those of a CSS margin. If size is a
    4-tuple, its "sides" are moved outwards by the corresponding items of
    margin; if it is a 2-tuple, it is treated as if it were a rect with a
    nondescript position that is discarded again and the given size.
    """
    if len(size) == 2:
        return (margin[3] * mul + size[0] + margin[1] * mul,
                margin[0] * mul + size[1] + margin[2] * mul)
    elif len(size) == 4:
        return (size[0] - margin[3] * mul,
                size[1] - margin[0] * mul,
                margin[3] * mul + size[2] + margin[1] * mul,
                margin[0] * mul + size[3] + margin[2] * mul)
    else:
        raise TypeError('Must be size or rect')
def deflate(rect, margin, mul=1):
    """
    Decrease size (a size or rect) by mul multiples of margin

    This is equivalent to inflate(rect, margin, -mul).
    """
    return inflate(rect, margin, -mul)

def charwidth(ch):
    """
    Return the amount of terminal columns the character ch occupies

    East Asian wide and fullwidth characters take two columns; combining
    marks and control characters take none.
    """
    o = ord(ch)
    if 0x20 <= o < 0x7F:
        return 1
    elif o < 0x20 or 0x7F <= o < 0xA0:
        return 0
    elif _unicodedata.east_asian_width(ch) in ('W', 'F'):
        return 2
    elif _unicodedata.category(ch).startswith('M'):
        return 0
    return 1
def textwidth(text):
    "Return the amount of terminal columns text occupies"
    return sum(charwidth(ch) for ch in text)
def chars2cols(text, idx):
    "Return the column at which the character at index idx of text starts"
    return textwidth(text[:idx])
def cols2chars(text, col):
    """
    Return the index of the character of text starting closest to col

    Ties are broken towards the lower index. The result is between zero and
    len(text), inclusive.
    """
    if col <= 0: return 0
    prev = 0
    for idx, ch in enumerate(text):
        nxt = prev + charwidth(ch)
        if nxt > col:
            return (idx if col - prev <= nxt - col else idx + 1)
        prev = nxt
    return len(text)
def substrwidth(text, start, length=None):
    """
    Return the part of text occupying the columns from start on

    If length is not None, no more than that many columns are returned.
    Wide characters cut in half at either end are replaced by spaces, so
    that the result occupies exactly the requested columns if text is long
    enough.
    """
    end = None if length is None else start + length
    ret, pos = [], 0
    for ch in text:
        w = charwidth(ch)
        if end is not None and pos >= end and w:
            break
        if pos < start:
            if pos + w > start:
                ret.append(' ' * min(pos + w - start,
                                     w if end is None else end - start))
        elif end is not None and pos + w > end:
            ret.append(' ' * (end - pos))
        else:
            ret.append(ch)
        pos += w
    return ''.join(ret)

class Constant:
    "A named constant with a meaningful string representation"
    def __init__(self, __name__, **__dict__):
        self.__dict__ = __dict__
        self.__name__ = __name__
    def __repr__(self):
        return '<%s>' % (self.__name__,)
    def __str__(self):
        return str(self.__name__)

class Event(Constant):
    "A singleton denoting the type of an input event"
FocusEvent = Event('FocusEvent')
KeyEvent = Event('KeyEvent')
TextEvent = Event('TextEvent')
MouseEvent = Event('MouseEvent')

class NumericConstant(Constant, float):
    "A constant with a floating-point value"
    def __new__(cls, __value__, __name__, **__dict__):
        return float.__new__(cls, __value__)
    def __init__(self, __value__, __name__, **__dict__):
        Constant.__init__(self, __name__, **__dict__)

class Alignment(NumericConstant):
    "A numerical alignment value"
ALIGN_TOP = Alignment(0.0, 'ALIGN_TOP')
ALIGN_LEFT = Alignment(0.0, 'ALIGN_LEFT')
ALIGN_CENTER = Alignment(0.5, 'ALIGN_CENTER')
ALIGN_RIGHT = Alignment(1.0, 'ALIGN_RIGHT')
ALIGN_BOTTOM = Alignment(1.0, 'ALIGN_BOTTOM')

_ALIGN_NAMES = {'left': ALIGN_LEFT, 'top': ALIGN_TOP,
                'centre': ALIGN_CENTER, 'center': ALIGN_CENTER,
                'middle': ALIGN_CENTER,
                'right': ALIGN_RIGHT, 'bottom': ALIGN_BOTTOM}

def parse_align(v):
    """
    Convert an alignment into a number between 0.0 and 1.0

    v can be a number, or one of the names "left", "centre" (or "center"),
    "right", "top", "middle", and "bottom".
    """
    if isinstance(v, str):
        try:
            return _ALIGN_NAMES[v]
        except KeyError:
            raise ValueError('Invalid alignment: %r' % (v,))
    return float(v)
def align_allocation(width, total, align):
    """
    Place an item of the given width into total columns

    Returns a (before, width, after) triple; width is reduced to total if it
    does not fit.
    """
    total = max(total, 0)
    width = zbound(width, total)
    extra = total - width
    before = int(extra * align)
    return (before, width, extra - before)

# Indices into the LINETYPES entries.
LINE_TOP, LINE_BOTTOM, LINE_LEFT, LINE_RIGHT = 0, 1, 2, 3
CORNER_TL, CORNER_TR, CORNER_BL, CORNER_BR = 4, 5, 6, 7

LINETYPES = {
    #                  TOP       BOTTOM    LEFT      RIGHT
    #                  TL        TR        BL        BR
    'ascii':         ('-',      '-',      '|',      '|',
                      '+',      '+',      '+',      '+'),
    'single':        ('─', '─', '│', '│',
                      '┌', '┐', '└', '┘'),
    'double':        ('═', '═', '║', '║',
                      '╔', '╗', '╚', '╝'),
    'thick':         ('━', '━', '┃', '┃',
                      '┏', '┓', '┗', '┛'),
    'solid_inside':  ('▄', '▀', '▐', '▌',
                      '▗', '▖', '▝', '▘'),
    'solid_outside': ('▀', '▄', '▌', '▐',
                      '▛', '▜', '▙', '▟'),
}

def check_linetype(name):
    "Raise a ValueError if name is not a key of LINETYPES"
    if name not in LINETYPES:
        raise ValueError('Invalid line type: %r' % (name,))

class Bucket(object):
    """
    A unit of space to be handed out by distribute()

    A bucket is either fixed, always receiving exactly its fixed size (this
    is used for spacing), or flexible, receiving its base size plus a share
    of any spare space that is proportional to its expand weight.

    Attributes are:
    fixed   : The size of a fixed bucket, or None for a flexible one.
    base    : The base size of a flexible bucket.
    expand  : The expand weight of a flexible bucket.
    multiple: If greater than one, the spare space given to the bucket is
              rounded down to a multiple of this. Only if every
              expanding bucket snaps does the last of them receive the
              cut-off remainder, unsnapped.
    key     : An arbitrary value to identify the bucket by.
    start   : The computed offset of the bucket.
    size    : The computed size of the bucket.
    """
    def __init__(self, base=0, expand=0, fixed=None, multiple=1, key=None):
        "Initializer"
        self.fixed = fixed
        self.base = base
        self.expand = expand
        self.multiple = multiple
        self.key = key
        self.start = None
        self.size = None
    def __repr__(self):
        if self.fixed is not None:
            desc = 'fixed=%r' % (self.fixed,)
        else:
            desc = 'base=%r expand=%r' % (self.base, self.expand)
        return '<Bucket %s start=%r size=%r>' % (desc, self.start, self.size)
    @property
    def flexible(self):
        "Whether this is a flexible bucket"
        return self.fixed is None

def _proportions(full, weights):
    """
    Split full into integers proportional to weights

    Every share is rounded down; the remainder goes to the last item with a
    nonzero weight, so that the result sums up to full exactly (unless all
    weights are zero, in which case the result is all zeroes).
    """
    total = sum(weights)
    if full <= 0 or total <= 0:
        return [0] * len(weights)
    ret = [int(full * w // total) for w in weights]
    rem = full - sum(ret)
    for idx in range(len(weights) - 1, -1, -1):
        if weights[idx]:
            ret[idx] += rem
            break
    return ret

def distribute(total, buckets):
    """
    Lay the given buckets out along an extent of total cells

    Fixed buckets receive their size. If the flexible buckets' base sizes
    fit into the rest, the spare space is distributed amongst those buckets
    proportionally to their expand weights (if no bucket has a nonzero
    weight, the spare space stays unused after the last bucket). Otherwise,
    the flexible buckets are shrunk proportionally to their base sizes; if
    the fixed buckets alone exceed total, all flexible buckets are
    zero-sized and the layout overflows.

    The start and size attributes of the buckets are set; the buckets are
    returned as well.
    """
    flex = [b for b in buckets if b.fixed is None]
    fixed = sum(b.fixed for b in buckets if b.fixed is not None)
    avail = total - fixed
    spare = avail - sum(b.base for b in flex)
    if spare >= 0:
        extras = _proportions(spare, [b.expand for b in flex])
        left = 0
        for n, b in enumerate(flex):
            if b.multiple > 1:
                cut = extras[n] % b.multiple
                extras[n] -= cut
                left += cut
        if left:
            # Whatever the snapping cut off goes to the last bucket that can
            # take it; if every expanding bucket snaps, the last of them
            # takes it unsnapped.
            takers = [n for n, b in enumerate(flex) if b.expand]
            unsnapped = [n for n in takers if flex[n].multiple <= 1]
            extras[(unsnapped or takers)[-1]] += left
        sizes = [b.base + e for b, e in zip(flex, extras)]
    else:
        sizes = _proportions(avail, [b.base for b in flex])
    for b, s in zip(flex, sizes):
        b.size = s
    pos = 0
    for b in buckets:
        if b.fixed is not None:
            b.size = b.fixed
        b.start = pos
        pos += b.size
    return buckets

class Style(object):
    """
    A resolved set of style values belonging to a single widget

    Values are stored in a base section and any amount of "tagged" sections;
    a value from a tagged section overrides the base value whenever the
    corresponding tag is set on the widget (see Widget.set_style_tag()).
    Style definitions are dictionaries mapping keys to values, where keys
    starting with a colon (such as ":active") map to dictionaries of tagged
    values instead.
    Only keys present in the base section of the defaults can be set later.

    Attributes are:
    checks: A mapping from keys to functions validating values for them;
            those raise an exception to reject a value.
    """
    def __init__(self, defaults, overrides=None, checks=None):
        "Initializer"
        self.checks = checks or {}
        self._base = {}
        self._tagged = {}
        self._merge(defaults, False)
        if overrides:
            self._merge(overrides, True)
    def _merge(self, values, strict):
        "Internal helper"
        for key, value in values.items():
            if key.startswith(':'):
                section = self._tagged.setdefault(key[1:], {})
                for k, v in value.items():
                    self._check(k, v, strict)
                    section[k] = v
            else:
                self._check(key, value, strict)
                self._base[key] = value
    def _check(self, key, value, strict):
        "Internal helper"
        if strict and key not in self._base:
            raise KeyError('Unknown style key: %r' % (key,))
        check = self.checks.get(key)
        if check is not None:
            check(value)
    def keys(self):
        "Return the keys of this style"
        return self._base.keys()
    def get(self, key, tags=()):
        """
        Return the value for key, taking the given tags into account

        Tags are applied in sorted order, so that later ones win.
        """
        ret = self._base[key]
        for tag in sorted(tags):
            section = self._tagged.get(tag)
            if section and key in section:
                ret = section[key]
        return ret
    def set(self, **values):
        "Change base values"
        self._merge(values, True)
    def set_tagged(self, tag, **values):
        "Change values applied when tag is set"
        self._merge({':' + tag: values}, True)

class SurfaceError(ValueError):
    "Raised when drawing to a withdrawn surface"

class Surface(object):
    """
    A rectangular drawing area backed by a curses window

    The root surface covers the whole window; others are created by
    make_sub() and positioned relative to their parent. Drawing is clipped
    to the surface. A surface that has been withdrawn must not be drawn to
    any more; attempting that raises a SurfaceError.

    Attributes are:
    window   : The curses window to draw to.
    parent   : The surface this one is nested in, or None for the root.
    pos      : The position relative to the parent (an (x, y) pair).
    size     : The size of the surface (a (columns, lines) pair).
    withdrawn: Whether the surface has been withdrawn.
    dirty    : Only meaningful for the root: Whether anything has been drawn
               since the last terminal refresh.
    """
    def __init__(self, window, pos=(0, 0), size=None, parent=None):
        "Initializer"
        self.window = window
        self.parent = parent
        self.pos = tuple(pos)
        if size is None:
            h, w = window.getmaxyx()
            size = (w, h)
        self.size = tuple(size)
        self.withdrawn = False
        self.dirty = False
    def __repr__(self):
        return '<Surface %r%s>' % (self.rect,
            ' withdrawn' if self.withdrawn else '')
    @property
    def rect(self):
        "The position concatenated with the size"
        return (self.pos[0], self.pos[1], self.size[0], self.size[1])
    @property
    def cols(self):
        "The width of the surface"
        return self.size[0]
    @property
    def lines(self):
        "The height of the surface"
        return self.size[1]
    @property
    def root(self):
        "The root of the surface tree"
        s = self
        while s.parent is not None:
            s = s.parent
        return s
    @property
    def abspos(self):
        "The position of the surface relative to the window"
        if self.parent is None:
            return self.pos
        return addpos(self.parent.abspos, self.pos)
    def make_sub(self, x, y, w, h):
        "Create a surface nested in this one"
        return Surface(self.window, (x, y), (w, h), self)
    def change_geometry(self, x, y, w, h):
        "Move and/or resize this surface"
        self.pos = (x, y)
        self.size = (w, h)
    def withdraw(self):
        "Mark this surface as not to be drawn to any more"
        self.withdrawn = True
    def contains(self, line, col):
        "Test whether the given parent-relative position is inside self"
        return (self.pos[1] <= line < self.pos[1] + self.size[1] and
                self.pos[0] <= col < self.pos[0] + self.size[0])
    def _check(self):
        "Internal helper"
        if self.withdrawn:
            raise SurfaceError('Drawing to a withdrawn surface')
    def print_at(self, line, col, text, attr=0):
        """
        Draw text at the given position, clipping it to the surface

        Returns the amount of columns the (unclipped) text occupies.
        """
        self._check()
        width = textwidth(text)
        if not 0 <= line < self.size[1] or not text:
            return width
        if col < 0:
            text = substrwidth(text, -col)
            col = 0
        if col >= self.size[0]:
            return width
        if col + textwidth(text) > self.size[0]:
            text = substrwidth(text, 0, self.size[0] - col)
        if text:
            ax, ay = self.abspos
            try:
                self.window.addstr(ay + line, ax + col, text, attr)
            except _curses.error:
                # Filling the bottom-right cell moves the cursor off the
                # window, which curses reports as an error.
                pass
            self.root.dirty = True
        return width
    def erase_at(self, line, col, count, attr=0):
        "Blank count columns starting at the given position"
        if count <= 0:
            self._check()
            return 0
        return self.print_at(line, col, ' ' * count, attr)
    def clear(self, attr=0):
        "Blank the entire surface"
        self._check()
        for line in range(self.size[1]):
            self.erase_at(line, 0, self.size[0], attr)
    def hline_at(self, line, col, length, linetype='single', attr=0):
        "Draw a horizontal line of the given type"
        ch = LINETYPES[linetype][LINE_TOP]
        return self.print_at(line, col, ch * max(length, 0), attr)
    def vline_at(self, col, line, length, linetype='single', attr=0):
        "Draw a vertical line of the given type"
        ch = LINETYPES[linetype][LINE_LEFT]
        for l in range(line, line + length):
            self.print_at(l, col, ch, attr)
    def shift_line(self, line, col, delta):
        """
        Shift the rest of a line sideways in place

        A positive delta inserts that many blank columns at col, moving the
        remainder of the line rightwards (and off the edge); a negative delta
        deletes columns, moving the remainder leftwards. Since the terminal
        shifts entire lines, this is only possible if the surface extends to
        the right edge of the window. Returns whether the shift was done.
        """
        self._check()
        if not 0 <= line < self.size[1] or not 0 <= col < self.size[0]:
            return False
        if delta == 0:
            return True
        ax, ay = self.abspos
        if ax + self.size[0] != self.window.getmaxyx()[1]:
            return False
        try:
            self.window.move(ay + line, ax + col)
            if delta > 0:
                for i in range(delta):
                    self.window.insch(' ')
            else:
                for i in range(-delta):
                    self.window.delch()
        except _curses.error:
            return False
        self.root.dirty = True
        return True

_KEY_NAMES = {
    _curses.KEY_LEFT: 'Left', _curses.KEY_RIGHT: 'Right',
    _curses.KEY_UP: 'Up', _curses.KEY_DOWN: 'Down',
    _curses.KEY_HOME: 'Home', _curses.KEY_END: 'End',
    _curses.KEY_PPAGE: 'PageUp', _curses.KEY_NPAGE: 'PageDown',
    _curses.KEY_IC: 'Insert', _curses.KEY_DC: 'Delete',
    _curses.KEY_BACKSPACE: 'Backspace', _curses.KEY_ENTER: 'Enter',
    _curses.KEY_BTAB: 'S-Tab',
    8: 'Backspace', 9: 'Tab', 10: 'Enter', 13: 'Enter', 127: 'Backspace'}
# Names reported by curses.keyname() for modified cursor keys.
_KEYNAME_ALIASES = {
    'kLFT5': 'C-Left', 'kRIT5': 'C-Right', 'kUP5': 'C-Up', 'kDN5': 'C-Down',
    'kHOM5': 'C-Home', 'kEND5': 'C-End', 'kDC5': 'C-Delete',
    'kLFT3': 'M-Left', 'kRIT3': 'M-Right', 'kDC3': 'M-Delete'}
_MOUSE_BUTTONS = (
    (1, _curses.BUTTON1_PRESSED, _curses.BUTTON1_RELEASED),
    (2, _curses.BUTTON2_PRESSED, _curses.BUTTON2_RELEASED),
    (3, _curses.BUTTON3_PRESSED, _curses.BUTTON3_RELEASED))
_MOUSE_WHEEL = (
    (4, _curses.BUTTON4_PRESSED),
    (5, getattr(_curses, 'BUTTON5_PRESSED', 0)))

def key_name(ch):
    """
    Translate a curses key code into a symbolic key name

    Returns None if there is no name for the code.
    """
    if ch in _KEY_NAMES:
        return _KEY_NAMES[ch]
    elif 0 < ch < 32:
        return 'C-' + chr(ch + 96)
    elif _curses.KEY_F0 < ch <= _curses.KEY_F0 + 63:
        return 'F%d' % (ch - _curses.KEY_F0)
    try:
        name = _curses.keyname(ch).decode('ascii', 'replace')
    except (_curses.error, ValueError):
        return None
    return _KEYNAME_ALIASES.get(name)

class WidgetRoot(object):
    """
    A container for a widget hierarchy directly interfacing curses

    This class implements the methods expected by a widget to be present on
    its parent (and some others, as applicable) as well as an event loop
    translating curses input into termwidgets events.

    A typical use pattern would be:
    >>> root = WidgetRoot(window)
    >>> root.add(widget)
    >>> root.main()

    Events are tuples whose first item is one of the Event singletons:
    (FocusEvent, focused)              : The receiver gained or lost focus.
    (KeyEvent, name)                   : A special key was pressed; name is
                                         a string like "Left", "C-a", "M-f",
                                         "S-Tab", or "F1".
    (TextEvent, text)                  : Text was typed.
    (MouseEvent, kind, button, line, col)
                                       : kind is one of "press", "drag",
                                         "release", or "wheel"; line and col
                                         are relative to the receiver.

    Attributes are:
    window       : The curses window to access.
    widget       : The (only) widget to host.
    surface      : The root drawing surface covering the whole window.
    valid_display: Whether any part of self needs to be redrawn.
    valid_layout : Whether the layout of self needs to be remade.
    """
    def __init__(self, window):
        """
        Initializer

        window is the curses window to draw to and to receive events from.
        """
        self.window = window
        self.widget = None
        self.surface = Surface(window)
        self.valid_display = False
        self.valid_layout = False
        self._cursorpos = None
        self._escape = False
        self._drag_button = None
        self._init_decoder()
    def _init_decoder(self):
        "Initialize the input decoder"
        if _ENCODING:
            f = _codecs.getincrementaldecoder(_ENCODING)
            self._decoder = f(errors='replace')
        else:
            self._decoder = None
    def make(self):
        """
        Perform layout

        The root surface is fitted to the window, and handed to the widget
        (if any), which is then made.
        """
        h, w = self.window.getmaxyx()
        self.surface.change_geometry(0, 0, w, h)
        if self.widget is not None:
            self.widget.set_surface(self.surface)
            self.widget.make()
        self.valid_layout = True
        self.invalidate()
    def render(self):
        "Draw all parts of the widget tree that need it"
        if self.widget is not None:
            self.widget.draw()
        self.valid_display = True
    def refresh(self):
        "Flush drawing operations to the terminal and place the cursor"
        if self._cursorpos is None:
            _curses.curs_set(0)
            self.window.refresh()
        else:
            self.window.noutrefresh()
            _curses.curs_set(1)
            _curses.setsyx(self._cursorpos[1], self._cursorpos[0])
            _curses.doupdate()
        self.surface.dirty = False
    def redraw(self):
        """
        Redraw the widget and adjust the cursor position as necessary
        """
        self.render()
        self.refresh()
    def grab_input(self, rect, pos=None, child=None):
        """
        Bring focus to the specified area

        Of the arguments, only pos is interpreted, and used to set the cursor
        position (or to hide the cursor) on the next refresh.
        """
        if pos != self._cursorpos:
            self._cursorpos = pos
            self.surface.dirty = True
    def child_focus(self, child):
        "Make sure the widget knows it is focused on its request"
        child.event((FocusEvent, True))
    def event(self, event):
        """
        Handle an input event

        Returns whether the event was consumed.
        Tab and back tab key presses are translated into calls of focus(); if
        those do not succeed or the key was not a TAB, the event is passed on
        to the widget.
        """
        if event[0] == KeyEvent and event[1] == 'Tab':
            if self.focus(): return True
        elif event[0] == KeyEvent and event[1] == 'S-Tab':
            if self.focus(True): return True
        if self.widget is not None:
            return self.widget.event(event)
        return False
    def focus(self, rev=False):
        """
        Cycle focus between widgets

        rev specifies the direction of the focus movement. Returns whether
        the focus switch succeeded.
        If no widget is focused, the first (or last) one is focused. If the
        last (or first) widget is reached, focus wraps around.
        """
        if self.widget is None:
            return False
        # When a widget is fully traversed, it de-focuses itself and returns
        # false; since there is nothing outside us, we "wrap around" and ask
        # the widget to focus itself.
        if not self.widget.focus(rev) and not self.widget.focus(rev):
            return False
        self.widget.event((FocusEvent, True))
        return True
    def invalidate(self, rec=False, child=None):
        """
        Mark the widget root as "damaged", i.e. in need of a redraw

        If rec is true, the entire widget tree is marked recursively;
        if neither rec nor child are given, the widget itself is marked.
        """
        self.valid_display = False
        if self.widget is None:
            return
        elif rec:
            self.widget.invalidate(rec)
        elif child is None:
            self.widget.invalidate()
    def invalidate_layout(self):
        """
        Mark the widget root as in need of a layout refresh

        The action is (unless valid_layout is already false) propagated to
        the nested widget.
        """
        if not self.valid_layout: return
        self.valid_layout = False
        if self.widget is not None:
            self.widget.invalidate_layout()
    def add(self, widget):
        """
        Add the given widget to the root

        Since a WidgetRoot can only manage one descendant, the previous
        child (if any) is removed.
        """
        if widget is self.widget: return widget
        if self.widget is not None:
            self.remove(self.widget)
        widget.delete()
        self.widget = widget
        widget.parent = self
        self.invalidate_layout()
        return widget
    def remove(self, widget):
        """
        Remove the given widget from self
        """
        if widget is self.widget:
            self.widget = None
            widget.parent = None
            widget.set_surface(None)
            self.surface = Surface(self.window)
            self.invalidate_layout()
    def _translate_mouse(self, mouse):
        "Convert the result of curses.getmouse() into events"
        x, y, bstate = mouse[1], mouse[2], mouse[4]
        ret = []
        for button, pressed, released in _MOUSE_BUTTONS:
            if bstate & pressed:
                self._drag_button = button
                ret.append((MouseEvent, 'press', button, y, x))
            if bstate & released:
                self._drag_button = None
                ret.append((MouseEvent, 'release', button, y, x))
        for button, flag in _MOUSE_WHEEL:
            if flag and bstate & flag:
                ret.append((MouseEvent, 'wheel', button, y, x))
        if (not ret and bstate & _curses.REPORT_MOUSE_POSITION and
                self._drag_button is not None):
            ret.append((MouseEvent, 'drag', self._drag_button, y, x))
        return ret
    def _flush_escape(self):
        "Deliver a lone Escape key press if one is pending"
        if self._escape:
            self._escape = False
            self.event((KeyEvent, 'Escape'))
    def _process_input(self, ch):
        "Handle an input character from curses"
        if ch == _curses.KEY_RESIZE:
            self.invalidate_layout()
        elif ch == _curses.KEY_MOUSE:
            try:
                mouse = _curses.getmouse()
            except _curses.error:
                return
            for ev in self._translate_mouse(mouse):
                self.event(ev)
        elif ch == 27:
            if self._escape:
                self.event((KeyEvent, 'Escape'))
            self._escape = True
        elif isinstance(ch, int) and 32 <= ch < 256 and ch != 127:
            if self._decoder:
                res = self._decoder.decode(bytes((ch,)))
            else:
                res = chr(ch)
            if not res:
                return
            if self._escape:
                self._escape = False
                self.event((KeyEvent, 'M-' + res))
            else:
                self.event((TextEvent, res))
        else:
            name = key_name(ch)
            if name is None:
                _LOGGER.debug('Ignoring unknown key code %r', ch)
                self._escape = False
                return
            if self._escape:
                self._escape = False
                if not name.startswith('M-'): name = 'M-' + name
            self.event((KeyEvent, name))
    def main(self):
        """
        Main loop

        Revalidates and redraws the widget as necessary, and processes
        events, all that ad infinitum (or until an exception is thrown).
        """
        self.window.keypad(1)
        _curses.mousemask(_curses.ALL_MOUSE_EVENTS |
                          _curses.REPORT_MOUSE_POSITION)
        _curses.mouseinterval(0)
        while 1:
            if not self.valid_layout:
                self.make()
            if not self.valid_display:
                self.redraw()
            elif self.surface.dirty:
                self.refresh()
            last_update = _time.time()
            ch = self.window.getch()
            self._process_input(ch)
            self.window.nodelay(1)
            while _time.time() - last_update < 0.1:
                ch = self.window.getch()
                if ch == -1: break
                self._process_input(ch)
            self.window.nodelay(0)
            self._flush_escape()

class Widget(object):
    """
    Base class for all UI widgets

    This provides default implementations for all methods.

    Attributes:
    parent       : The parent of this widget in the hierarchy.
    surface      : The surface assigned to the widget by its parent, or None
                   if there is none (because the widget has not been laid
                   out yet, or because it has been allotted no space).
    style        : The Style of this widget.
    style_tags   : The set of style tags currently applied.
    valid_display: Whether the widget has *not* to be redrawn. Implies
                   valid_self (so that a false valid_self implies a false
                   valid_display).
    valid_self   : Whether the widget itself (i.e. excluding children) needs
                   *not* to be redrawn.
    valid_layout : Whether the widget's layout has *not* to be remade.

    Class attributes:
    STYLE             : The default style definition (see Style).
    STYLE_RESHAPE_KEYS: Style keys whose change affects the requested size.
    STYLE_CHECKS      : Validators for style values (see Style).

    See also:
    Container: for specific notes on widgets "containing" other ones.
    """
    STYLE = {'attr': 0}
    STYLE_RESHAPE_KEYS = ()
    STYLE_CHECKS = {}
    def __init__(self, **kwds):
        """
        Initializer

        Accepts configuration via keyword arguments:
        style: A style definition overriding the class' defaults.
        """
        self.parent = None
        self.surface = None
        self.style = Style(self.STYLE, kwds.get('style'), self.STYLE_CHECKS)
        self.style_tags = set()
        self.valid_display = False
        self.valid_self = False
        self.valid_layout = False
        self._prefsize = None
    @property
    def prefsize(self):
        "The requested layout size of this widget as a (cols, lines) pair"
        if self._prefsize is None: self._prefsize = self.getprefsize()
        return self._prefsize
    @property
    def requested_cols(self):
        "The amount of columns this widget would like to have"
        return self.prefsize[0]
    @property
    def requested_lines(self):
        "The amount of lines this widget would like to have"
        return self.prefsize[1]
    @property
    def size(self):
        "The size of the widget's surface, or (0, 0) if it has none"
        if self.surface is None: return (0, 0)
        return self.surface.size
    @property
    def rect(self):
        "The absolute position concatenated with the size, or None"
        if self.surface is None: return None
        pos = self.surface.abspos
        return (pos[0], pos[1], self.surface.size[0], self.surface.size[1])
    def getprefsize(self):
        """
        Compute the requested layout size of this widget

        The default implementation returns (0, 0).
        """
        return (0, 0)
    def set_surface(self, surface):
        """
        Assign a new drawing surface to this widget

        surface may be None to leave the widget without one; the previous
        surface (if any) is withdrawn then.
        """
        if surface is self.surface: return
        if surface is None:
            self.surface.withdraw()
        self.surface = surface
        self.invalidate_layout()
    def get_style_values(self, *keys):
        """
        Return the effective values of the given style keys

        With exactly one key, the value is returned directly; otherwise, a
        tuple of the values is returned.
        """
        if len(keys) == 1:
            return self.style.get(keys[0], self.style_tags)
        return tuple(self.style.get(k, self.style_tags) for k in keys)
    def _style_snapshot(self):
        "Internal helper"
        return dict((k, self.style.get(k, self.style_tags))
                    for k in self.style.keys())
    def _style_changed(self, old):
        "Internal helper"
        changed = {}
        for key, value in old.items():
            new = self.style.get(key, self.style_tags)
            if new != value: changed[key] = (value, new)
        if changed: self.on_style_changed(changed)
    def set_style(self, **values):
        "Change base style values of this widget"
        old = self._style_snapshot()
        self.style.set(**values)
        self._style_changed(old)
    def set_style_tag(self, tag, value):
        "Set or clear the given style tag"
        if bool(value) == (tag in self.style_tags): return
        old = self._style_snapshot()
        if value:
            self.style_tags.add(tag)
        else:
            self.style_tags.discard(tag)
        self._style_changed(old)
    def on_style_changed(self, changed):
        """
        React to a change of effective style values

        changed maps the keys that changed to (old, new) pairs.
        The default implementation remakes the layout if any of the keys is
        in STYLE_RESHAPE_KEYS, and redraws the widget.
        """
        if any(k in self.STYLE_RESHAPE_KEYS for k in changed):
            self.invalidate_layout()
        self.invalidate()
    def make(self):
        """
        Recompute the layout of this widget

        The default implementation removes the "needs re-layout" mark and
        marks the widget for redrawing.
        """
        self.valid_layout = True
        self.invalidate()
    def draw(self):
        """
        Redraw this widget and its children

        The default implementation does nothing beyond marking the widget as
        (fully) redrawn and calling draw_self() if necessary. Containers
        may override this to draw children, but any drawing tasks directly
        related to this widget should go into draw_self().
        Widgets without a surface are not drawn at all.
        """
        if self.valid_display: return
        if self.surface is None: return
        self.valid_display = True
        if not self.valid_self:
            self.valid_self = True
            self.draw_self(self.surface)
    def draw_self(self, surface):
        """
        Redraw this widget only

        surface is the surface to draw to.
        The default implementation blanks the surface.
        """
        surface.clear(self.get_style_values('attr'))
    def grab_input(self, rect, pos=None, child=None):
        """
        Render this widget in charge of input

        rect is the (absolute) rectangle that should be visible with respect
        to that; pos is where to place the cursor (or None to hide it);
        child is the child widget the request originated from (if any).
        The default implementation propagates the request to the parent.
        """
        if self.parent is not None:
            self.parent.grab_input(rect, pos, self)
    def event(self, event):
        """
        Handle an input event

        See WidgetRoot for the event types. The method returns whether the
        event has been "consumed" by the widget; some containers handle
        events on their own if the children do not, so set this carefully.

        The default implementation consumes nothing.
        """
        return False
    def focus(self, rev=False):
        """
        Perform focus traversal

        rev tells whether the traversal should be "forward" (rev is false) or
        "backward" (rev is true). Returns whether the traversal has stopped
        "inside" the widget and should not continue at parents.
        Widgets that are not focusable should return False unconditionally;
        widgets that only have two focus states should toggle their focus
        status and return whether they are focused now.

        The default implementation assumes an unfocusable widget.
        """
        return False
    def take_focus(self):
        "Ask the ancestors of this widget to move the focus to it"
        if self.parent is not None:
            self.parent.child_focus(self)
    def invalidate(self, rec=False, child=None):
        """
        Mark this widget as in need of a redraw

        rec is whether the entire widget tree should be invalidated; child
        is the child the invalidation request originated from (if any).
        A widget can be invalidated in multiple ways:
        - Recursive invalidation: If rec is true, the entire widget tree
          below and including self is invalidated unconditionally.
        - Pinpoint invalidation: If rec is false and child is None, the
          invalidation is aimed at exactly this widget. Both valid_display
          and valid_self are reset, and the request is propagated to the
          parent.
        - Pass-through invalidation: If rec is false and child is not None,
          a child was invalidated and is propagating the request to its
          parent. valid_display is reset (valid_self not), and the request
          is propagated further.
        """
        ovd = self.valid_display
        self.valid_display = False
        if child is None: self.valid_self = False
        if ovd and not rec and self.parent is not None:
            self.parent.invalidate(child=self)
    def invalidate_layout(self):
        """
        Mark this widget as in need of a re-layout

        The standard implementation sets the valid_layout attribute to False,
        drops the cached requested size, and propagates the request to the
        parent.
        """
        ov, self.valid_layout = self.valid_layout, False
        self._prefsize = None
        if ov and self.parent is not None:
            self.parent.invalidate_layout()
    def _delete_layout(self):
        "Remove the widget from its container"
        if self.parent is not None:
            self.parent.remove(self)
    def delete(self):
        """
        Remove this widget from the hierarchy

        The standard implementation removes the widget from its container.
        """
        self._delete_layout()

class Focusable:
    """
    A mixin class for widgets that can hold the input focus

    Classes using this should list it before Widget in their bases, and call
    Focusable.__init__() in their initializers.

    Attributes:
    focused: Whether the widget is currently focused.
    """
    def __init__(self):
        "Initializer"
        self.focused = False
    def focus(self, rev=False):
        "Toggle the focus state and return whether the widget is focused"
        return (not self.focused)
    def _set_focused(self, state):
        "Internal method to update the focus state"
        if state == self.focused: return
        self.focused = state
        self.on_focuschange()
    def on_focuschange(self):
        """
        React to a change of the focus state

        The default implementation applies the "focus" style tag, and hides
        the cursor when the focus is gained.
        """
        self.set_style_tag('focus', self.focused)
        if self.focused and self.surface is not None:
            self.grab_input(self.rect, None)
    def event(self, event):
        "Track focus changes"
        if event[0] == FocusEvent:
            self._set_focused(event[1])
            return True
        return Widget.event(self, event)

class Container(Widget):
    """
    A widget "containing" others

    A container is responsible for the management, layout, and rendering of
    its children. It partitions its surface into sub-surfaces for them,
    preferably sized as the children request; children that are allotted
    no space at all have their surfaces withdrawn.

    This class provides default implementations for all methods expected on
    "container" widgets. In particular, the children are "stacked" on top of
    each other, assuming the position and size of the container and being
    rendered (and tab-traversed) in the order of insertion. Specific
    subclasses of Container are available with more sophisticated layout
    algorithms.

    Mouse events are routed to the child under the pointer; a child that
    received a button press receives all further mouse events until the
    button is released, even if the pointer leaves it.

    Attributes:
    children: The list of children held by this widget. May be read
              externally, but should only be modified using the corresponding
              methods.
    """
    def __init__(self, **kwds):
        """
        Initializer

        See Widget.__init__() for more detail.
        """
        Widget.__init__(self, **kwds)
        self.children = []
        self._focused = None
        self._mouse_child = None
        self._oldrect = None
    def getprefsize(self):
        """
        Calculate the requested size of the container

        This method should be overridden as part of the concrete class'
        layout algorithm.
        """
        wh = (0, 0)
        for i in self.children: wh = maxpos(wh, i.prefsize)
        return wh
    def set_surface(self, surface):
        "Assign a new surface; the children lose theirs if it is None"
        Widget.set_surface(self, surface)
        if surface is None:
            for i in self.children:
                i.set_surface(None)
    def make(self):
        """
        Perform layout

        The standard implementation aborts if the container is (already)
        valid; otherwise, if the container's position or size have changed,
        it invalidates all children, calls the relayout() method, and
        invokes all children's make() methods. In any case, the container
        is valid after the procedure.
        """
        if self.valid_layout: return
        if self.surface is None:
            Widget.make(self)
            return
        if self._oldrect != self.surface.rect:
            for i in self.children:
                i.invalidate_layout()
            self.relayout()
            for i in self.children:
                i.make()
            self._oldrect = self.surface.rect
        Widget.make(self)
    def relayout(self):
        """
        Perform the actual layout of children

        This method should be overridden as part of the concrete class'
        layout algorithm.
        """
        for i in self.children:
            self._place(i, (0, 0) + self.surface.size)
    def _place(self, child, rect):
        """
        Assign the given rect (relative to self) to child

        The child's surface is created or moved as necessary; if the rect is
        empty, the child's surface is withdrawn instead.
        """
        if rect[2] <= 0 or rect[3] <= 0:
            if child.surface is not None:
                _LOGGER.debug('Withdrawing surface of %r', child)
            child.set_surface(None)
        elif child.surface is None:
            child.set_surface(self.surface.make_sub(*rect))
        else:
            child.surface.change_geometry(*rect)
    def draw(self):
        """
        Draw this container

        The standard implementation aborts if already valid, draws all
        children recursively, and marks the container as valid.
        Subclasses should hook draw_self() (which is implicitly called
        if necessary) to display own UI elements.
        """
        if self.valid_display: return
        Widget.draw(self)
        for i in self.children:
            i.draw()
    def child_at(self, line, col):
        "Return the child whose surface contains the given position, or None"
        for i in reversed(self.children):
            if i.surface is not None and i.surface.contains(line, col):
                return i
        return None
    def _route_mouse(self, event):
        "Forward a mouse event to the appropriate child"
        kind, button, line, col = event[1:]
        if kind in ('drag', 'release') and self._mouse_child is not None:
            child = self._mouse_child
            if kind == 'release': self._mouse_child = None
        else:
            child = self.child_at(line, col)
            if child is None: return False
            if kind == 'press': self._mouse_child = child
        if child.surface is None:
            return False
        x, y = child.surface.pos
        return child.event((MouseEvent, kind, button, line - y, col - x))
    def event(self, event):
        """
        Process input events directed to this widget

        The standard implementation handles focus events, routes mouse
        events by position, and forwards other events to the currently
        focused child.
        """
        ret = Widget.event(self, event)
        if event[0] == FocusEvent:
            if not event[1]:
                self._refocus(None)
            return True
        elif event[0] == MouseEvent:
            return (self._route_mouse(event) or ret)
        elif self._focused is not None:
            return (self._focused.event(event) or ret)
        else:
            return ret
    def focus(self, rev=False):
        """
        Perform focus traversal

        rev indicates whether the traversal should be reversed or no.
        The standard implementation first relays traversal to the focused
        child (if any), then attempts successive children (preceding /
        following it in insertion order) until one is found that takes the
        focus, or reports failure to the caller.
        """
        if not self.children:
            return False
        elif self._focused is not None:
            idx = self.children.index(self._focused)
        elif rev:
            idx = len(self.children) - 1
        else:
            idx = 0
        incr = (-1 if rev else 1)
        while 1:
            ch = self.children[idx]
            if ch.focus(rev):
                self._refocus(ch)
                return True
            idx += incr
            if idx in (-1, len(self.children)): break
        self._refocus(None)
        return False
    def child_focus(self, child):
        "Move the focus to the given child (and self) on its request"
        self._refocus(child)
        self.take_focus()
    def invalidate(self, rec=False, child=None):
        """
        Mark this widget as in need of a redraw

        The standard implementation marks the container itself and, unless
        the request is a pass-through one from a child, all children.
        """
        Widget.invalidate(self, rec, child)
        if rec or child is None:
            for i in self.children:
                i.invalidate(True)
    def invalidate_layout(self):
        """
        Mark this widget as in need of a layout refresh

        The standard implementation additionally forces the layout to be
        recalculated regardless of whether the container has been resized.
        """
        Widget.invalidate_layout(self)
        self._oldrect = None
    def _refocus(self, new):
        "Helper method to properly switch focus between two children"
        if new is self._focused: return
        if self._focused is not None:
            self._focused.event((FocusEvent, False))
        self._focused = new
        if self._focused is not None:
            self._focused.event((FocusEvent, True))
    def add(self, widget, **config):
        """
        Add the given widget to the container

        config may contain further detail on the role of the widget in
        this container.
        The default implementation ignores config, removes the widget
        from its previous parent (if any), installs it as a child of
        the container, and invalidates the latter.
        """
        widget._delete_layout()
        self.children.append(widget)
        widget.parent = self
        self.invalidate_layout()
        return widget
    def remove(self, widget):
        """
        Remove the widget from the container

        The standard implementation removes the widget from the container,
        resets the focus if it had previously been at the widget, withdraws
        the widget's surface, and invalidates the container.
        """
        self.children.remove(widget)
        if self._focused is widget:
            self._focused = None
        if self._mouse_child is widget:
            self._mouse_child = None
        widget.parent = None
        widget.set_surface(None)
        self.invalidate_layout()
    def clear(self):
        """
        Remove all children from this container

        The standard implementation calls remove() for each child.
        """
        for i in self.children[:]:
            self.remove(i)

class SingleContainer(Container):
    """
    A container holding no more than one child

    Adding a child when one is already present removes the former one.
    """
    @property
    def child(self):
        "The child of this container, or None"
        return (self.children[0] if self.children else None)
    def _child_prefsize(self):
        "Get the requested size of the child, or (0, 0) if none"
        if not self.children:
            return (0, 0)
        return self.children[0].prefsize
    def add(self, widget, **config):
        "Add a child"
        while self.children:
            self.remove(self.children[0])
        return Container.add(self, widget, **config)
    def set_child(self, widget):
        """
        Replace the child with widget, or remove it if widget is None

        Returns the former child (or None).
        """
        old = self.child
        if widget is None:
            if old is not None:
                self.remove(old)
        else:
            self.add(widget)
        return old

class GridBox(Container):
    """
    A container laying its children out in a two-dimensional grid

    Each child occupies exactly one cell; no cell holds more than one child.
    Every row is as high as its tallest child requests, and every column is
    as wide as its widest child requests; space beyond that is distributed
    amongst rows and columns proportionally to their expand factors, while
    lacking space is taken away from them proportionally to their requested
    sizes. A row's (column's) expand factor is the maximum of those given for
    its cells.

    Rows and columns are separated by row_spacing and col_spacing blank
    cells, respectively (those are style keys and can also be passed to the
    constructor directly).

    Attributes:
    max_col: The index of the rightmost column holding a child, or -1.
    """
    STYLE = {'attr': 0, 'row_spacing': 0, 'col_spacing': 0}
    STYLE_RESHAPE_KEYS = ('row_spacing', 'col_spacing')
    def __init__(self, children=None, **kwds):
        """
        Initializer

        children is an optional list of rows (each of which is a list of
        widgets or None values) to initially populate the grid with.
        row_spacing and col_spacing can be passed as keyword arguments
        instead of as part of style.
        """
        style = dict(kwds.get('style') or {})
        for key in ('row_spacing', 'col_spacing'):
            if key in kwds: style[key] = kwds[key]
        kwds['style'] = style
        Container.__init__(self, **kwds)
        self.max_col = -1
        self._grid = []
        self._places = {}
        self._expand = {}
        for row, cells in enumerate(children or ()):
            for col, child in enumerate(cells):
                if child is not None:
                    self.add(row, col, child)
    @property
    def row_count(self):
        "The amount of rows in the grid"
        return len(self._grid)
    @property
    def col_count(self):
        "The amount of columns in the grid"
        return self.max_col + 1
    def get(self, row, col):
        "Return the child at the given cell, or None if there is none"
        if not 0 <= row < len(self._grid): return None
        cells = self._grid[row]
        if not 0 <= col < len(cells): return None
        return cells[col]
    def get_row(self, row):
        "Return the children of the given row (None for empty cells)"
        cells = self._grid[row] if 0 <= row < len(self._grid) else []
        return cells + [None] * (self.max_col + 1 - len(cells))
    def get_col(self, col):
        "Return the children of the given column (None for empty cells)"
        return [self.get(row, col) for row in range(len(self._grid))]
    def add(self, row, col, child, row_expand=0, col_expand=0):
        """
        Place child into the given cell

        A child previously occupying the cell is removed. row_expand and
        col_expand are the expand factors the child contributes to its row
        and column. Returns child.
        """
        if row < 0 or col < 0:
            raise IndexError('Negative grid position: (%r, %r)' % (row, col))
        old = self.get(row, col)
        if old is child:
            self._expand[child] = (row_expand, col_expand)
            self.invalidate_layout()
            return child
        if old is not None:
            self.remove(row, col)
        # Detach child from wherever it is (including another cell of
        # this grid) before taking the position.
        child._delete_layout()
        while len(self._grid) <= row:
            self._grid.append([])
        cells = self._grid[row]
        while len(cells) <= col:
            cells.append(None)
        cells[col] = child
        self.max_col = max(self.max_col, col)
        self._places[child] = (row, col)
        self._expand[child] = (row_expand, col_expand)
        Container.add(self, child)
        self.children.sort(key=self._places.__getitem__)
        return child
    def remove(self, row, col=None):
        """
        Remove the child at the given cell and return it

        Alternatively, the child itself can be passed as the only argument.
        Returns None if the cell is empty; raises an IndexError if it lies
        outside the grid. Trailing empty rows and columns are trimmed away.
        """
        if col is None:
            row, col = self._places[row]
        if not (0 <= row < len(self._grid) and 0 <= col <= self.max_col):
            raise IndexError('Grid position out of bounds: (%r, %r)' %
                             (row, col))
        child = self.get(row, col)
        if child is None:
            return None
        self._grid[row][col] = None
        self._trim()
        del self._places[child]
        del self._expand[child]
        Container.remove(self, child)
        return child
    def _trim(self):
        "Remove trailing empty cells and rows"
        for cells in self._grid:
            while cells and cells[-1] is None:
                cells.pop()
        while self._grid and not self._grid[-1]:
            self._grid.pop()
        self.max_col = max([len(c) for c in self._grid] or [0]) - 1
    def _measure(self):
        "Compute the requested sizes and expand factors of rows and columns"
        nrows, ncols = len(self._grid), self.max_col + 1
        heights, widths = [0] * nrows, [0] * ncols
        row_exp, col_exp = [0] * nrows, [0] * ncols
        for child, (row, col) in self._places.items():
            cw, ch = child.prefsize
            re, ce = self._expand[child]
            heights[row] = max(heights[row], ch)
            widths[col] = max(widths[col], cw)
            row_exp[row] = max(row_exp[row], re)
            col_exp[col] = max(col_exp[col], ce)
        return heights, row_exp, widths, col_exp
    def getprefsize(self):
        "Calculate the requested size of the grid"
        row_spacing, col_spacing = self.get_style_values('row_spacing',
                                                         'col_spacing')
        heights, row_exp, widths, col_exp = self._measure()
        return (sum(widths) + col_spacing * max(len(widths) - 1, 0),
                sum(heights) + row_spacing * max(len(heights) - 1, 0))
    def _buckets(self, sizes, expands, spacing):
        "Internal helper"
        ret = []
        for idx, (size, expand) in enumerate(zip(sizes, expands)):
            if ret and spacing: ret.append(Bucket(fixed=spacing))
            ret.append(Bucket(size, expand, key=idx))
        return ret
    def relayout(self):
        "Assign each child the surface of its cell"
        row_spacing, col_spacing = self.get_style_values('row_spacing',
                                                         'col_spacing')
        heights, row_exp, widths, col_exp = self._measure()
        rows = distribute(self.surface.size[1],
                          self._buckets(heights, row_exp, row_spacing))
        cols = distribute(self.surface.size[0],
                          self._buckets(widths, col_exp, col_spacing))
        rows = dict((b.key, (b.start, b.size)) for b in rows
                    if b.key is not None)
        cols = dict((b.key, (b.start, b.size)) for b in cols
                    if b.key is not None)
        _LOGGER.debug('GridBox layout: rows %r, columns %r', rows, cols)
        for child, (row, col) in self._places.items():
            top, height = rows[row]
            left, width = cols[col]
            self._place(child, (left, top, width, height))

class LinearSplit(Container):
    """
    Base class for containers showing two children next to each other

    The children are separated by a divider spacing cells thick, which can
    be dragged with the primary mouse button to move the split. The split
    is remembered as a fraction of the space available, which is preserved
    across resizes; split_at holds the derived position of the divider (or
    None if the container is too small to show it).

    Style keys (beyond attr):
    attr_split: The attribute of the divider; the "active" tag is applied
                while it is being dragged.
    spacing   : The thickness of the divider.
    linetype  : The kind of line drawn for the divider (see LINETYPES).

    Subclasses set AXIS to 0 (for a split along the columns) or 1 (for one
    along the lines).
    """
    STYLE = {'attr': 0, 'attr_split': 0, 'spacing': 1, 'linetype': 'single',
             ':active': {'attr_split': _curses.A_BOLD}}
    STYLE_RESHAPE_KEYS = ('spacing',)
    STYLE_CHECKS = {'linetype': check_linetype}
    AXIS = None
    def __init__(self, a_child=None, b_child=None, **kwds):
        """
        Initializer

        a_child and b_child are the initial children (the top and bottom,
        or left and right, ones, respectively). split_fraction (defaulting
        to 0.5) is the initial position of the split.
        """
        Container.__init__(self, **kwds)
        self.split_fraction = kwds.get('split_fraction', 0.5)
        self.split_at = None
        self.dragging = False
        self._drag_offset = 0
        self.a_child = None
        self.b_child = None
        if a_child is not None: self.set_a_child(a_child)
        if b_child is not None: self.set_b_child(b_child)
    def _set_child(self, attr, child):
        "Internal helper"
        old = getattr(self, attr)
        if old is child: return child
        if old is not None: self.remove(old)
        if child is not None:
            Container.add(self, child)
            setattr(self, attr, child)
            self.children.sort(key=lambda c: c is not self.a_child)
        return child
    def set_a_child(self, child):
        "Replace the first child"
        return self._set_child('a_child', child)
    def set_b_child(self, child):
        "Replace the second child"
        return self._set_child('b_child', child)
    def add(self, widget, **config):
        "Add widget into the first free slot"
        if self.a_child is None:
            return self.set_a_child(widget)
        elif self.b_child is None:
            return self.set_b_child(widget)
        raise ValueError('%s already has two children' %
                         self.__class__.__name__)
    def remove(self, widget):
        "Remove one of the children"
        Container.remove(self, widget)
        if widget is self.a_child: self.a_child = None
        if widget is self.b_child: self.b_child = None
    def getprefsize(self):
        "Calculate the requested size of the split"
        spacing = self.get_style_values('spacing')
        sa = self.a_child.prefsize if self.a_child else (1, 1)
        sb = self.b_child.prefsize if self.b_child else (1, 1)
        ret = list(maxpos(sa, sb))
        ret[self.AXIS] = sa[self.AXIS] + spacing + sb[self.AXIS]
        return tuple(ret)
    def _avail(self):
        "The space available to the children along the split axis"
        return self.size[self.AXIS] - self.get_style_values('spacing')
    def _child_rect(self, start, length):
        "Return the rect of a child occupying the given span"
        if self.AXIS == 0:
            return (start, 0, length, self.size[1])
        return (0, start, self.size[0], length)
    def relayout(self):
        "Position the divider and the children around it"
        spacing = self.get_style_values('spacing')
        total = self.size[self.AXIS]
        avail = total - spacing
        if avail < 0:
            self.split_at = None
            for i in self.children:
                self._place(i, (0, 0, 0, 0))
            return
        self.split_at = zbound(int(round(avail * self.split_fraction)),
                               avail)
        b_start = self.split_at + spacing
        if self.a_child is not None:
            self._place(self.a_child, self._child_rect(0, self.split_at))
        if self.b_child is not None:
            self._place(self.b_child,
                        self._child_rect(b_start, total - b_start))
    def set_split(self, pos):
        """
        Move the divider to the given position

        The position is clamped to the space available and stored as a
        fraction of that.
        """
        avail = self._avail()
        if avail <= 0: return
        pos = zbound(pos, avail)
        self.split_fraction = float(pos) / avail
        if pos != self.split_at:
            self.invalidate_layout()
    def draw_self(self, surface):
        "Draw the divider"
        attr, attr_split, spacing, linetype = self.get_style_values('attr',
            'attr_split', 'spacing', 'linetype')
        if self.split_at is None:
            surface.clear(attr)
            return
        if self.a_child is None:
            for i in range(self.split_at):
                self._erase_span(surface, i, attr)
        if self.b_child is None:
            for i in range(self.split_at + spacing, self.size[self.AXIS]):
                self._erase_span(surface, i, attr)
        for i in range(spacing):
            offset = self.split_at + i
            if i == 0 or i == spacing - 1:
                if self.AXIS == 0:
                    surface.vline_at(offset, 0, self.size[1], linetype,
                                     attr_split)
                else:
                    surface.hline_at(offset, 0, self.size[0], linetype,
                                     attr_split)
            else:
                self._erase_span(surface, offset, attr_split)
    def _erase_span(self, surface, offset, attr):
        "Blank the line or column at the given offset"
        if self.AXIS == 0:
            for line in range(self.size[1]):
                surface.erase_at(line, offset, 1, attr)
        else:
            surface.erase_at(offset, 0, self.size[0], attr)
    def _divider_mouse(self, kind, button, val):
        """
        Handle a mouse event concerning the divider

        val is the coordinate of the event along the split axis. Returns
        whether the event was consumed.
        """
        if self.dragging:
            if kind == 'drag':
                self.set_split(val - self._drag_offset)
            elif kind == 'release':
                self.dragging = False
                self.set_style_tag('active', False)
            return (kind != 'wheel')
        if self.split_at is None or kind != 'press' or button != 1:
            return False
        spacing = self.get_style_values('spacing')
        if not self.split_at <= val < self.split_at + spacing:
            return False
        self.dragging = True
        self._drag_offset = val - self.split_at
        self.set_style_tag('active', True)
        return True
    def event(self, event):
        "Handle divider dragging, and process other events as usual"
        if event[0] == MouseEvent:
            kind, button, line, col = event[1:]
            if self._divider_mouse(kind, button, (col, line)[self.AXIS]):
                return True
        return Container.event(self, event)

class HSplit(LinearSplit):
    """
    A container showing two children above each other

    The divider is a horizontal line.
    """
    AXIS = 1
    def __init__(self, top_child=None, bottom_child=None, **kwds):
        "Initializer"
        LinearSplit.__init__(self, top_child, bottom_child, **kwds)
    @property
    def top_child(self):
        "The child above the divider"
        return self.a_child
    @property
    def bottom_child(self):
        "The child below the divider"
        return self.b_child
    def set_top_child(self, child):
        "Replace the child above the divider"
        return self.set_a_child(child)
    def set_bottom_child(self, child):
        "Replace the child below the divider"
        return self.set_b_child(child)

class VSplit(LinearSplit):
    """
    A container showing two children next to each other

    The divider is a vertical line.
    """
    AXIS = 0
    def __init__(self, left_child=None, right_child=None, **kwds):
        "Initializer"
        LinearSplit.__init__(self, left_child, right_child, **kwds)
    @property
    def left_child(self):
        "The child left of the divider"
        return self.a_child
    @property
    def right_child(self):
        "The child right of the divider"
        return self.b_child
    def set_left_child(self, child):
        "Replace the child left of the divider"
        return self.set_a_child(child)
    def set_right_child(self, child):
        "Replace the child right of the divider"
        return self.set_b_child(child)

class Border(SingleContainer):
    """
    A container surrounding its child with blank borders

    The border sizes are given like CSS margins (see parse_quad()), either
    as the border argument, or individually as top_border, right_border,
    bottom_border, and left_border (which take precedence), or as v_border
    and h_border (covering top and bottom, and left and right,
    respectively).
    """
    def __init__(self, child=None, **kwds):
        """
        Initializer

        See the class docstring for the border arguments.
        """
        SingleContainer.__init__(self, **kwds)
        top, right, bottom, left = parse_quad(kwds.get('border', 0))
        v, h = kwds.get('v_border'), kwds.get('h_border')
        if v is not None: top = bottom = v
        if h is not None: left = right = h
        self.borders = (kwds.get('top_border', top),
                        kwds.get('right_border', right),
                        kwds.get('bottom_border', bottom),
                        kwds.get('left_border', left))
        if child is not None: self.add(child)
    def set_borders(self, border):
        "Change the border sizes; border is parsed by parse_quad()"
        self.borders = parse_quad(border, self.borders)
        self.invalidate_layout()
    def getprefsize(self):
        "Calculate the requested size of the border"
        return inflate(self._child_prefsize(), self.borders)
    def relayout(self):
        "Place the child inside the borders"
        if self.child is not None:
            self._place(self.child,
                        deflate((0, 0) + self.surface.size, self.borders))
    def draw_self(self, surface):
        "Blank the borders (or everything if the child is not visible)"
        attr = self.get_style_values('attr')
        child = self.child
        if child is None or child.surface is None:
            surface.clear(attr)
            return
        cols, lines = surface.size
        top, right, bottom, left = self.borders
        for line in range(lines):
            if line < top or line >= lines - bottom:
                surface.erase_at(line, 0, cols, attr)
            else:
                surface.erase_at(line, 0, left, attr)
                surface.erase_at(line, cols - right, right, attr)

class Frame(SingleContainer):
    """
    A container drawing a box around its child

    The box is drawn using one of the LINETYPES, which is selected via the
    linetype style key (or constructor argument); an optional title is shown
    inside the top edge.

    Attributes:
    title      : The title to display, or None.
    title_align: The alignment of the title (see parse_align()).
    """
    STYLE = {'attr': 0, 'attr_frame': 0, 'linetype': 'ascii'}
    STYLE_CHECKS = {'linetype': check_linetype}
    def __init__(self, child=None, **kwds):
        """
        Initializer

        Accepts the title, title_align, and linetype keyword arguments
        beyond the standard ones.
        """
        if 'linetype' in kwds:
            style = dict(kwds.get('style') or {})
            style['linetype'] = kwds['linetype']
            kwds['style'] = style
        SingleContainer.__init__(self, **kwds)
        self.title = kwds.get('title')
        self.title_align = parse_align(kwds.get('title_align', ALIGN_LEFT))
        if child is not None: self.add(child)
    def set_title(self, title):
        "Change the title"
        self.title = title
        self.invalidate()
    def set_title_align(self, align):
        "Change the title alignment"
        self.title_align = parse_align(align)
        self.invalidate()
    def set_linetype(self, linetype):
        "Change the kind of line drawn"
        self.set_style(linetype=linetype)
    def getprefsize(self):
        "Calculate the requested size of the frame"
        return inflate(self._child_prefsize(), (1, 1, 1, 1))
    def relayout(self):
        "Place the child inside the box, if there is room"
        if self.child is None: return
        cols, lines = self.surface.size
        if cols > 2 and lines > 2:
            self._place(self.child, (1, 1, cols - 2, lines - 2))
        else:
            self._place(self.child, (0, 0, 0, 0))
    def draw_self(self, surface):
        "Draw the box and the title"
        attr, attr_frame, linetype = self.get_style_values('attr',
            'attr_frame', 'linetype')
        lt = LINETYPES[linetype]
        cols, lines = surface.size
        if self.child is None or self.child.surface is None:
            surface.clear(attr)
        if self.title is None:
            top = lt[CORNER_TL] + lt[LINE_TOP] * (cols - 2) + lt[CORNER_TR]
        else:
            before, width, after = align_allocation(textwidth(self.title),
                                                    cols - 4,
                                                    self.title_align)
            top = (lt[CORNER_TL] + lt[LINE_TOP] * before + ' ' +
                   substrwidth(self.title, 0, width) + ' ' +
                   lt[LINE_TOP] * after + lt[CORNER_TR])
        surface.print_at(0, 0, top, attr_frame)
        for line in range(1, lines - 1):
            surface.print_at(line, 0, lt[LINE_LEFT], attr_frame)
            if cols > 1:
                surface.print_at(line, cols - 1, lt[LINE_RIGHT], attr_frame)
        if lines > 1:
            surface.print_at(lines - 1, 0, lt[CORNER_BL] +
                             lt[LINE_BOTTOM] * (cols - 2) + lt[CORNER_BR],
                             attr_frame)

class Label(Widget):
    """
    A widget displaying (possibly multi-line) static text

    Attributes:
    align : The horizontal alignment of the lines.
    valign: The vertical alignment of the text block.
    """
    def __init__(self, text='', **kwds):
        "Initializer"
        Widget.__init__(self, **kwds)
        self.align = parse_align(kwds.get('align', ALIGN_LEFT))
        self.valign = parse_align(kwds.get('valign', ALIGN_TOP))
        self._text = None
        self._lines = ()
        self.text = text
    @property
    def text(self):
        "The text displayed"
        return self._text
    @text.setter
    def text(self, text):
        if text == self._text: return
        self._text = text
        self._lines = tuple(text.split('\n'))
        self.invalidate_layout()
        self.invalidate()
    def getprefsize(self):
        "Calculate the requested size of the label"
        return (max(textwidth(l) for l in self._lines), len(self._lines))
    def draw_self(self, surface):
        "Draw the text"
        attr = self.get_style_values('attr')
        cols, lines = surface.size
        surface.clear(attr)
        top = align_allocation(len(self._lines), lines, self.valign)[0]
        for idx, text in enumerate(self._lines[:lines]):
            before = align_allocation(textwidth(text), cols, self.align)[0]
            surface.print_at(top + idx, before, text, attr)

class Fill(Widget):
    """
    A widget filling its whole area with a repeated text

    Style keys (beyond attr):
    text: The text to repeat.
    skew: How many columns to shift each line with respect to the
          previous one.
    """
    STYLE = {'attr': 0, 'text': ' ', 'skew': 0}
    def getprefsize(self):
        "Request a single cell"
        return (1, 1)
    def draw_self(self, surface):
        "Fill the surface"
        attr, text, skew = self.get_style_values('attr', 'text', 'skew')
        cols, lines = surface.size
        width = textwidth(text)
        if not width:
            surface.clear(attr)
            return
        repeated = text * (cols // width + 2)
        for line in range(lines):
            lineskew = (line * skew) % width
            if lineskew: lineskew -= width
            surface.print_at(line, lineskew, repeated, attr)

class Placegrid(Widget):
    """
    A placeholder widget showing a grid and its size

    Useful for testing layouts.
    """
    STYLE = {'attr': 0, 'attr_grid': 0}
    def getprefsize(self):
        "Request a single cell"
        return (1, 1)
    def draw_self(self, surface):
        "Draw the grid and the size label"
        attr, attr_grid = self.get_style_values('attr', 'attr_grid')
        cols, lines = surface.size
        surface.clear(attr)
        w, h = cols - 1, lines - 1
        surface.hline_at(0, 0, cols, 'thick', attr_grid)
        surface.hline_at(h // 2, 0, cols, 'single', attr_grid)
        surface.hline_at(h, 0, cols, 'thick', attr_grid)
        surface.vline_at(0, 0, lines, 'thick', attr_grid)
        surface.vline_at(w // 2, 0, lines, 'single', attr_grid)
        surface.vline_at(w, 0, lines, 'thick', attr_grid)
        text = '(%d,%d)' % (cols, lines)
        surface.print_at(h // 2, (1 + w - textwidth(text)) // 2, text, attr)

class Button(Focusable, Widget):
    """
    A clickable button with a text label

    The button is drawn as a box around the label; when it is focused,
    markers point at the label. Clicking it with the primary mouse button,
    or pressing Return or the space bar while it is focused, invokes the
    on_click callback.

    Attributes:
    label   : The text to display.
    on_click: A function to invoke (with the button as the only argument)
              when the button is clicked, or None.
    align   : The horizontal alignment of the label.
    valign  : The vertical alignment of the label.
    """
    STYLE = {'attr': 0, 'linetype': 'single',
             ':focus': {'attr': _curses.A_BOLD}}
    STYLE_CHECKS = {'linetype': check_linetype}
    def __init__(self, label='', on_click=None, **kwds):
        "Initializer"
        Widget.__init__(self, **kwds)
        Focusable.__init__(self)
        self.on_click = on_click
        self.align = parse_align(kwds.get('align', ALIGN_CENTER))
        self.valign = parse_align(kwds.get('valign', ALIGN_CENTER))
        self._label = label
    @property
    def label(self):
        "The text of the button"
        return self._label
    @label.setter
    def label(self, text):
        if text == self._label: return
        self._label = text
        self.invalidate_layout()
        self.invalidate()
    def getprefsize(self):
        "Request room for the box, the focus markers, and the label"
        return (4 + textwidth(self._label), 3)
    def draw_self(self, surface):
        "Draw the box and the label"
        attr, linetype = self.get_style_values('attr', 'linetype')
        lt = LINETYPES[linetype]
        cols, lines = surface.size
        width = textwidth(self._label)
        surface.print_at(0, 0, lt[CORNER_TL] + lt[LINE_TOP] * (cols - 2) +
                         lt[CORNER_TR], attr)
        for line in range(1, lines - 1):
            surface.print_at(line, 0, lt[LINE_LEFT] + ' ' * (cols - 2) +
                             lt[LINE_RIGHT], attr)
        if lines > 1:
            surface.print_at(lines - 1, 0, lt[CORNER_BL] +
                             lt[LINE_BOTTOM] * (cols - 2) + lt[CORNER_BR],
                             attr)
        label_line = 1 + align_allocation(1, lines - 2, self.valign)[0]
        before, width, after = align_allocation(width + 2, cols - 2,
                                                self.align)
        surface.print_at(label_line, before + 2, self._label, attr)
        if self.focused:
            surface.print_at(label_line, before + 1, '▶', attr)
            surface.print_at(label_line, cols - 2 - after, '◀', attr)
    def click(self):
        "Invoke the on_click callback (if any)"
        if self.on_click is not None:
            self.on_click(self)
    def event(self, event):
        "Handle clicks and key presses"
        if event[0] == FocusEvent:
            return Focusable.event(self, event)
        elif event[0] == KeyEvent and event[1] == 'Enter':
            self.click()
            return True
        elif event[0] == TextEvent and event[1] == ' ':
            self.click()
            return True
        elif event[0] == MouseEvent and event[2] == 1:
            kind, line, col = event[1], event[3], event[4]
            if kind == 'press':
                self.take_focus()
                return True
            elif kind == 'release':
                cols, lines = self.size
                if 0 <= line < lines and 0 <= col < cols:
                    self.click()
                return True
        return Widget.event(self, event)

class ToggleButton(Focusable, Widget):
    """
    Base class for single-line buttons showing a state mark next to a label

    Subclasses set MARK_KEY to the style key holding the mark (which usually
    differs under the "active" style tag) and ATTR_MARK_KEY to the key of
    its attribute. Pressing the primary mouse button on the first line,
    or pressing Return or the space bar while focused, invokes toggle().

    Attributes:
    label: The text to display after the mark.
    """
    MARK_KEY = None
    ATTR_MARK_KEY = None
    STYLE_RESHAPE_KEYS = ('spacing',)
    def __init__(self, label='', **kwds):
        "Initializer"
        Widget.__init__(self, **kwds)
        Focusable.__init__(self)
        self._label = label
    @property
    def label(self):
        "The text of the button"
        return self._label
    @label.setter
    def label(self, text):
        if text == self._label: return
        self._label = text
        self.invalidate_layout()
        self.invalidate()
    @property
    def is_active(self):
        "Whether the button is active"
        return ('active' in self.style_tags)
    def getprefsize(self):
        "Request room for the mark, the spacing, and the label"
        mark, spacing = self.get_style_values(self.MARK_KEY, 'spacing')
        return (textwidth(mark) + spacing + textwidth(self._label), 1)
    def on_style_changed(self, changed):
        "Remake the layout if the mark changed its width"
        if self.MARK_KEY in changed:
            old, new = changed[self.MARK_KEY]
            if textwidth(old) != textwidth(new):
                self.invalidate_layout()
        Widget.on_style_changed(self, changed)
    def draw_self(self, surface):
        "Draw the mark and the label"
        attr, attr_mark, mark, spacing = self.get_style_values('attr',
            self.ATTR_MARK_KEY, self.MARK_KEY, 'spacing')
        cols, lines = surface.size
        col = surface.print_at(0, 0, mark, attr_mark)
        surface.erase_at(0, col, spacing, attr)
        col += spacing
        col += surface.print_at(0, col, self._label, attr)
        surface.erase_at(0, col, cols - col, attr)
        for line in range(1, lines):
            surface.erase_at(line, 0, cols, attr)
    def toggle(self):
        "Change the state of the button"
        raise NotImplementedError
    def event(self, event):
        "Handle clicks and key presses"
        if event[0] == FocusEvent:
            return Focusable.event(self, event)
        elif event[0] == KeyEvent and event[1] == 'Enter':
            self.toggle()
            return True
        elif event[0] == TextEvent and event[1] == ' ':
            self.toggle()
            return True
        elif (event[0] == MouseEvent and event[1] == 'press' and
                event[2] == 1 and event[3] == 0):
            self.take_focus()
            self.toggle()
            return True
        return Widget.event(self, event)

class CheckButton(ToggleButton):
    """
    A button that can be checked and unchecked independently

    Attributes:
    on_toggle: A function invoked (with the button and its new state as
               arguments) whenever the state changes, or None.
    """
    MARK_KEY = 'check'
    ATTR_MARK_KEY = 'attr_check'
    STYLE = {'attr': 0, 'attr_check': _curses.A_BOLD, 'check': '[ ]',
             'spacing': 2,
             ':active': {'check': '[X]'},
             ':focus': {'attr': _curses.A_STANDOUT}}
    def __init__(self, label='', on_toggle=None, **kwds):
        "Initializer"
        ToggleButton.__init__(self, label, **kwds)
        self.on_toggle = on_toggle
        if kwds.get('active'):
            self.set_style_tag('active', True)
    def activate(self):
        "Check the button"
        self._set_active(True)
    def deactivate(self):
        "Uncheck the button"
        self._set_active(False)
    def _set_active(self, state):
        "Internal helper"
        if state == self.is_active: return
        self.set_style_tag('active', state)
        if self.on_toggle is not None:
            self.on_toggle(self, state)
    def toggle(self):
        "Invert the state of the button"
        self._set_active(not self.is_active)

class RadioGroup(object):
    """
    A group of RadioButton-s of which no more than one is active at a time

    Attributes:
    buttons   : The buttons belonging to this group.
    active    : The currently active button, or None.
    on_changed: A function invoked (with the group and the new active
                button as arguments) when the active button changes, or
                None.
    """
    def __init__(self, on_changed=None):
        "Initializer"
        self.buttons = []
        self.active = None
        self.on_changed = on_changed
    @property
    def value(self):
        "The value of the active button, or None"
        return (None if self.active is None else self.active.value)
    def add(self, button):
        "Add a button to this group"
        if button.group is not None and button.group is not self:
            button.group.remove(button)
        if button not in self.buttons:
            self.buttons.append(button)
        button.group = self
    def remove(self, button):
        "Remove a button from this group"
        if button is self.active:
            self.set_active(None)
        self.buttons.remove(button)
        button.group = None
    def set_active(self, button):
        "Make button the active one (or deactivate all if it is None)"
        if button is self.active: return
        old, self.active = self.active, button
        if old is not None:
            old.set_style_tag('active', False)
        if button is not None:
            button.set_style_tag('active', True)
        if self.on_changed is not None:
            self.on_changed(self, button)

class RadioButton(ToggleButton):
    """
    A button that is active while no other button of its group is

    Attributes:
    group: The RadioGroup this button belongs to.
    value: An arbitrary value associated with the button.
    """
    MARK_KEY = 'tick'
    ATTR_MARK_KEY = 'attr_tick'
    STYLE = {'attr': 0, 'attr_tick': _curses.A_BOLD, 'tick': '( )',
             'spacing': 2,
             ':active': {'tick': '(*)'},
             ':focus': {'attr': _curses.A_STANDOUT}}
    def __init__(self, label='', group=None, value=None, **kwds):
        """
        Initializer

        If group is None, a new group is created for the button.
        """
        ToggleButton.__init__(self, label, **kwds)
        self.value = value
        self.group = None
        (RadioGroup() if group is None else group).add(self)
        if kwds.get('active'):
            self.activate()
    def activate(self):
        "Make this button the active one of its group"
        self.group.set_active(self)
    def toggle(self):
        "Activate this button (radio buttons cannot be toggled off)"
        self.activate()

class Entry(Focusable, Widget):
    """
    A single-line text input widget

    The text is scrolled horizontally to keep the cursor at least
    SCROLL_MARGIN columns away from either edge (where possible); if text is
    hidden beyond an edge, a "more" marker is shown there. Edits are drawn
    incrementally by shifting the remainder of the line in place where the
    terminal permits that.

    Keys are looked up in the keybindings mapping, whose values are names of
    methods of the entry or functions taking the entry as the only
    argument; typed text is inserted at the cursor (or overwrites the text
    there in overwrite mode).

    Attributes:
    scroll_offset: The column of the text shown at the left edge.
    overwrite    : Whether typed text replaces existing text.
    on_enter     : A function invoked (with the entry and its text as
                   arguments) when Return is pressed on a non-empty entry,
                   or None.
    more_markers : The markers shown at the left and right edges when text
                   is hidden there.
    keybindings  : The keybindings mapping (initialized from KEYBINDINGS).

    Style keys (beyond attr):
    attr_more: The attribute of the "more" markers.
    """
    STYLE = {'attr': 0, 'attr_more': _curses.A_BOLD}
    SCROLL_MARGIN = 5
    KEYBINDINGS = {
        'Left': 'key_backward_char',
        'Right': 'key_forward_char',
        'C-b': 'key_backward_char',
        'C-f': 'key_forward_char',
        'C-Left': 'key_backward_word',
        'C-Right': 'key_forward_word',
        'M-b': 'key_backward_word',
        'M-f': 'key_forward_word',
        'Home': 'key_beginning_of_line',
        'End': 'key_end_of_line',
        'C-a': 'key_beginning_of_line',
        'C-e': 'key_end_of_line',
        'Backspace': 'key_backward_delete_char',
        'Delete': 'key_forward_delete_char',
        'C-d': 'key_forward_delete_char',
        'C-w': 'key_backward_delete_word',
        'M-Backspace': 'key_backward_delete_word',
        'C-Delete': 'key_forward_delete_word',
        'M-d': 'key_forward_delete_word',
        'C-u': 'key_backward_delete_line',
        'C-k': 'key_forward_delete_line',
        'Insert': 'key_overwrite_mode',
        'Enter': 'key_enter_line'}
    def __init__(self, text='', on_enter=None, **kwds):
        """
        Initializer

        position is the initial cursor position (defaulting to the end of
        the text).
        """
        Widget.__init__(self, **kwds)
        Focusable.__init__(self)
        self._text = text
        self._pos = zbound(kwds.get('position', len(text)), len(text))
        self.scroll_offset = 0
        self.overwrite = False
        self.on_enter = on_enter
        self.more_markers = kwds.get('more_markers', ('<..', '..>'))
        self.keybindings = dict(self.KEYBINDINGS)
    @property
    def text(self):
        "The text of the entry"
        return self._text
    @property
    def position(self):
        "The cursor position as a character index"
        return self._pos
    def getprefsize(self):
        "Request a single line of (at least) a single column"
        return (1, 1)
    def bind_keys(self, mapping):
        """
        Change keybindings

        Values of None remove the binding for the corresponding key.
        """
        for key, action in mapping.items():
            if action is None:
                self.keybindings.pop(key, None)
            else:
                self.keybindings[key] = action
    def set_text(self, text):
        "Replace the text, keeping the cursor position as far as possible"
        self._text = text
        self._pos = min(self._pos, len(text))
        self.invalidate()
        self._reposition_cursor()
    def set_position(self, pos):
        "Move the cursor to the given character index"
        self._pos = zbound(pos, len(self._text))
        self._reposition_cursor()
    def _calc_scroll(self, pos):
        "Return the scroll offset that keeps the cursor at pos visible"
        width = self.size[0]
        off = self.scroll_offset
        if width <= 0: return off
        margin = min(self.SCROLL_MARGIN, (width - 1) // 2)
        half = max(width // 2, 1)
        cursor = chars2cols(self._text, pos)
        while cursor - off < margin and off > 0:
            off = max(off - half, 0)
        while cursor - off > width - max(margin, 1):
            off += half
        return off
    def _reposition_cursor(self):
        "Adjust scrolling to the cursor and update the terminal cursor"
        if self.surface is None: return
        off = self._calc_scroll(self._pos)
        if off != self.scroll_offset:
            self.scroll_offset = off
            self.invalidate()
        self._update_cursor()
    def _update_cursor(self):
        "Place the terminal cursor if focused"
        if not self.focused or self.surface is None: return
        x = chars2cols(self._text, self._pos) - self.scroll_offset
        ax, ay = self.surface.abspos
        self.grab_input(self.rect, (ax + x, ay))
    def on_focuschange(self):
        "Show the cursor when focused"
        self._update_cursor()
    def _pre_width(self):
        "The width of the left-hand more marker, if shown"
        if self.scroll_offset == 0: return 0
        return textwidth(self.more_markers[0])
    def _post_width(self, text_cols):
        """
        The width of the right-hand more marker, if shown

        The marker is left out if it would overlap the left-hand one.
        """
        width = self.size[0]
        if text_cols <= self.scroll_offset + width: return 0
        post = textwidth(self.more_markers[1])
        if self._pre_width() + post > width: return 0
        return post
    def _segments(self):
        "Return the (start, text, attr) triples the visible line consists of"
        attr, attr_more = self.get_style_values('attr', 'attr_more')
        width = self.size[0]
        pre = self._pre_width()
        post = self._post_width(textwidth(self._text))
        span = max(width - pre - post, 0)
        text = substrwidth(self._text, self.scroll_offset + pre, span)
        text += ' ' * (span - textwidth(text))
        ret = []
        if pre: ret.append((0, self.more_markers[0], attr_more))
        ret.append((pre, text, attr))
        if post: ret.append((width - post, self.more_markers[1], attr_more))
        return ret
    def _paint_span(self, start, end):
        "Redraw the columns from start (inclusive) to end (exclusive)"
        start = max(start, 0)
        for seg_start, text, attr in self._segments():
            seg_end = seg_start + textwidth(text)
            lo, hi = max(start, seg_start), min(end, seg_end)
            if lo >= hi: continue
            self.surface.print_at(0, lo, substrwidth(text, lo - seg_start,
                                                     hi - lo), attr)
    def draw_self(self, surface):
        "Draw the visible part of the text"
        cols, lines = surface.size
        self._paint_span(0, cols)
        for line in range(1, lines):
            surface.erase_at(line, 0, cols, self.get_style_values('attr'))
        self._update_cursor()
    def make(self):
        "Re-derive the scroll offset for the new size"
        Widget.make(self)
        self._reposition_cursor()
    def splice(self, pos, count, text):
        """
        Replace count characters from pos on by text

        Returns the characters removed. The cursor stays at the same
        character if that lies before or after the replaced range, and
        moves to the end of the inserted text if it lay within the range.
        """
        old = self._text
        pos = zbound(pos, len(old))
        count = zbound(count, len(old) - pos)
        at_end = (pos == len(old))
        deleted = old[pos:pos + count]
        self._text = old[:pos] + text + old[pos + count:]
        cur = self._pos
        if cur >= pos + count:
            new_pos = cur + len(text) - count
        elif cur >= pos:
            new_pos = pos + len(text)
        else:
            new_pos = cur
        if (self.surface is None or
                self._calc_scroll(new_pos) == self.scroll_offset):
            self._text_spliced(pos, deleted, text, at_end)
        self._pos = new_pos
        self._reposition_cursor()
        return deleted
    def _text_spliced(self, pos, deleted, inserted, at_end):
        "Redraw the parts of the line affected by a splice"
        if self.surface is None or not self.valid_display:
            self.invalidate()
            return
        width = self.size[0]
        ins_cols = textwidth(inserted)
        delta = ins_cols - textwidth(deleted)
        new_cols = textwidth(self._text)
        old_post = self._post_width(new_cols - delta)
        new_post = self._post_width(new_cols)
        # Leftmost column touched by the more marker appearing or vanishing,
        # including the cell before it where a wide character may be cut.
        if old_post != new_post:
            marker = width - max(old_post, new_post) - 1
        else:
            marker = width
        x = chars2cols(self._text, pos) - self.scroll_offset
        if x >= width - new_post:
            if marker < width:
                self._paint_span(self._char_start(marker), width)
            return
        if x < self._pre_width():
            if x < 0:
                _LOGGER.warning('Entry text changed left of the visible '
                                'area (column %d); redrawing', x)
            self.invalidate()
            return
        if delta > 0 and not at_end or delta < 0:
            if not self.surface.shift_line(0, x, delta):
                self._paint_span(self._char_start(min(x, marker)), width)
                return
        if ins_cols:
            self._paint_span(x, x + ins_cols)
        if not delta and marker == width:
            return
        right = width - new_post
        if old_post and delta:
            right = min(right, width - old_post + delta)
        if delta < 0:
            right = min(right, width + delta)
        # One more column in case a wide character straddles the boundary.
        start = min(max(right - 1, x), marker)
        self._paint_span(self._char_start(start), width)
    def _char_start(self, col):
        "Return the first column of the character of text shown at col"
        text, tcol = self._text, self.scroll_offset + col
        idx = cols2chars(text, tcol)
        start = chars2cols(text, idx)
        if start > tcol:
            if idx == 0: return col
            start = chars2cols(text, idx - 1)
        elif idx == len(text):
            return col
        return start - self.scroll_offset
    def text_insert(self, text, pos):
        "Insert text at the given character index"
        self.splice(pos, 0, text)
    def text_delete(self, pos, count):
        "Delete count characters at pos and return them"
        return self.splice(pos, count, '')
    text_splice = splice
    def find_word_start_forward(self, pos, default=None):
        "Return the index of the next word start after pos, or default"
        m = _re.search(r'(?<=\s)\S', self._text[pos:])
        return (default if m is None else pos + m.start())
    def find_word_end_forward(self, pos, default=None):
        "Return the index of the next word end after pos, or default"
        m = _re.search(r'(?<=\S)\s', self._text[pos:])
        if m is not None:
            return pos + m.start()
        elif self._text[pos:].strip():
            return len(self._text)
        return default
    def find_word_start_backward(self, pos):
        "Return the index of the last word start before pos, or zero"
        m = _re.match(r'.*\s(?=\S)', self._text[:pos], _re.DOTALL)
        return (0 if m is None else m.end())
    def find_word_end_backward(self, pos):
        "Return the index of the last word end before pos, or zero"
        m = _re.match(r'.*\S(?=\s)', self._text[:pos + 1], _re.DOTALL)
        return (0 if m is None else m.end())
    def key_backward_char(self):
        "Move the cursor one character left"
        if self._pos > 0: self.set_position(self._pos - 1)
    def key_forward_char(self):
        "Move the cursor one character right"
        if self._pos < len(self._text): self.set_position(self._pos + 1)
    def key_backward_word(self):
        "Move the cursor to the start of the previous word"
        if self._pos > 0:
            self.set_position(self.find_word_start_backward(self._pos))
    def key_forward_word(self):
        "Move the cursor to the start of the next word"
        self.set_position(self.find_word_start_forward(self._pos,
                                                       len(self._text)))
    def key_beginning_of_line(self):
        "Move the cursor to the start of the text"
        self.set_position(0)
    def key_end_of_line(self):
        "Move the cursor to the end of the text"
        self.set_position(len(self._text))
    def key_backward_delete_char(self):
        "Delete the character before the cursor"
        if self._pos > 0: self.text_delete(self._pos - 1, 1)
    def key_forward_delete_char(self):
        "Delete the character at the cursor"
        if self._pos < len(self._text): self.text_delete(self._pos, 1)
    def key_backward_delete_word(self):
        "Delete from the start of the previous word to the cursor"
        start = self.find_word_start_backward(self._pos)
        self.text_delete(start, self._pos - start)
    def key_forward_delete_word(self):
        "Delete from the cursor to the start of the next word"
        end = self.find_word_start_forward(self._pos, len(self._text))
        self.text_delete(self._pos, end - self._pos)
    def key_backward_delete_line(self):
        "Delete everything before the cursor"
        self.text_delete(0, self._pos)
    def key_forward_delete_line(self):
        "Delete everything from the cursor on"
        self.text_delete(self._pos, len(self._text) - self._pos)
    def key_overwrite_mode(self):
        "Toggle between inserting and overwriting"
        self.overwrite = not self.overwrite
    def key_enter_line(self):
        "Pass the text to on_enter unless it is empty"
        if self._text and self.on_enter is not None:
            self.on_enter(self, self._text)
    def on_text(self, text):
        "Insert (or overwrite with) typed text at the cursor"
        self.splice(self._pos, len(text) if self.overwrite else 0, text)
    def event(self, event):
        "Handle key presses, typed text, and mouse clicks"
        if event[0] == FocusEvent:
            return Focusable.event(self, event)
        elif event[0] == KeyEvent:
            action = self.keybindings.get(event[1])
            if action is None:
                return False
            elif callable(action):
                action(self)
            else:
                getattr(self, action)()
            return True
        elif event[0] == TextEvent:
            self.on_text(event[1])
            return True
        elif (event[0] == MouseEvent and event[1] == 'press' and
                event[2] == 1):
            self.take_focus()
            self.set_position(cols2chars(self._text,
                                         event[4] + self.scroll_offset))
            return True
        return Widget.event(self, event)

class DeferredLog(_logging_handlers.BufferingHandler):
    """
    A logging handler holding records back until they are dumped

    While curses owns the terminal, log output written to it would garble
    the display; records are therefore kept (up to capacity of them; older
    ones are dropped) and can be written out later using dump().
    """
    def __init__(self, capacity=1000):
        "Initializer"
        _logging_handlers.BufferingHandler.__init__(self, capacity)
        self.setFormatter(_logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s'))
    def shouldFlush(self, record):
        "Drop the oldest records when over capacity; never flush"
        if len(self.buffer) > self.capacity:
            del self.buffer[:len(self.buffer) - self.capacity]
        return False
    def dump(self, stream):
        "Write all held records to stream and forget them"
        self.acquire()
        try:
            for record in self.buffer:
                stream.write(self.format(record) + '\n')
            self.buffer = []
        finally:
            self.release()
        stream.flush()
    def __len__(self):
        return len(self.buffer)

_LOG = DeferredLog()

def dump_log(stream):
    "Write log records held back while the UI was running to stream"
    _LOG.dump(stream)

def init(loglevel=None):
    """
    Initialize the library

    Should be called once before performing any actions.
    WARNING: This modifies the module's global state, and the program-wide
             locale.
    loglevel, if not None, is the level to set on the library's logger.
    """
    global _ENCODING
    _locale.setlocale(_locale.LC_ALL, '')
    _ENCODING = _locale.getpreferredencoding(True)
    if _LOG not in _LOGGER.handlers:
        _LOGGER.addHandler(_LOG)
    if loglevel is not None:
        _LOGGER.setLevel(loglevel)
