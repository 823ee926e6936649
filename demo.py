
import sys, curses, logging

from termwidgets import *
from termwidgets import _LOG

def demo_grid(root):
    # A two-by-two grid with a blank column between the cells; the second
    # column takes up any spare width.
    grid = root.add(GridBox(col_spacing=1))
    grid.add(0, 0, Placegrid())
    grid.add(0, 1, Placegrid(), col_expand=1, row_expand=1)
    grid.add(1, 0, Placegrid())
    grid.add(1, 1, Placegrid(), col_expand=1)

def demo_split(root):
    # The top half is split again horizontally; drag the dividers with the
    # mouse.
    split = root.add(HSplit(VSplit(Placegrid(), Placegrid()),
                            Fill(style={'text': 'termwidgets ',
                                        'skew': 2})))
    split.set_split(8)

def demo_entry(root):
    frame = root.add(Frame(title='Entry', linetype='single'))
    grid = frame.add(GridBox(row_spacing=1, col_spacing=2))
    status = Label('Type something and press Return')
    def entered(entry, text):
        status.text = 'You entered: %s' % text
        entry.set_text('')
    grid.add(0, 0, Label('Text:'))
    entry = grid.add(0, 1, Entry('Lorem ipsum dolor sit amet',
                                 on_enter=entered), col_expand=1)
    grid.add(1, 1, status)
    root.focus()

def demo_frame(root):
    # Frames of every line type, each labelled by its own title.
    grid = root.add(GridBox(row_spacing=1, col_spacing=1))
    for idx, linetype in enumerate(sorted(LINETYPES)):
        frame = Frame(Label(linetype, align='centre', valign='middle'),
                      title=linetype, title_align=(idx % 3) / 2.0,
                      linetype=linetype)
        grid.add(idx // 3, idx % 3, frame, row_expand=1, col_expand=1)

def demo_buttons(root):
    status = Label('Use Tab to move the focus')
    def changed(group, button):
        status.text = 'Selected: %s' % button.value
    def toggled(button, active):
        status.text = '%s: %s' % (button.label, 'on' if active else 'off')
    group = RadioGroup(on_changed=changed)
    grid = root.add(Border(GridBox(row_spacing=1), border=1)).child
    grid.add(0, 0, CheckButton('Check me', on_toggle=toggled))
    grid.add(1, 0, RadioButton('First', group, value=1))
    grid.add(2, 0, RadioButton('Second', group, value=2))
    grid.add(3, 0, Button('Quit', on_click=lambda b: sys.exit()))
    grid.add(4, 0, status)

DEMOS = {'grid': demo_grid, 'split': demo_split, 'entry': demo_entry,
         'frame': demo_frame, 'buttons': demo_buttons}

def main(window):
    # Create the root of the widget hierarchy.
    root = WidgetRoot(window)
    DEMOS[sys.argv[1] if len(sys.argv) > 1 else 'entry'](root)
    # Run it.
    root.main()

if __name__ == '__main__':
    if len(sys.argv) > 1 and sys.argv[1] not in DEMOS:
        sys.stderr.write('USAGE: %s [%s]\n' % (sys.argv[0],
                                               '|'.join(sorted(DEMOS))))
        sys.exit(1)
    try:
        init(logging.DEBUG)
        curses.wrapper(main)
    except KeyboardInterrupt:
        pass
    finally:
        if _LOG:
            _LOG.dump(sys.stderr)
