from __future__ import annotations
import curses
from typing import Sequence

from lowkeytype.console import BACKSPACE_CODES, Color, KeyEvent, Terminal, classify_key

# ------------------------------
# Curses terminal
# ------------------------------

class CursesTerminal(Terminal):
    COLOR_PAIRS = {
        Color.GREEN: curses.COLOR_GREEN,
        Color.RED: curses.COLOR_RED,
        Color.YELLOW: curses.COLOR_YELLOW,
        Color.CYAN: curses.COLOR_CYAN,
    }

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.attr = 0
        self.typing_row = 0
        self.init_colors()
        self.stdscr.nodelay(False)
        self.stdscr.keypad(True)
        self.stdscr.scrollok(True)
        self.stdscr.erase()

    def init_colors(self):
        if not curses.has_colors():
            return
        curses.start_color()
        curses.use_default_colors()
        for color, fg in self.COLOR_PAIRS.items():
            curses.init_pair(int(color), fg, -1)

    def _attr_for(self, color: Color) -> int:
        if color == Color.DEFAULT or not curses.has_colors():
            return 0
        return curses.color_pair(int(color))

    def read_key(self) -> KeyEvent:
        ch = self.stdscr.getch()
        return classify_key(ch, BACKSPACE_CODES + (curses.KEY_BACKSPACE,))

    def set_color(self, color: Color) -> None:
        self.attr = self._attr_for(color)

    def clear_screen(self) -> None:
        self.stdscr.erase()
        self.stdscr.move(0, 0)
        self.stdscr.refresh()

    def console_width(self) -> int:
        _, maxx = self.stdscr.getmaxyx()
        return max(1, maxx)

    def write(self, text: str) -> None:
        try:
            self.stdscr.addstr(text, self.attr)
        except curses.error:
            # writing into the bottom-right cell raises after the text is drawn
            pass
        self.stdscr.refresh()

    def show_target(self, target: str) -> None:
        super().show_target(target)
        self.write("\n")
        self.typing_row, _ = self.stdscr.getyx()

    def render_prefix(self, typed: Sequence[str], target: str, correctness: Sequence[bool]) -> None:
        maxy, _ = self.stdscr.getmaxyx()
        width = max(1, self.console_width() - 1)
        self.stdscr.move(self.typing_row, 0)
        self.stdscr.clrtobot()
        for i, ch in enumerate(typed):
            y, x = self.typing_row + i // width, i % width
            if y >= maxy:
                break
            attr = self._attr_for(Color.GREEN if correctness[i] else Color.RED)
            try:
                self.stdscr.addch(y, x, ord(ch), attr)
            except curses.error:
                pass
        n = len(typed)
        y, x = self.typing_row + n // width, n % width
        if y < maxy:
            self.stdscr.move(y, x)
        self.stdscr.refresh()

def run_in_curses(func, *args, **kwargs):
    """Run ``func(terminal, *args, **kwargs)`` with curses set up and torn down."""
    def _session(stdscr):
        return func(CursesTerminal(stdscr), *args, **kwargs)
    return curses.wrapper(_session)
