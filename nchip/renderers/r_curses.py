#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws the 64x32 display in a text terminal (Linux TTY, Windows Command Prompt
or PowerShell).  Each lit pixel is a run of reverse-video spaces, 'scale'
characters wide, so that pixels look roughly square.

Everything is drawn into an off-screen pad:

    row 0      title bar, which doubles as the debug overlay
    rows 1-32  display rows

The pad is copied onto the terminal when a refresh is requested, and only if
something changed since the last one (or the terminal was resized).
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
import _curses
from .r_null import Renderer as RendererBase

TITLE_ROWS = 1


class Renderer(RendererBase):
    def __init__(self, scale=None, cursor_mode=0, **kwargs):
        # Here, scale is the number of characters per pixel
        self.pixel_char = " " * (2 if scale is None else scale)
        self.pad = None
        self.term_size = None
        self.cursor_mode = cursor_mode

        self.screen = curses.initscr()
        curses.noecho()
        curses.cbreak()
        curses.curs_set(cursor_mode)

        super().__init__(len(self.pixel_char))

    def set_resolution(self, width, height):
        # One spare column, as curses refuses to write the bottom-right cell of a pad
        self.pad = curses.newpad(height + TITLE_ROWS + 1, max(width * self.scale + 1, 2))
        super().set_resolution(width, height)

    def set_pixel(self, x, y, value):
        attribute = curses.A_REVERSE if value else curses.A_NORMAL
        self.pad.addstr(y + TITLE_ROWS, x * self.scale, self.pixel_char, attribute)
        super().set_pixel(x, y, value)

    def refresh_display(self):
        term_size = self.screen.getmaxyx()

        if term_size != self.term_size:
            # Terminal was resized (or this is the first frame), so start from a clean screen
            self.term_size = term_size
            self.screen.clear()

            if hasattr(curses, "resizeterm"):  # Not on Windows
                curses.resizeterm(*term_size)

            self.screen.refresh()
            self.refresh_needed = True

        if self.refresh_needed:
            self.pad.refresh(0, 0, 0, 0, term_size[0] - 1, term_size[1] - 1)

        super().refresh_display()

    def set_title(self, title):
        if self.pad is not None and title != self.title:
            bar_width = self.width * self.scale
            self.pad.addstr(0, 0, title[:bar_width].ljust(bar_width), curses.A_REVERSE)
            self.refresh_needed = True

        super().set_title(title)

    def shutdown(self):
        self.pad = None
        curses.nocbreak()
        curses.echo()

        try:
            curses.curs_set(1)
        except _curses.error:
            pass  # Some terminals can't show the cursor again

        curses.endwin()
        super().shutdown()

    # Curses-specific, used by the curses input plugin

    def get_curses_screen(self):
        return self.screen
