#!/usr/bin/env python3

"""
Curses TTY Terminal Input Plugin

Terminals deliver characters, not key presses and releases.  A background
thread reads characters as they arrive and hands the interesting ones to the
main thread through a queue.

A keypad key counts as held for a short while after its character was last
seen.  Keyboard auto-repeat keeps topping this up for as long as the key is
really held down, which is close enough to a proper press and release.

Control characters (overlay, step, pause) act once per character seen.  ESC
or CTRL+C quits.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import queue
from threading import Thread
from time import time
from .i_null import Inputs as InputsBase
from ..constants import DEFAULT_CONTROLS, NUM_KEYS

# How long a key stays down after its character is seen, in seconds
KEY_HOLD_TIME = 0.2
QUIT_CHARS = frozenset((27, 3))  # ESC, CTRL+C


def read_chars(stop_queue, char_queue, wanted_chars, curses_screen):
    # Runs in its own thread.  getch() blocks, so a stop request is only noticed after the next character.
    while stop_queue.empty():
        char = curses_screen.getch()

        if char < 0:
            continue  # Nothing read

        char = ord(chr(char).lower())

        if char in QUIT_CHARS:
            char_queue.put(None)
            return

        if char in wanted_chars:
            try:
                char_queue.put_nowait(char)
            except queue.Full:
                pass  # Main thread is behind, so drop the character


class Inputs(InputsBase):
    def __init__(self, keymap, renderer, controls=DEFAULT_CONTROLS):
        super().__init__(keymap, renderer, controls, force_lowercase=True)

        self.held_until = [0.0] * NUM_KEYS
        self.stop_queue = queue.Queue(1)
        self.char_queue = queue.Queue(16)

        # Daemon, so a thread stuck in getch() never holds up the process exiting
        self.reader = Thread(
            target=read_chars,
            args=(
                self.stop_queue, self.char_queue, set(self.keymap_dict) | set(self.controls_dict),
                renderer.get_curses_screen()
            ),
            daemon=True
        )
        self.reader.start()

    def process_messages(self, ticker):
        now = time()

        while True:
            try:
                char = self.char_queue.get_nowait()
            except queue.Empty:
                break

            if char is None:
                return True

            if char in self.keymap_dict:
                self.held_until[self.keymap_dict[char]] = now + KEY_HOLD_TIME
            else:
                self.apply_control(ticker, self.controls_dict[char])

        for key_num, until in enumerate(self.held_until):
            if until > now:
                ticker.press_key(key_num)

        return False

    def shutdown(self):
        try:
            self.stop_queue.put_nowait(None)
        except queue.Full:
            pass  # Already asked to stop

        super().shutdown()
