#!/usr/bin/env python3

"""
Keypad Latch

Holds the state of the 16 hex keys for the current tick only.  Input plugins
set keys as they see them, the CPU reads them, and the ticker wipes the lot at
the end of every tick.  A key that is held down must therefore be re-asserted
by its input plugin on each tick, otherwise the program sees it as released.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.keys = [False] * NUM_KEYS

    def press(self, key):
        self._check_key(key)
        self.keys[key] = True

    def is_key_down(self, key):
        # Called with a register value, so anything over 0xF is simply never pressed
        return key < NUM_KEYS and self.keys[key]

    def get_keypress(self):
        # Lowest numbered key that is down, or None
        for key_num, down in enumerate(self.keys):
            if down:
                return key_num

        return None

    def clear(self):
        for key_num in range(NUM_KEYS):
            self.keys[key_num] = False

    def get_keys(self):
        return list(self.keys)

    def _check_key(self, key):
        if not 0 <= key < NUM_KEYS:
            raise KeypadError("Key 0x{:x} is outside the 16-key layout".format(key))
