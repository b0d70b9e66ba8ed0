#!/usr/bin/env python3

"""
PyGame Input Plugin

PyGame reports real key presses and releases, so this keeps track of which
keypad keys are physically held.  Since the ticker releases every key at the
end of each tick, held keys are passed on again each time messages are
processed.

Control keys act once, on the press.  ESC (on release) or closing the window
asks the ticker to quit.  PyGame itself is shut down afterwards by the
renderer.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase
from ..constants import DEFAULT_CONTROLS, NUM_KEYS


class Inputs(InputsBase):
    def __init__(self, keymap, renderer, controls=DEFAULT_CONTROLS):
        super().__init__(keymap, renderer, controls)
        self.held = [False] * NUM_KEYS

        # Event handlers return True to quit
        self.event_handlers = {
            pygame.QUIT:    lambda ticker, event: True,
            pygame.KEYDOWN: self._key_pressed,
            pygame.KEYUP:   self._key_released
        }

    def process_messages(self, ticker):
        quit_program = False

        for event in pygame.event.get():
            handler = self.event_handlers.get(event.type)

            if handler is not None and handler(ticker, event):
                quit_program = True  # Keep draining the queue anyway

        for key_num in range(NUM_KEYS):
            if self.held[key_num]:
                ticker.press_key(key_num)

        return quit_program

    def _key_pressed(self, ticker, event):
        if event.key in self.keymap_dict:
            self.held[self.keymap_dict[event.key]] = True
        elif event.key in self.controls_dict:
            self.apply_control(ticker, self.controls_dict[event.key])

        return False

    def _key_released(self, ticker, event):  # pylint: disable=unused-argument
        if event.key == pygame.K_ESCAPE:
            return True

        if event.key in self.keymap_dict:
            self.held[self.keymap_dict[event.key]] = False

        return False
