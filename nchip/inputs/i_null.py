#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Input plugins never touch the machine directly.  When the ticker processes
their messages, they pass on which of the 16 keys are down (these only last
for the current tick) and any control requests: pause/resume, single step,
and the debug overlay toggle.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import CONTROL_NAMES, DEFAULT_CONTROLS, NUM_KEYS


class InputsError(Exception):
    pass


def parse_codes(codes, count, label, force_lowercase=False):
    codes_split = codes.split(",")

    if len(codes_split) != count:
        raise InputsError(
            "Incorrect number of {} defined -- {} required.  Use commas to split numbers".format(label, count)
        )

    parsed = []

    for code_defined in codes_split:
        try:
            code_defined_ord = int(code_defined)
        except ValueError:
            raise InputsError("Defined {} are not all integer values".format(label)) from None

        if force_lowercase:
            # If we are working with characters rather than keyscan codes, we should convert to lowercase
            code_defined_ord = ord(chr(code_defined_ord).lower())

        parsed.append(code_defined_ord)

    return parsed


class Inputs:
    def __init__(self, keymap, renderer, controls=DEFAULT_CONTROLS, force_lowercase=False):
        self.keymap_dict = {}
        self.controls_dict = {}
        self.renderer = renderer

        for key_num, key_code in enumerate(parse_codes(keymap, NUM_KEYS, "keys", force_lowercase)):
            if key_code in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_code] = key_num

        for control_name, control_code in zip(
            CONTROL_NAMES, parse_codes(controls, len(CONTROL_NAMES), "controls", force_lowercase)
        ):
            if control_code in self.keymap_dict or control_code in self.controls_dict:
                raise InputsError("Control keys must not overlap with each other or the keypad")

            self.controls_dict[control_code] = control_name

    def process_messages(self, ticker):  # pylint: disable=unused-argument
        return False  # Don't exit the program

    def apply_control(self, ticker, control_name):
        if control_name == "debug":
            ticker.toggle_debug()
        elif control_name == "step":
            ticker.request_step()
        elif control_name == "pause":
            ticker.toggle_pause()

    def shutdown(self):
        pass
