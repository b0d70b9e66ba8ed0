#!/usr/bin/env python3

"""
Null Audio Plugin

The only audio plugin, since the interpreter makes no sound of its own.  The
ticker tells it when the sound timer has just run out, so anything that
started a tone knows when to stop.  Stops are counted, which is handy for
checking timer behaviour without a sound device.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Audio:
    def __init__(self):
        self.tone_stops = 0

    def stop_tone(self):
        # Fire and forget: the sound timer just reached zero
        self.tone_stops += 1

    def shutdown(self):
        pass
