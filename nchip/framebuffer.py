#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are only presented on the actual display (the
host rendering system) when the ticker asks for a refresh.  The renderer is
told about every pixel that changes as it happens, so it can keep its own
surface up to date without rescanning the whole screen.

Programs cannot write directly into video RAM.  Instead, sprites are drawn to
the screen by XORing their bits against the current contents, one byte per
pixel: 0x00 is off, 0xFF is on.

Coordinates always wrap around the edges of the 64x32 display, so a sprite
that runs off the right edge reappears on the left.

Collisions (where a set sprite bit turns an already lit pixel off) are
reported back to the caller, which records them in the flag register.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_NAME, SCREEN_WIDTH, SCREEN_HEIGHT
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer():
    def __init__(self, renderer, vid_width=SCREEN_WIDTH, vid_height=SCREEN_HEIGHT):
        if vid_width <= 0 or vid_height <= 0:
            raise FramebufferError("Display dimensions must be positive")

        self.renderer = renderer
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.vram = RAM()
        self.vram.resize(self.vid_size)
        self.renderer.set_resolution(vid_width, vid_height)
        self.set_title()

    def clear(self):
        self.vram.clear()

        for y in range(self.vid_height):
            for x in range(self.vid_width):
                self.renderer.set_pixel(x, y, 0)

    def xor_pixel(self, x, y):
        # Toggles a lit sprite bit into place.  Returns True if the pixel was already on (a collision).
        x %= self.vid_width
        y %= self.vid_height
        vram_loc = y * self.vid_width + x
        pixel = self.vram.read(vram_loc)
        new_pixel = pixel ^ 0xFF
        self.vram.write(vram_loc, new_pixel)
        self.renderer.set_pixel(x, y, int(new_pixel != 0))

        return pixel != 0

    def get_pixel(self, x, y):
        return int(self.vram.read((y % self.vid_height) * self.vid_width + (x % self.vid_width)) != 0)

    def rows(self):
        # Snapshot of the screen as rows of 0/1 values, top row first
        return [
            [self.get_pixel(x, y) for x in range(self.vid_width)]
            for y in range(self.vid_height)
        ]

    def is_blank(self):
        return not any(self.vram.snapshot())

    def refresh_display(self):
        self.renderer.refresh_display()

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def set_title(self, status=None):
        self.renderer.set_title(APP_NAME if status is None else "{} - {}".format(APP_NAME, status))
