#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the display in an SDL window via PyGame.  Pixels are kept in a 64x32
RGB buffer, which is stretched with nearest-neighbour scaling onto the window
(inside a grey frame) whenever a refresh is needed.  Nothing is drawn more
than once per refresh, however many times a pixel changed.

The window title carries the debug overlay status while it is enabled.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase

FRAME_WIDTH = 6
FRAME_COLOUR = (0xAA, 0xAA, 0xAA)
WINDOW_COLOUR = (0xFF, 0xFF, 0xFF)
DEFAULT_PALETTE = (0x000000, 0xFFFFFF)  # Unlit, lit
MIN_WINDOW_WIDTH = 64


def parse_palette(palette):
    # "RRGGBB,RRGGBB" into a pair of 3-byte colours.  Either colour can be left out to keep its default.
    colours = list(DEFAULT_PALETTE)

    if palette is not None:
        palette_split = palette.split(",")

        if len(palette_split) > len(colours):
            raise RendererError("Only {} palette colours can be defined.".format(len(colours)))

        for colour_num, colour in enumerate(palette_split):
            if len(colour) != 6:
                raise RendererError("Palette colours must all be 6 hex digits long.")

            try:
                colours[colour_num] = int(colour, 16)
            except ValueError:
                raise RendererError("Invalid palette colour '{}'.".format(colour)) from None

    return [bytes((colour >> 16, (colour >> 8) & 0xFF, colour & 0xFF)) for colour in colours]


class Renderer(RendererBase):
    def __init__(self, scale=None, palette=None, **kwargs):
        # Here, scale is the width of the display area in the window
        display_width = 512 if scale is None else scale

        if display_width < MIN_WINDOW_WIDTH:
            raise RendererError("Window width must be at least {} pixels.".format(MIN_WINDOW_WIDTH))

        self.rgb_map = parse_palette(palette)
        self.rgb_buffer = memoryview(bytearray())
        self.display_size = (display_width, display_width // 2)
        self.display_offset = (FRAME_WIDTH * 2, FRAME_WIDTH * 2)

        pygame.display.init()
        self.window = pygame.display.set_mode(
            (self.display_size[0] + FRAME_WIDTH * 4, self.display_size[1] + FRAME_WIDTH * 4)
        )
        self.window.fill(WINDOW_COLOUR)
        pygame.draw.rect(
            self.window, FRAME_COLOUR,
            pygame.Rect(
                FRAME_WIDTH, FRAME_WIDTH, self.display_size[0] + FRAME_WIDTH * 2, self.display_size[1] + FRAME_WIDTH * 2
            ),
            FRAME_WIDTH
        )

        super().__init__(display_width)

    def set_resolution(self, width, height):
        # Every pixel starts unlit
        self.rgb_buffer = memoryview(bytearray(self.rgb_map[0] * (width * height)))
        super().set_resolution(width, height)
        self.refresh_needed = True

    def set_pixel(self, x, y, value):
        # Written in place, so there are no allocations or PyGame calls per pixel
        offset = (y * self.width + x) * 3
        self.rgb_buffer[offset:offset + 3] = self.rgb_map[value]
        super().set_pixel(x, y, value)

    def refresh_display(self):
        if self.refresh_needed and self.width and self.height:
            # Blitting straight from the bytearray is much faster than frequent PixelArray updates
            surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
            self.window.blit(pygame.transform.scale(surface, self.display_size), self.display_offset)
            pygame.display.flip()

        super().refresh_display()

    def set_title(self, title):
        # Setting the caption is slow, so skip it unless the text changed
        if title != self.title:
            pygame.display.set_caption(title)

        super().set_title(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
