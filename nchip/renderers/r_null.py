#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output.  It keeps the last title it was given, and counts pixel updates,
which is enough to check what a program did without a display.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.title = ""
        self.pixel_updates = 0
        self.refresh_needed = False
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def set_pixel(self, x, y, value):  # pylint: disable=unused-argument
        # value is 1 for a lit pixel, 0 for an unlit one
        self.pixel_updates += 1
        self.refresh_needed = True

    def refresh_display(self):
        self.refresh_needed = False

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
