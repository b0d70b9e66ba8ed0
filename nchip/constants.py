#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "NineChip Interpreter"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
FONT_ADDR = 0x50
FONT_GLYPH_SIZE = 5
STACK_DEPTH = 16
NUM_REGS = 16
NUM_KEYS = 16

# Display
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# One instruction and one timer decrement per tick
DEFAULT_TICK_MS = 15

# Glyphs 0-F, 5 rows each, 4 pixels wide in the top nibble
FONT_DATA = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))

# Default mappings for keys 0-F.  The keyscans (PyGame) and ASCII characters (Curses) for these are the same code:
#   x 1 2 3 / q w e a / s d z c / 4 r f v
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Control keys in order: debug overlay toggle (i), single step (o), pause toggle (p)
DEFAULT_CONTROLS = "105,111,112"
CONTROL_NAMES = ["debug", "step", "pause"]

# CPU quirks, each of which can be forced on or off from the command line
CPU_QUIRKS = ["shift", "logic"]
