#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

from argparse import ArgumentParser
from nchip import main
from nchip.constants import CPU_QUIRKS, DEFAULT_CONTROLS, DEFAULT_KEYMAP, DEFAULT_TICK_MS


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="program to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "curses", "null"],
        help="set the rendering and input systems (pygame by default if available, otherwise curses)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 512), and scale in Curses mode (default 2)"
    )
    parser.add_argument(
        "-t", "--tick_ms", type=int, default=DEFAULT_TICK_MS,
        help="milliseconds per tick.  One instruction runs and both timers count down once per tick (default {})"
        .format(DEFAULT_TICK_MS)
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes (PyGame) or character numbers (Curses).  Separate each decimal with a comma"
    )
    parser.add_argument(
        "--controls", default=DEFAULT_CONTROLS,
        help="redefine the debug overlay, single step, and pause keys (default i, o, p).  Same format as --keymap"
    )
    parser.add_argument(
        "--palette",
        help="redefine the unlit and lit colours for the PyGame renderer in comma-separated hex, e.g. 000000,FFFFFF"
    )

    for cpu_quirk in CPU_QUIRKS:
        parser.add_argument(
            "--{}_quirks".format(cpu_quirk), type=int, choices=[0, 1],
            help="manually disable or enable {} quirks".format(cpu_quirk.replace("_", " "))
        )

    parser.add_argument(
        "--dump",
        help="write a memory dump to this file if execution halts with an error"
    )
    parser.add_argument(
        "--ticks", type=int,
        help="quit after this many ticks (runs until quit by default)"
    )
    parser.add_argument(
        "-p", "--paused", action="store_true", default=False,
        help="start paused.  Use the step key to run one instruction at a time"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live debug output of every instruction executed"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def run():
    # It is possible to start the interpreter from a GUI by calling main with a dictionary
    main(vars(parse_args()))


if __name__ == "__main__":
    run()
