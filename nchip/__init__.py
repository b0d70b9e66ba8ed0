#!/usr/bin/env python3

"""
Main Startup Module

Call main(args) to start the interpreter, where args is a dictionary of
options.  The launcher builds this from the command line, but a GUI could just
as easily supply it.

Every option must be present.  Use None to get the default.

The program is loaded and checked before anything else is set up, so a bad
file never leaves a half-initialised window or terminal behind.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS, DEFAULT_CONTROLS, DEFAULT_KEYMAP, STACK_DEPTH
from .cpu import CPU, CPUError
from .debugger import Debugger
from .framebuffer import Framebuffer
from .hostio import Loader, LoaderError
from .keypad import Keypad
from .ram import RAM
from .stack import Stack
from .ticker import Ticker

# Tried in this order when no renderer is requested
AUTO_RENDERERS = ("pygame", "curses")


class StartupError(Exception):
    pass


def _import_plugins(renderer_name):
    # Returns the (Inputs, Renderer) classes for a front end.  Raises ImportError if its library is missing.
    # pylint: disable=import-outside-toplevel, unused-import
    if renderer_name == "pygame":
        import pygame  # noqa: F401
        from .inputs.i_pygame import Inputs
        from .renderers.r_pygame import Renderer
    elif renderer_name == "curses":
        import curses  # noqa: F401
        from .inputs.i_curses import Inputs
        from .renderers.r_curses import Renderer
    else:
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer

    return Inputs, Renderer


def select_plugins(renderer_name):
    if renderer_name is not None:
        try:
            return _import_plugins(renderer_name)
        except ImportError:
            raise StartupError(
                "The '{}' renderer is not available.  Is {} installed?".format(
                    renderer_name, "PyGame" if renderer_name == "pygame" else "Curses (or Windows-Curses)"
                )
            ) from None

    for auto_name in AUTO_RENDERERS:
        try:
            return _import_plugins(auto_name)
        except ImportError:
            pass  # Try the next one

    raise StartupError("Neither PyGame nor Curses (or Windows-Curses) appear to be installed.")


def get_quirk_settings(args):
    # None leaves the CPU default in place, otherwise 0 or 1 forces the quirk off or on
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_setting = args[quirk_label]
        quirk_settings[quirk_label] = None if quirk_setting is None else bool(quirk_setting)

    return quirk_settings


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    loader = Loader()

    try:
        program = loader.load_binary(args["filename"])
        CPU.check_program(program)
    except (LoaderError, CPUError) as e:
        raise StartupError(str(e)) from None

    Inputs, Renderer = select_plugins(args["renderer"])  # pylint: disable=invalid-name
    # The interpreter makes no sound, but the audio plugin still hears when the sound timer runs out
    from .audio.a_null import Audio  # pylint: disable=import-outside-toplevel

    renderer = Renderer(scale=args["scale"], palette=args["palette"])

    try:
        # Inputs are linked to the renderer, as the curses one reads from the renderer's terminal
        inputs = Inputs(args["keymap"] or DEFAULT_KEYMAP, renderer, args["controls"] or DEFAULT_CONTROLS)
    except Exception:
        renderer.shutdown()  # Give the terminal back before reporting the error
        raise

    audio = Audio()
    debugger = Debugger()
    debugger.set_live(args["debug"])

    # Creating the CPU resets the machine, which clears the display and writes the font
    keypad = Keypad()
    cpu = CPU(RAM(), Stack(STACK_DEPTH), Framebuffer(renderer), keypad, debugger, **get_quirk_settings(args))

    ticker = Ticker(
        cpu, keypad, audio, debugger, inputs=inputs, loader=loader, tick_ms=args["tick_ms"],
        dump_filename=args["dump"], running=not args["paused"]
    )
    ticker.load(program)

    try:
        ticker.run(args["ticks"])
    finally:
        # __del__ cannot be relied upon when using PyPy, so shut everything down here
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()

    return ticker
