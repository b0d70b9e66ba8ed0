#!/usr/bin/env python3

"""
Timer Ticker

Drives the whole machine.  Every tick, in this order:

    1. Run one instruction, if running (or if a single step was requested)
       and the program counter is still inside memory
    2. Count the delay and sound timers down by one, stopping at zero
    3. Tell the audio plugin if the sound timer has just run out
    4. Release every key, so key presses only last for the tick they arrive in

Pausing only stops step 1.  The timers keep counting and the keys keep being
released while paused.

A single step runs exactly one instruction and then leaves the ticker paused.

If an instruction fails (unknown opcode, bad address, stack overflow or
underflow), execution halts but the process carries on.  The fault is kept for
inspection along with a copy of RAM, which is also written to a dump file if
one was configured.  Any of resume(), reset() and reload() clears it.

The host loop in run() is the only thing that touches the machine.  Input
plugins hand over key presses and control requests when their messages are
processed at the start of each tick, so there is never more than one tick in
progress.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from time import perf_counter
from .constants import DEFAULT_TICK_MS, MEMORY_SIZE, PROGRAM_START
from .cpu import CPUError
from .decoder import disassemble
from .hostio import LoaderError
from .ram import RAMError
from .stack import StackError

DISPLAY_FREQ = 60.0  # 60Hz host display refresh
DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ

# opcode is the last word fetched, offset is relative to the program load address
Fault = namedtuple("Fault", ["message", "opcode", "family", "address", "offset", "memory"])


class Ticker:
    def __init__(self, cpu, keypad, audio, debugger, inputs=None, loader=None, tick_ms=None, dump_filename=None,
                 running=True):
        self.cpu = cpu
        self.keypad = keypad
        self.audio = audio
        self.debugger = debugger
        self.inputs = inputs
        self.loader = loader
        self.tick_interval = (DEFAULT_TICK_MS if tick_ms is None else tick_ms) / 1000.0
        self.dump_filename = dump_filename

        self.running = running
        self.single_step = False
        self.show_debug = True  # Debug overlay starts visible
        self.fault = None
        self.program = b""
        self.ticks = 0
        self.keys_seen = keypad.get_keys()  # Keys held during the last tick, for the overlay

    def tick(self):
        cpu = self.cpu

        if (self.running or self.single_step) and cpu.pc < MEMORY_SIZE:
            stepping = self.single_step

            try:
                cpu.step()
            except (CPUError, RAMError, StackError) as e:
                self._halt(e)

            if stepping:
                # One instruction, then halt
                self.single_step = False
                self.running = False

        if cpu.dt > 0:
            cpu.dt -= 1

        if cpu.st > 0:
            cpu.st -= 1

            if cpu.st == 0:
                self.audio.stop_tone()

        self.keys_seen = self.keypad.get_keys()
        self.keypad.clear()
        self.ticks += 1

    def _halt(self, error):
        cpu = self.cpu
        self.running = False
        self.fault = Fault(
            message=str(error),
            opcode=cpu.opcode,
            family=(cpu.opcode & 0xF000) >> 12,
            address=cpu.debug_pc,
            offset=cpu.debug_pc - PROGRAM_START,
            memory=cpu.ram.snapshot()
        )

        if isinstance(error, CPUError):
            # Unsupported opcode reports already carry the full debug info
            self.debugger.report(str(error))
        else:
            self.debugger.report(
                "Emulation halted: {}\n{}".format(
                    error, self.debugger.debug(cpu, disassemble(cpu.instruction), verbose=True)
                )
            )

        if self.dump_filename is not None and self.loader is not None:
            try:
                self.loader.write_dump(self.dump_filename, self.fault.memory)
            except LoaderError as e:
                self.debugger.report(str(e))
            else:
                self.debugger.report("Memory dumped to '{}'".format(self.dump_filename))

    # Control surface

    def pause(self):
        self.running = False
        self.single_step = False

    def resume(self):
        self.fault = None
        self.running = True

    def toggle_pause(self):
        if self.running:
            self.pause()
        else:
            self.resume()

    def request_step(self):
        self.single_step = True

    def toggle_debug(self):
        self.show_debug = not self.show_debug

    def press_key(self, key):
        self.keypad.press(key)

    def load(self, data):
        # Raises before anything is changed if the program can't fit
        self.cpu.check_program(data)
        self.cpu.reset()
        self.cpu.load_program(data)
        self.program = bytes(data)
        self.fault = None
        self.single_step = False
        self.keypad.clear()

    def reset(self):
        self.load(self.program)
        self.running = True

    def reload(self, data):
        self.load(data)
        self.running = True

    # Host loop

    def refresh_display(self):
        framebuffer = self.cpu.framebuffer

        if self.show_debug:
            framebuffer.set_title(self.debugger.status(self.cpu, self.running, self.keys_seen))
        else:
            framebuffer.set_title()

        framebuffer.refresh_display()

    def run(self, max_ticks=None):
        # Runs until the input plugin asks to quit, or until max_ticks ticks have passed if given
        next_display_update_time = 0

        while max_ticks is None or self.ticks < max_ticks:
            this_time = perf_counter()  # Do this first for maximum precision

            # Key presses and control requests for this tick
            if self.inputs.process_messages(self):
                break

            self.tick()

            # Prevent unnecessary display rendering in excess of host frame rate
            if this_time >= next_display_update_time:
                next_display_update_time = this_time + DISPLAY_INTERVAL
                self.refresh_display()

            # Wait for the next tick.  Do this last so time spent on this tick is taken into account.
            next_time = this_time + self.tick_interval

            while perf_counter() < next_time:  # Unfortunately we have to do this to get the timing right
                pass

        # Show the final state, as refreshing is normally rate limited
        self.refresh_display()
