#!/usr/bin/env python3

"""
CPU Debugger

All diagnostics go through here, as plain printed text.

Live trace (-d): one line per instruction, printed just before it runs.  The
line holds V registers from Vf down to V0, then I, both timers, the address
of the instruction, its opcode and its disassembly.

Fault report: the same line for the failing instruction, followed by the
call stack and the keys that were down on that tick.

Overlay status: a single line describing the next instruction and the
machine state, shown in the window title or the top line of the terminal.

Warnings: instructions that were skipped rather than run, e.g. machine code
calls.  Warnings and fault reports can be silenced, the live trace cannot.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import PROGRAM_START
from .decoder import fetch
from .ram import RAMError


class Debugger:
    def __init__(self):
        self.live = False
        self.quiet = False

    def debug(self, cpu, instruction, verbose=False):
        debug_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} IN: {}"
        ).format(
            *[cpu.v[reg_num] for reg_num in range(15, -1, -1)] +
            [cpu.i, cpu.dt, cpu.st, cpu.debug_pc, cpu.opcode, instruction]
        )

        if verbose:
            stack_items = cpu.stack.get_items()
            stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
            debug_str += ("\nStack:{}").format(stack_str or " (Empty)")
            keys_down = [key_num for key_num, down in enumerate(cpu.keypad.get_keys()) if down]
            keys_str = (" {:x}" * len(keys_down)).format(*keys_down)
            debug_str += ("\nKeys:{}").format(keys_str or " (None)")

        return debug_str

    def status(self, cpu, running, keys=None):
        # Debug overlay line.  Shows the word at the program counter, which is the next one to run.
        # keys is a list of 16 flags, defaulting to the current latch.
        if keys is None:
            keys = cpu.keypad.get_keys()

        keys_down = " ".join("{:X}".format(key_num) for key_num, down in enumerate(keys) if down)

        try:
            opcode = fetch(cpu.ram, cpu.pc)
        except RAMError:
            opcode = 0  # Program counter is past the end of memory

        return (
            "{} opcode: 0x{:04X} | inst: 0x{:04X} | PC: 0x{:04X} ({:04d}) | I: 0x{:04X} ({:04d}) | "
            "SP: {:04d} | DT: {:04d} | ST: {:04d} | Keys: {}"
        ).format(
            "RUNNING" if running else "PAUSED", opcode, opcode & 0xF000, cpu.pc, cpu.pc - PROGRAM_START, cpu.i, cpu.i,
            cpu.stack.depth(), cpu.dt, cpu.st, keys_down or "-"
        )

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def set_quiet(self, enabled):
        # Silences warnings and fault reports, but never the live trace
        self.quiet = enabled

    def output(self, cpu, instruction):
        print(self.debug(cpu, instruction))

    def warn(self, cpu, message):
        if not self.quiet:
            print("Warning at 0x{:03x}: {}".format(cpu.debug_pc, message))

    def report(self, message):
        if not self.quiet:
            print(message)
