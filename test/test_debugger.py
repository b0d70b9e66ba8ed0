#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import io
import unittest
from contextlib import redirect_stdout
from nchip.constants import STACK_DEPTH
from nchip.cpu import CPU
from nchip.debugger import Debugger
from nchip.framebuffer import Framebuffer
from nchip.keypad import Keypad
from nchip.ram import RAM
from nchip.renderers.r_null import Renderer
from nchip.stack import Stack


class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.debugger = Debugger()
        self.keypad = Keypad()
        self.stack = Stack(STACK_DEPTH)
        self.cpu = CPU(RAM(), self.stack, Framebuffer(Renderer()), self.keypad, self.debugger)

    def test_debugger_debug_line(self):
        self.cpu.v[0xF] = 0xAB
        self.cpu.v[0x0] = 0x01
        self.cpu.i = 0x123
        self.cpu.dt = 0x10
        self.cpu.st = 0x20
        self.cpu.opcode = 0x6A02
        self.assertEqual(
            "V: 0xab000000000000000000000000000001 I: 0x0123 DT: 0x10 ST: 0x20 PC: 0x200 OP: 0x6a02 IN: LD VA, 0x02",
            self.debugger.debug(self.cpu, "LD VA, 0x02")
        )

    def test_debugger_verbose(self):
        text = self.debugger.debug(self.cpu, "???", verbose=True)
        self.assertIn("\nStack: (Empty)", text)
        self.assertIn("\nKeys: (None)", text)

        self.stack.push(0x200)
        self.stack.push(0x20A)
        self.keypad.press(0x3)
        self.keypad.press(0xC)
        text = self.debugger.debug(self.cpu, "???", verbose=True)
        self.assertIn("\nStack: 0x200 0x20a", text)
        self.assertIn("\nKeys: 3 c", text)

    def test_debugger_status(self):
        self.cpu.load_program(b"\x6A\x02")
        self.cpu.i = 0x50
        self.cpu.dt = 7
        self.assertEqual(
            "RUNNING opcode: 0x6A02 | inst: 0x6000 | PC: 0x0200 (0000) | I: 0x0050 (0080) | SP: 0000 | DT: 0007 | "
            "ST: 0000 | Keys: -",
            self.debugger.status(self.cpu, True)
        )

    def test_debugger_status_keys(self):
        self.keypad.press(0x3)
        self.keypad.press(0xC)
        self.assertTrue(self.debugger.status(self.cpu, True).endswith(" | Keys: 3 C"))

        keys = [False] * 16
        keys[0x0] = True
        keys[0xF] = True
        self.assertTrue(self.debugger.status(self.cpu, False, keys).endswith(" | Keys: 0 F"))

    def test_debugger_status_past_memory(self):
        self.cpu.pc = 0x1000
        status = self.debugger.status(self.cpu, False)
        self.assertTrue(status.startswith("PAUSED opcode: 0x0000 | inst: 0x0000 | PC: 0x1000 (3584)"))

    def test_debugger_live(self):
        self.assertFalse(self.debugger.is_live())
        self.debugger.set_live(True)
        self.cpu.load_program(b"\x6A\x02")
        output = io.StringIO()

        with redirect_stdout(output):
            self.cpu.step()

        self.assertIn("IN: LD VA, 0x02", output.getvalue())

    def test_debugger_warning(self):
        self.cpu.load_program(b"\x01\x23")
        output = io.StringIO()

        with redirect_stdout(output):
            self.cpu.step()

        self.assertEqual("Warning at 0x200: Ignoring machine code call 0x0123\n", output.getvalue())

    def test_debugger_quiet(self):
        self.debugger.set_quiet(True)
        output = io.StringIO()

        with redirect_stdout(output):
            self.debugger.warn(self.cpu, "Hidden")
            self.debugger.report("Hidden")

        self.assertEqual("", output.getvalue())
