#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  The CPU
holds the registers, index register, program counter and both timers, and
executes one instruction each time step() is called.  It has no clock of its
own: the ticker decides when instructions run and when the timers count down.

Each step fetches the word at the program counter, moves the program counter
on by 2, decodes the word and calls the method registered for its kind.
Instructions that jump, call or return set the program counter outright.
Skips add another 2 on top.

Quirks
------

- Shift quirks: SHR and SHL read their source from Vy unless enabled, in which
  case Vx is used (the later Super-CHIP convention).
  SHL follows SHR here, so by default 8XYE shifts Vy into Vx, unlike the
  tables that list it as shifting Vx in place.
- Logic quirks: OR, AND and XOR clear Vf unless disabled.

Flag-setting instructions always write Vf last, after their operands are read
and the result is stored.  This matters when Vf is itself an operand.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import (
    APP_INTRO, FONT_ADDR, FONT_DATA, FONT_GLYPH_SIZE, MEMORY_SIZE, NUM_REGS, PROGRAM_START
)
from .decoder import KINDS, decode, disassemble, fetch


class CPUError(Exception):
    pass


class CPU:
    def __init__(self, ram, stack, framebuffer, keypad, debugger, rng=None, shift_quirks=None, logic_quirks=None):
        self.ram = ram
        self.stack = stack
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.debugger = debugger
        self.rng = Random() if rng is None else rng

        self.shift_quirks = False if shift_quirks is None else shift_quirks
        self.logic_quirks = True if logic_quirks is None else logic_quirks

        # Define instruction pointers by decoded kind.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            "SYS": self._0nnn,
            "CLS": self._00E0,
            "RET": self._00EE,
            "JP": self._1nnn,
            "CALL": self._2nnn,
            "SE_BYTE": self._3xkk,
            "SNE_BYTE": self._4xkk,
            "SE_REG": self._5xy0,
            "LD_BYTE": self._6xkk,
            "ADD_BYTE": self._7xkk,
            "LD_REG": self._8xy0,
            "OR": self._8xy1,
            "AND": self._8xy2,
            "XOR": self._8xy3,
            "ADD_REG": self._8xy4,
            "SUB": self._8xy5,
            "SHR": self._8xy6,
            "SUBN": self._8xy7,
            "SHL": self._8xyE,
            "SNE_REG": self._9xy0,
            "LD_I": self._Annn,
            "JP_V0": self._Bnnn,
            "RND": self._Cxkk,
            "DRW": self._Dxyn,
            "SKP": self._Ex9E,
            "SKNP": self._ExA1,
            "LD_VX_DT": self._Fx07,
            "LD_VX_K": self._Fx0A,
            "LD_DT_VX": self._Fx15,
            "LD_ST_VX": self._Fx18,
            "ADD_I": self._Fx1E,
            "LD_F": self._Fx29,
            "LD_B": self._Fx33,
            "LD_I_VX": self._Fx55,
            "LD_VX_I": self._Fx65
        }

        if set(self.instructions) != KINDS:
            raise CPUError("Instruction table does not match the decoder")

        # Initialise registers
        self.v = memoryview(bytearray(NUM_REGS))  # Mutable, so register updates are fast
        self.i = 0  # Index register
        self.i_bitmask = 0xFFFF  # 16-bit index register

        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer

        self.pc = PROGRAM_START
        self.debug_pc = PROGRAM_START
        self.opcode = 0
        self.instruction = decode(0)

        self.reset()

    def reset(self):
        # Power-on state.  The font is written once here and is read-only from then on.
        ram = self.ram
        ram.protected = None
        ram.resize(MEMORY_SIZE)
        ram.write_block(FONT_ADDR, FONT_DATA, force=True)
        ram.protect(FONT_ADDR, len(FONT_DATA))

        self.v[:] = bytes(NUM_REGS)
        self.i = 0
        self.dt = 0
        self.st = 0
        self.pc = PROGRAM_START
        self.debug_pc = PROGRAM_START
        self.opcode = 0
        self.instruction = decode(0)
        self.stack.clear()
        self.framebuffer.clear()

    @staticmethod
    def check_program(data):
        if len(data) > MEMORY_SIZE - PROGRAM_START:
            raise CPUError(
                "Program is {} bytes, but only {} bytes are available from 0x{:03x}".format(
                    len(data), MEMORY_SIZE - PROGRAM_START, PROGRAM_START
                )
            )

    def load_program(self, data):
        # Check the size first, so an oversize image leaves memory untouched
        self.check_program(data)
        self.ram.write_block(PROGRAM_START, data)

    def step(self):
        # Keep track of the program counter before altering it in any way for debugging purposes
        self.debug_pc = self.pc  # Do this all the time in case there is a crash
        self.opcode = fetch(self.ram, self.pc)
        self.instruction = decode(self.opcode)
        self.inc_pc()  # Program counter updates after fetch, but before execute

        if self.debugger.is_live():
            self.debugger.output(self, disassemble(self.instruction))

        self.exec_instruction()

    def exec_instruction(self):
        instruction = self.instructions.get(self.instruction.kind)

        if instruction is None:
            self._opcode_unsupported()

        instruction()

    def inc_pc(self):
        self.pc += 2

    def dec_pc(self):
        # Only used to re-run instructions (keypress wait)
        self.pc -= 2

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so read
    # them from the decoded instruction rather than repeating the bit masks everywhere.
    @property
    def vx(self):
        return self.instruction.x

    @property
    def vy(self):
        return self.instruction.y

    @property
    def addr(self):
        return self.instruction.nnn

    @property
    def byte(self):
        return self.instruction.nn

    @property
    def nibble(self):
        return self.instruction.n

    def _opcode_unsupported(self):
        raise CPUError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\nUnknown opcode 0x{:04x} (instruction 0x{:x}000) at offset {} (address 0x{:03x})."
            ).format(
                APP_INTRO, self.debugger.debug(self, "???", verbose=True), self.opcode, self.instruction.family,
                self.debug_pc - PROGRAM_START, self.debug_pc
            )
        ) from None

    def _post_skip(self):
        self.inc_pc()

    def _0nnn(self):  # SYS addr
        # Machine code routines can't run here.  Carry on, but make some noise about it.
        self.debugger.warn(self, "Ignoring machine code call 0x{:04x}".format(self.opcode))

    def _00E0(self):  # CLS
        self.framebuffer.clear()

    def _00EE(self):  # RET
        # The stack holds the address of the CALL itself, so step over it
        self.pc = self.stack.pop()
        self.inc_pc()

    def _1nnn(self):  # JP addr
        self.pc = self.addr

    def _2nnn(self):  # CALL addr
        self.stack.push(self.debug_pc)
        self.pc = self.addr

    def _3xkk(self):  # SE Vx, byte
        if self.v[self.vx] == self.byte:
            self._post_skip()

    def _4xkk(self):  # SNE Vx, byte
        if self.v[self.vx] != self.byte:
            self._post_skip()

    def _5xy0(self):  # SE Vx, Vy
        if self.v[self.vx] == self.v[self.vy]:
            self._post_skip()

    def _6xkk(self):  # LD Vx, byte
        self.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        self.v[vx] = (self.v[vx] + self.byte) & 0xFF  # Vf is not affected

    def _post_8xy1_8xy2_8xy3(self):
        if self.logic_quirks:
            self.v[0xF] = 0

    def _8xy0(self):  # LD Vx, Vy
        self.v[self.vx] = self.v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        self.v[self.vx] |= self.v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self):  # AND Vx, Vy
        self.v[self.vx] &= self.v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self):  # XOR Vx, Vy
        self.v[self.vx] ^= self.v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy4(self):  # ADD Vx, Vy
        val = self.v[self.vx] + self.v[self.vy]
        self.v[self.vx] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.vx] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes Vf is specified in the
        # parameters.
        self.v[0xF] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        self._post_8xy5_8xy7(self.v[self.vx] - self.v[self.vy])

    def _8xy6(self):  # SHR Vx {, Vy}
        val = self.v[self.vx if self.shift_quirks else self.vy]
        self.v[self.vx] = val >> 1  # The result is put in Vx either way
        self.v[0xF] = val & 1

    def _8xy7(self):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(self.v[self.vy] - self.v[self.vx])

    def _8xyE(self):  # SHL Vx {, Vy}
        val = self.v[self.vx if self.shift_quirks else self.vy]
        self.v[self.vx] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        if self.v[self.vx] != self.v[self.vy]:
            self._post_skip()

    def _Annn(self):  # LD I, addr
        self.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        # Not masked.  Landing past the end of memory leaves the ticker idle.
        self.pc = self.addr + self.v[0x0]

    def _Cxkk(self):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = self.rng.randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        # Main sprite drawing routine.  Sprites are always 8 pixels wide and 'nibble' rows tall.
        height = self.nibble
        vid_width, vid_height = self.framebuffer.get_vid_size()
        vx_pos = self.v[self.vx] % vid_width
        vy_pos = self.v[self.vy] % vid_height
        # Read the whole sprite up front, so a bad index register stops the draw before anything changes
        sprite = self.ram.read_block(self.i, height)
        collided = False

        for y, spr_data in enumerate(sprite):
            for x in range(8):
                if spr_data & (0x80 >> x):
                    if self.framebuffer.xor_pixel(vx_pos + x, vy_pos + y):
                        # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                        collided = True

        self.v[0xF] = int(collided)

    def _Ex9E(self):  # SKP Vx
        if self.keypad.is_key_down(self.v[self.vx]):
            self._post_skip()

    def _ExA1(self):  # SKNP Vx
        if not self.keypad.is_key_down(self.v[self.vx]):
            self._post_skip()

    def _Fx07(self):  # LD Vx, DT
        self.v[self.vx] = self.dt

    def _Fx0A(self):  # LD Vx, K
        # This opcode waits for a keypress, but since the timers still need to count down and the display still needs
        # updating, we return control to the ticker and simply rewind the program counter.  The same instruction runs
        # again on the next tick.
        key = self.keypad.get_keypress()

        if key is None:
            self.dec_pc()
        else:
            self.v[self.vx] = key

    def _Fx15(self):  # LD DT, Vx
        self.dt = self.v[self.vx]

    def _Fx18(self):  # LD ST, Vx
        self.st = self.v[self.vx]

    def _Fx1E(self):  # ADD I, Vx
        self.i = (self.i + self.v[self.vx]) & self.i_bitmask

    def _Fx29(self):  # LD F, Vx
        self.i = FONT_ADDR + FONT_GLYPH_SIZE * self.v[self.vx]

    def _Fx33(self):  # LD B, Vx
        val = self.v[self.vx]
        # Hundreds, tens, then ones
        self.ram.write_block(self.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _Fx55(self):  # LD [I], Vx
        # Ensure with +1s that the final register is copied.  I is left as it is.
        self.ram.write_block(self.i, self.v[:self.vx + 1])

    def _Fx65(self):  # LD Vx, [I]
        vx = self.vx
        self.v[:vx + 1] = self.ram.read_block(self.i, vx + 1)
