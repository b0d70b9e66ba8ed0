#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, plus
zeroing and whole-image snapshots for post-mortem dumps.

Every access is bounds-checked.  Nothing wraps: a location outside the bank
is reported as a RAMError, which the ticker treats as an address fault.

A single region can be marked read-only.  System RAM uses this to stop
programs overwriting the built-in font, which is written once at reset.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RAMError(Exception):
    pass


class RAM:
    def __init__(self):
        self.protected = None
        self.resize(0)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(b"\x00" * mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def protect(self, location, size):
        # Only programs are stopped by this.  Use write_block(.., force=True) to fill the region.
        self.protected = range(location, location + size)

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        if size > 0:
            self.check_overflow(location)
            self.check_overflow(location + size - 1)

        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.check_protected(location, 1)
        self.mem[location] = byte

    def write_block(self, location, block, force=False):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(location)
        self.check_overflow(block_top - 1)

        if not force:
            self.check_protected(location, block_size)

        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location < 0 or location > self.mem_top:
            raise RAMError("Memory access out of range at 0x{:04x}".format(location))

    def check_protected(self, location, size):
        protected = self.protected

        if protected is None or size <= 0:
            return

        if location < protected.stop and location + size > protected.start:
            raise RAMError(
                "Write to protected region 0x{:03x}-0x{:03x} at 0x{:03x}".format(
                    protected.start, protected.stop - 1, max(location, protected.start)
                )
            )

    def zero_block(self, offset, size):
        block_top = offset + size
        self.check_overflow(block_top - 1)

        for i in range(offset, block_top):
            self.mem[i] = 0x00

    def clear(self):
        self.zero_block(0, self.mem_size)

    def snapshot(self):
        # Immutable copy of the entire bank, for dumps and fault reports
        return self.mem.tobytes()
