#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from nchip.ram import RAM, RAMError


class TestRAM(unittest.TestCase):
    def setUp(self):
        self.ram = RAM()
        self.ram.resize(5)

    def test_ram_init(self):
        ram = RAM()
        self.assertEqual("", ram.mem.hex())

    def test_ram_resize(self):
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_write(self):
        self.ram.write(1, 255)
        self.assertEqual("00ff000000", self.ram.mem.hex())
        self.assertEqual(255, self.ram.read(1))

    def test_ram_write_block(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.write_block(4, bytearray(b"\xFF"))
        self.assertEqual("00fdfe00ff", self.ram.mem.hex())
        self.assertEqual("fdfe", self.ram.read_block(1, 2).hex())

    def test_ram_byte_overflow(self):
        self.assertRaises(RAMError, self.ram.write, 5, 255)
        self.assertRaises(RAMError, self.ram.write, -1, 255)

    def test_ram_read_overflow(self):
        self.assertRaises(RAMError, self.ram.read, 5)
        self.assertRaises(RAMError, self.ram.read_block, 4, 2)
        self.assertRaises(RAMError, self.ram.read_block, -1, 2)

    def test_ram_read_empty_block(self):
        # Zero-length reads never fault, wherever they point
        self.assertEqual(b"", self.ram.read_block(0, 0).tobytes())
        self.assertEqual(b"", self.ram.read_block(0x1000, 0).tobytes())

    def test_ram_block_overflow(self):
        self.assertRaises(RAMError, self.ram.write_block, 4, bytearray(b"\xFE\xFF"))
        # Nothing should have been written
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_protected_region(self):
        self.ram.protect(1, 2)
        self.assertRaises(RAMError, self.ram.write, 1, 0xAA)
        self.assertRaises(RAMError, self.ram.write, 2, 0xAA)
        self.assertRaises(RAMError, self.ram.write_block, 0, b"\x01\x02")
        self.assertRaises(RAMError, self.ram.write_block, 2, b"\x01\x02")
        self.assertEqual("0000000000", self.ram.mem.hex())

        # Either side of the region is fine
        self.ram.write(0, 0xAA)
        self.ram.write_block(3, b"\xBB\xCC")
        self.assertEqual("aa0000bbcc", self.ram.mem.hex())

        # Forced writes are for the system, e.g. loading fonts
        self.ram.write_block(1, b"\x11\x22", force=True)
        self.assertEqual("aa1122bbcc", self.ram.mem.hex())

        # Protected data can still be read
        self.assertEqual(0x22, self.ram.read(2))

    def test_ram_zero_block(self):
        self.ram.write_block(0, bytearray(b"\xFC\xFD\xFE\xFF"))
        self.assertEqual("fcfdfeff00", self.ram.mem.hex())
        self.ram.zero_block(1, 2)
        self.assertEqual("fc0000ff00", self.ram.mem.hex())

    def test_ram_clear(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.assertEqual("00fdfe0000", self.ram.mem.hex())
        self.ram.clear()
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_snapshot(self):
        self.ram.write_block(0, b"\x01\x02")
        snapshot = self.ram.snapshot()
        self.ram.write(0, 0x09)
        # The snapshot is a copy, so later writes don't show up in it
        self.assertEqual(b"\x01\x02\x00\x00\x00", snapshot)
