#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pc8.constants import FONT_LOC, SYSTEM_FONT
from pc8.errors import OutOfBoundsError, RomTooLargeError
from pc8.ram import RAM


class TestRAM(unittest.TestCase):
    def setUp(self):
        self.ram = RAM(5)

    def test_ram_init(self):
        self.assertEqual(0x1000, RAM().mem_size)
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_write(self):
        self.ram.write(1, 255)
        self.assertEqual("00ff000000", self.ram.mem.hex())
        self.assertEqual(255, self.ram.read(1))

    def test_ram_write_block(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.write_block(4, bytearray(b"\xFF"))
        self.assertEqual("00fdfe00ff", self.ram.mem.hex())
        self.assertEqual(b"\xFD\xFE", self.ram.read_block(1, 2))

    def test_ram_byte_overflow(self):
        self.assertRaises(OutOfBoundsError, self.ram.write, 5, 255)
        self.assertRaises(OutOfBoundsError, self.ram.read, 5)
        self.assertRaises(OutOfBoundsError, self.ram.read, -1)

    def test_ram_block_overflow(self):
        self.assertRaises(OutOfBoundsError, self.ram.write_block, 4, bytearray(b"\xFE\xFF"))
        # Nothing should be written if the block doesn't fit
        self.assertEqual("0000000000", self.ram.mem.hex())
        self.assertRaises(OutOfBoundsError, self.ram.read_block, 3, 3)

    def test_ram_overflow_address_reported(self):
        with self.assertRaises(OutOfBoundsError) as context:
            self.ram.read_block(4, 2)

        self.assertEqual(5, context.exception.address)

    def test_ram_zero_block(self):
        self.ram.write_block(0, bytearray(b"\xFC\xFD\xFE\xFF"))
        self.ram.zero_block(1, 2)
        self.assertEqual("fc0000ff00", self.ram.mem.hex())

    def test_ram_clear(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.clear()
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_load_font(self):
        ram = RAM()
        ram.load_font()
        self.assertEqual(SYSTEM_FONT, ram.read_block(FONT_LOC, 80))
        self.assertEqual(0xF0, ram.read(0x50))
        self.assertEqual(0x80, ram.read(0x9F))

    def test_ram_load_rom(self):
        ram = RAM()
        ram.load_rom(b"\x00\xE0\x12\x00")
        self.assertEqual(b"\x00\xE0\x12\x00", ram.read_block(0x200, 4))

    def test_ram_load_rom_largest(self):
        ram = RAM()
        ram.load_rom(b"\xAA" * 0xE00)
        self.assertEqual(0xAA, ram.read(0xFFF))

    def test_ram_load_rom_too_large(self):
        ram = RAM()

        with self.assertRaises(RomTooLargeError) as context:
            ram.load_rom(b"\xAA" * 0xE01)

        self.assertEqual(0xE01, context.exception.size)
        self.assertEqual(0xE00, context.exception.capacity)
        self.assertEqual(0, ram.read(0x200))
