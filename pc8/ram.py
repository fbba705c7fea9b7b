#!/usr/bin/env python3

"""
RAM Emulator

A flat 4K byte array.  The bottom 512 bytes are reserved for the interpreter,
with the hex digit font stored inside them, and programs are loaded from
0x200 upwards.

Every access is range checked.  Real hardware would wrap or read garbage, but
a program that strays outside memory is broken, so this is reported instead.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE, FONT_LOC, PROGRAM_START, SYSTEM_FONT
from .errors import OutOfBoundsError, RomTooLargeError


class RAM:
    def __init__(self, mem_size=MEM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_range(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_range(location, size)
        return bytes(self.mem[location:location + size])

    def write(self, location, byte):
        self.check_range(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_top = location + len(block)
        self.check_range(location, len(block))
        self.mem[location:block_top] = block

    def check_range(self, location, size=1):
        if location < 0:
            raise OutOfBoundsError(location)

        if location + size - 1 > self.mem_top:
            # Report the first address that doesn't exist
            raise OutOfBoundsError(max(location, self.mem_size))

    def load_font(self):
        self.write_block(FONT_LOC, SYSTEM_FONT)

    def load_rom(self, data):
        capacity = self.mem_size - PROGRAM_START

        if len(data) > capacity:
            raise RomTooLargeError(len(data), capacity)

        self.write_block(PROGRAM_START, data)

    def zero_block(self, offset, size):
        self.check_range(offset, size)
        self.mem[offset:offset + size] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)
