#!/usr/bin/env python3

"""
Machine Errors

Every condition that stops the emulated machine derives from MachineError, so
the launcher only needs to catch one type to halt cleanly.  None of these are
recoverable; once raised, the CPU refuses to continue until it is reset.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class MachineError(Exception):
    pass


class OutOfBoundsError(MachineError):
    def __init__(self, address, message="Address out of bounds"):
        self.address = address
        super().__init__("{}: 0x{:04x}".format(message, address))


class UnknownOpcodeError(MachineError):
    def __init__(self, opcode, address):
        self.opcode = opcode
        self.address = address
        super().__init__("Opcode 0x{:04x} at address 0x{:03x} is not a CHIP-8 instruction".format(opcode, address))


class StackError(MachineError):
    pass


class StackOverflowError(StackError):
    pass


class StackUnderflowError(StackError):
    pass


class RomTooLargeError(MachineError):
    def __init__(self, size, capacity):
        self.size = size
        self.capacity = capacity
        super().__init__("ROM is {} bytes, but only {} bytes are available".format(size, capacity))


class MachineHaltedError(MachineError):
    def __init__(self, fault):
        self.fault = fault
        super().__init__("Emulation halted by an earlier error: {}".format(fault))
