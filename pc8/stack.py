#!/usr/bin/env python3

"""
Stack Emulator

The call stack only ever holds return addresses, and programs have no way to
address it, so it lives outside emulated RAM as a plain bounded list.

CHIP-8 programs are written against 16 levels of nesting.  Going deeper, or
returning with nothing to return to, means the program has gone wrong, so both
are fatal.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_SIZE
from .errors import StackOverflowError, StackUnderflowError


class Stack:
    def __init__(self, size=STACK_SIZE):
        self.items = []
        self.size = size

    def push(self, item):
        if self.is_full():
            raise StackOverflowError("Stack overflow (more than {} nested calls)".format(self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflowError("Stack underflow (return without a call)") from None

    def peek(self):
        if not self.items:
            raise StackUnderflowError("Stack underflow (return without a call)")

        return self.items[-1]

    def is_full(self):
        return len(self.items) >= self.size

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For debugging
        return tuple(self.items)

    def __len__(self):
        return len(self.items)
