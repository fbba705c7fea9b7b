#!/usr/bin/env python3

"""
Keypad State

The 16-key hex keypad.  Input plugins write into this before the CPU runs, and
the CPU only ever reads from it.

As well as the current up/down state of each key, the most recent key to go
down is latched.  The 'wait for key' instruction resets the latch when it
starts waiting, then polls it each cycle, so only a fresh press will release
it, and not a key that was already held.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

NUM_KEYS = 0x10


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None

    def set_key(self, key, down):
        if not 0 <= key < NUM_KEYS:
            raise KeypadError("Key 0x{:x} does not exist on the keypad".format(key))

        if down and not self.key_down[key]:
            self.last_keypress = key

        self.key_down[key] = down

    def is_down(self, key):
        # Only the low nibble selects a key, so a stray register value can't escape the keypad
        return self.key_down[key & 0xF]

    def setup_keypress(self):
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress

    def release_all(self):
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None
