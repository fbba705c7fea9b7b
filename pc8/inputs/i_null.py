#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Input plugins translate host key codes into the 16 hex keys and write them into
the Keypad.  They also report when the user wants to quit, and, in step mode,
when the user asks for the next instruction.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap, keypad):
        self.keymap_dict = {}
        self.keypad = keypad
        self.step_requests = 0
        keymap_split = keymap.split(",")

        if len(keymap_split) != 0x10:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_defined_ord] = key_num

    def process_messages(self):
        return False  # Don't exit the program

    def host_key_event(self, host_key, down):
        # Returns True if the host key belongs to the keypad
        hex_key = self.keymap_dict.get(host_key)

        if hex_key is None:
            return False

        self.keypad.set_key(hex_key, down)
        return True

    def release_keys(self):
        # Used when the host stops sending key events, so no key is left stuck down
        self.keypad.release_all()

    def request_step(self):
        self.step_requests += 1

    def take_step_request(self):
        if self.step_requests:
            self.step_requests -= 1
            return True

        return False

    def shutdown(self):
        pass
