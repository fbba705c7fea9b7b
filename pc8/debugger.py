#!/usr/bin/env python3

"""
CPU Debugger

Formats CPU snapshots as text.  The CPU knows nothing about debugging; the
driver decides when to ask for output.  Each line shows:
    * All 16 of the [V] registers, starting with most significant (VF) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter
    * OP - OpCode number
    * IN - Decoded instruction

If a crash occurs, the stack contents are added.  When a StepResult is given,
the side effects of that cycle are listed underneath.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Debugger:
    def debug(self, snapshot, verbose=False):
        debug_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} IN: {}"
        ).format(
            *[snapshot.v[reg_num] for reg_num in range(15, -1, -1)] +
            [snapshot.i, snapshot.delay, snapshot.sound, snapshot.pc, snapshot.opcode, snapshot.mnemonic]
        )

        if snapshot.waiting:
            debug_str += " (waiting for key)"

        if verbose:
            stack_str = (" 0x{:03x}" * len(snapshot.stack)).format(*snapshot.stack)
            debug_str += "\nStack:{}".format(stack_str or " (Empty)")
            debug_str += "\nCycles: {}".format(snapshot.cycles)

        return debug_str

    def describe_step(self, result):
        header = "[PC:0x{:03x}] [RAW:0x{:04x}] {}".format(result.pc, result.opcode, result.mnemonic)

        if result.waiting and not result.effects:
            return header + " (waiting for key)"

        return "\n".join([header] + ["    {}".format(effect) for effect in result.effects])

    def output(self, snapshot, result=None):
        if result is not None:
            print(self.describe_step(result))

        print(self.debug(snapshot))
