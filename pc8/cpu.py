#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each call
to step() runs exactly one instruction cycle: fetch two bytes at the program
counter, decode them into an Instruction, execute it, then move the program
counter on.

Every instruction checks everything that could fail (the next program counter
value, memory ranges, stack space) before it changes anything.  If an error is
raised, the machine is left exactly as it was before the instruction, which
keeps the crash report honest.  The CPU then refuses to run any further until
it is reset.

Timers are not tied to instructions.  run_frame() runs however many cycles fit
into one 60Hz frame at the configured clock speed, then ticks the timers once,
so timers keep the same pace whatever the clock speed is.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from random import Random
from .constants import DEFAULT_CLOCK_SPEED, FONT_GLYPH_SIZE, FONT_LOC, PC_TOP, PROGRAM_START, TIMER_FREQ
from .errors import MachineError, MachineHaltedError, OutOfBoundsError
from .instructions import BRANCH_OPS, Op, decode

CPU_ENDIAN = "big"  # CHIP-8 is big-endian
I_MAX = 0xFFFF      # I is a 16-bit register

StepResult = namedtuple("StepResult", "pc opcode mnemonic effects waiting")
Snapshot = namedtuple("Snapshot", "v i pc stack delay sound opcode mnemonic waiting cycles")


class CPUError(Exception):
    pass


class CPU:
    def __init__(self, ram, stack, framebuffer, keypad, timers, clock_speed=None, load_quirks=None, shift_quirks=None,
                 logic_quirks=None, jump_quirks=None, seed=None):

        self.ram = ram
        self.stack = stack
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.timers = timers
        self.rng = Random(seed)

        self.clock_speed = DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed

        if self.clock_speed <= 0:
            raise CPUError("Clock speed must be above zero operations per second")

        self.cycles_per_frame = self.clock_speed / TIMER_FREQ

        """
        Quirks
        ------

        - Load quirks : Fx55/Fx65 leave I pointing past the last register.  Disabled by default.
        - Shift quirks: 8xy6/8xyE shift Vx in place, ignoring Vy.  Enabled by default.
        - Logic quirks: 8xy1/8xy2/8xy3 reset VF.  Disabled by default.
        - Jump quirks : Bnnn adds Vx (the top nibble of nnn) instead of V0.  Disabled by default.
        """

        self.load_quirks = False if load_quirks is None else load_quirks
        self.shift_quirks = True if shift_quirks is None else shift_quirks
        self.logic_quirks = False if logic_quirks is None else logic_quirks
        self.jump_quirks = False if jump_quirks is None else jump_quirks

        # One handler per decoded operation
        self.operations = {
            Op.CLS:       self._00E0,
            Op.RET:       self._00EE,
            Op.SYS:       self._0nnn,
            Op.JP:        self._1nnn,
            Op.CALL:      self._2nnn,
            Op.SE_BYTE:   self._3xkk,
            Op.SNE_BYTE:  self._4xkk,
            Op.SE_REG:    self._5xy0,
            Op.LD_BYTE:   self._6xkk,
            Op.ADD_BYTE:  self._7xkk,
            Op.LD_REG:    self._8xy0,
            Op.OR:        self._8xy1,
            Op.AND:       self._8xy2,
            Op.XOR:       self._8xy3,
            Op.ADD_REG:   self._8xy4,
            Op.SUB:       self._8xy5,
            Op.SHR:       self._8xy6,
            Op.SUBN:      self._8xy7,
            Op.SHL:       self._8xyE,
            Op.SNE_REG:   self._9xy0,
            Op.LD_I:      self._Annn,
            Op.JP_V0:     self._Bnnn,
            Op.RND:       self._Cxkk,
            Op.DRW:       self._Dxyn,
            Op.SKP:       self._Ex9E,
            Op.SKNP:      self._ExA1,
            Op.LD_VX_DT:  self._Fx07,
            Op.LD_VX_K:   self._Fx0A,
            Op.LD_DT_VX:  self._Fx15,
            Op.LD_ST_VX:  self._Fx18,
            Op.ADD_I:     self._Fx1E,
            Op.LD_F:      self._Fx29,
            Op.LD_B:      self._Fx33,
            Op.LD_MEM_VX: self._Fx55,
            Op.LD_VX_MEM: self._Fx65
        }

        self.reset()

    def reset(self, start_location=PROGRAM_START):
        # Bytearrays are mutable, so this should be fast when a register is updated
        self.v = memoryview(bytearray(16))
        self.i = 0
        self.pc = start_location
        self.next_pc = start_location
        self.opcode = 0
        self.instruction = None
        self.awaiting_key = None  # Register waiting for a keypress, if any
        self.fault = None
        self.cycles = 0
        self.cycle_credit = 0.0
        self.effects = []

        self.ram.clear()
        self.ram.load_font()
        self.stack.clear()
        self.timers.reset()
        self.framebuffer.clear()
        self.keypad.setup_keypress()

    def load_rom(self, data):
        self.ram.load_rom(data)

    # Free-run and timers

    def run_frame(self, listener=None):
        # Run one 60Hz frame's worth of instruction cycles, then tick the timers.  The fractional part of the cycle
        # count carries over, so odd clock speeds average out correctly.
        self.cycle_credit += self.cycles_per_frame
        cycles_due = int(self.cycle_credit)
        self.cycle_credit -= cycles_due

        for _ in range(cycles_due):
            result = self.step(trace=listener is not None)

            if listener is not None:
                listener(result)

        self.tick_timers()
        return cycles_due

    def tick_timers(self):
        self.timers.tick()

    @property
    def sound_active(self):
        return self.timers.sound_active

    # Single instruction cycle

    def step(self, trace=True):
        return self._run(None, trace)

    def execute(self, instruction, trace=True):
        # Runs an already decoded instruction as if it had been fetched from the program counter
        if self.awaiting_key is not None:
            raise CPUError("Cannot execute an instruction while waiting for a keypress")

        return self._run(instruction, trace)

    def _run(self, instruction, trace):
        if self.fault is not None:
            raise MachineHaltedError(self.fault)

        try:
            return self._cycle(instruction, trace)
        except MachineError as err:
            self.fault = err
            raise

    def _cycle(self, instruction, trace):
        pc = self.pc
        before = self._state() if trace else None
        self.effects = []

        if self.awaiting_key is not None:
            # Still inside Fx0A.  The cycle passes, but the instruction doesn't retire until a key goes down.
            self._poll_keypress()
        else:
            if instruction is None:
                self.instruction = None
                self.opcode = self.fetch()
                instruction = decode(self.opcode, pc)

            self.instruction = instruction
            self.opcode = instruction.opcode

            if instruction.op not in BRANCH_OPS:
                # Ensure falling through is possible before anything is changed
                self._check_pc(pc + 2)

            self.next_pc = pc + 2
            self.operations[instruction.op]()

        # The program counter only moves once the instruction has fully executed
        self.pc = self.next_pc
        self.cycles += 1
        waiting = self.awaiting_key is not None

        return StepResult(
            pc, self.opcode, self.instruction.mnemonic, tuple(self._describe(before)) if trace else (), waiting
        )

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.pc, 2), CPU_ENDIAN, signed=False)

    def _check_pc(self, location):
        if not PROGRAM_START <= location <= PC_TOP:
            raise OutOfBoundsError(location, "Program counter would leave program memory")

    def _jump(self, location):
        self._check_pc(location)
        self.next_pc = location

    def _skip(self):
        self._jump(self.pc + 4)

    # Diagnostics

    def _state(self):
        return (
            bytes(self.v), self.i, self.pc, self.stack.get_items(), self.timers.delay, self.timers.sound
        )

    def _describe(self, before):
        # Compare the machine against its state before the cycle, listing what changed
        old_v, old_i, old_pc, old_stack, old_delay, old_sound = before

        for reg_num in range(16):
            if old_v[reg_num] != self.v[reg_num]:
                yield "V{:X}: 0x{:02x} -> 0x{:02x}".format(reg_num, old_v[reg_num], self.v[reg_num])

        if old_i != self.i:
            yield "I: 0x{:03x} -> 0x{:03x}".format(old_i, self.i)

        stack_items = self.stack.get_items()

        if len(stack_items) > len(old_stack):
            yield "Stack: push 0x{:03x}".format(stack_items[-1])
        elif len(stack_items) < len(old_stack):
            yield "Stack: pop 0x{:03x}".format(old_stack[-1])

        if old_delay != self.timers.delay:
            yield "DT: 0x{:02x} -> 0x{:02x}".format(old_delay, self.timers.delay)

        if old_sound != self.timers.sound:
            yield "ST: 0x{:02x} -> 0x{:02x}".format(old_sound, self.timers.sound)

        yield from self.effects

        if old_pc != self.pc:
            yield "PC: 0x{:03x} -> 0x{:03x}".format(old_pc, self.pc)

    def snapshot(self):
        return Snapshot(
            tuple(self.v), self.i, self.pc, self.stack.get_items(), self.timers.delay, self.timers.sound,
            self.opcode, self.instruction.mnemonic if self.instruction else "???", self.awaiting_key is not None,
            self.cycles
        )

    def _write_mem(self, location, byte):
        self.ram.write(location, byte)
        self.effects.append("[0x{:03x}]: 0x{:02x}".format(location, byte))

    # Operands always come from the decoded instruction, never from the raw opcode

    def _0nnn(self):  # SYS addr
        # Native machine code calls can't be emulated, so they are skipped
        pass

    def _00E0(self):  # CLS
        self.framebuffer.clear()
        self.effects.append("Display cleared")

    def _00EE(self):  # RET
        return_location = self.stack.peek()
        self._check_pc(return_location)
        self.next_pc = self.stack.pop()

    def _1nnn(self):  # JP addr
        self._jump(self.instruction.nnn)

    def _2nnn(self):  # CALL addr
        addr = self.instruction.nnn
        self._check_pc(addr)
        self.stack.push(self.pc + 2)
        self.next_pc = addr

    def _3xkk(self):  # SE Vx, byte
        if self.v[self.instruction.x] == self.instruction.kk:
            self._skip()

    def _4xkk(self):  # SNE Vx, byte
        if self.v[self.instruction.x] != self.instruction.kk:
            self._skip()

    def _5xy0(self):  # SE Vx, Vy
        if self.v[self.instruction.x] == self.v[self.instruction.y]:
            self._skip()

    def _6xkk(self):  # LD Vx, byte
        self.v[self.instruction.x] = self.instruction.kk

    def _7xkk(self):  # ADD Vx, byte
        # VF is never touched here, even on overflow
        vx = self.instruction.x
        self.v[vx] = (self.v[vx] + self.instruction.kk) & 0xFF

    def _post_8xy1_8xy2_8xy3(self):
        if self.logic_quirks:
            self.v[0xF] = 0

    def _8xy0(self):  # LD Vx, Vy
        self.v[self.instruction.x] = self.v[self.instruction.y]

    def _8xy1(self):  # OR Vx, Vy
        self.v[self.instruction.x] |= self.v[self.instruction.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self):  # AND Vx, Vy
        self.v[self.instruction.x] &= self.v[self.instruction.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self):  # XOR Vx, Vy
        self.v[self.instruction.x] ^= self.v[self.instruction.y]
        self._post_8xy1_8xy2_8xy3()

    # Flag-setting instructions work out the flag from the original operands, then write VF last.  If Vx is VF, the
    # flag wins, so VF is always 0 or 1 afterwards.

    def _8xy4(self):  # ADD Vx, Vy
        vx = self.instruction.x
        val = self.v[vx] + self.v[self.instruction.y]
        self.v[vx] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # VF is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.instruction.x] = val & 0xFF
        self.v[0xF] = int(val >= 0)  # VF is set when NOT borrowing

    def _8xy5(self):  # SUB Vx, Vy
        self._post_8xy5_8xy7(self.v[self.instruction.x] - self.v[self.instruction.y])

    def _shift_source(self):
        return self.v[self.instruction.x if self.shift_quirks else self.instruction.y]

    def _8xy6(self):  # SHR Vx {, Vy}
        val = self._shift_source()
        self.v[self.instruction.x] = val >> 1
        self.v[0xF] = val & 1

    def _8xy7(self):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(self.v[self.instruction.y] - self.v[self.instruction.x])

    def _8xyE(self):  # SHL Vx {, Vy}
        val = self._shift_source()
        self.v[self.instruction.x] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        if self.v[self.instruction.x] != self.v[self.instruction.y]:
            self._skip()

    def _Annn(self):  # LD I, addr
        self.i = self.instruction.nnn

    def _Bnnn(self):  # JP V0, addr
        vr = self.instruction.x if self.jump_quirks else 0
        self._jump(self.v[vr] + self.instruction.nnn)

    def _Cxkk(self):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.instruction.x] = self.rng.randint(0, 0xFF) & self.instruction.kk

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        # Reading the whole sprite first means a bad I fails before any pixel is drawn
        sprite = self.ram.read_block(self.i, self.instruction.n)
        collision = self.framebuffer.draw(self.v[self.instruction.x], self.v[self.instruction.y], sprite)
        self.v[0xF] = int(collision)
        self.effects.append("Display drawn{}".format(" (collision)" if collision else ""))

    def _Ex9E(self):  # SKP Vx
        if self.keypad.is_down(self.v[self.instruction.x]):
            self._skip()

    def _ExA1(self):  # SKNP Vx
        if not self.keypad.is_down(self.v[self.instruction.x]):
            self._skip()

    def _Fx07(self):  # LD Vx, DT
        self.v[self.instruction.x] = self.timers.delay

    def _Fx0A(self):  # LD Vx, K
        # Waiting must not stall the host, as timers still need to run and the display still needs updating.  Instead,
        # the CPU enters a waiting state and stays on this instruction, checking the keypad on every cycle.
        self.keypad.setup_keypress()  # Ignore keys that were already down
        self.awaiting_key = self.instruction.x
        self.next_pc = self.pc

    def _poll_keypress(self):
        key = self.keypad.get_keypress()

        if key is None:
            self.next_pc = self.pc
            return

        self.v[self.awaiting_key] = key
        self.awaiting_key = None
        self.next_pc = self.pc + 2

    def _Fx15(self):  # LD DT, Vx
        self.timers.set_delay(self.v[self.instruction.x])

    def _Fx18(self):  # LD ST, Vx
        self.timers.set_sound(self.v[self.instruction.x])

    def _Fx1E(self):  # ADD I, Vx
        # I is not wrapped.  Running past the end of RAM is caught when I is next used.
        self.i = min(self.i + self.v[self.instruction.x], I_MAX)

    def _Fx29(self):  # LD F, Vx
        self.i = FONT_LOC + FONT_GLYPH_SIZE * (self.v[self.instruction.x] & 0xF)

    def _Fx33(self):  # LD B, Vx
        val = self.v[self.instruction.x]
        i = self.i
        self.ram.check_range(i, 3)
        self._write_mem(i, val // 100)            # Most-significant digit
        self._write_mem(i + 1, (val // 10) % 10)  # Middle digit
        self._write_mem(i + 2, val % 10)          # Least-significant digit

    def _post_Fx55_Fx65(self):
        if self.load_quirks:
            self.i = min(self.i + self.instruction.x + 1, I_MAX)

    def _Fx55(self):  # LD [I], Vx
        i = self.i
        count = self.instruction.x + 1  # Ensure with +1 that the final register is included
        self.ram.check_range(i, count)

        for reg in range(count):
            self._write_mem(i + reg, self.v[reg])

        self._post_Fx55_Fx65()

    def _Fx65(self):  # LD Vx, [I]
        count = self.instruction.x + 1
        self.v[:count] = self.ram.read_block(self.i, count)
        self._post_Fx55_Fx65()
