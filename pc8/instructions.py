#!/usr/bin/env python3

"""
Instruction Decoder

Turns a raw 16-bit opcode into an Instruction: one of a fixed set of
operations, tagged by Op, plus the fields the operation takes.  Decoding never
touches machine state, so it can be tested (and disassembled) on its own.

Field naming follows the usual CHIP-8 references:
    nnn = address (lowest 12 bits)
    kk  = byte (lowest 8 bits)
    n   = nibble (lowest 4 bits)
    x/y = register numbers (second and third nibbles)
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from enum import Enum
from .errors import UnknownOpcodeError


class Op(Enum):
    CLS = "CLS"
    RET = "RET"
    SYS = "SYS"
    JP = "JP"
    CALL = "CALL"
    SE_BYTE = "SE_BYTE"
    SNE_BYTE = "SNE_BYTE"
    SE_REG = "SE_REG"
    LD_BYTE = "LD_BYTE"
    ADD_BYTE = "ADD_BYTE"
    LD_REG = "LD_REG"
    OR = "OR"
    AND = "AND"
    XOR = "XOR"
    ADD_REG = "ADD_REG"
    SUB = "SUB"
    SHR = "SHR"
    SUBN = "SUBN"
    SHL = "SHL"
    SNE_REG = "SNE_REG"
    LD_I = "LD_I"
    JP_V0 = "JP_V0"
    RND = "RND"
    DRW = "DRW"
    SKP = "SKP"
    SKNP = "SKNP"
    LD_VX_DT = "LD_VX_DT"
    LD_VX_K = "LD_VX_K"
    LD_DT_VX = "LD_DT_VX"
    LD_ST_VX = "LD_ST_VX"
    ADD_I = "ADD_I"
    LD_F = "LD_F"
    LD_B = "LD_B"
    LD_MEM_VX = "LD_MEM_VX"
    LD_VX_MEM = "LD_VX_MEM"


# Bitmask applied to the opcode, chosen by its first nibble.  Anything missing uses 0xF000.
OPCODE_MASKS = {
    0x0: 0xFFFF,  # Exact match (00E0, 00EE), otherwise SYS
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

OPCODE_TABLE = {
    0x00E0: Op.CLS,
    0x00EE: Op.RET,
    0x1000: Op.JP,
    0x2000: Op.CALL,
    0x3000: Op.SE_BYTE,
    0x4000: Op.SNE_BYTE,
    0x5000: Op.SE_REG,
    0x6000: Op.LD_BYTE,
    0x7000: Op.ADD_BYTE,
    0x8000: Op.LD_REG,
    0x8001: Op.OR,
    0x8002: Op.AND,
    0x8003: Op.XOR,
    0x8004: Op.ADD_REG,
    0x8005: Op.SUB,
    0x8006: Op.SHR,
    0x8007: Op.SUBN,
    0x800E: Op.SHL,
    0x9000: Op.SNE_REG,
    0xA000: Op.LD_I,
    0xB000: Op.JP_V0,
    0xC000: Op.RND,
    0xD000: Op.DRW,
    0xE09E: Op.SKP,
    0xE0A1: Op.SKNP,
    0xF007: Op.LD_VX_DT,
    0xF00A: Op.LD_VX_K,
    0xF015: Op.LD_DT_VX,
    0xF018: Op.LD_ST_VX,
    0xF01E: Op.ADD_I,
    0xF029: Op.LD_F,
    0xF033: Op.LD_B,
    0xF055: Op.LD_MEM_VX,
    0xF065: Op.LD_VX_MEM
}

# Assembly-style text for the debugger
MNEMONICS = {
    Op.CLS:       "CLS",
    Op.RET:       "RET",
    Op.SYS:       "SYS 0x{nnn:03x}",
    Op.JP:        "JP 0x{nnn:03x}",
    Op.CALL:      "CALL 0x{nnn:03x}",
    Op.SE_BYTE:   "SE V{x:X}, 0x{kk:02x}",
    Op.SNE_BYTE:  "SNE V{x:X}, 0x{kk:02x}",
    Op.SE_REG:    "SE V{x:X}, V{y:X}",
    Op.LD_BYTE:   "LD V{x:X}, 0x{kk:02x}",
    Op.ADD_BYTE:  "ADD V{x:X}, 0x{kk:02x}",
    Op.LD_REG:    "LD V{x:X}, V{y:X}",
    Op.OR:        "OR V{x:X}, V{y:X}",
    Op.AND:       "AND V{x:X}, V{y:X}",
    Op.XOR:       "XOR V{x:X}, V{y:X}",
    Op.ADD_REG:   "ADD V{x:X}, V{y:X}",
    Op.SUB:       "SUB V{x:X}, V{y:X}",
    Op.SHR:       "SHR V{x:X}, V{y:X}",
    Op.SUBN:      "SUBN V{x:X}, V{y:X}",
    Op.SHL:       "SHL V{x:X}, V{y:X}",
    Op.SNE_REG:   "SNE V{x:X}, V{y:X}",
    Op.LD_I:      "LD I, 0x{nnn:03x}",
    Op.JP_V0:     "JP V0, 0x{nnn:03x}",
    Op.RND:       "RND V{x:X}, 0x{kk:02x}",
    Op.DRW:       "DRW V{x:X}, V{y:X}, 0x{n:01x}",
    Op.SKP:       "SKP V{x:X}",
    Op.SKNP:      "SKNP V{x:X}",
    Op.LD_VX_DT:  "LD V{x:X}, DT",
    Op.LD_VX_K:   "LD V{x:X}, K",
    Op.LD_DT_VX:  "LD DT, V{x:X}",
    Op.LD_ST_VX:  "LD ST, V{x:X}",
    Op.ADD_I:     "ADD I, V{x:X}",
    Op.LD_F:      "LD F, V{x:X}",
    Op.LD_B:      "LD B, V{x:X}",
    Op.LD_MEM_VX: "LD [I], V{x:X}",
    Op.LD_VX_MEM: "LD V{x:X}, [I]"
}

# Operations which always set the program counter themselves, rather than falling through to the next instruction
BRANCH_OPS = frozenset((Op.RET, Op.JP, Op.CALL, Op.JP_V0))


class Instruction(namedtuple("Instruction", "op opcode x y n kk nnn")):
    __slots__ = ()

    @property
    def mnemonic(self):
        return MNEMONICS[self.op].format(x=self.x, y=self.y, n=self.n, kk=self.kk, nnn=self.nnn)

    def __str__(self):
        return self.mnemonic


def decode(opcode, address=0):
    nibble = opcode >> 12
    op = OPCODE_TABLE.get(opcode & OPCODE_MASKS.get(nibble, 0xF000))

    if op is None:
        if nibble == 0x0:
            # Machine code routine on the original hardware.  Modern interpreters ignore these.
            op = Op.SYS
        else:
            raise UnknownOpcodeError(opcode, address)

    return Instruction(
        op, opcode, (opcode & 0xF00) >> 8, (opcode & 0xF0) >> 4, opcode & 0xF, opcode & 0xFF, opcode & 0xFFF
    )
