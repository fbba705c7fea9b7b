#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "PlainChip8 Emulator"
APP_VERSION = "0.3.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEM_SIZE = 0x1000
FONT_LOC = 0x50
PROGRAM_START = 0x200
PC_TOP = MEM_SIZE - 3  # Highest address the program counter may rest on

# Display
VID_WIDTH = 64
VID_HEIGHT = 32

# Call stack depth
STACK_SIZE = 16

# Timing
TIMER_FREQ = 60.0                # Delay and sound timers always count down at 60Hz
DEFAULT_CLOCK_SPEED = 360        # Instructions per second
SPEED_PRESETS = {"0.5": 0.5, "1": 1.0, "2": 2.0}

# Hex digit glyphs 0-F, 5 rows each, written into RAM at FONT_LOC
SYSTEM_FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
FONT_GLYPH_SIZE = 5

# Default mappings for keys 0-F.  These are the keyscan codes (and ASCII characters) for '0'-'9' and 'a'-'f', so each
# hex key sits on the key with the same label
DEFAULT_KEYMAP = "48,49,50,51,52,53,54,55,56,57,97,98,99,100,101,102"

# Behaviour toggles (see CPU for defaults)
CPU_QUIRKS = ["load", "shift", "logic", "jump"]
