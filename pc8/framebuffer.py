#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and the host renderer pulls the whole grid once per
displayed frame.  Programs cannot write into video memory directly.  The only
ways to change the picture are clearing it, or drawing sprites with XOR.

Each sprite is 8 pixels wide, one byte per row, most significant bit on the
left.  Drawing starts at the given coordinates (wrapped onto the screen) and
any pixels that run off an edge wrap around to the opposite edge.

A collision is reported when a lit pixel is switched off by a draw.  Games use
this for hit detection.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT
from .ram import RAM


class Framebuffer():
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.vram = RAM(self.vid_size)
        self.changed = True  # Always draw the first frame

    def clear(self):
        self.vram.clear()
        self.changed = True

    def xor_pixel(self, x, y):
        # Returns flagging any collision
        x %= self.vid_width
        y %= self.vid_height
        vram_loc = y * self.vid_width + x
        pixel = self.vram.read(vram_loc)
        self.vram.write(vram_loc, pixel ^ 0xFF)
        return pixel != 0

    def draw(self, x, y, sprite_bytes):
        x %= self.vid_width
        y %= self.vid_height
        collision = False

        for row, spr_data in enumerate(sprite_bytes):
            for col in range(8):
                if spr_data & (0x80 >> col):
                    # Don't stop drawing on a collision, just remember it
                    if self.xor_pixel(x + col, y + row):
                        collision = True

        if sprite_bytes:
            self.changed = True

        return collision
    def get_rows(self):
        # Read-only copy for renderers
        mem = self.vram.mem
        width = self.vid_width
        return tuple(
            tuple(mem[offset + x] != 0 for x in range(width))
            for offset in range(0, self.vid_size, width)
        )

    def collect_frame(self):
        # Returns the grid if it has changed since the last call, otherwise None
        if not self.changed:
            return None

        self.changed = False
        return self.get_rows()
