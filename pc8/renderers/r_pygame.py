#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the framebuffer onto an SDL window surface via PyGame.  The surface is
allocated at the emulated resolution (64x32), and then the contents are
stretched ('Nearest Neighbour') to fit the window, so each emulated pixel is
only written once per frame.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME, VID_WIDTH, VID_HEIGHT

COLOUR_OFF = 0x222222
COLOUR_ON = 0xDDDDDD


class Renderer(RendererBase):
    def __init__(self, scale=None, **kwargs):
        if scale is None:
            scale = 512  # Default window width if not supplied

        if scale < VID_WIDTH:
            raise RendererError("Window width must be at least {} pixels.".format(VID_WIDTH))

        pygame.display.init()
        self.scaled_size = (scale, scale * VID_HEIGHT // VID_WIDTH)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.rgb_buffer = memoryview(bytearray(VID_WIDTH * VID_HEIGHT * 3))  # 24-bit

        # Split compound RGB values for faster byte-based lookup later
        self.rgb_map = [bytes((i >> 16, (i >> 8) & 0xFF, i & 0xFF)) for i in (COLOUR_OFF, COLOUR_ON)]

        super().__init__(scale)
        self.set_title(APP_NAME)

    def refresh_display(self, rows):
        super().refresh_display(rows)
        rgb_location = 0

        # Update RGB buffer in-place to minimise allocations and PyGame calls
        for row in rows:
            for pixel in row:
                self.rgb_buffer[rgb_location:rgb_location + 3] = self.rgb_map[pixel]
                rgb_location += 3

        # Blit the bytearray straight to the surface, rather than setting pixels one by one
        render_surface = pygame.image.frombuffer(self.rgb_buffer, (VID_WIDTH, VID_HEIGHT), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()

    def set_title(self, title):
        super().set_title(title)
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
