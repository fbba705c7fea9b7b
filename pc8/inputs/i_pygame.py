#!/usr/bin/env python3

"""
PyGame Input Plugin

Scans the keyboard and passes key 'press' and 'release' events on to the
keypad.  The check should not be called more often than 60Hz, as constantly
checking the queue is time consuming.

ESC or closing the window quits.  Space asks for the next instruction when
single-stepping.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase


class Inputs(InputsBase):
    def __init__(self, keymap, keypad):
        self.pygame_methods = {
            pygame.QUIT:            self._pygame_quit,
            pygame.KEYDOWN:         self._pygame_keydown,
            pygame.KEYUP:           self._pygame_keyup,
            pygame.WINDOWFOCUSLOST: self._pygame_focus_lost
        }

        super().__init__(keymap, keypad)

    def process_messages(self):
        # Call PyGame method based on fast dictionary lookup of event
        quit_program = False

        for event in pygame.event.get():
            pygame_method = self.pygame_methods.get(event.type)

            if pygame_method and pygame_method(event):  # Check via short circuit that we don't have 'None'
                quit_program = True  # Process more events, even if planning to quit

        return quit_program

    def _pygame_quit(self, _):
        return True

    def _pygame_keydown(self, event):
        if not self.host_key_event(event.key, True) and event.key == pygame.K_SPACE:
            self.request_step()

        return False

    def _pygame_focus_lost(self, _):
        # Key releases made while another window has focus never arrive
        self.release_keys()
        return False

    def _pygame_keyup(self, event):
        if event.key == pygame.K_ESCAPE:
            return True

        self.host_key_event(event.key, False)
        return False
