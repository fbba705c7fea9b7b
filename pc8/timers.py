#!/usr/bin/env python3

"""
Delay and Sound Timers

Two independent 8-bit counters which count down to zero at 60Hz.  Programs
use the delay timer for pacing, and the buzzer sounds for as long as the sound
timer is above zero.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Timers:
    def __init__(self):
        self.delay = 0
        self.sound = 0

    def tick(self):
        if self.delay > 0:
            self.delay -= 1

        if self.sound > 0:
            self.sound -= 1

    def set_delay(self, value):
        self.delay = value & 0xFF

    def set_sound(self, value):
        self.sound = value & 0xFF

    @property
    def sound_active(self):
        # The only thing the audio plugin needs to know
        return self.sound > 0

    def reset(self):
        self.delay = 0
        self.sound = 0
