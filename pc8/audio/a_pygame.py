#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the buzzer tone within PyGame / SDL.

The buzzer only has an 'on' or 'off' state, so a short square wave is built at
the requested pitch and looped for as long as the buzzer is on.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self):
        self.sound = None
        self.frequency = None
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        super().__init__()

    def set_frequency(self, frequency):
        # Setting PyGame's playback rate is very slow, so build a new sample instead
        if frequency == self.frequency:
            return

        self.frequency = frequency
        half_period = max(1, int(PLAYBACK_FREQUENCY / frequency / 2))
        sample = (b"\x00" * half_period) + (b"\xFF" * half_period)
        was_enabled = self.buzzer_enabled

        if was_enabled:
            self.enable_buzzer(False)

        self.sound = pygame.mixer.Sound(buffer=sample)
        self.sound.set_volume(DEFAULT_VOLUME)

        if was_enabled:
            self.enable_buzzer(True)

    def enable_buzzer(self, enabled):
        # If the tone is already playing, it won't be restarted
        if enabled == self.buzzer_enabled:
            return

        if enabled:
            self.sound.play(-1)
        else:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
