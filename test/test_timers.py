#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pc8.timers import Timers


class TestTimers(unittest.TestCase):
    def setUp(self):
        self.timers = Timers()

    def test_timers_tick(self):
        self.timers.set_delay(3)
        self.timers.set_sound(1)
        self.timers.tick()
        self.assertEqual(2, self.timers.delay)
        self.assertEqual(0, self.timers.sound)

    def test_timers_never_underflow(self):
        self.timers.set_delay(2)

        for _ in range(10):
            self.timers.tick()

        self.assertEqual(0, self.timers.delay)
        self.assertEqual(0, self.timers.sound)

    def test_timers_sound_active(self):
        self.assertFalse(self.timers.sound_active)
        self.timers.set_sound(2)
        self.assertTrue(self.timers.sound_active)
        self.timers.tick()
        self.assertTrue(self.timers.sound_active)
        self.timers.tick()
        self.assertFalse(self.timers.sound_active)

    def test_timers_reset(self):
        self.timers.set_delay(0xFF)
        self.timers.set_sound(0xFF)
        self.timers.reset()
        self.assertEqual((0, 0), (self.timers.delay, self.timers.sound))
