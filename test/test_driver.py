#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from contextlib import redirect_stdout
from io import StringIO
from pc8 import new_machine
from pc8.audio.a_null import Audio
from pc8.constants import DEFAULT_KEYMAP
from pc8.debugger import Debugger
from pc8.driver import Driver
from pc8.inputs.i_null import Inputs, InputsError
from pc8.renderers.r_null import Renderer


class QuittingInputs(Inputs):
    def process_messages(self):
        return True


class TestDriver(unittest.TestCase):
    def setUp(self):
        # Sets the sound timer, draws digit 0 in the corner, then loops forever
        self.cpu = new_machine(rom=bytes.fromhex("6103f118f029d0051208"), clock_speed=360)
        self.renderer = Renderer()
        self.inputs = Inputs(DEFAULT_KEYMAP, self.cpu.keypad)
        self.audio = Audio()

    def _driver(self, inputs=None, **kwargs):
        return Driver(self.cpu, self.renderer, inputs or self.inputs, self.audio, Debugger(), **kwargs)

    def test_driver_title(self):
        self._driver()
        self.assertEqual("PlainChip8 Emulator - 0 FPS, 0 OPS", self.renderer.title)

    def test_driver_frame(self):
        driver = self._driver()
        self.assertTrue(driver.frame())
        self.assertEqual(6, self.cpu.cycles)
        self.assertTrue(self.renderer.last_frame[0][0])
        self.assertTrue(self.audio.buzzer_enabled)
        self.assertEqual(6, driver.perf_counter_ops)

    def test_driver_buzzer_stops(self):
        driver = self._driver()

        for _ in range(4):
            driver.frame()

        self.assertFalse(self.audio.buzzer_enabled)

    def test_driver_quit(self):
        driver = self._driver(inputs=QuittingInputs(DEFAULT_KEYMAP, self.cpu.keypad))
        self.assertFalse(driver.frame())
        self.assertEqual(0, self.cpu.cycles)

    def test_driver_step_mode(self):
        driver = self._driver(step=True)
        output = StringIO()

        with redirect_stdout(output):
            driver.frame()
            self.assertEqual(0, self.cpu.cycles)
            self.inputs.request_step()
            self.inputs.request_step()
            driver.frame()

        self.assertEqual(2, self.cpu.cycles)
        self.assertEqual(0x204, self.cpu.pc)
        self.assertIn("[PC:0x202] [RAW:0xf118] LD ST, V1", output.getvalue())

    def test_driver_debug_output(self):
        driver = self._driver(debug=True)
        output = StringIO()

        with redirect_stdout(output):
            driver.frame()

        self.assertEqual(6, output.getvalue().count("[PC:"))

    def test_inputs_host_keys(self):
        self.assertTrue(self.inputs.host_key_event(ord("a"), True))
        self.assertTrue(self.cpu.keypad.is_down(0xA))
        self.assertFalse(self.inputs.host_key_event(ord("z"), True))
        self.inputs.host_key_event(ord("a"), False)
        self.assertFalse(self.cpu.keypad.is_down(0xA))

    def test_inputs_release_keys(self):
        self.inputs.host_key_event(ord("a"), True)
        self.inputs.host_key_event(ord("3"), True)
        self.inputs.release_keys()
        self.assertFalse(self.cpu.keypad.is_down(0xA))
        self.assertFalse(self.cpu.keypad.is_down(0x3))
        self.assertIsNone(self.cpu.keypad.get_keypress())

    def test_inputs_bad_keymap(self):
        self.assertRaises(InputsError, Inputs, "1,2,3", self.cpu.keypad)
        self.assertRaises(InputsError, Inputs, ",".join(["1"] * 16), self.cpu.keypad)
        self.assertRaises(InputsError, Inputs, ",".join(["x"] * 16), self.cpu.keypad)
