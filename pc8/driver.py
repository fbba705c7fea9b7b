#!/usr/bin/env python3

"""
Real-Time Driver

Owns the host side of the emulator: it paces the machine against the real
clock, feeds key presses in, pulls finished frames out to the renderer, and
switches the buzzer on and off.  Debug output and single-stepping are policies
of the driver only.  The CPU simply offers step() and run_frame().

Everything happens on one 60Hz frame boundary.  Per frame, the inputs are
processed, the CPU runs one frame's worth of cycles (or, when single-stepping,
only the cycles the user has asked for), then the display and buzzer are
updated.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import APP_NAME, TIMER_FREQ

FRAME_INTERVAL = 1.0 / TIMER_FREQ


class Driver:
    def __init__(self, cpu, renderer, inputs, audio, debugger, debug=False, step=False):
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.debugger = debugger
        self.debug = debug
        self.step = step

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def run(self):
        next_frame_time = 0

        while True:
            this_time = perf_counter()

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            if this_time < next_frame_time:
                sleep(next_frame_time - this_time)
                continue

            next_frame_time = this_time + FRAME_INTERVAL

            if not self.frame():
                return

    def frame(self):
        # Returns False when the user has asked to quit
        if self.inputs.process_messages():
            return False

        if self.step:
            # Timers keep real time, but instructions only run when asked for
            while self.inputs.take_step_request():
                self._trace(self.cpu.step())
                self.perf_counter_ops += 1

            self.cpu.tick_timers()
        else:
            self.perf_counter_ops += self.cpu.run_frame(listener=self._trace if self.debug else None)

        self.refresh_display()
        self.audio.enable_buzzer(self.cpu.sound_active)
        return True

    def _trace(self, result):
        if self.debug or self.step:
            self.debugger.output(self.cpu.snapshot(), result)

    def refresh_display(self):
        frame = self.cpu.framebuffer.collect_frame()

        if frame is not None:
            self.renderer.refresh_display(frame)
            self.perf_counter_fps += 1

    def report_perf(self, fps=0, ops=0):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))
