#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.

To embed a machine without any host plugins (for tests or tools), call
new_machine() and drive the returned CPU directly.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS, DEFAULT_CLOCK_SPEED, SPEED_PRESETS
from .cpu import CPU
from .debugger import Debugger
from .driver import Driver
from .errors import MachineError
from .framebuffer import Framebuffer
from .hostio import Loader
from .keypad import Keypad
from .ram import RAM
from .stack import Stack
from .timers import Timers


class StartupError(Exception):
    pass


def new_machine(rom=None, clock_speed=None, **quirk_settings):
    # Every machine gets its own memory, stack, display, keypad and timers, so several can run side by side
    cpu = CPU(RAM(), Stack(), Framebuffer(), Keypad(), Timers(), clock_speed=clock_speed, **quirk_settings)

    if rom is not None:
        cpu.load_rom(rom)

    return cpu


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_setting = args[quirk_label]
        quirk_settings[quirk_label] = None if quirk_setting is None else bool(quirk_setting)

    clock_speed = DEFAULT_CLOCK_SPEED if args["clock_speed"] is None else args["clock_speed"]

    if args["speed"] is not None:
        clock_speed = int(clock_speed * SPEED_PRESETS[args["speed"]])

    if clock_speed <= 0:
        raise StartupError("The clock speed must be at least 1 operation per second.")

    opt_renderer = args["renderer"] or "pygame"
    mute_audio = args["mute"]

    # flake8: noqa: F401
    if opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            raise StartupError(
                "PyGame does not appear to be installed.  Use '-r null' to run without a display."
            )

        from .inputs.i_pygame import Inputs
        from .renderers.r_pygame import Renderer

        if mute_audio:
            from .audio.a_null import Audio
        else:
            from .audio.a_pygame import Audio
    else:
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

    # Read the ROM before opening any windows, so a bad filename fails quickly
    rom = Loader().load_binary(args["filename"])
    debugger = Debugger()

    try:
        cpu = new_machine(clock_speed=clock_speed, **quirk_settings)
        cpu.load_rom(rom)
    except MachineError as err:
        print("Unable to start: {}".format(err))
        return 1

    renderer = Renderer(scale=args["scale"])
    inputs = Inputs(args["keymap"], cpu.keypad)

    # Start up the audio system with a plain square beep
    audio = Audio()
    audio.set_frequency(440.0)

    driver = Driver(cpu, renderer, inputs, audio, debugger, debug=args["debug"], step=args["step"])

    try:
        driver.run()
    except MachineError as err:
        print(
            "Emulation halted.\n\n{}Debug info:\n{}\n\n{}".format(
                APP_INTRO, debugger.debug(cpu.snapshot(), verbose=True), err
            )
        )
        return 1
    finally:
        # The CPU has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()

    return 0
