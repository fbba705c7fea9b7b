#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output.  Frames handed to it are kept, so the last picture can still be
inspected.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.last_frame = None
        self.title = ""

    def refresh_display(self, rows):
        # Rows are tuples of booleans, top row first
        self.last_frame = rows

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
