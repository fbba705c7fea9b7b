#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries from the host file system for later writing into
RAM.  Save states are deliberately not supported.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()
