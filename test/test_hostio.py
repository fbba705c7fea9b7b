#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import unittest
from hashlib import sha256
from tempfile import TemporaryDirectory
from pc8.hostio import Loader


class TestLoader(unittest.TestCase):
    def setUp(self):
        self.loader = Loader()

    def test_loader_load_file_present(self):
        rom = bytes(range(0x100)) * 4

        with TemporaryDirectory() as temp_dir:
            filename = os.path.join(temp_dir, "Test.ch8")

            with open(filename, "wb") as f:
                f.write(rom)

            self.assertEqual(sha256(rom).hexdigest(), sha256(self.loader.load_binary(filename)).hexdigest())

    def test_loader_load_file_missing(self):
        self.assertRaises(FileNotFoundError, self.loader.load_binary, "NoFile.ch8")
