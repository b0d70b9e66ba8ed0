#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading program binaries for later writing into RAM, and writing RAM
images back out to disk after a crash so they can be inspected.

Program images are flat byte streams with no header.  Dumps use the same
format, covering the whole of system RAM from address 0.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class LoaderError(Exception):
    pass


class Loader:
    def load_binary(self, filename):
        try:
            with open(filename, "rb") as f:
                return f.read()
        except OSError as e:
            raise LoaderError("Unable to load '{}': {}".format(filename, e.strerror or e)) from e

    def write_dump(self, filename, memory):
        try:
            with open(filename, "wb") as f:
                f.write(memory)
        except OSError as e:
            raise LoaderError("Unable to write dump '{}': {}".format(filename, e.strerror or e)) from e
