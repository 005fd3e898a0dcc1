# common.py

# Copyright (C) 2025 The mipsasm authors. License: GNU GPL Version 3

# This file is part of mipsasm. mipsasm is free software: you can
# redistribute it and/or modify it under the terms of the GNU General
# Public License as published by the Free Software Foundation, either
# version 3 of the License, or (at your option) any later version.
# mipsasm is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# General Public License for more details. You should have received
# a copy of the GNU General Public License along with mipsasm. If
# not, see <https://www.gnu.org/licenses/>.

# ----------------------------------------------------------------------
# common.py
# ----------------------------------------------------------------------

import sys

def stacktrace():
    import traceback
    traceback.print_stack()

class Mode:
    def __init__(self):
        self.trace = False
        self.show_err = True

    def set_trace(self):
        self.trace = True

    def clear_trace(self):
        self.trace = False

    def devlog(self, xs):
        if self.trace:
            print(xs)

    def errlog(self, xs):
        if self.show_err:
            print(xs, file=sys.stderr)

mode = Mode()

# ----------------------------------------------------------------------
# Logging error message
# ----------------------------------------------------------------------

# Used for internal errors only; errors in the user's program go into
# the listing

def indicate_error(xs):
    print(f"\033[91m\033[1m{xs}\033[0m", file=sys.stderr) # ANSI escape codes for red and bold
    if mode.trace:
        stacktrace()
