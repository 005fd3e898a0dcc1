# main.py

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

import sys
import os
import argparse

import common
import assembler
import state

class ArgumentParser(argparse.ArgumentParser):
    # Usage errors exit with status 1, like a file that cannot be opened
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")

def assemble_file(src_path, listing_path, binary_path):
    """Assemble src_path, writing the listing and the binary words.

    Returns the AsmInfo, or None if one of the files cannot be opened;
    nothing is assembled in that case.
    """
    try:
        # Bytes that are not UTF-8 are replaced so the run still completes
        with open(src_path, "r", encoding="utf-8", errors="replace") as src:
            src_text = src.read()
        base_name = os.path.basename(src_path).split(".")[0]
        asm_info = assembler.assembler(base_name, src_text)
        with open(listing_path, "w", encoding="utf-8") as listing, \
             open(binary_path, "w", encoding="utf-8") as binary:
            listing.write(asm_info.listing_text)
            binary.write(asm_info.binary_text)
    except OSError as e:
        common.mode.errlog(f"Error: cannot open {e.filename}: {e.strerror}")
        return None

    if asm_info.n_asm_errors > 0:
        print(f"Assembly completed with {asm_info.n_asm_errors} errors.")
        print("--- Assembly Errors ---")
        for err in asm_info.errors:
            print(err)
        print("-----------------------")
    else:
        print("Assembly successful!")
    common.mode.devlog(asm_info.show_short())
    return asm_info

def main(argv=None):
    parser = ArgumentParser(prog="mipsasm", description="Two-pass MIPS assembler")
    parser.add_argument("source", help="Path to the assembly source file")
    parser.add_argument("listing", help="Path of the listing file to write")
    parser.add_argument("binary", help="Path of the binary file to write (one hex word per line)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Do not report file errors on stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        common.mode.set_trace()
    if args.quiet:
        common.mode.show_err = False
    try:
        asm_info = assemble_file(args.source, args.listing, args.binary)
        if asm_info and args.verbose:
            state.display_symbol_table(asm_info)
    finally:
        common.mode.clear_trace()
        common.mode.show_err = True
    return 0 if asm_info else 1

def cli():
    sys.exit(main())

if __name__ == "__main__":
    cli()
