# state.py

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

# -------------------------------------------------------------------------
# state.py defines the state of one assembly run: the classified
# source lines, the symbol table, the listing, and the object words.
# -------------------------------------------------------------------------

import common
import arithmetic as arith
import architecture as arch

# -------------------------------------------------------------------------
# Listing layout
# -------------------------------------------------------------------------

label_width = 10  # label column of an instruction record
symbol_width = 13  # name column of the symbol table
column_sep = "    "
no_label_fill = " " * (len(column_sep) + label_width + len(column_sep))
no_code_fill = " " * 28  # width of the address and word columns
symbols_header = "Symbols"

# -------------------------------------------------------------------------
# Classified line
# -------------------------------------------------------------------------

# Kinds of classified line

LineInstr = "Instr"          # instruction, possibly with label and comment
LineLabel = "Label"          # label without instruction
LineComment = "Comment"      # comment only
LineBlank = "Blank"          # nothing at all
LineMalformed = "Malformed"  # content that fits no instruction shape

class ClassifiedLine:
    def __init__(self, line_number, src_line):
        self.line_number = line_number
        self.src_line = src_line
        self.kind = LineBlank
        self.tokens = []
        self.label = ""
        self.comment = ""

    def __str__(self):
        return f"ClassifiedLine({self.line_number} {self.kind} label=/{self.label}/ " \
               f"tokens={self.tokens} comment=/{self.comment}/ src=/{self.src_line}/)"

# -------------------------------------------------------------------------
# Assembler information record
# -------------------------------------------------------------------------

# Only newline ends a source line; form feeds and other Unicode line
# breaks stay inside it.

def split_source_lines(src_text):
    xs = src_text.split("\n")
    if xs[-1] == "":
        xs.pop()
    return xs

class AsmInfo:
    def __init__(self, base_name, src_text, catalog=None):
        self.asm_mod_name = base_name
        self.asm_src_text = src_text
        self.asm_src_lines = split_source_lines(src_text)
        self.catalog = catalog if catalog is not None else arch.instr_catalog
        self.symbol_table = {}
        self.location_counter = 0
        self.listing = Listing()
        self.object_words = []  # (address, word) in address order
        self.errors = []  # AsmError
        self.n_asm_errors = 0
        self.current_line = 0
        self.listing_text = ""
        self.binary_text = ""

    def binary_lines(self):
        return [f"0x{arith.word_to_hex8(w)}" for _, w in self.object_words]

    def show_short(self):
        xs = "AsmInfo\n"
        xs += f" asm_mod_name={self.asm_mod_name}\n"
        xs += f" {len(self.asm_src_lines)} source lines, {len(self.object_words)} words," \
              f" {len(self.symbol_table)} symbols, {self.n_asm_errors} errors\n"
        xs += "\n".join(self.asm_src_lines[:4]) + "\n"
        xs += "\n".join(self.binary_lines()[:4]) + "\n"
        return xs

# -------------------------------------------------------------------------
# Symbol table
# -------------------------------------------------------------------------

# The symbol table is a dict from label to byte address. Labels are
# listed in sorted order.

def symbol_lines(symbol_table):
    xs = []
    for name in sorted(symbol_table.keys()):
        xs.append(f"{name.ljust(symbol_width)} 0x{arith.word_to_hex8(symbol_table[name])}")
    return xs

def display_symbol_table(ma):
    print("\nSymbol table")
    print("Name          Address")
    for x in symbol_lines(ma.symbol_table):
        print(x)

# -------------------------------------------------------------------------
# Listing
# -------------------------------------------------------------------------

class Listing:
    def __init__(self):
        self.clear()

    def clear(self):
        self.lines = []
        self.map_arr = {}  # address -> source line index

    def push_src(self, xs):
        common.mode.devlog(f"listing <{xs}>")
        self.lines.append(xs)

    def add_mapping(self, a, i):
        self.map_arr[a] = i

    def get_src_idx(self, a):
        i = self.map_arr.get(a)
        return i if i is not None else 0

    def to_text(self):
        return "".join(x + "\n" for x in self.lines)

# -------------------------------------------------------------------------
# Assembly errors
# -------------------------------------------------------------------------

class AsmError:
    def __init__(self, line_number, kind, msg):
        self.line_number = line_number
        self.kind = kind
        self.msg = msg

    def __str__(self):
        return f"line {self.line_number + 1}: {self.kind}: {self.msg}"
