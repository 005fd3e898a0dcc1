# arithmetic.py

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

# ------------------------------------------------------------------------
# arithmetic.py defines word representation, data conversions, and
# operations on the bit fields of a 32-bit instruction word
# ------------------------------------------------------------------------

import common

word16mask = 0x0000FFFF
word26mask = 0x03FFFFFF
word32mask = 0xFFFFFFFF

# ------------------------------------------------------------------------
# Ensuring and asserting validity of words
# ------------------------------------------------------------------------

# A k-bit word is represented as a nonnegative integer x with
# 0 <= x < 2^k. Immediates and jump targets that do not fit are
# truncated silently, as the hardware fields would do; negative
# integers become their two's complement representation.

def limit16(x):
    return x & word16mask

def limit26(x):
    return x & word26mask

def limit32(x):
    return x & word32mask

def assert32(x):
    if 0 <= x < 2**32:
        return x
    else:
        common.indicate_error(f"assert32 fail: {x}")
        return x & word32mask

# ------------------------------------------------------------------------
# Converting between words and two's complement integers
# ------------------------------------------------------------------------

def word16_to_int(w):
    x = limit16(w)
    return x if x < 0x8000 else x - 0x10000

# ------------------------------------------------------------------------
# Operating on fields of a word
# ------------------------------------------------------------------------

# Place value x in the field that starts at bit position shift

def mk_field(x, shift, mask):
    return (x & mask) << shift

# Bits hi..lo inclusive of word w, Little End indexing

def extract_field(w, hi, lo):
    return (w >> lo) & ((1 << (hi - lo + 1)) - 1)

def split_instr(w):
    """Break an instruction word into its named fields.

    All fields are returned regardless of format; the caller picks the
    ones that apply.
    """
    return {
        "op": extract_field(w, 31, 26),
        "rs": extract_field(w, 25, 21),
        "rt": extract_field(w, 20, 16),
        "rd": extract_field(w, 15, 11),
        "sh": extract_field(w, 10, 6),
        "fn": extract_field(w, 5, 0),
        "imm": extract_field(w, 15, 0),
        "target": extract_field(w, 25, 0),
    }

# ------------------------------------------------------------------------
# Hexadecimal notation
# ------------------------------------------------------------------------

def word_to_hex8(x):
    return f"{assert32(x):08x}"
