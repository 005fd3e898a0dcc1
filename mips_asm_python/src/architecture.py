# architecture.py

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

# --------------------------------------------------------------------
# architecture.py defines constants and tables specifying formats,
# opcodes, function codes, mnemonics, and register names
# --------------------------------------------------------------------

from collections import namedtuple
from types import MappingProxyType

import common

# --------------------------------------------------------------------
# Architecture constants
# --------------------------------------------------------------------

word_bytes = 4  # every instruction occupies one 32-bit word
n_registers = 32

# Bit fields of an instruction word. Bits are numbered Little End:
# the most significant bit has index 31, the least significant 0.

#   R        op[31:26] rs[25:21] rt[20:16] rd[15:11] sh[10:6] fn[5:0]
#   R-SHIFT  op[31:26]    0      rt[20:16] rd[15:11] sh[10:6] fn[5:0]
#   I        op[31:26] rs[25:21] rt[20:16] imm[15:0]
#   J        op[31:26] target[25:0]

shift_op = 26
shift_rs = 21
shift_rt = 16
shift_rd = 11
shift_sh = 6

mask_op = 0x3F
mask_reg = 0x1F
mask_sh = 0x1F
mask_fn = 0x3F

# --------------------------------------------------------------------
# Instruction formats
# --------------------------------------------------------------------

iR = "R"
iRShift = "R-SHIFT"
iI = "I"
iJ = "J"
iNull = "NULL"

# Number of tokens (mnemonic included) each format accepts. R also
# accepts 2 tokens for the register-indirect jumps jr and jalr.

format_arity = {
    iR: (4, 2),
    iRShift: (4,),
    iI: (4,),
    iJ: (2,),
    iNull: (),
}

# --------------------------------------------------------------------
# Instruction catalog
# --------------------------------------------------------------------

# The catalog maps a mnemonic to its op-code, function code (R
# formats only) and format. It is built once and never modified.

InstrCodes = namedtuple("InstrCodes", ["mnemonic", "op_code", "function", "format"])

# Mnemonics whose label operand is an absolute word address
jump_mnemonics = frozenset(["j", "jal"])

# Mnemonics whose label operand is a PC-relative word offset
branch_mnemonics = frozenset(["beq", "bne"])

catalog_entries = [
    # R format: op-code 0, operation chosen by function code
    ("add", 0x00, 0x20, iR),
    ("addu", 0x00, 0x21, iR),
    ("sub", 0x00, 0x22, iR),
    ("subu", 0x00, 0x23, iR),
    ("and", 0x00, 0x24, iR),
    ("or", 0x00, 0x25, iR),
    ("xor", 0x00, 0x26, iR),
    ("nor", 0x00, 0x27, iR),
    ("slt", 0x00, 0x2A, iR),
    ("sltu", 0x00, 0x2B, iR),
    ("jr", 0x00, 0x08, iR),
    ("jalr", 0x00, 0x09, iR),

    # Shifts take a constant shift amount instead of rs
    ("sll", 0x00, 0x00, iRShift),
    ("srl", 0x00, 0x02, iRShift),
    ("sra", 0x00, 0x03, iRShift),

    # I format
    ("beq", 0x04, 0x00, iI),
    ("bne", 0x05, 0x00, iI),
    ("addi", 0x08, 0x00, iI),
    ("addiu", 0x09, 0x00, iI),
    ("slti", 0x0A, 0x00, iI),
    ("sltiu", 0x0B, 0x00, iI),
    ("andi", 0x0C, 0x00, iI),
    ("ori", 0x0D, 0x00, iI),
    ("xori", 0x0E, 0x00, iI),
    ("lb", 0x20, 0x00, iI),
    ("lh", 0x21, 0x00, iI),
    ("lw", 0x23, 0x00, iI),
    ("lbu", 0x24, 0x00, iI),
    ("lhu", 0x25, 0x00, iI),
    ("sb", 0x28, 0x00, iI),
    ("sh", 0x29, 0x00, iI),
    ("sw", 0x2B, 0x00, iI),

    # J format
    ("j", 0x02, 0x00, iJ),
    ("jal", 0x03, 0x00, iJ),

    # No binary encoding of its own
    ("nop", 0x00, 0x00, iNull),
]

def mk_instr_catalog(entries=None):
    catalog = {}
    for mnemonic, op_code, function, ifmt in (entries or catalog_entries):
        catalog[mnemonic] = InstrCodes(mnemonic, op_code, function, ifmt)
    common.mode.devlog(f"mk_instr_catalog: {len(catalog)} mnemonics")
    return MappingProxyType(catalog)

instr_catalog = mk_instr_catalog()

# --------------------------------------------------------------------
# Register names
# --------------------------------------------------------------------

# Symbolic register names, as written after the '$'. Numeric names
# ($00 to $31) are handled by the register resolver.

register_abbreviations = MappingProxyType({
    "zero": 0, "at": 1,
    "v0": 2, "v1": 3,
    "a0": 4, "a1": 5, "a2": 6, "a3": 7,
    "t0": 8, "t1": 9, "t2": 10, "t3": 11,
    "t4": 12, "t5": 13, "t6": 14, "t7": 15,
    "s0": 16, "s1": 17, "s2": 18, "s3": 19,
    "s4": 20, "s5": 21, "s6": 22, "s7": 23,
    "t8": 24, "t9": 25,
    "k0": 26, "k1": 27,
    "gp": 28, "sp": 29, "fp": 30, "ra": 31,
})

def show_instr_codes(codes):
    if codes:
        return f"{codes.mnemonic} fmt={codes.format} op={codes.op_code:#04x} fn={codes.function:#04x}"
    else:
        return "unknown instruction"
