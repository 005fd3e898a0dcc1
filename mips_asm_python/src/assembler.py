# assembler.py

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

# ---------------------------------------------------------------------
# assembler.py translates assembly language to machine language
# ---------------------------------------------------------------------

import re
import time

import common
import state as st
import architecture as arch
import arithmetic as arith

# ----------------------------------------------------------------------
# Error kinds
# ----------------------------------------------------------------------

# None of these stop the assembler. The message goes into the listing
# and the offending field is assembled as 0.

InvalidRegisterToken = "InvalidRegisterToken"
RegisterOutOfRange = "RegisterOutOfRange"
UnsupportedMnemonic = "UnsupportedMnemonic"
OperandArityMismatch = "OperandArityMismatch"
UnparsableLine = "UnparsableLine"
InvalidImmediate = "InvalidImmediate"

def mk_err_msg(ma, kind, msg):
    common.mode.devlog(f"line {ma.current_line}: {kind}: {msg}")
    ma.errors.append(st.AsmError(ma.current_line, kind, msg))
    ma.n_asm_errors += 1
    ma.listing.push_src(f"Error: {kind}: {msg}")

# ----------------------------------------------------------------------
# Assembler
# ----------------------------------------------------------------------

def assembler(base_name, src_text, catalog=None):
    """Assemble src_text and return the AsmInfo record.

    Pass 1 runs over every line and returns the finished symbol table;
    only then does pass 2 classify, encode and list each line. The
    listing and binary texts are left in ai.listing_text and
    ai.binary_text.
    """
    ai = st.AsmInfo(base_name, src_text, catalog)
    start = time.perf_counter()
    symbol_table = asm_pass1(ai.asm_src_lines)
    elapsed = (time.perf_counter() - start) * 1000
    common.mode.devlog(f"Pass 1: {len(symbol_table)} labels in {elapsed:.3f} ms")
    ai.symbol_table = symbol_table
    asm_pass2(ai, symbol_table)
    emit_symbols(ai)
    ai.listing_text = ai.listing.to_text()
    ai.binary_text = "".join(x + "\n" for x in ai.binary_lines())
    return ai

# ----------------------------------------------------------------------
# Regular expressions for the parser
# ----------------------------------------------------------------------

label_parser = re.compile(r"(\S*):")
reg_parser = re.compile(r"^\$(zero|[0-9]{2}|[a-z][0-9]|[a-z]{2})$")
int_parser = re.compile(r"^[+-]?[0-9]+$")

# Instruction shapes, tried in this order

op_parser = re.compile(r"^\s*(\S+)\s*$")
op_k_parser = re.compile(r"^\s*(\S+)\s+([^\s,]+)\s*$")
op_r_disp_parser = re.compile(r"^\s*(\S+)\s+([^\s,]+)\s*,\s*(-?[0-9]+)\(([^\s()]+)\)\s*$")
op_kkk_parser = re.compile(r"^\s*(\S+)\s+([^\s,]+)\s*,\s*([^\s,]+)\s*,\s*([^\s,]+)\s*$")

# ----------------------------------------------------------------------
# Splitting a line into fields
# ----------------------------------------------------------------------

# The comment runs from the first '#' to the end of the line and
# keeps the '#'

def split_comment(line):
    i = line.find("#")
    if i == -1:
        return line, ""
    return line[:i], line[i:]

# The label is the first name followed by ':'. Returns the label
# name and the remaining code.

def split_label(code):
    m = label_parser.search(code)
    if m:
        return m.group(1), code[:m.start()] + code[m.end():]
    return "", code

# ----------------------------------------------------------------------
# Assembler Pass 1
# ----------------------------------------------------------------------

# Every line with code advances the location counter by one word,
# except a line whose only code is a label: that label belongs to
# the next instruction.

def asm_pass1(src_lines):
    common.mode.devlog(f"Assembler Pass 1: {len(src_lines)} source lines")
    symbol_table = {}
    location_counter = 0
    for i, line in enumerate(src_lines):
        code, _ = split_comment(line)
        if not code.strip():
            continue
        label, rest = split_label(code)
        if label:
            if label in symbol_table:
                common.mode.devlog(f"Pass 1 {i}: label {label} redefined")
            symbol_table[label] = location_counter
            common.mode.devlog(f"Pass 1 {i}: {label} = {arith.word_to_hex8(location_counter)}")
        if rest.strip():
            location_counter += arch.word_bytes
    return symbol_table

# ----------------------------------------------------------------------
# Line classifier
# ----------------------------------------------------------------------

def lookup_label(symbol_table, name):
    a = symbol_table.get(name)
    if a is None:
        common.mode.devlog(f"label {name} is not defined, using 0")
        return 0
    return a

def branch_offset(target, address):
    # Relative to the instruction after the branch, in words
    return (target - address - arch.word_bytes) // arch.word_bytes

def classify_line(i, line, symbol_table, address):
    """Split one source line into label, operand tokens and comment.

    The tokens come out in the order the encoder expects: the memory
    form "lw rt, k(rs)" becomes [lw, rt, rs, k], and a branch
    "beq rs, rt, label" becomes [beq, rt, rs, offset]. Jump and branch
    labels are replaced by numbers using symbol_table, which must be
    complete.
    """
    cl = st.ClassifiedLine(i, line)
    code, cl.comment = split_comment(line)
    if not code.strip():
        cl.kind = st.LineComment if cl.comment else st.LineBlank
        return cl
    cl.label, code = split_label(code)
    if not code.strip():
        cl.kind = st.LineLabel if cl.label else (st.LineComment if cl.comment else st.LineBlank)
        return cl

    m1 = op_parser.search(code)
    m2 = op_k_parser.search(code)
    m3 = op_r_disp_parser.search(code)
    m4 = op_kkk_parser.search(code)
    if m1:
        cl.tokens = [m1.group(1)]
    elif m2:
        op = m2.group(1)
        if op in arch.jump_mnemonics:
            target = lookup_label(symbol_table, m2.group(2))
            cl.tokens = [op, str(target // arch.word_bytes)]
        else:
            cl.tokens = [op, m2.group(2)]
    elif m3:
        cl.tokens = [m3.group(1), m3.group(2), m3.group(4), m3.group(3)]
    elif m4:
        op = m4.group(1)
        if op in arch.branch_mnemonics:
            target = lookup_label(symbol_table, m4.group(4))
            cl.tokens = [op, m4.group(3), m4.group(2), str(branch_offset(target, address))]
        else:
            cl.tokens = [op, m4.group(2), m4.group(3), m4.group(4)]
    else:
        cl.kind = st.LineMalformed
        cl.tokens = code.split()
        return cl
    cl.kind = st.LineInstr
    common.mode.devlog(f"classify_line {cl}")
    return cl

# ----------------------------------------------------------------------
# Operands
# ----------------------------------------------------------------------

def require_reg(ma, field):
    result = 0
    m = reg_parser.search(field)
    if not m:
        mk_err_msg(ma, InvalidRegisterToken, f"Register string invalid: {field}")
    elif m.group(1)[0].isdigit():
        n = int(m.group(1))
        if n < arch.n_registers:
            result = n
        else:
            mk_err_msg(ma, RegisterOutOfRange, f"Register out of range: {n}")
    else:
        r = arch.register_abbreviations.get(m.group(1))
        if r is None:
            mk_err_msg(ma, InvalidRegisterToken, f"Register abbreviation not supported: {field}")
        else:
            result = r
    common.mode.devlog(f"require_reg field={field} result={result}")
    return result

def require_int(ma, field):
    if int_parser.search(field):
        try:
            return int(field)
        except ValueError:
            mk_err_msg(ma, InvalidImmediate, f"{field[:20]}... has too many digits")
            return 0
    mk_err_msg(ma, InvalidImmediate, f"{field} is not a decimal integer")
    return 0

# ----------------------------------------------------------------------
# Instruction encoder
# ----------------------------------------------------------------------

def bin_instruction(ma, tokens):
    n = len(tokens)
    if n == 0:
        mk_err_msg(ma, OperandArityMismatch, "Empty instruction can't be converted to binary")
        return 0

    codes = ma.catalog.get(tokens[0])
    if codes is None:
        mk_err_msg(ma, UnsupportedMnemonic, f"Instruction {tokens[0]} is not supported")
        return 0
    common.mode.devlog(f"bin_instruction {tokens} {arch.show_instr_codes(codes)}")

    if codes.format == arch.iNull:
        return 0
    if n not in arch.format_arity[codes.format]:
        mk_err_msg(ma, OperandArityMismatch,
                   f"Wrong amount of arguments for instruction type {codes.format}: {n}")
        return 0

    w = arith.mk_field(codes.op_code, arch.shift_op, arch.mask_op)
    if codes.format == arch.iR and n == 2:
        # jr, jalr: only rs
        w |= arith.mk_field(require_reg(ma, tokens[1]), arch.shift_rs, arch.mask_reg)
        w |= codes.function & arch.mask_fn
    elif codes.format == arch.iR:
        w |= arith.mk_field(require_reg(ma, tokens[2]), arch.shift_rs, arch.mask_reg)
        w |= arith.mk_field(require_reg(ma, tokens[3]), arch.shift_rt, arch.mask_reg)
        w |= arith.mk_field(require_reg(ma, tokens[1]), arch.shift_rd, arch.mask_reg)
        w |= codes.function & arch.mask_fn
    elif codes.format == arch.iRShift:
        w |= arith.mk_field(require_reg(ma, tokens[2]), arch.shift_rt, arch.mask_reg)
        w |= arith.mk_field(require_reg(ma, tokens[1]), arch.shift_rd, arch.mask_reg)
        w |= arith.mk_field(require_int(ma, tokens[3]), arch.shift_sh, arch.mask_sh)
        w |= codes.function & arch.mask_fn
    elif codes.format == arch.iI:
        # tokens are [op, rt, rs, immediate or offset]
        w |= arith.mk_field(require_reg(ma, tokens[2]), arch.shift_rs, arch.mask_reg)
        w |= arith.mk_field(require_reg(ma, tokens[1]), arch.shift_rt, arch.mask_reg)
        w |= arith.limit16(require_int(ma, tokens[3]))
    elif codes.format == arch.iJ:
        w |= arith.limit26(require_int(ma, tokens[1]))
    return arith.limit32(w)

# ----------------------------------------------------------------------
# Pass 2
# ----------------------------------------------------------------------

def asm_pass2(ma, symbol_table):
    common.mode.devlog("Assembler Pass 2")
    ma.location_counter = 0
    for i, line in enumerate(ma.asm_src_lines):
        ma.current_line = i
        cl = classify_line(i, line, symbol_table, ma.location_counter)
        if cl.label and symbol_table.get(cl.label) != ma.location_counter:
            common.mode.devlog(f"Pass 2 {i}: {cl.label} is at {ma.location_counter}"
                               f" but the symbol table has {symbol_table.get(cl.label)}")
        if cl.kind == st.LineInstr:
            w = bin_instruction(ma, cl.tokens)
            generate_object_word(ma, cl, w)
        elif cl.kind == st.LineMalformed:
            mk_err_msg(ma, UnparsableLine, "Wrong amount of arguments, operation not supported")
            generate_object_word(ma, cl, 0)
        else:
            ma.listing.push_src(listing_no_code(cl))

def generate_object_word(ma, cl, w):
    a = ma.location_counter
    ma.object_words.append((a, w))
    ma.listing.add_mapping(a, cl.line_number)
    ma.listing.push_src(listing_instr(a, w, cl))
    ma.location_counter += arch.word_bytes

# ----------------------------------------------------------------------
# Listing
# ----------------------------------------------------------------------

def listing_instr(a, w, cl):
    xs = f"0x{arith.word_to_hex8(a)}{st.column_sep}0x{arith.word_to_hex8(w)}"
    if cl.label:
        xs += st.column_sep + f"{cl.label}:".ljust(st.label_width) + st.column_sep
    else:
        xs += st.no_label_fill
    xs += "".join(x + " " for x in cl.tokens)
    if cl.comment:
        xs += st.column_sep + cl.comment
    return xs

def listing_no_code(cl):
    xs = ""
    if cl.label or cl.comment:
        xs += st.no_code_fill
    if cl.label:
        xs += f"{cl.label}:"
    if cl.comment:
        if cl.label:
            xs += st.column_sep
        xs += cl.comment
    return xs

def emit_symbols(ma):
    ma.listing.push_src("")
    ma.listing.push_src(st.symbols_header)
    for x in st.symbol_lines(ma.symbol_table):
        ma.listing.push_src(x)
