import pytest

import architecture as arch
import arithmetic as arith

def test_catalog_entries():
    add = arch.instr_catalog["add"]
    assert (add.op_code, add.function, add.format) == (0x00, 0x20, arch.iR)
    assert arch.instr_catalog["lw"].op_code == 0x23
    assert arch.instr_catalog["j"].format == arch.iJ
    assert arch.instr_catalog["sra"].format == arch.iRShift
    assert arch.instr_catalog["nop"].format == arch.iNull

def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        arch.instr_catalog["add"] = None

def test_every_format_has_an_arity():
    for codes in arch.instr_catalog.values():
        assert codes.format in arch.format_arity

def test_label_forms_are_in_catalog():
    for m in arch.jump_mnemonics:
        assert arch.instr_catalog[m].format == arch.iJ
    for m in arch.branch_mnemonics:
        assert arch.instr_catalog[m].format == arch.iI

def test_register_abbreviations_cover_all_registers():
    assert sorted(set(arch.register_abbreviations.values())) == list(range(arch.n_registers))
    assert arch.register_abbreviations["sp"] == 29

def test_show_instr_codes():
    assert arch.show_instr_codes(arch.instr_catalog["beq"]) == "beq fmt=I op=0x04 fn=0x00"
    assert arch.show_instr_codes(None) == "unknown instruction"

# ----------------------------------------------------------------------
# Arithmetic
# ----------------------------------------------------------------------

def test_word_to_hex8():
    assert arith.word_to_hex8(0) == "00000000"
    assert arith.word_to_hex8(0x012A4020) == "012a4020"

def test_limits_truncate():
    assert arith.limit16(-1) == 0xFFFF
    assert arith.limit16(0x12345) == 0x2345
    assert arith.limit26(1 << 26) == 0

def test_two_complement_16():
    assert arith.word16_to_int(0xFFFE) == -2
    assert arith.word16_to_int(0x7FFF) == 32767

def test_fields():
    w = arith.mk_field(0x23, arch.shift_op, arch.mask_op) | arith.mk_field(29, arch.shift_rs, arch.mask_reg)
    assert w == 0x8FA00000
    assert arith.extract_field(w, 31, 26) == 0x23
    fields = arith.split_instr(0x00094100)
    assert (fields["rt"], fields["rd"], fields["sh"], fields["fn"]) == (9, 8, 4, 0)
