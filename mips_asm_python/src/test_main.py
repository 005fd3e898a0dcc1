import pytest

import common
import main

SRC = """\
# count down from 3
start:  addi $t0, $zero, 3
loop:   addi $t0, $t0, -1     # decrement
        bne $t0, $zero, loop
        j start
"""

def test_assemble_writes_listing_and_binary(tmp_path, capsys):
    src = tmp_path / "count.asm"
    src.write_text(SRC)
    lst = tmp_path / "count.lst"
    out = tmp_path / "count.bin"
    assert main.main([str(src), str(lst), str(out)]) == 0
    assert out.read_text().splitlines() == [
        "0x20080003",
        "0x2108ffff",
        "0x1500fffe",
        "0x08000000",
    ]
    listing = lst.read_text().splitlines()
    assert listing[0] == " " * 28 + "# count down from 3"
    assert listing[2].startswith("0x00000004    0x2108ffff    loop:")
    assert listing[-3:] == ["Symbols", "loop          0x00000004", "start         0x00000000"]
    assert "Assembly successful!" in capsys.readouterr().out

def test_errors_are_summarized_but_exit_zero(tmp_path, capsys):
    src = tmp_path / "bad.asm"
    src.write_text("frob $t0, $t1, $t2\nadd $t0, $t1, $99\n")
    lst = tmp_path / "bad.lst"
    out = tmp_path / "bad.bin"
    assert main.main([str(src), str(lst), str(out)]) == 0
    assert out.read_text() == "0x00000000\n0x01204020\n"
    text = lst.read_text()
    assert "Error: UnsupportedMnemonic" in text
    assert "Error: RegisterOutOfRange: Register out of range: 99" in text
    assert "Assembly completed with 2 errors." in capsys.readouterr().out

def test_missing_source_exits_one(tmp_path):
    lst = tmp_path / "x.lst"
    assert main.main([str(tmp_path / "missing.asm"), str(lst), str(tmp_path / "x.bin")]) == 1
    assert not lst.exists()

def test_unwritable_output_exits_one(tmp_path):
    src = tmp_path / "a.asm"
    src.write_text("nop\n")
    assert main.main([str(src), str(tmp_path / "no" / "such" / "dir.lst"), str(tmp_path / "a.bin")]) == 1

@pytest.mark.parametrize("argv", [[], ["one"], ["one", "two"], ["a", "b", "c", "d"]])
def test_wrong_argument_count_exits_one(argv, capsys):
    with pytest.raises(SystemExit) as e:
        main.main(argv)
    assert e.value.code == 1

def test_verbose_clears_trace_afterwards(tmp_path, capsys):
    src = tmp_path / "a.asm"
    src.write_text("top: nop\n")
    assert main.main(["-v", str(src), str(tmp_path / "a.lst"), str(tmp_path / "a.bin")]) == 0
    assert not common.mode.trace
    assert "Symbol table" in capsys.readouterr().out

def test_source_with_non_utf8_bytes_still_assembles(tmp_path):
    src = tmp_path / "latin.asm"
    src.write_bytes(b"add $t0, $t1, $t2 # caf\xe9\n")
    lst = tmp_path / "latin.lst"
    out = tmp_path / "latin.bin"
    assert main.main([str(src), str(lst), str(out)]) == 0
    assert out.read_text() == "0x012a4020\n"
    assert "# caf\ufffd" in lst.read_text(encoding="utf-8")

def test_outputs_untouched_when_source_missing(tmp_path):
    lst = tmp_path / "keep.lst"
    lst.write_text("old listing\n")
    assert main.main([str(tmp_path / "missing.asm"), str(lst), str(tmp_path / "keep.bin")]) == 1
    assert lst.read_text() == "old listing\n"

def test_quiet_suppresses_file_errors(tmp_path, capsys):
    argv = [str(tmp_path / "missing.asm"), str(tmp_path / "q.lst"), str(tmp_path / "q.bin")]
    assert main.main(["-q"] + argv) == 1
    assert capsys.readouterr().err == ""
    assert common.mode.show_err
    assert main.main(argv) == 1
    assert "cannot open" in capsys.readouterr().err
