import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

import assembler
import gui

SRC = "start: add $t0, $t1, $t2\nloop: bne $t0, $zero, loop\n       j start\n"

@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app

def test_symbol_model(qapp):
    model = gui.SymbolModel()
    model.update(assembler.assembler("t", SRC))
    assert model.rowCount() == 2
    assert model.item(0, 0).text() == "loop"
    assert model.item(0, 1).text() == "0x00000004"

def test_object_model(qapp):
    model = gui.ObjectModel()
    model.update(assembler.assembler("t", SRC))
    assert model.rowCount() == 3
    assert model.item(0, 1).text() == "0x012a4020"
    assert model.item(2, 2).text() == "02"
    assert model.item(2, 3).text() == "3"

def test_window_assemble_and_export(qapp, tmp_path):
    src = tmp_path / "prog.asm"
    src.write_text(SRC)
    window = gui.MainWindow()
    window.load_file(str(src))
    asm_info = window.assemble()
    assert asm_info.n_asm_errors == 0
    assert "Symbols" in window.listing_view.toPlainText()
    assert window.object_model.rowCount() == 3
    window.export_output()
    assert (tmp_path / "prog.bin").read_text() == asm_info.binary_text
    assert (tmp_path / "prog.lst").read_text() == asm_info.listing_text
    window.highlight_line(1)
    window.close()
