# gui.py

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

import os
import sys
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QIcon, QColor, QTextCharFormat, QTextCursor, QTextOption, QFont
from PySide6.QtGui import QStandardItemModel, QStandardItem
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QTextEdit, QVBoxLayout,
    QTableView, QHeaderView, QSplitter, QGroupBox, QDockWidget, QFileDialog, QToolBar
)

import common
import assembler
import arithmetic as arith

class SymbolModel(QStandardItemModel):
    def __init__(self):
        super().__init__(0, 2)
        self.setHorizontalHeaderLabels(["Label", "Address"])

    def update(self, asm_info):
        self.removeRows(0, self.rowCount())
        for name in sorted(asm_info.symbol_table.keys()):
            a = asm_info.symbol_table[name]
            self.appendRow([QStandardItem(name), QStandardItem(f"0x{arith.word_to_hex8(a)}")])

class ObjectModel(QStandardItemModel):
    def __init__(self):
        super().__init__(0, 4)
        self.setHorizontalHeaderLabels(["Address", "Word", "Op", "Line"])

    def update(self, asm_info):
        self.removeRows(0, self.rowCount())
        for a, w in asm_info.object_words:
            fields = arith.split_instr(w)
            line = asm_info.listing.get_src_idx(a) + 1
            self.appendRow([
                QStandardItem(f"0x{arith.word_to_hex8(a)}"),
                QStandardItem(f"0x{arith.word_to_hex8(w)}"),
                QStandardItem(f"{fields['op']:02x}"),
                QStandardItem(str(line)),
            ])

class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("MIPS Assembler")
        self.setGeometry(100, 100, 1400, 900)

        main_splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(main_splitter)

        # Source editor (left pane)
        self.code_editor = QTextEdit()
        self.code_editor.setWordWrapMode(QTextOption.NoWrap)
        self.code_editor.setFont(QFont("Courier New", 10))
        self.code_dock = QDockWidget("Source", self)
        self.code_dock.setWidget(self.code_editor)
        main_splitter.addWidget(self.code_dock)

        # Listing, symbols and object code (right pane)
        right_splitter = QSplitter(Qt.Orientation.Vertical)
        main_splitter.addWidget(right_splitter)

        listing_group = QGroupBox("Listing")
        listing_layout = QVBoxLayout(listing_group)
        self.listing_view = QTextEdit()
        self.listing_view.setReadOnly(True)
        self.listing_view.setWordWrapMode(QTextOption.NoWrap)
        self.listing_view.setFont(QFont("Courier New", 10))
        listing_layout.addWidget(self.listing_view)
        right_splitter.addWidget(listing_group)

        tables = QSplitter(Qt.Orientation.Horizontal)

        sym_group = QGroupBox("Symbols")
        sym_layout = QVBoxLayout(sym_group)
        self.symbol_view = QTableView()
        self.symbol_model = SymbolModel()
        self.symbol_view.setModel(self.symbol_model)
        self.symbol_view.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        sym_layout.addWidget(self.symbol_view)
        tables.addWidget(sym_group)

        obj_group = QGroupBox("Object code")
        obj_layout = QVBoxLayout(obj_group)
        self.object_view = QTableView()
        self.object_model = ObjectModel()
        self.object_view.setModel(self.object_model)
        self.object_view.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeToContents)
        self.object_view.clicked.connect(self.on_object_clicked)
        obj_layout.addWidget(self.object_view)
        tables.addWidget(obj_group)

        right_splitter.addWidget(tables)
        right_splitter.setStretchFactor(0, 3)
        right_splitter.setStretchFactor(1, 1)
        main_splitter.setStretchFactor(0, 1)
        main_splitter.setStretchFactor(1, 1)

        self.toolbar = QToolBar("Main Toolbar")
        self.addToolBar(self.toolbar)

        self.assemble_action = QAction(QIcon.fromTheme("system-run"), "Assemble", self)
        self.assemble_action.triggered.connect(self.assemble)
        self.toolbar.addAction(self.assemble_action)

        self.export_action = QAction(QIcon.fromTheme("document-export"), "Export", self)
        self.export_action.triggered.connect(self.export_output)
        self.export_action.setEnabled(False)
        self.toolbar.addAction(self.export_action)

        file_menu = self.menuBar().addMenu("&File")
        open_action = QAction(QIcon.fromTheme("document-open"), "Open...", self)
        open_action.triggered.connect(self.open_file)
        file_menu.addAction(open_action)

        save_action = QAction(QIcon.fromTheme("document-save"), "Save", self)
        save_action.triggered.connect(self.save_file)
        file_menu.addAction(save_action)

        save_as_action = QAction(QIcon.fromTheme("document-save-as"), "Save As...", self)
        save_as_action.triggered.connect(self.save_file_as)
        file_menu.addAction(save_as_action)

        self.toolbar.addAction(open_action)
        self.toolbar.addAction(save_action)

        self.last_asm_info = None
        self.current_file = None

    def module_name(self):
        if self.current_file:
            return os.path.basename(self.current_file).split('.')[0]
        return "untitled"

    def assemble(self):
        source_code = self.code_editor.toPlainText()
        asm_info = assembler.assembler(self.module_name(), source_code)
        self.listing_view.setPlainText(asm_info.listing_text)
        self.symbol_model.update(asm_info)
        self.object_model.update(asm_info)
        self.last_asm_info = asm_info
        self.export_action.setEnabled(self.current_file is not None)
        if asm_info.n_asm_errors > 0:
            self.statusBar().showMessage(f"{asm_info.n_asm_errors} errors detected")
        else:
            self.statusBar().showMessage(f"Assembled {len(asm_info.object_words)} instructions")
        return asm_info

    def on_object_clicked(self, index):
        if self.last_asm_info is None:
            return
        a, _ = self.last_asm_info.object_words[index.row()]
        self.highlight_line(self.last_asm_info.listing.get_src_idx(a))

    def highlight_line(self, line_number):
        self.clear_highlight()
        fmt = QTextCharFormat()
        fmt.setBackground(QColor(Qt.GlobalColor.darkYellow))
        cursor = self.code_editor.textCursor()
        cursor.setPosition(0)
        cursor.movePosition(QTextCursor.MoveOperation.Down, QTextCursor.MoveMode.MoveAnchor, line_number)
        cursor.movePosition(QTextCursor.MoveOperation.StartOfLine, QTextCursor.MoveMode.MoveAnchor)
        cursor.movePosition(QTextCursor.MoveOperation.EndOfLine, QTextCursor.MoveMode.KeepAnchor)
        cursor.mergeCharFormat(fmt)
        self.code_editor.setTextCursor(cursor)
        self.code_editor.ensureCursorVisible()

    def clear_highlight(self):
        fmt = QTextCharFormat()
        fmt.setBackground(QColor(Qt.GlobalColor.transparent))
        cursor = self.code_editor.textCursor()
        cursor.select(QTextCursor.SelectionType.Document)
        cursor.mergeCharFormat(fmt)
        cursor.clearSelection()

    def export_output(self):
        # Writes <base>.lst and <base>.bin beside the source file
        if self.last_asm_info is None or self.current_file is None:
            return
        base = os.path.splitext(self.current_file)[0]
        try:
            with open(base + ".lst", 'w') as f:
                f.write(self.last_asm_info.listing_text)
            with open(base + ".bin", 'w') as f:
                f.write(self.last_asm_info.binary_text)
            self.statusBar().showMessage(f"Wrote {base}.lst and {base}.bin")
        except OSError as e:
            common.mode.errlog(f"Error exporting: {e}")
            self.statusBar().showMessage(f"Error exporting: {e}")

    def load_file(self, file_name):
        with open(file_name, "r", encoding="utf-8", errors="replace") as f:
            self.code_editor.setPlainText(f.read())
        self.current_file = file_name
        self.setWindowTitle(f"MIPS Assembler - {file_name}")

    def open_file(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Assembly File", ".", "Assembly Files (*.asm *.s);;All Files (*)")
        if file_name:
            try:
                self.load_file(file_name)
                self.assemble()
            except OSError as e:
                self.statusBar().showMessage(f"Error opening file: {e}")

    def save_file(self):
        if self.current_file:
            try:
                with open(self.current_file, 'w') as f:
                    f.write(self.code_editor.toPlainText())
                self.statusBar().showMessage(f"File saved: {self.current_file}")
            except OSError as e:
                self.statusBar().showMessage(f"Error saving file: {e}")
        else:
            self.save_file_as()

    def save_file_as(self):
        file_name, _ = QFileDialog.getSaveFileName(self, "Save Assembly File As", ".", "Assembly Files (*.asm *.s);;All Files (*)")
        if file_name:
            self.current_file = file_name
            self.setWindowTitle(f"MIPS Assembler - {file_name}")
            self.save_file()

def start_gui():
    app = QApplication(sys.argv)
    app.setStyleSheet("""
    QTextEdit {
        background-color: #2a2a2a;
        color: #e0e0e0;
        border: 1px solid #007acc;
        padding: 5px;
    }
    QTableView {
        background-color: #2a2a2a;
        color: #e0e0e0;
        gridline-color: #444444;
        selection-background-color: #007acc;
    }
    """)
    window = MainWindow()
    if len(sys.argv) > 1:
        window.load_file(sys.argv[1])
        window.assemble()
    window.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    start_gui()
