"""Dialog for correcting today's check-in, check-out and break times by hand."""

from typing import Any
from collections.abc import Callable
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from otc.common.logger import log
from otc.core.edits import TimeEdit, TimeEditError
from otc.ui.row_factory import RowFactory
from otc.ui.ui_blueprint import UIBlueprint

# The dialog only collects strings. `on_save` gets the resulting TimeEdit and either applies it or raises
# TimeEditError, in which case the reason is shown and the dialog stays open for another try.
class TimeEditDialog(QDialog):

    def __init__(self, parent, blueprint: UIBlueprint, form: TimeEdit, on_save: Callable[[TimeEdit], Any]):
        super().__init__(parent)
        self.setWindowTitle("Edit Times")
        self.setModal(True)
        self._blueprint = blueprint
        self._on_save = on_save
        self._break_rows = []  # (container, widget_dict)

        outer = QVBoxLayout(self)
        outer.setSpacing(10)

        self._check_in = self._build_time_field(outer, "Check-in:", form.check_in)
        self._check_out = self._build_time_field(outer, "Check-out:", form.check_out)

        # Breaks
        lbl = QLabel("Breaks (leave end blank for a break still in progress):")
        lbl.setFont(QFont(blueprint.font_family, 11, QFont.Bold))
        outer.addWidget(lbl)

        self._breaks_widget = QWidget()
        self._breaks_lay = QVBoxLayout(self._breaks_widget)
        self._breaks_lay.setContentsMargins(0, 0, 0, 0)
        outer.addWidget(self._breaks_widget)

        for start, end in form.breaks:
            self._append_break_row(start, end)
        if not self._break_rows:
            self._append_break_row()

        row = QHBoxLayout()
        add_btn = QPushButton("Add Break")
        add_btn.clicked.connect(lambda _=False: self._append_break_row())
        clear_btn = QPushButton("Clear Breaks")
        clear_btn.clicked.connect(self._clear_breaks)
        row.addWidget(add_btn)
        row.addWidget(clear_btn)
        row.addStretch()
        outer.addLayout(row)

        # Save / Cancel
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        save_btn = QPushButton("Save")
        save_btn.setObjectName("primary")
        save_btn.clicked.connect(self._save)
        btn_row.addWidget(cancel_btn)
        btn_row.addWidget(save_btn)
        outer.addLayout(btn_row)

    # Label, HH:MM input and a Clear button on one row.
    def _build_time_field(self, parent_layout, label, value):
        row = QHBoxLayout()
        lbl = QLabel(label)
        lbl.setFont(QFont(self._blueprint.font_family, 12, QFont.Bold))
        field = QLineEdit(value)
        field.setPlaceholderText("HH:MM")
        field.setFont(self._blueprint.time_font)
        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(lambda _=False: field.clear())
        row.addWidget(lbl)
        row.addWidget(field, 1)
        row.addWidget(clear_btn)
        parent_layout.addLayout(row)
        return field

    def _append_break_row(self, start="", end=""):
        container, widgets = RowFactory.break_edit_row(self._blueprint, start, end, on_remove=self._remove_break_row)
        self._break_rows.append((container, widgets))
        self._breaks_lay.addWidget(container)

    # Removing the last row leaves one blank row behind, so there's always somewhere to type.
    def _remove_break_row(self, container):
        self._break_rows = [(c, w) for c, w in self._break_rows if c is not container]
        container.hide()
        container.deleteLater()
        if not self._break_rows:
            self._append_break_row()

    def _clear_breaks(self):
        for container, _ in self._break_rows:
            container.hide()
            container.deleteLater()
        self._break_rows = []
        self._append_break_row()

    def current_edit(self) -> TimeEdit:
        return TimeEdit(
            check_in=self._check_in.text().strip(),
            check_out=self._check_out.text().strip(),
            breaks=[(w["start"].text().strip(), w["end"].text().strip()) for _, w in self._break_rows],
        )

    def _save(self):
        try:
            self._on_save(self.current_edit())
        except TimeEditError as e:
            log.info(f"Rejected manual time edit: {e.message}")
            QMessageBox.warning(self, e.title, e.message)
            return
        self.accept()
