"""Settings dialog for the Office Time Calculator."""

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
)
from otc.core.accounting import NORMAL_TARGET, RAMADAN_TARGET
from otc.util.misc import format_duration

# Opens from the main window's Settings button. Only Ramadan mode lives here for now; the main window reads
# chosen_ramadan_mode and settings_changed back once the dialog is accepted.
class SettingsDialog(QDialog):

    def __init__(self, parent, cfg):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)

        self.chosen_ramadan_mode = bool(cfg.get("ramadan_mode", False))
        self.settings_changed = False

        outer = QVBoxLayout(self)
        outer.setSpacing(12)

        # Ramadan mode toggle, with the target it results in shown underneath
        toggle_row = QHBoxLayout()
        toggle_lbl = QLabel("Ramadan Mode:")
        toggle_lbl.setFont(QFont("Calibri", 12, QFont.Bold))
        self._ramadan_box = QCheckBox()
        self._ramadan_box.setChecked(self.chosen_ramadan_mode)
        self._ramadan_box.setToolTip(f"Shortens the daily target from {format_duration(NORMAL_TARGET)} "
                                     f"to {format_duration(RAMADAN_TARGET)}.")
        self._ramadan_box.toggled.connect(self._update_target_label)
        toggle_row.addWidget(toggle_lbl)
        toggle_row.addStretch()
        toggle_row.addWidget(self._ramadan_box)
        outer.addLayout(toggle_row)

        self._target_lbl = QLabel()
        self._target_lbl.setObjectName("muted")
        outer.addWidget(self._target_lbl)
        self._update_target_label(self.chosen_ramadan_mode)

        line = QFrame()
        line.setFrameShape(QFrame.HLine)
        line.setFrameShadow(QFrame.Sunken)
        outer.addWidget(line)

        # Cancel / Save
        buttons = QHBoxLayout()
        buttons.addStretch()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        save_btn = QPushButton("Save")
        save_btn.setObjectName("primary")
        save_btn.setDefault(True)
        save_btn.clicked.connect(self._save)
        buttons.addWidget(cancel_btn)
        buttons.addWidget(save_btn)
        outer.addLayout(buttons)

    def _update_target_label(self, checked):
        target = RAMADAN_TARGET if checked else NORMAL_TARGET
        self._target_lbl.setText(f"Daily target: {format_duration(target)}")

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape:
            self.reject()
            return
        super().keyPressEvent(event)

    def _save(self):
        chosen = self._ramadan_box.isChecked()
        self.settings_changed = chosen != self.chosen_ramadan_mode
        self.chosen_ramadan_mode = chosen
        self.accept()
