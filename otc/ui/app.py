import sys
from PySide6.QtCore import Qt, QEvent, QTimer
from PySide6.QtWidgets import (
    QApplication,
    QDialog,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QProgressBar,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)
from otc.common.logger import log
from otc.core import config
from otc.core.session import CheckedIn, NotStarted, OnBreak
from otc.core.store import JsonFileStore
from otc.core.tracker import Tracker
from otc.ui.dialogs.settings import SettingsDialog
from otc.ui.dialogs.time_edit import TimeEditDialog
from otc.ui.row_factory import RowFactory
from otc.ui.theme import build_stylesheet
from otc.ui.ui_blueprint import UIBlueprint


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# Main window of the office time calculator. Shows today's status and times, the four attendance buttons, and a
# second screen with the break timeline. Everything shown comes from Tracker.display().
class MainWindow(QMainWindow):

    def __init__(self, tracker: Tracker | None = None):
        super().__init__()
        self.setWindowTitle("Office Time Calculator")

        self.tracker = tracker or Tracker(JsonFileStore(config.STORE_PATH))
        self._blueprint = UIBlueprint.compute(self.tracker.theme)
        self._break_rows_shown = None

        # -- Tick timer (1 s), display only --
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._refresh)

        # -- Build UI skeleton --
        self._stack = QStackedWidget()
        self._stack.addWidget(self._build_main_screen())
        self._stack.addWidget(self._build_breaks_screen())
        self.setCentralWidget(self._stack)

        self._apply_style()
        self._refresh()
        self._timer.start(1000)

    # ------------------------------------------------------------------ #
    #  Screens                                                             #
    # ------------------------------------------------------------------ #

    def _value_label(self, text="-"):
        lbl = QLabel(text)
        lbl.setFont(self._blueprint.time_font)
        lbl.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        return lbl

    def _muted_label(self, text):
        lbl = QLabel(text)
        lbl.setObjectName("muted")
        lbl.setFont(self._blueprint.label_font)
        return lbl

    def _build_main_screen(self):
        page = QWidget()
        lay = QVBoxLayout(page)
        lay.setSpacing(10)

        # Header: theme + settings
        header = QHBoxLayout()
        header.addStretch()
        self._theme_btn = QPushButton()
        self._theme_btn.clicked.connect(self._on_toggle_theme)
        settings_btn = QPushButton("Settings")
        settings_btn.clicked.connect(self._on_settings)
        header.addWidget(self._theme_btn)
        header.addWidget(settings_btn)
        lay.addLayout(header)

        # Remaining time and progress
        lay.addWidget(self._muted_label("Remaining"), alignment=Qt.AlignHCenter)
        self._remaining_lbl = QLabel("00:00:00")
        self._remaining_lbl.setObjectName("bigTime")
        self._remaining_lbl.setFont(self._blueprint.big_time_font)
        self._remaining_lbl.setAlignment(Qt.AlignCenter)
        lay.addWidget(self._remaining_lbl)

        self._progress = QProgressBar()
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        self._progress.setFixedHeight(10)
        lay.addWidget(self._progress)

        # Status card
        card = QFrame()
        card.setObjectName("card")
        grid = QGridLayout(card)
        self._status_lbl = self._value_label()
        self._worked_lbl = self._value_label()
        self._target_lbl = self._value_label()
        self._estimated_lbl = self._value_label()
        for i, (name, value_lbl) in enumerate((
                ("Status", self._status_lbl),
                ("Worked", self._worked_lbl),
                ("Daily target", self._target_lbl),
                ("Estimated check-out", self._estimated_lbl))):
            grid.addWidget(self._muted_label(name), i, 0)
            grid.addWidget(value_lbl, i, 1)
        lay.addWidget(card)

        # Attendance buttons
        btn_grid = QGridLayout()
        self._checkin_btn = QPushButton("Check In")
        self._break_start_btn = QPushButton("Start Break")
        self._break_stop_btn = QPushButton("Stop Break")
        self._checkout_btn = QPushButton("Check Out")
        for btn in (self._checkin_btn, self._break_start_btn, self._break_stop_btn, self._checkout_btn):
            btn.setObjectName("primary")
            btn.setFont(self._blueprint.action_font)
        self._checkin_btn.clicked.connect(self._on_check_in)
        self._break_start_btn.clicked.connect(self._on_start_break)
        self._break_stop_btn.clicked.connect(self._on_stop_break)
        self._checkout_btn.clicked.connect(self._on_check_out)
        btn_grid.addWidget(self._checkin_btn, 0, 0)
        btn_grid.addWidget(self._checkout_btn, 0, 1)
        btn_grid.addWidget(self._break_start_btn, 1, 0)
        btn_grid.addWidget(self._break_stop_btn, 1, 1)
        lay.addLayout(btn_grid)

        # Footer
        footer = QHBoxLayout()
        edit_btn = QPushButton("Edit Times")
        edit_btn.clicked.connect(self._on_edit_times)
        breaks_btn = QPushButton("Breaks")
        breaks_btn.clicked.connect(lambda _=False: self._stack.setCurrentIndex(1))
        footer.addWidget(edit_btn)
        footer.addStretch()
        footer.addWidget(breaks_btn)
        lay.addLayout(footer)

        return page

    def _build_breaks_screen(self):
        page = QWidget()
        lay = QVBoxLayout(page)
        lay.setSpacing(10)

        header = QHBoxLayout()
        back_btn = QPushButton("Back")
        back_btn.clicked.connect(lambda _=False: self._stack.setCurrentIndex(0))
        header.addWidget(back_btn)
        header.addStretch()
        lay.addLayout(header)

        card = QFrame()
        card.setObjectName("card")
        grid = QGridLayout(card)
        self._break_checkin_lbl = self._value_label()
        self._break_current_lbl = self._value_label()
        self._break_count_lbl = self._value_label()
        self._break_total_lbl = self._value_label()
        self._break_estimated_lbl = self._value_label()
        for i, (name, value_lbl) in enumerate((
                ("Checked in", self._break_checkin_lbl),
                ("Current break started", self._break_current_lbl),
                ("Breaks", self._break_count_lbl),
                ("Total break time", self._break_total_lbl),
                ("Estimated check-out", self._break_estimated_lbl))):
            grid.addWidget(self._muted_label(name), i, 0)
            grid.addWidget(value_lbl, i, 1)
        lay.addWidget(card)

        self._break_list = QWidget()
        self._break_list_lay = QVBoxLayout(self._break_list)
        self._break_list_lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(self._break_list)

        self._break_empty_lbl = self._muted_label("No breaks yet today.")
        self._break_empty_lbl.setAlignment(Qt.AlignCenter)
        lay.addWidget(self._break_empty_lbl)
        lay.addStretch()

        return page

    # ------------------------------------------------------------------ #
    #  Style                                                               #
    # ------------------------------------------------------------------ #

    def _apply_style(self):
        style = build_stylesheet(self.tracker.theme)
        self.setStyleSheet(style)
        app = QApplication.instance()
        if app is not None:
            app.setStyleSheet(style)
        self._theme_btn.setText("Light Mode" if self.tracker.theme == "dark" else "Dark Mode")

    # ------------------------------------------------------------------ #
    #  Button handlers                                                     #
    # ------------------------------------------------------------------ #

    def _on_check_in(self):
        self.tracker.check_in()
        self._refresh()

    def _on_start_break(self):
        self.tracker.start_break()
        self._refresh()

    def _on_stop_break(self):
        self.tracker.stop_break()
        self._refresh()

    def _on_check_out(self):
        self.tracker.check_out(self._ask)
        self._refresh()

    def _ask(self, message, title):
        return QMessageBox.question(self, title, message) == QMessageBox.Yes

    def _on_toggle_theme(self):
        self.tracker.toggle_theme()
        self._blueprint = UIBlueprint.compute(self.tracker.theme)
        self._break_rows_shown = None
        self._apply_style()
        self._refresh()

    def _on_settings(self):
        dlg = SettingsDialog(self, {"ramadan_mode": self.tracker.settings.ramadan_mode})
        if dlg.exec() == QDialog.Accepted and dlg.settings_changed:
            self.tracker.set_ramadan_mode(dlg.chosen_ramadan_mode)
            self._refresh()

    def _on_edit_times(self):
        dlg = TimeEditDialog(self, self._blueprint, self.tracker.edit_form(), on_save=self.tracker.apply_time_edit)
        dlg.exec()
        self._refresh()

    # ------------------------------------------------------------------ #
    #  Display                                                             #
    # ------------------------------------------------------------------ #

    def _refresh(self):
        view = self.tracker.display()
        state = self.tracker.state

        self._checkin_btn.setEnabled(isinstance(state, NotStarted))
        self._break_start_btn.setEnabled(isinstance(state, CheckedIn))
        self._break_stop_btn.setEnabled(isinstance(state, OnBreak))
        self._checkout_btn.setEnabled(isinstance(state, (CheckedIn, OnBreak)))

        self._remaining_lbl.setText(view.remaining)
        self._status_lbl.setText(view.status)
        self._worked_lbl.setText(view.worked)
        self._target_lbl.setText(view.target)
        self._estimated_lbl.setText(view.estimated_checkout)

        self._progress.setValue(int(view.progress * 1000))
        complete = view.progress >= 1
        if self._progress.property("complete") != complete:
            self._progress.setProperty("complete", complete)
            self._progress.style().unpolish(self._progress)
            self._progress.style().polish(self._progress)

        self._break_checkin_lbl.setText(view.check_in)
        self._break_current_lbl.setText(view.current_break_start)
        self._break_count_lbl.setText(str(view.break_count))
        self._break_total_lbl.setText(view.break_total)
        self._break_estimated_lbl.setText(view.estimated_checkout)
        self._rebuild_break_rows(view.breaks)

    # Tear down and recreate the break timeline, only when what it shows actually changed.
    def _rebuild_break_rows(self, entries):
        if entries == self._break_rows_shown:
            return
        self._break_rows_shown = entries

        while self._break_list_lay.count():
            item = self._break_list_lay.takeAt(0)
            w = item.widget()
            if w:
                w.hide()
                w.deleteLater()

        for entry in entries:
            container, _ = RowFactory.break_entry(self._blueprint, entry)
            self._break_list_lay.addWidget(container)
        self._break_empty_lbl.setVisible(not entries)

    # ------------------------------------------------------------------ #
    #  Visibility                                                          #
    # ------------------------------------------------------------------ #

    # Pauses the tick while hidden. Coming back runs the daily reset check before the tick starts again.
    def _on_visibility_changed(self, visible):
        if not visible:
            if self._timer.isActive():
                self._timer.stop()
                log.debug("Window hidden, paused refresh")
            return
        if self._timer.isActive():
            return
        self.tracker.check_daily_reset()
        self._refresh()
        self._timer.start(1000)
        log.debug("Window visible again, resumed refresh")

    def changeEvent(self, event):
        if event.type() == QEvent.WindowStateChange:
            self._on_visibility_changed(not self.isMinimized())
        super().changeEvent(event)

    def hideEvent(self, event):
        self._on_visibility_changed(False)
        super().hideEvent(event)

    def showEvent(self, event):
        self._on_visibility_changed(True)
        super().showEvent(event)

    # ------------------------------------------------------------------ #
    #  Window close                                                        #
    # ------------------------------------------------------------------ #

    def closeEvent(self, event):
        self._timer.stop()
        log.info(f"Closing with session for {self.tracker.session.date} in state '{self.tracker.state.label}'")
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())
