from typing import Any
from collections.abc import Callable
from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QWidget,
)
from otc.core.display import BreakEntry
from otc.ui.ui_blueprint import UIBlueprint

# Purely organizational class to group functions that build rows for the break timeline and the time edit form.
# Each builder returns a (container, widget_dict) tuple. The container is a QWidget with objectName "rowBg" that can
# be inserted into a layout. The widget_dict maps logical names to sub-widgets for later reads.
class RowFactory:
    @staticmethod
    # One read-only line of the break timeline: "Break 1: 10:00 - 10:15" on the left, duration on the right.
    def break_entry(blueprint: UIBlueprint, entry: BreakEntry):
        row_container = QWidget()
        row_container.setObjectName("rowBg")
        row_container.setStyleSheet(
            f"#rowBg {{ border-bottom: 1px solid {blueprint.theme['separator']}; }}")
        row_container_layout = QHBoxLayout(row_container)
        row_container_layout.setContentsMargins(4, 4, 4, 4)

        range_lbl = QLabel(f"{entry.label}: {entry.start} - {entry.end}")
        range_lbl.setFont(blueprint.label_font)
        range_lbl.setMinimumWidth(blueprint.min_label_w)
        range_lbl.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        row_container_layout.addWidget(range_lbl, 1)

        duration_lbl = QLabel(entry.duration)
        duration_lbl.setFont(blueprint.time_font)
        duration_lbl.setFixedWidth(blueprint.min_time_w)
        duration_lbl.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        row_container_layout.addWidget(duration_lbl)

        return row_container, {"range": range_lbl, "duration": duration_lbl, "container": row_container}

    @staticmethod
    # One editable break row: start, end (blank while the break is still going), and a remove button.
    def break_edit_row(blueprint: UIBlueprint,
                       start: str,
                       end: str,
                       on_remove: Callable[..., Any]):
        row_container = QWidget()
        row_container.setObjectName("rowBg")
        row_container_layout = QHBoxLayout(row_container)
        row_container_layout.setContentsMargins(0, 0, 0, 0)

        start_input = QLineEdit(start)
        start_input.setPlaceholderText("HH:MM")
        start_input.setFont(blueprint.time_font)
        start_input.setAccessibleName("Break start time")
        row_container_layout.addWidget(start_input)

        end_input = QLineEdit(end)
        end_input.setPlaceholderText("HH:MM")
        end_input.setFont(blueprint.time_font)
        end_input.setAccessibleName("Break end time")
        row_container_layout.addWidget(end_input)

        remove_btn = QPushButton("Remove")
        remove_btn.setFont(blueprint.action_font)
        remove_btn.clicked.connect(lambda _=False: on_remove(row_container))
        row_container_layout.addWidget(remove_btn)

        return row_container, {"start": start_input, "end": end_input, "remove": remove_btn,
                               "container": row_container}
