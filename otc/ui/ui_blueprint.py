from dataclasses import dataclass
from PySide6.QtGui import QFont, QFontMetrics
from otc.ui.theme import THEMES

# A unified UI Blueprint dataclass to share across all UI builders in one rebuild pass.
@dataclass
class UIBlueprint:
    theme: dict          # resolved theme dict (THEMES[name])
    font_family: str
    label_font: QFont
    time_font: QFont
    big_time_font: QFont
    action_font: QFont
    min_time_w: int
    min_label_w: int

    # Builds the blueprint from the current theme name.
    @staticmethod
    def compute(theme_name, font_family="Calibri"):
        theme = THEMES.get(theme_name, THEMES["light"])

        label_font = QFont(font_family, 11)
        time_font = QFont(font_family, 12)
        big_time_font = QFont(font_family, 28)
        big_time_font.setBold(True)
        action_font = QFont(font_family, 11)

        # Wide enough for the longest value each column can show
        min_time_w = QFontMetrics(time_font).horizontalAdvance("00:00:00 ")
        min_label_w = QFontMetrics(label_font).horizontalAdvance("Break 00: 00:00 - In progress ")

        return UIBlueprint(
            theme=theme, font_family=font_family,
            label_font=label_font, time_font=time_font,
            big_time_font=big_time_font, action_font=action_font,
            min_time_w=min_time_w, min_label_w=min_label_w,
        )
