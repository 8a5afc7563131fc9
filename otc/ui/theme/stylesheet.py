from .colors import THEMES


# Builds the application-wide Qt stylesheet for the given theme name, falling back to light.
def build_stylesheet(theme_name):
    t = THEMES.get(theme_name, THEMES["light"])
    return f"""
        QMainWindow, QDialog, QWidget {{ background-color: {t['bg']}; color: {t['text']}; }}
        QLabel {{ background: transparent; color: {t['text']}; }}
        QLabel#muted {{ color: {t['text_muted']}; }}
        QLabel#bigTime {{ font-size: 28pt; font-weight: bold; }}
        QFrame#card {{ background-color: {t['card_bg']}; border-radius: 8px; }}
        QFrame#separator {{ background-color: {t['separator']}; }}
        QPushButton {{
            background-color: {t['button_bg']}; color: {t['text']};
            border: none; border-radius: 6px; padding: 6px 12px;
        }}
        QPushButton#primary {{ background-color: {t['accent']}; color: {t['accent_text']}; }}
        QPushButton:disabled {{ background-color: {t['button_disabled']}; color: {t['text_disabled']}; }}
        QLineEdit {{
            background-color: {t['card_bg']}; color: {t['text']};
            border: 1px solid {t['separator']}; border-radius: 4px; padding: 4px;
        }}
        QProgressBar {{
            background-color: {t['progress_bg']}; border: none; border-radius: 4px;
            text-align: center; color: {t['text']};
        }}
        QProgressBar::chunk {{ background-color: {t['progress_fill']}; border-radius: 4px; }}
        QProgressBar[complete="true"]::chunk {{ background-color: {t['progress_complete']}; }}
    """
