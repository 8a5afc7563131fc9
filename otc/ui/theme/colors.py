# Color palettes keyed by the stored theme preference.
THEMES = {
    "light": {
        "bg": "#F5F5F7",
        "card_bg": "#FFFFFF",
        "text": "#1D1D1F",
        "text_muted": "#6E6E73",
        "accent": "#0A84FF",
        "accent_text": "#FFFFFF",
        "button_bg": "#E5E5EA",
        "button_disabled": "#D1D1D6",
        "text_disabled": "#A1A1A6",
        "progress_bg": "#E5E5EA",
        "progress_fill": "#0A84FF",
        "progress_complete": "#30D158",
        "separator": "#D1D1D6",
    },
    "dark": {
        "bg": "#1C1C1E",
        "card_bg": "#2C2C2E",
        "text": "#F2F2F7",
        "text_muted": "#AEAEB2",
        "accent": "#0A84FF",
        "accent_text": "#FFFFFF",
        "button_bg": "#3A3A3C",
        "button_disabled": "#2C2C2E",
        "text_disabled": "#636366",
        "progress_bg": "#3A3A3C",
        "progress_fill": "#0A84FF",
        "progress_complete": "#30D158",
        "separator": "#48484A",
    },
}
