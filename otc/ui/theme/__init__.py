"""Light and dark palettes plus the stylesheet built from them."""
from .colors import THEMES
from .stylesheet import build_stylesheet

__all__ = ["THEMES", "build_stylesheet"]
