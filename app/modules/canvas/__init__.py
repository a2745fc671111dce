# app/modules/canvas/__init__.py
"""Canvas placement and die-cut export rendering."""
from . import process
from .config import settings
from .layout import fit_to_canvas

__all__ = ["process", "settings", "fit_to_canvas"]
