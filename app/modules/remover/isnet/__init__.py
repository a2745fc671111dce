# app/modules/remover/isnet/__init__.py
"""IS-Net background removal."""
from . import process
from .config import settings

__all__ = ["process", "settings"]
