# app/services/__init__.py
"""Business logic and service layer."""
from .pipeline import DieCutPipeline, DieCutResult
from .loader import ImageLoader

__all__ = ["DieCutPipeline", "DieCutResult", "ImageLoader"]
