"""
Configuration for the die-cut outline generator.
"""
from pydantic_settings import BaseSettings


class OutlineSettings(BaseSettings):
    """Tuning for the sample -> map -> simplify -> expand chain."""

    # A pixel counts as opaque only when its alpha is strictly above this.
    ALPHA_THRESHOLD: int = 128

    # Sample every Nth pixel along both axes. Larger = fewer points, coarser outline.
    GRID_STEP: int = 5

    # Points closer than this (canvas units) to the last kept point are dropped.
    SIMPLIFY_TOLERANCE: float = 5.0

    # Below this many points there is no usable polygon.
    MIN_POINTS: int = 4

    class Config:
        env_prefix = "OUTLINE_"


settings = OutlineSettings()
