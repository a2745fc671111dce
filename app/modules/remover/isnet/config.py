# app/modules/remover/isnet/config.py
"""
Configuration for IS-Net background removal ahead of die-cut outlining.
The outline samples the alpha at a hard threshold, so post-processing is kept
minimal: drop specks that would grow their own outline, then soften slightly.
"""
from pydantic_settings import BaseSettings


class ISNetSettings(BaseSettings):
    """Configuration for the IS-Net cut-out stage."""

    # Model settings
    MODEL_INPUT_SIZE: tuple[int, int] = (1024, 1024)

    # === STAGE 1: Speck Removal ===
    # Isolated blobs would otherwise be merged into the die-cut polygon.
    USE_NOISE_REMOVAL: bool = True
    MIN_COMPONENT_SIZE: int = 50
    NOISE_THRESHOLD: float = 0.01

    # === STAGE 2: Gentle Gaussian Smoothing ===
    USE_GAUSSIAN_SMOOTH: bool = True
    GAUSSIAN_SIGMA: float = 0.5         # 0.5-2.0 for subtle smoothing

    # === STAGE 3: Feathering (OPTIONAL) ===
    USE_EDGE_FEATHERING: bool = False
    FEATHER_RADIUS: int = 1

    class Config:
        env_prefix = "ISNET_"


settings = ISNetSettings()
