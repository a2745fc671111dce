"""
Application configuration using Pydantic Settings.
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8001
    WORKERS: int = 1  # Single worker for GPU management

    # Storage settings
    OUTPUT_DIR: str = "outputs"
    BASE_URL: str = "https://yourcdn.com"  # Base URL for exported die-cut images

    # Global switch to enable/disable saving of intermediate debug images.
    DEBUG_SAVE_IMAGES: bool = False

    # Upload / processing limits
    MAX_IMAGE_SIZE: int = 4096  # Larger inputs are downscaled to this dimension
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Model settings
    DEVICE: str = "cuda"  # or "cpu"
    USE_FP16: bool = True  # Use half precision for faster inference
    MODEL_CACHE_DIR: str = "/models"
    LOCK_DIR: str = "/tmp/app_locks"
    MODEL_LOCK_TIMEOUT: float = 120.0  # seconds
    ISNET_WEIGHTS: str = "isnet-general-use.pth"

    # Host canvas the cut-out is placed on (editor defaults)
    CANVAS_WIDTH: int = 800
    CANVAS_HEIGHT: int = 600
    CANVAS_FILL_RATIO: float = 0.8

    # Die-cut bleed, in canvas units
    DEFAULT_BLEED: float = 10.0
    BLEED_MIN: float = 5.0
    BLEED_MAX: float = 30.0

    DEFAULT_BACKGROUND: str = "#ffffff"

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Create global settings instance
settings = Settings()
