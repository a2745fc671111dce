"""
Styling for the rendered die-cut export.
"""
from pydantic_settings import BaseSettings


class CanvasStyleSettings(BaseSettings):
    """How the outline is drawn behind the cut-out."""

    # --- OUTLINE STROKE ---
    STROKE_COLOR: tuple[int, int, int, int] = (255, 255, 255, 255)
    STROKE_WIDTH: int = 2
    # Alternating on/off run lengths along the outline, in canvas units.
    DASH_PATTERN: tuple[float, ...] = (5.0, 5.0)

    # --- DROP SHADOW ---
    SHADOW_COLOR: tuple[int, int, int, int] = (0, 0, 0, 77)  # rgba(0,0,0,0.3)
    SHADOW_OFFSET: tuple[int, int] = (2, 2)
    SHADOW_BLUR: float = 4.0

    # Background swatches offered by the editor. Any CSS colour is accepted.
    BACKGROUND_PRESETS: tuple[str, ...] = ("#ffffff", "#000000", "#f2f2f2", "#cccccc", "transparent")

    EXPORT_FILENAME: str = "die-cut-image.png"

    class Config:
        env_prefix = "CANVAS_"


settings = CanvasStyleSettings()
