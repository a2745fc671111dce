# app/core/debug_utils.py

from pathlib import Path
from typing import Optional

import cv2
import numpy as np
import structlog
from PIL import Image

from app.config import settings

log = structlog.get_logger(__name__)


def _debug_dir(request_id: Optional[int]) -> Path:
    folder = "adhoc" if request_id is None else str(request_id)
    return Path(settings.OUTPUT_DIR) / "debug" / folder


def save_debug_image(request_id: Optional[int], image_key: str, step_name: str, image_data):
    """
    Saves an image to a debug folder if DEBUG_SAVE_IMAGES is enabled.
    Handles PIL Images and NumPy arrays (uint8, or float mattes in [0, 1]).
    """
    if not settings.DEBUG_SAVE_IMAGES:
        return

    try:
        debug_dir = _debug_dir(request_id)
        debug_dir.mkdir(parents=True, exist_ok=True)
        filepath = debug_dir / f"{image_key}_{step_name}.png"

        pil_image = None
        if isinstance(image_data, Image.Image):
            pil_image = image_data
        elif isinstance(image_data, np.ndarray):
            if image_data.dtype != np.uint8:
                image_data = (np.clip(image_data, 0, 1) * 255).astype(np.uint8)
            # Convert BGR (from OpenCV) to RGB if needed
            if image_data.ndim == 3 and image_data.shape[2] == 3:
                image_data = cv2.cvtColor(image_data, cv2.COLOR_BGR2RGB)
            pil_image = Image.fromarray(image_data)

        if pil_image:
            pil_image.save(filepath, "PNG")

    except Exception as e:
        # Don't crash the main pipeline if a debug save fails
        log.warning("Failed to save debug image", step=step_name, error=str(e))


def save_debug_heatmap(request_id: Optional[int], image_key: str, step_name: str, alpha_matte: np.ndarray):
    """
    Generates a color heatmap from a single-channel alpha matte and saves it.
    """
    if not settings.DEBUG_SAVE_IMAGES:
        return

    try:
        alpha_uint8 = (np.clip(alpha_matte, 0, 1) * 255).astype(np.uint8)
        heatmap = cv2.applyColorMap(alpha_uint8, cv2.COLORMAP_JET)
        save_debug_image(request_id, image_key, f"{step_name}_heatmap", heatmap)
    except Exception as e:
        log.warning("Failed to save debug heatmap", step=step_name, error=str(e))


def save_debug_outline(request_id: Optional[int], image_key: str, step_name: str,
                       canvas_image: Image.Image, outline_points):
    """
    Draws the raw (undashed) outline polygon over a rendered canvas in red.
    """
    if not settings.DEBUG_SAVE_IMAGES or not outline_points:
        return

    try:
        bgr = cv2.cvtColor(np.array(canvas_image.convert("RGB")), cv2.COLOR_RGB2BGR)
        pts = np.round(np.asarray(outline_points, dtype=np.float64)).astype(np.int32).reshape(-1, 1, 2)
        cv2.polylines(bgr, [pts], isClosed=True, color=(0, 0, 255), thickness=1)
        save_debug_image(request_id, image_key, step_name, bgr)
    except Exception as e:
        log.warning("Failed to save debug outline", step=step_name, error=str(e))
