# app/modules/remover/isnet/utils.py
"""
Alpha matte helpers for the IS-Net cut-out stage.
"""
import cv2
import numpy as np
from PIL import Image
from scipy.ndimage import gaussian_filter


def smart_noise_removal(alpha_matte, min_size=50, threshold=0.01):
    """
    Conservative connected component analysis.
    Remove only tiny isolated artifacts.
    """
    binary = (alpha_matte > threshold).astype(np.uint8)
    num_labels, labels, stats, _ = cv2.connectedComponentsWithStats(binary, connectivity=8)

    clean_mask = np.zeros_like(binary)

    for i in range(1, num_labels):  # Skip background (0)
        if stats[i, cv2.CC_STAT_AREA] >= min_size:
            clean_mask[labels == i] = 1

    return alpha_matte * clean_mask


def apply_gaussian_smoothing(alpha_matte, sigma=0.5):
    """Gentle Gaussian blur for subtle smoothing."""
    if sigma <= 0:
        return alpha_matte
    return gaussian_filter(alpha_matte, sigma=sigma)


def feather_edges(alpha_matte, radius=1):
    """Soft edges via a wider blur (optional)."""
    if radius <= 0:
        return alpha_matte

    sigma = radius / 3.0
    return gaussian_filter(alpha_matte, sigma=sigma)


def compose_rgba(rgb_image: Image.Image, alpha_matte: np.ndarray) -> Image.Image:
    """Attach a [0, 1] float matte to an RGB image as its alpha channel."""
    rgb_array = np.array(rgb_image.convert("RGB"))
    alpha_uint8 = (np.clip(alpha_matte, 0, 1) * 255).astype(np.uint8)
    rgba_array = np.dstack((rgb_array, alpha_uint8))
    return Image.fromarray(rgba_array)
