# app/modules/remover/isnet/process.py
"""
IS-Net cut-out for the die-cut pipeline.
========================================
Turns an arbitrary photo into an RGBA image whose alpha marks the subject.
Post-processing stays light: the outline sampler thresholds the alpha, so
the matte only needs to be clean, not pretty.
"""
from typing import TYPE_CHECKING, Optional

import numpy as np
import structlog
import torch
from PIL import Image
from torchvision import transforms

from app.core.debug_utils import save_debug_heatmap
from .config import settings
from . import utils

if TYPE_CHECKING:
    from app.core.model_manager import ModelManager

log = structlog.get_logger(__name__)


def run(input_image: Image.Image, model_manager: "ModelManager", request_id: Optional[int] = None) -> Image.Image:
    """
    Performs background removal using IS-Net.

    Args:
        input_image: decoded image in any Pillow mode
        model_manager: manager holding the loaded IS-Net model

    Returns:
        RGBA image of the same size as the input
    """
    model = model_manager.isnet_model
    if model is None:
        raise RuntimeError("IS-Net model not initialized in ModelManager.")

    log.info("IS-Net: Starting cut-out.", input_size=input_image.size, mode=input_image.mode)
    rgb_image = input_image.convert("RGB")
    original_size = rgb_image.size

    # ═══════════════════════════════════════════════════════════════════
    # STAGE 1: IS-Net Inference
    # ═══════════════════════════════════════════════════════════════════
    log.info("IS-Net [Stage 1/3]: Inference...")

    preprocess = transforms.Compose([
        transforms.Resize(settings.MODEL_INPUT_SIZE),
        transforms.ToTensor(),
        transforms.Normalize([0.5, 0.5, 0.5], [1.0, 1.0, 1.0])
    ])

    input_tensor = preprocess(rgb_image).unsqueeze(0).to(model_manager.device)
    if model_manager.use_half:
        input_tensor = input_tensor.half()

    with torch.no_grad():
        outputs = model(input_tensor)
        pred = torch.sigmoid(outputs[0][0].squeeze()).float()

    # Back to the input resolution (Resize takes (h, w))
    pred_resized = transforms.Resize(original_size[::-1])(pred.clamp(0, 1).unsqueeze(0))
    alpha = pred_resized.squeeze(0).cpu().numpy().astype(np.float32)

    save_debug_heatmap(request_id, "cutout", "1_isnet_raw", alpha)

    # ═══════════════════════════════════════════════════════════════════
    # STAGE 2: Speck Removal
    # ═══════════════════════════════════════════════════════════════════
    if settings.USE_NOISE_REMOVAL:
        log.info("IS-Net [Stage 2/3]: Speck removal...")
        alpha = utils.smart_noise_removal(alpha, settings.MIN_COMPONENT_SIZE, settings.NOISE_THRESHOLD)
    else:
        log.info("IS-Net [Stage 2/3]: Speck removal skipped.")

    # ═══════════════════════════════════════════════════════════════════
    # STAGE 3: Smoothing / Feathering
    # ═══════════════════════════════════════════════════════════════════
    if settings.USE_GAUSSIAN_SMOOTH:
        log.info(f"IS-Net [Stage 3/3]: Gaussian smoothing (σ={settings.GAUSSIAN_SIGMA})...")
        alpha = utils.apply_gaussian_smoothing(alpha, settings.GAUSSIAN_SIGMA)
    if settings.USE_EDGE_FEATHERING:
        log.info(f"IS-Net [Stage 3/3]: Edge feathering (radius={settings.FEATHER_RADIUS})...")
        alpha = utils.feather_edges(alpha, settings.FEATHER_RADIUS)

    save_debug_heatmap(request_id, "cutout", "2_final_alpha", alpha)

    cutout = utils.compose_rgba(rgb_image, alpha)
    log.info("IS-Net: Cut-out complete.", output_size=cutout.size)
    return cutout
