"""
Model manager for the die-cut service.
Holds the IS-Net segmentation model used for background removal.
"""
import os
import sys
from pathlib import Path

import structlog
import torch

from app.config import settings

log = structlog.get_logger(__name__)


def _setup_isnet_import():
    """Adds the cloned DIS repository (which ships the IS-Net architecture) to the Python path."""
    project_root = Path(__file__).resolve().parent.parent.parent
    dis_path = project_root / "external" / "DIS" / "IS-Net"

    if not dis_path.is_dir():
        raise ImportError(
            f"IS-Net directory not found at '{dis_path}'. "
            f"Please ensure the DIS repository is cloned into the 'external' folder."
        )

    dis_path_str = str(dis_path)
    if dis_path_str not in sys.path:
        sys.path.insert(0, dis_path_str)
        log.info("Added IS-Net source to Python path", path=dis_path_str)


class ModelManager:
    """Loads the cut-out model once and keeps it on the configured device."""

    def __init__(self):
        wants_cuda = settings.DEVICE.startswith("cuda")
        self.device = torch.device(settings.DEVICE if wants_cuda and torch.cuda.is_available() else "cpu")
        self.is_initialized = False
        self.isnet_model = None
        log.info("ModelManager created", device=str(self.device))

    @property
    def use_half(self) -> bool:
        return self.device.type == "cuda" and settings.USE_FP16

    async def initialize(self):
        if self.is_initialized:
            return
        log.info("Starting model initialization...")
        await self._init_isnet()
        self.is_initialized = True
        log.info("All models initialized successfully")
        if self.device.type == "cuda":
            allocated = torch.cuda.memory_allocated(self.device) / 1024**3
            reserved = torch.cuda.memory_reserved(self.device) / 1024**3
            log.info(f"GPU memory: {allocated:.2f}GB allocated, {reserved:.2f}GB reserved")

    async def _init_isnet(self):
        """Initialize the IS-Net background removal model."""
        log.info("Loading IS-Net model from external DIS repository...")
        model_path = os.path.join(settings.MODEL_CACHE_DIR, settings.ISNET_WEIGHTS)
        if not os.path.exists(model_path):
            raise FileNotFoundError(
                f"IS-Net model not found at {model_path}. "
                f"Please add it to the model cache directory."
            )

        _setup_isnet_import()
        from models.isnet import ISNetDIS

        self.isnet_model = ISNetDIS()
        self.isnet_model.load_state_dict(torch.load(model_path, map_location="cpu"))
        self.isnet_model.to(self.device)
        if self.use_half:
            self.isnet_model.half()
        self.isnet_model.eval()
        log.info("IS-Net model loaded successfully.", weights=model_path)

    async def cleanup(self):
        log.info("Cleaning up ModelManager...")
        if self.isnet_model is not None:
            self.isnet_model.cpu()
            self.isnet_model = None
        if self.device.type == "cuda":
            torch.cuda.empty_cache()
        self.is_initialized = False
        log.info("ModelManager cleanup complete")
