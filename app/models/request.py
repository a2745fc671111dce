# app/models/request.py
from typing import Optional

from pydantic import BaseModel, Field

from app.config import settings


class ProcessRequest(BaseModel):
    """Die-cut job for an image hosted at a URL."""

    id: int
    image_url: str
    bleed: float = Field(default=settings.DEFAULT_BLEED, ge=settings.BLEED_MIN, le=settings.BLEED_MAX)
    background: Optional[str] = settings.DEFAULT_BACKGROUND
    # Skip IS-Net when the image is already a cut-out (e.g. re-running with a new bleed).
    remove_background: bool = True
