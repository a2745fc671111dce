"""
Image loading for the die-cut pipeline: upload validation and async download
with connection pooling, retry logic, and exponential backoff.
"""
import asyncio
import random
from io import BytesIO
from typing import Optional

import httpx
import structlog
from PIL import Image, UnidentifiedImageError

from app.config import settings
from app.core.errors import InvalidImageError

log = structlog.get_logger(__name__)


# A single, shared client so every download reuses the same connection pool.
_client = httpx.AsyncClient(
    timeout=30.0,
    follow_redirects=True,
    limits=httpx.Limits(max_keepalive_connections=20, max_connections=40),
    headers={
        "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    }
)


class ImageLoader:
    """Turns uploaded bytes or remote URLs into decoded Pillow images."""

    def __init__(self, max_retries: int = 3, initial_backoff: float = 1.0,
                 client: Optional[httpx.AsyncClient] = None):
        self.max_retries = max_retries
        self.initial_backoff = initial_backoff
        self.client = client or _client

    @staticmethod
    def check_size(size: int):
        """Raise InvalidImageError when an upload exceeds MAX_UPLOAD_BYTES."""
        if size > settings.MAX_UPLOAD_BYTES:
            limit_mb = settings.MAX_UPLOAD_BYTES / (1024 * 1024)
            raise InvalidImageError(f"Image is too large. Please select an image smaller than {limit_mb:g}MB.")

    def decode(self, data: bytes, content_type: Optional[str] = None) -> Image.Image:
        """
        Validate and decode an uploaded image.

        Args:
            data: raw file bytes
            content_type: declared MIME type; checked only when given

        Returns:
            Fully loaded PIL Image, downscaled to MAX_IMAGE_SIZE if larger

        Raises:
            InvalidImageError: wrong type, empty, too large, or undecodable
        """
        if content_type and not content_type.lower().startswith("image/"):
            raise InvalidImageError(
                f"Please select an image file (JPEG, PNG, etc.), got '{content_type}'",
                unsupported_type=True,
            )
        if not data:
            raise InvalidImageError("Uploaded file is empty")
        self.check_size(len(data))

        try:
            image = Image.open(BytesIO(data))
            # Force the decode now so a truncated stream fails here, not mid-pipeline.
            image.load()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise InvalidImageError(f"Could not decode image: {e}") from e

        if image.width == 0 or image.height == 0:
            raise InvalidImageError(f"Image has no pixels: {image.size}")

        if max(image.size) > settings.MAX_IMAGE_SIZE:
            original_size = image.size
            image.thumbnail((settings.MAX_IMAGE_SIZE, settings.MAX_IMAGE_SIZE), Image.LANCZOS)
            log.info("Image downscaled", original_size=original_size, size=image.size)

        log.info("Image decoded", size=image.size, mode=image.mode, bytes=len(data))
        return image

    async def download(self, url: str) -> Image.Image:
        """
        Download an image from a URL with exponential backoff retry logic.

        Raises:
            InvalidImageError: if every attempt fails or the payload is not an image
        """
        log.info("Downloading image", url=url)

        for attempt in range(self.max_retries):
            try:
                response = await self.client.get(url)
                response.raise_for_status()
                image = self.decode(response.content)
                log.info("Image downloaded successfully", url=url, attempt=attempt + 1)
                return image

            except httpx.HTTPStatusError as e:
                log.warning("HTTP error downloading image",
                            url=url,
                            status_code=e.response.status_code,
                            attempt=attempt + 1)
            except httpx.RequestError as e:
                log.warning("Network error downloading image",
                            url=url,
                            error=str(e),
                            attempt=attempt + 1)

            if attempt < self.max_retries - 1:
                backoff_time = self.initial_backoff * (2 ** attempt)
                jitter = backoff_time * random.uniform(0.1, 0.5)
                wait_time = backoff_time + jitter
                log.info(f"Download failed. Retrying in {wait_time:.2f} seconds...", url=url)
                await asyncio.sleep(wait_time)

        log.error("Failed to download image after all retries", url=url, attempts=self.max_retries)
        raise InvalidImageError(f"Failed to download image after {self.max_retries} attempts: {url}")

    async def close(self):
        """Close the HTTP client (called on app shutdown)."""
        if not self.client.is_closed:
            await self.client.aclose()
            log.info("HTTP client closed")
