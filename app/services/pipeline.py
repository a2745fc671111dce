# app/services/pipeline.py
import asyncio
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Tuple

import structlog
from PIL import Image

from app.config import settings
from app.core.debug_utils import save_debug_image, save_debug_outline
from app.core.errors import BackgroundRemovalError, NoSubjectFoundError
from app.core.process_lock import isnet_lock
from app.models.request import ProcessRequest
from app.models.response import OutlineResponse, PlacementModel, ProcessResponse
from app.modules.canvas import fit_to_canvas
from app.modules.canvas import process as canvas_process
from app.modules.canvas.utils import parse_background
from app.modules.outline import generate_outline, ImagePlacement, OutlinePolygon, RasterImage
from app.modules.outline import settings as outline_settings
from app.services.loader import ImageLoader

log = structlog.get_logger(__name__)

# Opaque background-removal step: any image in, RGBA cut-out out.
# Called as remover(image, request_id=...) so it can file its debug output.
Remover = Callable[..., Image.Image]

NO_OUTLINE_NOTICE = "No die-cut outline could be generated for this image; it was exported without one."


@dataclass
class DieCutResult:
    placement: ImagePlacement
    outline: Optional[OutlinePolygon]
    rendered: Image.Image
    canvas_size: Tuple[int, int]
    bleed: float

    @property
    def notice(self) -> Optional[str]:
        return None if self.outline is not None else NO_OUTLINE_NOTICE


def has_subject(image: Image.Image) -> bool:
    """True when at least one pixel is opaque enough to be outlined."""
    raster = RasterImage.from_pil(image)
    return raster.has_pixels() and bool((raster.alpha > outline_settings.ALPHA_THRESHOLD).any())


def _remove_background_safely(request_id: Optional[int], image: Image.Image, remover: Remover) -> Image.Image:
    """Synchronous helper to run the remover under the cross-process model lock."""
    with isnet_lock:
        log.info("Cut-out lock acquired", request_id=request_id)
        try:
            return remover(image, request_id=request_id)
        finally:
            log.info("Cut-out lock released", request_id=request_id)


class DieCutPipeline:
    """Orchestrates load -> cut-out -> place -> outline -> render."""

    def __init__(self, remover: Remover, loader: Optional[ImageLoader] = None,
                 output_dir: Optional[Path] = None):
        self.remover = remover
        self.loader = loader or ImageLoader()
        self.output_dir = Path(output_dir or settings.OUTPUT_DIR)
        self.canvas_size = (settings.CANVAS_WIDTH, settings.CANVAS_HEIGHT)
        log.info("Pipeline initialized", canvas_size=self.canvas_size)

    async def process(self, request: ProcessRequest) -> ProcessResponse:
        """Download, die-cut, save, and return the public URL of the export."""
        start_time = datetime.now()
        log.info("Starting pipeline", request_id=request.id)
        try:
            log.info("Stage 1: Downloading image...")
            image = await self.loader.download(request.image_url)

            result = await self.process_image(
                image,
                bleed=request.bleed,
                background=request.background,
                remove_background=request.remove_background,
                request_id=request.id,
            )

            log.info("Stage 5: Saving export...")
            url = await self._save_export(request.id, result.rendered)

            elapsed = (datetime.now() - start_time).total_seconds()
            log.info("Pipeline complete", request_id=request.id, elapsed_seconds=elapsed)

            return ProcessResponse(
                id=request.id,
                output=url,
                outline=self.describe(result),
                processing_time_seconds=elapsed,
            )
        except Exception:
            log.exception("Pipeline failed", request_id=request.id)
            raise

    async def process_upload(self, data: bytes, content_type: Optional[str], *, bleed: float,
                             background: Optional[str] = None, remove_background: bool = True,
                             request_id: Optional[int] = None) -> DieCutResult:
        image = self.loader.decode(data, content_type)
        return await self.process_image(image, bleed=bleed, background=background,
                                        remove_background=remove_background, request_id=request_id)

    async def process_image(self, image: Image.Image, *, bleed: float, background: Optional[str] = None,
                            remove_background: bool = True, request_id: Optional[int] = None) -> DieCutResult:
        # Fail on a bad colour before spending time on the model.
        parse_background(background)
        save_debug_image(request_id, "diecut", "0_original", image)

        if remove_background:
            log.info("Stage 2: Removing background...", request_id=request_id)
            cutout = await self._remove_background(request_id, image)
        else:
            log.info("Stage 2: Background removal skipped", request_id=request_id)
            cutout = image

        log.info("Stage 3-4: Generating outline and rendering...", request_id=request_id, bleed=bleed)
        result = await asyncio.to_thread(self.build, cutout, bleed, background)

        save_debug_outline(request_id, "diecut", "3_outline", result.rendered,
                           result.outline.as_pairs() if result.outline else None)
        save_debug_image(request_id, "diecut", "4_export", result.rendered)
        return result

    def build(self, cutout: Image.Image, bleed: float, background: Optional[str] = None) -> DieCutResult:
        """Place the cut-out, derive its outline and render the export (sync, CPU only)."""
        placement = fit_to_canvas(cutout.size, self.canvas_size)
        outline = generate_outline(RasterImage.from_pil(cutout), placement, bleed)
        if outline is None:
            log.warning("Exporting without die-cut outline", size=cutout.size)

        rendered = canvas_process.render_diecut(cutout, placement, outline, self.canvas_size, background)
        return DieCutResult(
            placement=placement,
            outline=outline,
            rendered=rendered,
            canvas_size=self.canvas_size,
            bleed=bleed,
        )

    @staticmethod
    def describe(result: DieCutResult) -> OutlineResponse:
        points = OutlineResponse.points_from(result.outline)
        return OutlineResponse(
            outline_found=result.outline is not None,
            points=points,
            point_count=len(points),
            bleed=result.bleed,
            placement=PlacementModel.from_placement(result.placement),
            canvas_width=result.canvas_size[0],
            canvas_height=result.canvas_size[1],
            notice=result.notice,
        )

    async def _remove_background(self, request_id: Optional[int], image: Image.Image) -> Image.Image:
        """Runs the remover in a worker thread; sorts failures from empty results."""
        try:
            cutout = await asyncio.to_thread(_remove_background_safely, request_id, image, self.remover)
        except Exception as e:
            log.exception("Background removal failed", request_id=request_id)
            raise BackgroundRemovalError(f"Background removal failed: {e}") from e

        save_debug_image(request_id, "diecut", "1_cutout", cutout)

        if not has_subject(cutout):
            log.warning("Background removal left no subject", request_id=request_id)
            raise NoSubjectFoundError("No subject found in the image after background removal")

        log.info("Background removal complete", request_id=request_id, size=cutout.size)
        return cutout

    async def _save_export(self, request_id: int, image: Image.Image) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"diecut_{request_id}_{timestamp}.png"
        filepath = self.output_dir / filename

        # The outputs folder may be cleared while the service runs.
        filepath.parent.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(image.save, filepath, "PNG")

        url = f"{settings.BASE_URL}/{filepath.name}"
        log.info("Export saved", request_id=request_id, path=str(filepath))
        return url
