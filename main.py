"""
FastAPI service for die-cut image generation: IS-Net background removal,
silhouette outline with configurable bleed, and PNG export.
"""
import functools
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from app.config import settings
from app.core.errors import (
    BackgroundRemovalError,
    DieCutError,
    InvalidImageError,
    InvalidRequestError,
    NoSubjectFoundError,
)
from app.core.model_manager import ModelManager
from app.models.request import ProcessRequest
from app.models.response import OutlineResponse, ProcessResponse
from app.modules.canvas import process as canvas_process
from app.modules.canvas import settings as canvas_settings
from app.modules.remover.isnet import process as isnet_process
from app.services.pipeline import DieCutPipeline

log = structlog.get_logger(__name__)

# Global instances, created in the lifespan hook
model_manager: ModelManager = None
pipeline: DieCutPipeline = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for loading models on startup and cleanup on shutdown."""
    global model_manager, pipeline

    log.info("Starting service initialization...")

    model_manager = ModelManager()
    await model_manager.initialize()

    remover = functools.partial(isnet_process.run, model_manager=model_manager)
    pipeline = DieCutPipeline(remover)

    log.info("Service initialization complete. Ready to process requests.")

    yield

    log.info("Shutting down service...")
    if pipeline:
        await pipeline.loader.close()
    if model_manager:
        await model_manager.cleanup()
    log.info("Service shutdown complete.")


app = FastAPI(
    title="Die-Cut Image Service",
    description="Background removal and die-cut outline generation for print-style export",
    version="1.0.0",
    lifespan=lifespan
)


def _require_pipeline() -> DieCutPipeline:
    if not pipeline:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return pipeline


def _to_http_error(error: Exception) -> HTTPException:
    """Map pipeline failures onto client-facing statuses."""
    if isinstance(error, InvalidImageError):
        return HTTPException(status_code=415 if error.unsupported_type else 400, detail=str(error))
    if isinstance(error, NoSubjectFoundError):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, BackgroundRemovalError):
        return HTTPException(status_code=502, detail=str(error))
    if isinstance(error, InvalidRequestError):
        return HTTPException(status_code=400, detail=str(error))
    return HTTPException(status_code=500, detail=f"Processing failed: {str(error)}")


async def _run_upload(file: UploadFile, bleed: float, background: Optional[str], remove_background: bool):
    active = _require_pipeline()
    try:
        # Reject on the declared size before buffering the body.
        if file.size is not None:
            active.loader.check_size(file.size)
        data = await file.read()
        log.info("Received upload", filename=file.filename, content_type=file.content_type,
                 bytes=len(data), bleed=bleed, remove_background=remove_background)
        return await active.process_upload(
            data,
            file.content_type,
            bleed=bleed,
            background=background,
            remove_background=remove_background,
        )
    except DieCutError as e:
        log.warning("Upload rejected", filename=file.filename, error=str(e))
        raise _to_http_error(e)
    except Exception as e:
        log.exception("Error processing upload", filename=file.filename)
        raise _to_http_error(e)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "models_loaded": model_manager.is_initialized if model_manager else False
    }


@app.post("/outline", response_model=OutlineResponse)
async def outline(
    file: UploadFile = File(...),
    bleed: float = Form(settings.DEFAULT_BLEED, ge=settings.BLEED_MIN, le=settings.BLEED_MAX),
    remove_background: bool = Form(True),
):
    """Return the die-cut polygon (canvas coordinates) for an uploaded image."""
    result = await _run_upload(file, bleed, None, remove_background)
    return DieCutPipeline.describe(result)


@app.post("/diecut")
async def diecut(
    file: UploadFile = File(...),
    bleed: float = Form(settings.DEFAULT_BLEED, ge=settings.BLEED_MIN, le=settings.BLEED_MAX),
    background: str = Form(settings.DEFAULT_BACKGROUND),
    remove_background: bool = Form(True),
):
    """Return the rendered die-cut export as a PNG download."""
    result = await _run_upload(file, bleed, background, remove_background)
    headers = {
        "Content-Disposition": f'attachment; filename="{canvas_settings.EXPORT_FILENAME}"',
        "X-Outline-Found": "true" if result.outline is not None else "false",
    }
    return Response(content=canvas_process.encode_png(result.rendered), media_type="image/png", headers=headers)


@app.post("/process", response_model=ProcessResponse)
async def process_design(request: ProcessRequest):
    """
    Process a remote image through the complete pipeline.

    Pipeline stages:
    1. Download image
    2. Background removal with IS-Net
    3. Canvas placement and die-cut outline
    4. Render export
    5. Save and return URL
    """
    active = _require_pipeline()
    try:
        log.info("Received process request", request_id=request.id)
        result = await active.process(request)
        log.info("Process request completed", request_id=request.id)
        return result

    except DieCutError as e:
        log.warning("Process request rejected", request_id=request.id, error=str(e))
        raise _to_http_error(e)
    except Exception as e:
        log.exception("Error processing request", request_id=request.id)
        raise _to_http_error(e)


@app.get("/")
async def root():
    """Root endpoint with service info."""
    return {
        "service": "Die-Cut Image Service",
        "version": "1.0.0",
        "endpoints": {
            "health": "/health",
            "outline": "/outline",
            "diecut": "/diecut",
            "process": "/process"
        },
        "bleed_range": [settings.BLEED_MIN, settings.BLEED_MAX],
        "backgrounds": list(canvas_settings.BACKGROUND_PRESETS),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        workers=settings.WORKERS,
        log_level=settings.LOG_LEVEL.lower()
    )
