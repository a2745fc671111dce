# app/models/response.py
from typing import List, Optional

from pydantic import BaseModel

from app.modules.outline.types import ImagePlacement, OutlinePolygon


class PointModel(BaseModel):
    x: float
    y: float


class PlacementModel(BaseModel):
    center_x: float
    center_y: float
    scaled_width: float
    scaled_height: float

    @classmethod
    def from_placement(cls, placement: ImagePlacement) -> "PlacementModel":
        return cls(
            center_x=placement.center_x,
            center_y=placement.center_y,
            scaled_width=placement.scaled_width,
            scaled_height=placement.scaled_height,
        )


class OutlineResponse(BaseModel):
    outline_found: bool
    points: List[PointModel] = []
    point_count: int = 0
    bleed: float
    placement: PlacementModel
    canvas_width: int
    canvas_height: int
    notice: Optional[str] = None

    @staticmethod
    def points_from(outline: Optional[OutlinePolygon]) -> List[PointModel]:
        if outline is None:
            return []
        return [PointModel(x=p.x, y=p.y) for p in outline]


class ProcessResponse(BaseModel):
    id: int
    output: str
    outline: OutlineResponse
    processing_time_seconds: float
