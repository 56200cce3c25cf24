"""GET /api/v1/heatmap — exploration heatmap cells."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from huntcore.api.dependencies import get_engine_manager
from huntcore.api.engine_manager import EngineManager
from huntcore.api.schemas import HeatmapCellSchema, HeatmapResponse

router = APIRouter()


@router.get("/heatmap", response_model=HeatmapResponse)
def get_heatmap(
    manager: EngineManager = Depends(get_engine_manager),
) -> HeatmapResponse:
    published = manager.get_published()
    if published is None:
        raise HTTPException(status_code=503, detail="Engine not ready")
    return HeatmapResponse(
        tick=published.tick,
        cells=[HeatmapCellSchema(**record) for record in published.heatmap],
    )
