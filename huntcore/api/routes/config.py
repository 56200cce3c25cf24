"""GET /api/v1/config — expose the engine configuration."""

from __future__ import annotations

import math
from dataclasses import asdict

from fastapi import APIRouter, Depends

from huntcore.api.dependencies import get_engine_manager
from huntcore.api.engine_manager import EngineManager
from huntcore.api.schemas import EngineConfigResponse, ScoreWeightsSchema

router = APIRouter()


@router.get("/config", response_model=EngineConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> EngineConfigResponse:
    cfg = manager.config
    weights = asdict(cfg.score)
    if math.isinf(weights["rare_monster_hp_threshold"]):
        weights["rare_monster_hp_threshold"] = None
    return EngineConfigResponse(
        seed=manager.seed,
        tick_interval=cfg.tick_interval,
        tick_rate=manager.tick_rate,
        vision_cone_angle=cfg.vision_cone_angle,
        vision_cone_radius=cfg.vision_cone_radius,
        interpolation_steps=cfg.interpolation_steps,
        prediction_horizon=cfg.prediction_horizon,
        path_step_size=cfg.path_step_size,
        path_proximity=cfg.path_proximity,
        max_pathfinding_iterations=cfg.max_pathfinding_iterations,
        proximity_to_action=cfg.proximity_to_action,
        ranged_attack_range=cfg.ranged_attack_range,
        get_resources=cfg.get_resources,
        recycle_items=cfg.recycle_items,
        optimize_path=cfg.optimize_path,
        explore_new_areas=cfg.explore_new_areas,
        decay_rate=cfg.decay_rate,
        decay_interval=cfg.decay_interval,
        heatmap_radius=cfg.heatmap_radius,
        explore_distance=cfg.explore_distance,
        excluded_kinds=sorted(cfg.excluded_kinds),
        score=ScoreWeightsSchema(**weights),
    )
