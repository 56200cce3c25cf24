"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Geometry ---

class PointSchema(BaseModel):
    x: float
    y: float


# --- Entities ---

class EntitySchema(BaseModel):
    id: int
    kind: str
    x: float
    y: float
    dx: float = 0.0
    dy: float = 0.0
    hp: float = 1.0
    max_hp: float = 1.0
    level: int = 1
    rarity: int = 0
    aggressive: bool = False
    target_id: int | None = None


class AgentSchema(BaseModel):
    id: int
    x: float
    y: float
    z: int = 0
    hp: float = 1.0
    max_hp: float = 1.0
    level: int = 1


class CandidateSchema(BaseModel):
    id: int
    kind: str
    score: float


# --- Decisions ---

class ExplorationSchema(BaseModel):
    destination: PointSchema
    path: list[PointSchema] = Field(default_factory=list)
    fallback: bool = False


class DecisionResponse(BaseModel):
    tick: int
    outcome: str
    agent: AgentSchema
    target: EntitySchema | None = None
    score: float | None = None
    path: list[PointSchema] = Field(default_factory=list)
    is_attackable: bool = False
    is_gatherable: bool = False
    exploration: ExplorationSchema | None = None
    candidates: list[CandidateSchema] = Field(default_factory=list)
    entities: list[EntitySchema] = Field(default_factory=list)


# --- Heatmap ---

class HeatmapCellSchema(BaseModel):
    x: float
    y: float
    score: float
    last_visited_at: float


class HeatmapResponse(BaseModel):
    tick: int
    cells: list[HeatmapCellSchema] = Field(default_factory=list)


# --- Events ---

class EventSchema(BaseModel):
    tick: int
    outcome: str
    message: str
    target_id: int | None = None
    score: float | None = None
    waypoints: int = 0


class EventsResponse(BaseModel):
    events: list[EventSchema] = Field(default_factory=list)


# --- Config ---

class ScoreWeightsSchema(BaseModel):
    monster_base: float
    resource_base: float
    resource_tag_bonus: float
    station_ready_bonus: float
    station_idle_penalty: float
    injured_bonus: float
    targeting_bonus: float
    can_hunt_penalty: float
    rare_multiplier: float
    rare_monster_limit: int
    rare_monster_hp_threshold: float | None = None  # None = unlimited
    distance_mode: str
    distance_multiplier: float
    monster_distance_k: float
    monster_distance_lambda: float
    resource_distance_k: float
    resource_distance_lambda: float
    goo_penalty: float
    nearby_monster_penalty: float
    monsters_along_path: float
    level_mode: str
    same_level_bonus: float
    level_difference_factor: float


class EngineConfigResponse(BaseModel):
    seed: int
    tick_interval: float
    tick_rate: float
    vision_cone_angle: float
    vision_cone_radius: float
    interpolation_steps: int
    prediction_horizon: float
    path_step_size: float
    path_proximity: float
    max_pathfinding_iterations: int
    proximity_to_action: float
    ranged_attack_range: float | None = None
    get_resources: bool
    recycle_items: bool
    optimize_path: bool
    explore_new_areas: bool
    decay_rate: float
    decay_interval: float
    heatmap_radius: float
    explore_distance: float
    excluded_kinds: list[str] = Field(default_factory=list)
    score: ScoreWeightsSchema


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int
