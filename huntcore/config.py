"""Decision engine configuration with sensible defaults."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from huntcore.errors import ConfigError, UnknownProfileError


@dataclass(frozen=True)
class ScoreWeights:
    """Additive weights for the target scoring signals.

    Distance shaping is either ``"linear"`` (``distance_multiplier * d``) or
    ``"exponential"`` (``k * exp(-lambda * d)``).  Level difference is
    ``"off"``, ``"absolute"`` or ``"match"``.
    """

    # Category
    monster_base: float = 15.0
    resource_base: float = 0.0
    resource_tag_bonus: float = 15.0
    station_ready_bonus: float = 50.0
    station_idle_penalty: float = -1000.0

    # Monster state
    injured_bonus: float = 50.0
    targeting_bonus: float = 500.0
    can_hunt_penalty: float = -100.0

    # Rarity
    rare_multiplier: float = 15.0
    rare_monster_limit: int = 6
    rare_monster_hp_threshold: float = math.inf

    # Distance
    distance_mode: str = "exponential"
    distance_multiplier: float = -1.0
    monster_distance_k: float = 60.0
    monster_distance_lambda: float = 0.6
    resource_distance_k: float = 15.0
    resource_distance_lambda: float = 0.8

    # Proximity
    goo_penalty: float = -10.0
    nearby_monster_penalty: float = -30.0
    monsters_along_path: float = -20.0

    # Level difference
    level_mode: str = "off"
    same_level_bonus: float = 20.0
    level_difference_factor: float = 5.0


SCORE_PROFILES: dict[str, ScoreWeights] = {
    "default": ScoreWeights(),
    "linear": ScoreWeights(distance_mode="linear"),
    "leveling": ScoreWeights(distance_mode="linear", level_mode="match"),
}


def score_profile(name: str) -> ScoreWeights:
    """Return the named score profile."""
    try:
        return SCORE_PROFILES[name]
    except KeyError:
        raise UnknownProfileError(
            f"Unknown score profile {name!r} (known: {', '.join(sorted(SCORE_PROFILES))})"
        ) from None


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration for the decision engine."""

    # Timing
    tick_interval: float = 0.4             # seconds between decision passes

    # Engagement
    proximity_to_action: float = 0.5       # stand-off behind an aggressive target
    ranged_attack_range: float | None = None  # enables max-distance pathfinding for monsters

    # Vision cones
    vision_cone_angle: float = math.pi     # full angle, radians
    vision_cone_radius: float = 3.2
    interpolation_steps: int = 20
    prediction_horizon: float = 0.0        # seconds of observer movement to project (0 = off)
    prediction_steps: int = 4
    default_move_speed: float = 0.3

    # Pathfinding
    path_step_size: float = 0.75
    path_proximity: float = 0.7
    max_pathfinding_iterations: int = 500
    footprint_step: float = 1.0

    # Terrain
    walkable_surface: int = 0
    solid_threshold: int = 1

    # Scoring
    goo_tag: str = "goo"
    goo_proximity_range: float = 1.0
    monster_proximity_range: float = 1.0
    excluded_kinds: frozenset[str] = frozenset()
    safe_owned_targets: bool = True        # owned "safe" entities stay targetable
    score: ScoreWeights = field(default_factory=ScoreWeights)

    # Feature flags
    get_resources: bool = False
    recycle_items: bool = False
    optimize_path: bool = True
    explore_new_areas: bool = True

    # Exploration heatmap
    decay_rate: float = 0.05               # score lost per second since last visit
    decay_interval: float = 3.0            # seconds between decay passes
    visit_merge_radius: float = 0.5
    heatmap_radius: float = 30.0
    explore_distance: float = 5.0
    explore_recompute_interval: float = 1.0

    # Spatial index
    spatial_cell_size: float = 4.0

    # Logging
    log_level: str = "INFO"
    record_file: str = "decisions.json"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ConfigError when a setting is out of range."""
        if self.path_step_size <= 0:
            raise ConfigError("path_step_size must be positive")
        if self.max_pathfinding_iterations < 1:
            raise ConfigError("max_pathfinding_iterations must be >= 1")
        if self.interpolation_steps < 1:
            raise ConfigError("interpolation_steps must be >= 1")
        if self.prediction_horizon < 0 or self.prediction_steps < 1:
            raise ConfigError("prediction_horizon must be >= 0 and prediction_steps >= 1")
        if not 0 < self.vision_cone_angle <= 2 * math.pi:
            raise ConfigError("vision_cone_angle must be in (0, 2*pi]")
        if self.vision_cone_radius < 0:
            raise ConfigError("vision_cone_radius must be >= 0")
        if self.decay_rate < 0 or self.decay_interval <= 0:
            raise ConfigError("decay_rate must be >= 0 and decay_interval > 0")
        if self.footprint_step <= 0 or self.spatial_cell_size <= 0:
            raise ConfigError("footprint_step and spatial_cell_size must be positive")
        if self.score.distance_mode not in ("linear", "exponential"):
            raise ConfigError(f"Unknown distance_mode {self.score.distance_mode!r}")
        if self.score.level_mode not in ("off", "absolute", "match"):
            raise ConfigError(f"Unknown level_mode {self.score.level_mode!r}")

    @property
    def half_cone_angle(self) -> float:
        return self.vision_cone_angle / 2

    def with_overrides(self, **overrides) -> EngineConfig:
        """Return a copy with *overrides* applied (validated again)."""
        return replace(self, **overrides)

    def with_profile(self, name: str) -> EngineConfig:
        """Return a copy using the named score profile."""
        return replace(self, score=score_profile(name))
