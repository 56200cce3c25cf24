"""huntcore — target selection, threat-aware pathfinding and exploration for a game agent."""

from huntcore.ai.engine import DecisionEngine, TickResult
from huntcore.config import EngineConfig, ScoreWeights, SCORE_PROFILES
from huntcore.errors import ConfigError, HuntcoreError, UnknownProfileError

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DecisionEngine",
    "EngineConfig",
    "HuntcoreError",
    "SCORE_PROFILES",
    "ScoreWeights",
    "TickResult",
    "UnknownProfileError",
]
