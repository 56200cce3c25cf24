"""Score signal registration.

Call ``register_all_signals()`` once at import time to populate SIGNAL_REGISTRY.
To add a custom signal, either append to this function or call
``register_signal()`` directly from your own module.
"""

from __future__ import annotations

from huntcore.ai.scoring.base import register_signal
from huntcore.ai.scoring.signals import (
    CategorySignal,
    StationSignal,
    InjuredSignal,
    TargetingAgentSignal,
    HuntableSignal,
    RaritySignal,
    LevelDifferenceSignal,
    DistanceSignal,
    GooClusterSignal,
    CrowdingSignal,
    ObstructionSignal,
)

_registered = False


def register_all_signals() -> None:
    """Register all built-in score signals (idempotent)."""
    global _registered
    if _registered:
        return
    _registered = True

    register_signal(CategorySignal())
    register_signal(StationSignal())
    register_signal(InjuredSignal())
    register_signal(TargetingAgentSignal())
    register_signal(HuntableSignal())
    register_signal(RaritySignal())
    register_signal(LevelDifferenceSignal())
    register_signal(DistanceSignal())
    register_signal(GooClusterSignal())
    register_signal(CrowdingSignal())
    register_signal(ObstructionSignal())
