"""Target scoring plugin system.

Each signal is a TargetSignal subclass registered in SIGNAL_REGISTRY.
The TargetScorer sums every registered signal to rank candidates.
"""

from huntcore.ai.scoring.base import TargetSignal, ScoringContext, TargetScorer, SIGNAL_REGISTRY
from huntcore.ai.scoring.registry import register_all_signals

# Auto-register all built-in signals on import
register_all_signals()

__all__ = [
    "TargetSignal",
    "ScoringContext",
    "TargetScorer",
    "SIGNAL_REGISTRY",
]
