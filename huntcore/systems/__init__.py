"""Engine systems: RNG and spatial indexing."""

from huntcore.systems.rng import DeterministicRNG
from huntcore.systems.spatial_hash import SpatialHash

__all__ = ["DeterministicRNG", "SpatialHash"]
