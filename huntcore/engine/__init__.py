"""Engine layer: the tick loop and the sandbox host world."""

from huntcore.engine.sandbox import SandboxWorld
from huntcore.engine.tick_loop import TickLoop

__all__ = ["SandboxWorld", "TickLoop"]
