"""Threat safety evaluator — would standing here, or walking this line, get us seen?

A hostile is a known monster that is aggressive and not already targeting the
agent (once it targets us there is nothing left to hide from).  Each hostile
projects a vision cone of ``vision_cone_radius`` and ``vision_cone_angle``
along its facing vector; a hostile with a zero facing vector has no cone.

Segment tests sample the line at ``interpolation_steps`` points.  With a
``prediction_horizon`` the observer is also projected forward along its
facing at ``prediction_steps`` instants, approximating an observer that
closes distance while we walk.  This is a sampled approximation: a cone can
still slip between samples.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from huntcore.core.geometry import hitboxes_overlap, magnitude, point_in_cone, sample_segment
from huntcore.core.models import EntitySnapshot, Vector2

if TYPE_CHECKING:
    from huntcore.config import EngineConfig
    from huntcore.core.snapshot import WorldSnapshot


class ThreatSafetyEvaluator:
    """Vision-cone queries against the hostiles of one snapshot."""

    __slots__ = ("_snapshot", "_config", "_hostiles", "_engaged_ids")

    def __init__(self, snapshot: WorldSnapshot, config: EngineConfig) -> None:
        self._snapshot = snapshot
        self._config = config
        agent = snapshot.agent
        hostiles: list[EntitySnapshot] = []
        engaged: set[int] = set()
        for e in snapshot.monsters():
            if not e.aggressive or e.targets(agent.id):
                continue
            if magnitude(e.facing) == 0.0:
                continue
            hostiles.append(e)
            if hitboxes_overlap(agent.pos, agent.hitbox, e.pos, snapshot.hitbox_of(e.kind)):
                engaged.add(e.id)
        self._hostiles = tuple(hostiles)
        self._engaged_ids = frozenset(engaged)

    # ------------------------------------------------------------------
    # Single observer
    # ------------------------------------------------------------------

    def is_point_in_cone(
        self,
        observer: EntitySnapshot,
        point: Vector2,
        radius: float | None = None,
        half_angle: float | None = None,
    ) -> bool:
        cfg = self._config
        return point_in_cone(
            observer.pos,
            observer.facing,
            point,
            cfg.vision_cone_radius if radius is None else radius,
            cfg.half_cone_angle if half_angle is None else half_angle,
        )

    def predicted_positions(self, observer: EntitySnapshot) -> list[Vector2]:
        """Observer positions at each prediction instant, starting with now."""
        cfg = self._config
        if cfg.prediction_horizon <= 0.0:
            return [observer.pos]
        speed = observer.move_speed or cfg.default_move_speed
        steps = cfg.prediction_steps
        return [
            Vector2(
                observer.x + observer.dx * speed * cfg.prediction_horizon * i / steps,
                observer.y + observer.dy * speed * cfg.prediction_horizon * i / steps,
            )
            for i in range(steps + 1)
        ]

    def is_line_in_cone(self, observer: EntitySnapshot, start: Vector2, end: Vector2) -> bool:
        cfg = self._config
        samples = sample_segment(start, end, cfg.interpolation_steps)
        radius = cfg.vision_cone_radius
        half_angle = cfg.half_cone_angle
        facing = observer.facing
        for origin in self.predicted_positions(observer):
            for p in samples:
                if point_in_cone(origin, facing, p, radius, half_angle):
                    return True
        return False

    # ------------------------------------------------------------------
    # All hostiles
    # ------------------------------------------------------------------

    @property
    def hostiles(self) -> tuple[EntitySnapshot, ...]:
        return self._hostiles

    def is_safe(self, point: Vector2) -> bool:
        for hostile in self._hostiles:
            if self.is_point_in_cone(hostile, point):
                return False
        return True

    def is_safe_path(self, start: Vector2, end: Vector2) -> bool:
        """No hostile cone crosses the segment.

        Hostiles whose hitbox already overlaps the agent are skipped: we are
        engaged with them and no route avoids them.
        """
        for hostile in self._hostiles:
            if hostile.id in self._engaged_ids:
                continue
            if self.is_line_in_cone(hostile, start, end):
                return False
        return True

    def count_observers_crossing(
        self,
        start: Vector2,
        end: Vector2,
        exclude_id: int | None = None,
    ) -> int:
        """How many hostiles (other than *exclude_id*) watch the segment."""
        return sum(
            1 for hostile in self._hostiles
            if hostile.id != exclude_id and self.is_line_in_cone(hostile, start, end)
        )
