"""GET /api/v1/decision — the latest decision pass."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from huntcore.api.dependencies import get_engine_manager
from huntcore.api.engine_manager import EngineManager
from huntcore.api.schemas import (
    AgentSchema,
    CandidateSchema,
    DecisionResponse,
    EntitySchema,
    ExplorationSchema,
    PointSchema,
)
from huntcore.core.enums import Outcome

router = APIRouter()


def _points(path) -> list[PointSchema]:
    return [PointSchema(x=p.x, y=p.y) for p in path]


def _entity(e) -> EntitySchema:
    return EntitySchema(
        id=e.id, kind=e.kind, x=e.x, y=e.y, dx=e.dx, dy=e.dy,
        hp=e.hp, max_hp=e.max_hp, level=e.level, rarity=e.rarity,
        aggressive=e.aggressive, target_id=e.target_id,
    )


@router.get("/decision", response_model=DecisionResponse)
def get_decision(
    candidates: int = Query(5, ge=0, le=100, description="How many ranked candidates to include"),
    manager: EngineManager = Depends(get_engine_manager),
) -> DecisionResponse:
    published = manager.get_published()
    if published is None:
        raise HTTPException(status_code=503, detail="Engine not ready")

    a = published.agent
    response = DecisionResponse(
        tick=published.tick,
        outcome=Outcome.STAND_BY.name,
        agent=AgentSchema(id=a.id, x=a.x, y=a.y, z=a.z, hp=a.hp, max_hp=a.max_hp, level=a.level),
        entities=[_entity(e) for e in published.entities],
    )
    result = published.result
    if result is None:
        return response

    response.outcome = result.outcome.name
    response.candidates = [
        CandidateSchema(id=s.entity.id, kind=s.entity.kind, score=s.score)
        for s in result.ranked[:candidates]
    ]
    if result.decision is not None:
        d = result.decision
        response.target = _entity(d.target)
        response.score = d.score
        response.path = _points(d.path)
        response.is_attackable = d.is_attackable
        response.is_gatherable = d.is_gatherable
    if result.exploration is not None:
        ex = result.exploration
        response.exploration = ExplorationSchema(
            destination=PointSchema(x=ex.destination.x, y=ex.destination.y),
            path=_points(ex.path),
            fallback=ex.fallback,
        )
    return response
