"""GET /api/v1/events — the decision event feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from huntcore.api.dependencies import get_engine_manager
from huntcore.api.engine_manager import EngineManager
from huntcore.api.schemas import EventSchema, EventsResponse

router = APIRouter()


@router.get("/events", response_model=EventsResponse)
def get_events(
    since_tick: int | None = Query(None, ge=0, description="Only events at or after this tick"),
    limit: int = Query(50, ge=1, le=1000),
    manager: EngineManager = Depends(get_engine_manager),
) -> EventsResponse:
    log = manager.event_log
    events = log.latest(limit) if since_tick is None else log.since_tick(since_tick)[-limit:]
    return EventsResponse(events=[
        EventSchema(
            tick=e.tick, outcome=e.outcome, message=e.message,
            target_id=e.target_id, score=e.score, waypoints=e.waypoints,
        )
        for e in events
    ])
