"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from huntcore.api.dependencies import set_engine_manager
from huntcore.api.engine_manager import EngineManager
from huntcore.api.routes import api_router
from huntcore.config import EngineConfig
from huntcore.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    config: EngineConfig | None = None,
    seed: int = 42,
    monsters: int = 12,
    autostart: bool = True,
    configure_logging: bool = True,
) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = EngineConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if configure_logging:
            setup_logging(_config.log_level)
        manager = EngineManager(_config, seed=seed, monsters=monsters)
        set_engine_manager(manager)
        app.state.engine_manager = manager
        if autostart:
            manager.start()
        logger.info("API server started (seed=%d, autostart=%s).", seed, autostart)
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="huntcore",
        description=(
            "Decision core of a real-time game agent, driven against a sandbox world.\n\n"
            "## API Groups\n\n"
            "- **Decision** — The latest tick: chosen target, path, exploration advisory\n"
            "- **Heatmap** — Exploration visitation cells\n"
            "- **Events** — Per-tick decision feed\n"
            "- **Control** — Loop lifecycle: start, pause, resume, step, reset\n"
            "- **Config** — Read-only engine configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
