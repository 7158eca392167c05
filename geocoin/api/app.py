"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geocoin.api.dependencies import set_session
from geocoin.api.routes import api_router
from geocoin.config import WorldConfig
from geocoin.engine.session import GameSession
from geocoin.persistence.gateway import KeyValueStore
from geocoin.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: WorldConfig | None = None, store: KeyValueStore | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = WorldConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        session = GameSession(_config, store=store)
        set_session(session)
        session.start()
        logger.info("API server started, world loaded.")
        yield
        session.close()
        set_session(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="GeoCoin World",
        description=(
            "Deterministic location-based coin collecting world.\n\n"
            "## API Groups\n\n"
            "- **State**: Player position, inventory, nearby caches, event feed\n"
            "- **Player**: Move to a position or nudge one cell\n"
            "- **Coins**: Take coins from a cache, give coins to a cache\n"
            "- **Control**: Reset the world, toggle sensor follow\n"
            "- **Config**: Read-only world constants\n"
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
