"""FastAPI application for the Golf Games API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import Settings
from api.logging_config import setup_logging
from database.connection import db
from database.db_manager import DatabaseManager
from database.memory import InMemoryStorage
from database.stores import StorageBackend
from scoring.service import GameScoringService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Pick the storage backend on startup, close the DB pool on shutdown."""
    if app.state.storage is None:
        if Settings.use_database():
            await db.initialize(
                dsn=Settings.DATABASE_URL,
                min_size=Settings.DB_POOL_MIN_SIZE,
                max_size=Settings.DB_POOL_MAX_SIZE,
            )
            app.state.storage = DatabaseManager(db.pool)
        else:
            logger.warning("DATABASE_URL not set; using in-memory storage")
            app.state.storage = InMemoryStorage()
    app.state.scoring_service = GameScoringService(app.state.storage)
    yield
    if db.is_initialized:
        await db.close()


def create_app(storage: StorageBackend = None) -> FastAPI:
    setup_logging(Settings.LOG_LEVEL)

    app = FastAPI(
        title="Golf Games API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.storage = storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import games, players
    app.include_router(games.router, prefix="/api/games", tags=["games"])
    app.include_router(players.router, prefix="/api/players", tags=["players"])

    @app.get("/api/health")
    async def health():
        if not db.is_initialized:
            return {"status": "ok", "database": None}
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
