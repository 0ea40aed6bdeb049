"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from .api import register_routes
from .core import (
    ALLOWED_CORS_ORIGINS,
    APP_ID,
    CATEGORIES,
    DB_RESET,
    WRITE_TIMEOUT_SEC,
    build_engine,
    configure_logging,
    init_db,
)
from .engine import ViewCoordinator
from .services import RecordWriter, SqlRecordStore

logger = logging.getLogger(__name__)


def create_app(engine: Optional[Engine] = None, app_id: str = APP_ID) -> FastAPI:
    db_engine = engine if engine is not None else build_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(db_engine, reset=DB_RESET)
        store = SqlRecordStore(db_engine)
        with ViewCoordinator(store, app_id, CATEGORIES) as coordinator:
            app.state.store = store
            app.state.coordinator = coordinator
            app.state.writer = RecordWriter(
                store, coordinator, CATEGORIES, timeout=WRITE_TIMEOUT_SEC
            )
            logger.info("Serving leaderboards for %s", app_id)
            yield

    app = FastAPI(title="Flight Sim Leaderboard API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


def main() -> None:
    import uvicorn

    configure_logging()
    uvicorn.run("flightboard.app:create_app", factory=True, host="127.0.0.1", port=3000)


if __name__ == "__main__":
    main()
