# backend/fittrack/main.py
from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from fittrack.db import healthcheck
from fittrack.routers.schedule import router as schedule_router
from fittrack.routers.routines import router as routines_router
from fittrack.routers.assignments import router as assignments_router
from fittrack.routers.sessions import router as sessions_router
from fittrack.routers.recommendations import router as recommendations_router

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_app() -> FastAPI:
    _configure_logging()
    app = FastAPI(title="Fittrack Schedule API")

    frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://localhost:5173")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[frontend_origin],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    # Health
    @app.get("/health")
    def health():
        return {"ok": True}

    @app.get("/health/db")
    def health_db():
        try:
            return healthcheck()
        except SQLAlchemyError as e:
            logger.exception("Database healthcheck failed")
            raise HTTPException(status_code=503, detail="Database unavailable") from e

    app.include_router(schedule_router)
    app.include_router(routines_router)
    app.include_router(assignments_router)
    app.include_router(sessions_router)
    app.include_router(recommendations_router)

    return app


app = build_app()
