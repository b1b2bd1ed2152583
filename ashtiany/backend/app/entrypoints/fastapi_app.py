# app/entrypoints/fastapi_app.py
from __future__ import annotations

from fastapi import FastAPI

from ..config import settings
from ..logging_setup import configure_logging
from .api.routers import health, submissions


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Ashtiany Fitness - Lead Intake")

    # Routers
    app.include_router(health.router)
    app.include_router(submissions.router)

    return app
