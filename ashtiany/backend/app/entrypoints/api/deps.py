# app/entrypoints/api/deps.py
from __future__ import annotations

from fastapi import Header, HTTPException

from ...config import IntakeConfig, settings
from ...service_layer.intake import IntakePipeline


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    if settings.API_KEY:
        if not x_api_key or x_api_key != settings.API_KEY:
            raise HTTPException(status_code=401, detail="Invalid API key")


def get_intake_config() -> IntakeConfig:
    return IntakeConfig.from_settings(settings)


def get_pipeline() -> IntakePipeline:
    # Tests override this dependency with a pipeline wired to fake transports.
    return IntakePipeline.from_config(get_intake_config())
