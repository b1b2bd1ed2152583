# app/entrypoints/api/routers/health.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..deps import get_intake_config, require_api_key
from ....config import IntakeConfig, settings
from ....schemas import ConfigView

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


def _redact(v: str | None) -> str | None:
    if not v:
        return v
    if len(v) <= 8:
        return "***"
    return v[:4] + "***" + v[-4:]


@router.get("/debug/config", response_model=ConfigView, dependencies=[Depends(require_api_key)])
def debug_config(cfg: IntakeConfig = Depends(get_intake_config)) -> ConfigView:
    """Which integrations this process would actually call. Secrets are redacted."""
    return ConfigView(
        ENV=settings.ENV,
        FORM_NAME=cfg.spam.form_name,
        AIRTABLE_CONFIGURED=bool(cfg.airtable_token and cfg.airtable_base_id and cfg.airtable_table),
        AIRTABLE_TABLE_NAME=cfg.airtable_table,
        POSTMARK_TOKEN=_redact(cfg.postmark_token),
        SALES_EMAIL=cfg.owner_email,
        EMAIL_FROM=cfg.sender,
        CALENDLY_LINK_SET=bool(cfg.scheduling_url),
        CONFIRM_REQUIRE_SAME_DOMAIN=cfg.confirm_require_same_domain,
    )
