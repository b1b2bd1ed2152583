from __future__ import annotations

import logging

import httpx

from ..adapters.clients.airtable import AirtableClient, record_fields
from ..adapters.clients.postmark import PostmarkClient
from ..config import IntakeConfig
from ..domain.emails import lead_confirmation, owner_notification
from ..domain.errors import ConfigMissing
from ..domain.policies import domains_match
from ..domain.types import EffectOutcome, ScoredLead
from .base import Effect, EffectPolicy

log = logging.getLogger(__name__)


def _missing(**values: str | None) -> list[str]:
    return [k for k, v in values.items() if not v]


class PersistLeadEffect:
    name = "persist"
    policy = EffectPolicy.best_effort

    def __init__(self, config: IntakeConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self.transport = transport

    async def execute(self, scored: ScoredLead) -> EffectOutcome:
        cfg = self.config
        missing = _missing(
            AIRTABLE_TOKEN=cfg.airtable_token,
            AIRTABLE_BASE_ID=cfg.airtable_base_id,
            AIRTABLE_TABLE_NAME=cfg.airtable_table,
        )
        if missing:
            raise ConfigMissing(self.name, missing)

        client = AirtableClient(
            token=cfg.airtable_token,
            base_id=cfg.airtable_base_id,
            table=cfg.airtable_table,
            base_url=cfg.airtable_api_url,
            timeout_s=cfg.http_timeout_s,
            transport=self.transport,
        )
        record_id = await client.create_record(record_fields(scored))
        return EffectOutcome.success(self.name, record_id)


class NotifyOwnerEffect:
    name = "notify_owner"
    policy = EffectPolicy.mandatory

    def __init__(self, config: IntakeConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self.transport = transport

    async def execute(self, scored: ScoredLead) -> EffectOutcome:
        cfg = self.config
        missing = _missing(POSTMARK_TOKEN=cfg.postmark_token, SALES_EMAIL=cfg.owner_email)
        if missing:
            raise ConfigMissing(self.name, missing)

        message = owner_notification(
            scored,
            sender=cfg.sender,
            to=cfg.owner_email,
            business_name=cfg.business_name,
            stream=cfg.message_stream,
        )
        client = PostmarkClient(
            token=cfg.postmark_token,
            api_url=cfg.postmark_api_url,
            timeout_s=cfg.http_timeout_s,
            transport=self.transport,
            service="postmark(owner)",
        )
        message_id = await client.send(message)
        return EffectOutcome.success(self.name, message_id or None)


class ConfirmLeadEffect:
    name = "confirm_lead"
    policy = EffectPolicy.best_effort

    def __init__(self, config: IntakeConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self.transport = transport

    async def execute(self, scored: ScoredLead) -> EffectOutcome:
        cfg = self.config
        lead = scored.lead

        missing = _missing(POSTMARK_TOKEN=cfg.postmark_token, EMAIL_FROM=cfg.sender)
        if missing:
            raise ConfigMissing(self.name, missing)
        if not lead.email:
            return EffectOutcome.skipped(self.name, "no_recipient")

        if cfg.confirm_require_same_domain and not domains_match(cfg.sender, lead.email):
            log.info("confirm_lead.skipped reason=domain_mismatch lead_domain=%s", lead.email_domain)
            return EffectOutcome.skipped(self.name, "domain_mismatch")

        message = lead_confirmation(
            lead,
            sender=cfg.sender,
            business_name=cfg.business_name,
            signature=cfg.signature,
            scheduling_url=cfg.scheduling_url,
            stream=cfg.message_stream,
        )
        client = PostmarkClient(
            token=cfg.postmark_token,
            api_url=cfg.postmark_api_url,
            timeout_s=cfg.http_timeout_s,
            transport=self.transport,
            service="postmark(lead)",
        )
        message_id = await client.send(message)
        return EffectOutcome.success(self.name, message_id or None)


def build_effects(config: IntakeConfig, transport: httpx.AsyncBaseTransport | None = None) -> list[Effect]:
    return [
        PersistLeadEffect(config, transport),
        NotifyOwnerEffect(config, transport),
        ConfirmLeadEffect(config, transport),
    ]
