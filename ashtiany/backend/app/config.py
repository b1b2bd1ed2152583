from __future__ import annotations

from dataclasses import dataclass, field

from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.policies import (
    ALLOWED_BEST_TIMES,
    ALLOWED_INTERESTS,
    BLOCKED_EMAIL_DOMAINS,
    FORM_NAME,
    MIN_FILL_MS,
    SpamPolicy,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    LOG_LEVEL: str = "INFO"

    # --- Minimal auth for debug endpoints ---
    # Send: X-API-Key: <key>
    API_KEY: str | None = None

    # --- Record store (Airtable) ---
    # All three must be set, otherwise persistence is skipped.
    AIRTABLE_TOKEN: str | None = None
    AIRTABLE_BASE_ID: str | None = None
    AIRTABLE_TABLE_NAME: str | None = None
    AIRTABLE_API_URL: str = "https://api.airtable.com/v0"

    # --- Transactional email (Postmark) ---
    POSTMARK_TOKEN: str | None = None
    POSTMARK_API_URL: str = "https://api.postmarkapp.com/email"
    POSTMARK_MESSAGE_STREAM: str = "outbound"

    # Owner inbox. Also the sender unless EMAIL_FROM is set.
    SALES_EMAIL: str | None = None
    EMAIL_FROM: str | None = None
    CALENDLY_LINK: str | None = None

    BUSINESS_NAME: str = "Ashtiany Fitness"
    OWNER_SIGNATURE: str = "Alex"

    # Postmark refuses unverified sending domains while an account is pending approval.
    CONFIRM_REQUIRE_SAME_DOMAIN: bool = True

    # --- Anti-spam tuning ---
    FORM_NAME: str = FORM_NAME
    MIN_FILL_MS: int = MIN_FILL_MS
    ALLOWED_INTERESTS: list[str] = list(ALLOWED_INTERESTS)
    ALLOWED_BEST_TIMES: list[str] = list(ALLOWED_BEST_TIMES)
    BLOCKED_EMAIL_DOMAINS: list[str] = list(BLOCKED_EMAIL_DOMAINS)

    HTTP_TIMEOUT_S: float = 20.0


settings = Settings()


@dataclass(frozen=True)
class IntakeConfig:
    """
    Everything the intake pipeline is allowed to know about its environment.
    Built once from Settings and injected; the pipeline never reads env vars.
    """

    airtable_token: str | None = None
    airtable_base_id: str | None = None
    airtable_table: str | None = None
    airtable_api_url: str = "https://api.airtable.com/v0"

    postmark_token: str | None = None
    postmark_api_url: str = "https://api.postmarkapp.com/email"
    message_stream: str = "outbound"

    owner_email: str | None = None
    sender_email: str | None = None
    scheduling_url: str | None = None

    business_name: str = "Ashtiany Fitness"
    signature: str = "Alex"
    confirm_require_same_domain: bool = True

    http_timeout_s: float = 20.0
    spam: SpamPolicy = field(default_factory=SpamPolicy)

    @property
    def sender(self) -> str | None:
        return self.sender_email or self.owner_email

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> "IntakeConfig":
        s = s or settings
        return cls(
            airtable_token=_blank_to_none(s.AIRTABLE_TOKEN),
            airtable_base_id=_blank_to_none(s.AIRTABLE_BASE_ID),
            airtable_table=_blank_to_none(s.AIRTABLE_TABLE_NAME),
            airtable_api_url=s.AIRTABLE_API_URL,
            postmark_token=_blank_to_none(s.POSTMARK_TOKEN),
            postmark_api_url=s.POSTMARK_API_URL,
            message_stream=s.POSTMARK_MESSAGE_STREAM,
            owner_email=_blank_to_none(s.SALES_EMAIL),
            sender_email=_blank_to_none(s.EMAIL_FROM),
            scheduling_url=_blank_to_none(s.CALENDLY_LINK),
            business_name=s.BUSINESS_NAME,
            signature=s.OWNER_SIGNATURE,
            confirm_require_same_domain=s.CONFIRM_REQUIRE_SAME_DOMAIN,
            http_timeout_s=float(s.HTTP_TIMEOUT_S),
            spam=SpamPolicy(
                form_name=s.FORM_NAME,
                min_fill_ms=int(s.MIN_FILL_MS),
                allowed_interests=frozenset(s.ALLOWED_INTERESTS),
                allowed_best_times=frozenset(s.ALLOWED_BEST_TIMES),
                blocked_domains=frozenset(d.strip().lower() for d in s.BLOCKED_EMAIL_DOMAINS if d.strip()),
            ),
        )


def _blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None
