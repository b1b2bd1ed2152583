# app/domain/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from .errors import MalformedInput


class IntakeStatus(str, Enum):
    ignored = "ignored"
    rejected = "rejected"
    processed = "processed"
    failed = "failed"


class RejectReason(str, Enum):
    honeypot = "honeypot"
    too_fast = "too_fast"
    bad_challenge = "bad_challenge"
    invalid_email = "invalid_email"
    blocked_domain = "blocked_domain"
    invalid_choice = "invalid_choice"


class EffectStatus(str, Enum):
    success = "success"
    skipped = "skipped"
    failed = "failed"


@dataclass(frozen=True)
class RawSubmission:
    """Untrusted form event. Lives for one invocation only."""

    form_name: str
    data: Mapping[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str:
        return self.data.get(key, "")

    @classmethod
    def from_event(cls, body: Any) -> "RawSubmission":
        """
        Accepts the decoded JSON body of a form-submission event:
            {"payload": {"form_name": "...", "data": {...}}}
        Missing pieces default to empty. Wrong shapes are malformed input.
        """
        if body is None:
            body = {}
        if not isinstance(body, dict):
            raise MalformedInput("event body must be a JSON object")

        payload = body.get("payload")
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise MalformedInput("payload must be an object")

        data = payload.get("data")
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MalformedInput("payload.data must be an object")

        form_name = payload.get("form_name") or ""
        clean: dict[str, str] = {}
        for k, v in data.items():
            if v is None:
                continue
            clean[str(k)] = v if isinstance(v, str) else str(v)
        return cls(form_name=str(form_name), data=clean)


@dataclass(frozen=True)
class Attribution:
    utm_source: str = ""
    utm_medium: str = ""
    utm_campaign: str = ""
    utm_term: str = ""
    utm_content: str = ""
    referrer: str = ""
    landing_path: str = ""
    device: str = ""


@dataclass(frozen=True)
class Lead:
    first_name: str
    last_name: str
    email: str
    interest: str
    best_time: str
    goals: str
    consent: str  # "yes" | "no"
    time_to_complete: int
    attribution: Attribution = field(default_factory=Attribution)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def email_domain(self) -> str:
        return self.email.rpartition("@")[2]


@dataclass(frozen=True)
class ScoredLead:
    lead: Lead
    score: int
    submitted_at: datetime


@dataclass(frozen=True)
class EffectOutcome:
    effect: str
    status: EffectStatus
    detail: str | None = None

    @classmethod
    def success(cls, effect: str, detail: str | None = None) -> "EffectOutcome":
        return cls(effect, EffectStatus.success, detail)

    @classmethod
    def skipped(cls, effect: str, detail: str | None = None) -> "EffectOutcome":
        return cls(effect, EffectStatus.skipped, detail)

    @classmethod
    def failed(cls, effect: str, detail: str | None = None) -> "EffectOutcome":
        return cls(effect, EffectStatus.failed, detail)


@dataclass(frozen=True)
class IntakeResult:
    status: IntakeStatus
    message: str
    reason: str | None = None
    score: int | None = None
    outcomes: tuple[EffectOutcome, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status != IntakeStatus.failed

    def outcome_for(self, effect: str) -> EffectOutcome | None:
        for o in self.outcomes:
            if o.effect == effect:
                return o
        return None
