# app/domain/normalize.py
from __future__ import annotations

from .parsing import clean, to_non_negative_int
from .types import Attribution, Lead, RawSubmission


ATTRIBUTION_FIELDS = (
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_term",
    "utm_content",
    "referrer",
    "landing_path",
    "device",
)


def normalize_consent(raw: object) -> str:
    # Checkboxes post "on" when ticked and nothing otherwise.
    return "yes" if clean(raw) == "on" else "no"


def normalize_lead(raw: RawSubmission) -> Lead:
    """
    Canonical Lead from a submission that already passed spam_gate.
    Callers must gate first; this function does not validate.
    """
    return Lead(
        first_name=clean(raw.get("firstName")),
        last_name=clean(raw.get("lastName")),
        email=clean(raw.get("email")).lower(),
        interest=clean(raw.get("interest")),
        best_time=clean(raw.get("bestTime")),
        goals=clean(raw.get("goals")),
        consent=normalize_consent(raw.get("consent")),
        time_to_complete=to_non_negative_int(raw.get("time_to_complete")),
        attribution=Attribution(**{k: clean(raw.get(k)) for k in ATTRIBUTION_FIELDS}),
    )
