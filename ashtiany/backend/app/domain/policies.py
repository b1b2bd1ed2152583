# app/domain/policies.py
from __future__ import annotations

import re
from dataclasses import dataclass

from .parsing import address_of, clean, email_domain, to_ms
from .types import RawSubmission, RejectReason


FORM_NAME = "consultation"

# Humans need a few seconds to fill the consultation form.
MIN_FILL_MS = 5000

# Must mirror the <select> options on the booking page.
ALLOWED_INTERESTS: frozenset[str] = frozenset(
    {
        "Fat Loss",
        "Strength & Muscle",
        "General Fitness",
        "Sports Performance",
        "Virtual Coaching",
        "Hybrid Coaching",
    }
)

ALLOWED_BEST_TIMES: frozenset[str] = frozenset(
    {
        "Morning (7–10 AM)",
        "Midday (11 AM–2 PM)",
        "Afternoon (2–5 PM)",
        "Evening (5–8 PM)",
    }
)

# Disposable inboxes. Subdomains are blocked as well.
BLOCKED_EMAIL_DOMAINS: frozenset[str] = frozenset(
    {
        "mailinator.com",
        "guerrillamail.com",
        "sharklasers.com",
        "10minutemail.com",
        "tempmail.com",
        "temp-mail.org",
        "yopmail.com",
        "trashmail.com",
        "getnada.com",
        "maildrop.cc",
        "dispostable.com",
        "throwawaymail.com",
    }
)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

HONEYPOT_FIELD = "company"
# The booking page renames a second decoy input at runtime and posts its name here.
DYNAMIC_HONEYPOT_KEY = "hp_key"


@dataclass(frozen=True)
class SpamPolicy:
    form_name: str = FORM_NAME
    min_fill_ms: int = MIN_FILL_MS
    allowed_interests: frozenset[str] = ALLOWED_INTERESTS
    allowed_best_times: frozenset[str] = ALLOWED_BEST_TIMES
    blocked_domains: frozenset[str] = BLOCKED_EMAIL_DOMAINS


def is_recognized_form(raw: RawSubmission, form_name: str = FORM_NAME) -> bool:
    return raw.form_name == form_name


def honeypot_tripped(raw: RawSubmission) -> bool:
    if clean(raw.get(HONEYPOT_FIELD)):
        return True
    hp_key = clean(raw.get(DYNAMIC_HONEYPOT_KEY))
    if hp_key and hp_key != DYNAMIC_HONEYPOT_KEY and clean(raw.get(hp_key)):
        return True
    return False


def filled_too_fast(raw: RawSubmission, min_fill_ms: int = MIN_FILL_MS) -> bool:
    ttc = to_ms(raw.get("time_to_complete"))
    # Unparseable timers are let through; the value is normalized to 0 later.
    return ttc is not None and ttc < min_fill_ms


def challenge_failed(raw: RawSubmission) -> bool:
    challenge = raw.get("challenge")
    answer = raw.get("challenge_answer")
    if not challenge or not answer:
        return False
    return str(challenge) != str(answer)


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def is_blocked_domain(email: str, blocked: frozenset[str] = BLOCKED_EMAIL_DOMAINS) -> bool:
    domain = email_domain(email)
    if not domain:
        return False
    return any(domain == d or domain.endswith("." + d) for d in blocked)


def domains_match(a: str, b: str) -> bool:
    da, db = email_domain(address_of(a)), email_domain(address_of(b))
    return bool(da) and da == db


def spam_gate(raw: RawSubmission, policy: SpamPolicy | None = None) -> tuple[bool, RejectReason | None, str | None]:
    """
    Returns (blocked, reason, detail).
    Gates run in a fixed order and the first hit wins.
    """
    policy = policy or SpamPolicy()

    if honeypot_tripped(raw):
        return True, RejectReason.honeypot, None

    if filled_too_fast(raw, policy.min_fill_ms):
        return True, RejectReason.too_fast, f"time_to_complete={clean(raw.get('time_to_complete')) or '0'}"

    if challenge_failed(raw):
        return True, RejectReason.bad_challenge, None

    email = clean(raw.get("email")).lower()
    if not is_valid_email(email):
        return True, RejectReason.invalid_email, None

    if is_blocked_domain(email, policy.blocked_domains):
        return True, RejectReason.blocked_domain, email_domain(email)

    interest = clean(raw.get("interest"))
    if interest not in policy.allowed_interests:
        return True, RejectReason.invalid_choice, f"interest={interest!r}"

    best_time = clean(raw.get("bestTime"))
    if best_time not in policy.allowed_best_times:
        return True, RejectReason.invalid_choice, f"bestTime={best_time!r}"

    return False, None, None
