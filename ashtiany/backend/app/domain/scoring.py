# app/domain/scoring.py
from __future__ import annotations

import re

from .types import Lead


DETAILED_GOALS_WORDS = 30
PATIENT_FILL_MS = 15000

_REMOTE_INTEREST_RE = re.compile(r"virtual|hybrid", re.IGNORECASE)
_PLACEHOLDER_EMAIL_RE = re.compile(r"@(example|test)\.")


def score_contributions(lead: Lead) -> list[tuple[str, int]]:
    """
    Independent rules; the score is their sum, so order never matters.
    Advisory only, nothing is gated on it.
    """
    out: list[tuple[str, int]] = []

    if len(lead.goals.split()) >= DETAILED_GOALS_WORDS:
        out.append(("detailed_goals", 2))
    if lead.time_to_complete >= PATIENT_FILL_MS:
        out.append(("patient_fill", 2))
    if lead.attribution.utm_source:
        out.append(("utm_source", 1))
    if _REMOTE_INTEREST_RE.search(lead.interest):
        out.append(("remote_interest", 1))
    if not lead.email or _PLACEHOLDER_EMAIL_RE.search(lead.email):
        out.append(("placeholder_email", -2))

    return out


def compute_score(lead: Lead) -> int:
    return sum(points for _, points in score_contributions(lead))


def explain_score(lead: Lead) -> str:
    parts = [f"{name}{points:+d}" for name, points in score_contributions(lead)]
    return ", ".join(parts) or "no signals"
