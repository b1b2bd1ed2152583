# app/domain/parsing.py
from __future__ import annotations

import math
from email.utils import parseaddr
from typing import Any


def clean(x: Any) -> str:
    if x is None:
        return ""
    return str(x).strip()


def to_ms(x: Any) -> float | None:
    """
    Client fill timer in milliseconds.
    Missing/blank counts as 0 so a stripped timer field cannot bypass the timing gate.
    Unparseable or non-finite values return None.
    """
    s = clean(x)
    if not s:
        return 0.0
    try:
        v = float(s)
    except ValueError:
        return None
    if not math.isfinite(v):
        return None
    return v


def to_non_negative_int(x: Any) -> int:
    v = to_ms(x)
    if v is None or v < 0:
        return 0
    return int(v)


def address_of(value: str) -> str:
    """Bare address from either "addr" or "Display Name <addr>"."""
    return parseaddr(clean(value))[1]


def email_domain(email: str) -> str:
    # A trailing root dot ("example.com.") names the same domain.
    return clean(email).lower().rpartition("@")[2].rstrip(".")
