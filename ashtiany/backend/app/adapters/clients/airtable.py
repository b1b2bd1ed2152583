# app/adapters/clients/airtable.py
from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from ...domain.errors import UpstreamFailure
from ...domain.types import ScoredLead


def record_fields(scored: ScoredLead) -> dict[str, Any]:
    """Column names must match the Leads table in the base exactly."""
    lead = scored.lead
    a = lead.attribution
    return {
        "Status": "New",
        "Score": scored.score,
        "First Name": lead.first_name,
        "Last Name": lead.last_name,
        "Email": lead.email,
        "Interest": lead.interest,
        "Best Time": lead.best_time,
        "Goals": lead.goals,
        "Consent": lead.consent,
        "UTM Source": a.utm_source,
        "UTM Medium": a.utm_medium,
        "UTM Campaign": a.utm_campaign,
        "UTM Term": a.utm_term,
        "UTM Content": a.utm_content,
        "Referrer": a.referrer,
        "Landing Path": a.landing_path,
        "Device": a.device,
        "Time to Complete (ms)": lead.time_to_complete,
        "Submitted At": scored.submitted_at.isoformat().replace("+00:00", "Z"),
    }


class AirtableClient:
    def __init__(
        self,
        token: str,
        base_id: str,
        table: str,
        base_url: str = "https://api.airtable.com/v0",
        timeout_s: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token = token
        self.base_id = base_id
        self.table = table
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.base_id}/{quote(self.table, safe='')}"

    async def create_record(self, fields: dict[str, Any]) -> str | None:
        """One attempt, no retries. Returns the new record id when Airtable sends one."""
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        body = {"records": [{"fields": fields}]}

        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
            r = await client.post(self.url, json=body, headers=headers)

        if not (200 <= r.status_code < 300):
            raise UpstreamFailure("airtable", r.status_code, r.text)

        try:
            data = r.json()
        except ValueError:
            return None
        records = data.get("records") if isinstance(data, dict) else None
        if records and isinstance(records[0], dict):
            return records[0].get("id")
        return None
