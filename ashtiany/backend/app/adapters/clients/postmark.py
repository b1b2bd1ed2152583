# app/adapters/clients/postmark.py
from __future__ import annotations

import httpx

from ...domain.emails import EmailMessage
from ...domain.errors import UpstreamFailure


class PostmarkClient:
    def __init__(
        self,
        token: str,
        api_url: str = "https://api.postmarkapp.com/email",
        timeout_s: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
        service: str = "postmark",
    ) -> None:
        self.token = token
        self.api_url = api_url
        self.timeout_s = timeout_s
        self.transport = transport
        self.service = service

    async def send(self, message: EmailMessage) -> str:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-Postmark-Server-Token": self.token,
        }
        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
            r = await client.post(self.api_url, json=message.to_postmark(), headers=headers)

        if not (200 <= r.status_code < 300):
            raise UpstreamFailure(self.service, r.status_code, r.text)

        try:
            data = r.json()
        except ValueError:
            return ""
        return str(data.get("MessageID", "")) if isinstance(data, dict) else ""
