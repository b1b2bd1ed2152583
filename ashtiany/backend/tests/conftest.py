# tests/conftest.py
from __future__ import annotations

import json
from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import IntakeConfig
from app.domain.types import RawSubmission
from app.entrypoints.api.deps import get_pipeline
from app.entrypoints.fastapi_app import create_app
from app.service_layer.intake import IntakePipeline

OWNER = "alex@ashtianyfitness.com"
FIXED_NOW = datetime(2025, 3, 14, 15, 9, 26, tzinfo=timezone.utc)

LONG_GOALS = (
    "I want to drop around twenty pounds before my wedding in the fall while keeping my strength up. "
    "I have a bad left knee from soccer so I need lower impact options and help with form on squats."
)


class FakeUpstream:
    """
    Stands in for Airtable and Postmark behind httpx.MockTransport.
    Records every request; individual endpoints can be told to fail.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.airtable_status = 200
        self.owner_status = 200
        self.lead_status = 200

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.airtable.com":
            if self.airtable_status >= 300:
                return httpx.Response(self.airtable_status, text="INVALID_PERMISSIONS")
            return httpx.Response(200, json={"records": [{"id": "recLEAD1", "fields": {}}]})

        if request.url.host == "api.postmarkapp.com":
            body = json.loads(request.content)
            status = self.owner_status if body.get("To") == OWNER else self.lead_status
            if status >= 300:
                return httpx.Response(status, json={"ErrorCode": 412, "Message": "Sender not approved"})
            return httpx.Response(200, json={"MessageID": f"msg-{len(self.requests)}", "ErrorCode": 0})

        return httpx.Response(404)

    def to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    @property
    def airtable(self) -> list[httpx.Request]:
        return self.to("api.airtable.com")

    @property
    def emails(self) -> list[dict]:
        return [json.loads(r.content) for r in self.to("api.postmarkapp.com")]

    def emails_to(self, address: str) -> list[dict]:
        return [e for e in self.emails if e.get("To") == address]


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def config() -> IntakeConfig:
    return IntakeConfig(
        airtable_token="patTESTTOKEN123",
        airtable_base_id="appBASE",
        airtable_table="Leads",
        postmark_token="pm-server-token",
        owner_email=OWNER,
        scheduling_url="https://calendly.com/ashtiany/consult",
    )


@pytest.fixture
def make_pipeline(upstream):
    def _make(cfg: IntakeConfig) -> IntakePipeline:
        pipeline = IntakePipeline.from_config(cfg, transport=upstream.transport)
        pipeline.clock = lambda: FIXED_NOW
        return pipeline

    return _make


@pytest.fixture
def pipeline(make_pipeline, config) -> IntakePipeline:
    return make_pipeline(config)


@pytest.fixture
def form_data() -> dict[str, str]:
    return {
        "firstName": " Jordan ",
        "lastName": "Reyes",
        "email": "Jordan.Reyes@Gmail.com ",
        "interest": "Fat Loss",
        "bestTime": "Morning (7–10 AM)",
        "goals": LONG_GOALS,
        "consent": "on",
        "company": "",
        "time_to_complete": "20000",
        "utm_source": "",
        "referrer": "https://www.google.com/",
        "landing_path": "/booking.html",
        "device": "Mozilla/5.0",
    }


@pytest.fixture
def submit(form_data):
    def _submit(form_name: str = "consultation", **overrides: str) -> RawSubmission:
        return RawSubmission(form_name=form_name, data={**form_data, **overrides})

    return _submit


@pytest.fixture
def event(form_data) -> dict:
    return {"payload": {"form_name": "consultation", "data": dict(form_data)}}


@pytest.fixture
def client(pipeline):
    app = create_app()
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
