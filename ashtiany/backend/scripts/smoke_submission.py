# scripts/smoke_submission.py
from __future__ import annotations

import argparse
import json

import httpx

GOALS = (
    "I want to lose about fifteen pounds before summer, get stronger on the basic lifts, "
    "fix my posture from sitting at a desk all day, and build a routine I can actually keep "
    "with two kids and a long commute."
)


def sample_event(email: str, form_name: str) -> dict:
    return {
        "payload": {
            "form_name": form_name,
            "data": {
                "firstName": "Smoke",
                "lastName": "Test",
                "email": email,
                "interest": "Hybrid Coaching",
                "bestTime": "Morning (7–10 AM)",
                "goals": GOALS,
                "consent": "on",
                "company": "",
                "time_to_complete": "21000",
                "utm_source": "smoke",
                "landing_path": "/booking.html",
                "device": "smoke-script",
            },
        }
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="POST a sample consultation submission to a running server.")
    parser.add_argument("--url", default="http://127.0.0.1:8000/submission-created")
    parser.add_argument("--email", default="smoke@ashtianyfitness.com")
    parser.add_argument("--form-name", default="consultation")
    args = parser.parse_args()

    r = httpx.post(args.url, json=sample_event(args.email, args.form_name), timeout=30)
    print(r.status_code)
    try:
        print(json.dumps(r.json(), indent=2))
    except ValueError:
        print(r.text)


if __name__ == "__main__":
    main()
