# app/domain/emails.py
from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any

from .types import Lead, ScoredLead


@dataclass(frozen=True)
class EmailMessage:
    sender: str
    to: str
    subject: str
    html_body: str
    text_body: str | None = None
    reply_to: str | None = None
    message_stream: str = "outbound"

    def to_postmark(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "From": self.sender,
            "To": self.to,
            "Subject": self.subject,
            "HtmlBody": self.html_body,
            "MessageStream": self.message_stream,
        }
        if self.text_body:
            body["TextBody"] = self.text_body
        if self.reply_to:
            body["ReplyTo"] = self.reply_to
        return body


def esc(s: object) -> str:
    return html.escape(str(s or ""), quote=True)


def nl2br(s: str) -> str:
    return s.replace("\r\n", "\n").replace("\n", "<br/>")


def _or_dash(s: str) -> str:
    return s or "-"


def owner_notification(
    scored: ScoredLead,
    *,
    sender: str,
    to: str,
    business_name: str,
    stream: str = "outbound",
) -> EmailMessage:
    lead = scored.lead
    a = lead.attribution

    subject = f"New Lead: {lead.full_name} ({lead.interest}) — Score {scored.score}"

    html_body = f"""
<h2>New Lead — {esc(business_name)}</h2>
<p><strong>{esc(lead.first_name)} {esc(lead.last_name)}</strong> ({esc(lead.email)})</p>
<p><strong>Interest:</strong> {esc(lead.interest)}<br/>
   <strong>Best time:</strong> {esc(lead.best_time)}<br/>
   <strong>Consent:</strong> {esc(lead.consent)}<br/>
   <strong>Score:</strong> {scored.score}</p>
<p><strong>Goals:</strong><br/>{nl2br(esc(lead.goals))}</p>
<hr/>
<p><strong>UTM:</strong> {esc(_or_dash(a.utm_source))}/{esc(_or_dash(a.utm_medium))}/{esc(_or_dash(a.utm_campaign))}<br/>
   <strong>Referrer:</strong> {esc(_or_dash(a.referrer))}<br/>
   <strong>Path:</strong> {esc(_or_dash(a.landing_path))}<br/>
   <strong>Device:</strong> {esc(_or_dash(a.device))}<br/>
   <strong>TTC:</strong> {lead.time_to_complete} ms</p>
""".strip()

    text_body = "\n".join(
        [
            f"New lead for {business_name}",
            "",
            f"Name: {lead.full_name}",
            f"Email: {lead.email}",
            f"Interest: {lead.interest}",
            f"Best time: {lead.best_time}",
            f"Consent: {lead.consent}",
            f"Score: {scored.score}",
            "",
            "Goals:",
            lead.goals or "-",
            "",
            f"UTM: {_or_dash(a.utm_source)}/{_or_dash(a.utm_medium)}/{_or_dash(a.utm_campaign)}",
            f"Referrer: {_or_dash(a.referrer)}",
            f"Path: {_or_dash(a.landing_path)}",
            f"Device: {_or_dash(a.device)}",
            f"TTC: {lead.time_to_complete} ms",
            f"Submitted: {scored.submitted_at.isoformat()}",
        ]
    )

    return EmailMessage(
        sender=sender,
        to=to,
        subject=subject,
        html_body=html_body,
        text_body=text_body,
        reply_to=lead.email or None,
        message_stream=stream,
    )


def lead_confirmation(
    lead: Lead,
    *,
    sender: str,
    business_name: str,
    signature: str,
    scheduling_url: str | None = None,
    stream: str = "outbound",
) -> EmailMessage:
    greeting = lead.first_name or "there"

    lines = [
        f"Hi {greeting},",
        "",
        f"Thanks for reaching out to {business_name}. I'll follow up shortly.",
    ]
    if scheduling_url:
        lines.append(f"To lock a time now, book here: {scheduling_url}")
    lines += ["", f"– {signature}"]
    text_body = "\n".join(lines)

    booking = ""
    if scheduling_url:
        href = esc(scheduling_url)
        booking = f'<p>To lock a time now, <a href="{href}">book here</a>.</p>\n'
    html_body = (
        f"<p>Hi {esc(greeting)},</p>\n"
        f"<p>Thanks for reaching out to {esc(business_name)}. I'll follow up shortly.</p>\n"
        f"{booking}"
        f"<p>– {esc(signature)}</p>"
    )

    return EmailMessage(
        sender=sender,
        to=lead.email,
        subject=f"{business_name} — Consultation Request Received",
        html_body=html_body,
        text_body=text_body,
        reply_to=sender,
        message_stream=stream,
    )
