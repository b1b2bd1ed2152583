# app/domain/errors.py
from __future__ import annotations


class IntakeError(Exception):
    pass


class MalformedInput(IntakeError):
    """The inbound event could not be decoded into a submission."""


class ConfigMissing(IntakeError):
    def __init__(self, effect: str, missing: list[str]) -> None:
        self.effect = effect
        self.missing = list(missing)
        super().__init__(f"{effect}: missing config {', '.join(self.missing)}")


class UpstreamFailure(IntakeError):
    def __init__(self, service: str, status_code: int, body: str = "") -> None:
        self.service = service
        self.status_code = status_code
        self.body = body
        super().__init__(f"{service}: {status_code} {body[:500]}".rstrip())
