from pydantic import BaseModel


class SubmissionAck(BaseModel):
    ok: bool = True
    message: str


class SubmissionError(BaseModel):
    error: str


class ConfigView(BaseModel):
    ENV: str
    FORM_NAME: str
    AIRTABLE_CONFIGURED: bool
    AIRTABLE_TABLE_NAME: str | None = None
    POSTMARK_TOKEN: str | None = None
    SALES_EMAIL: str | None = None
    EMAIL_FROM: str | None = None
    CALENDLY_LINK_SET: bool
    CONFIRM_REQUIRE_SAME_DOMAIN: bool
