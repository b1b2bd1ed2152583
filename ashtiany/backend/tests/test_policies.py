import pytest

from app.domain.policies import (
    SpamPolicy,
    domains_match,
    is_blocked_domain,
    is_recognized_form,
    is_valid_email,
    spam_gate,
)
from app.domain.types import RawSubmission, RejectReason


def test_clean_submission_passes_every_gate(submit):
    assert spam_gate(submit()) == (False, None, None)


def test_only_consultation_form_is_recognized(submit):
    assert is_recognized_form(submit()) is True
    assert is_recognized_form(submit(form_name="newsletter")) is False
    assert is_recognized_form(submit(form_name="Consultation")) is False


def test_honeypot_wins_over_everything_else(submit):
    # Also too fast and a bad email; the honeypot is reported because it runs first.
    blocked, reason, _ = spam_gate(submit(company=" Acme ", time_to_complete="10", email="nope"))
    assert blocked is True
    assert reason == RejectReason.honeypot


def test_whitespace_only_honeypot_is_ignored(submit):
    assert spam_gate(submit(company="   "))[0] is False


def test_dynamic_honeypot_field(submit):
    assert spam_gate(submit(hp_key="hp_x1y2", hp_x1y2=""))[0] is False

    blocked, reason, _ = spam_gate(submit(hp_key="hp_x1y2", hp_x1y2="http://spam.example"))
    assert blocked is True
    assert reason == RejectReason.honeypot


@pytest.mark.parametrize("ttc", ["0", "4999", "", "-20"])
def test_too_fast_rejected(submit, ttc):
    blocked, reason, _ = spam_gate(submit(time_to_complete=ttc))
    assert blocked is True
    assert reason == RejectReason.too_fast


def test_missing_timer_counts_as_zero(form_data):
    data = {k: v for k, v in form_data.items() if k != "time_to_complete"}
    blocked, reason, _ = spam_gate(RawSubmission("consultation", data))
    assert blocked is True
    assert reason == RejectReason.too_fast


@pytest.mark.parametrize("ttc", ["5000", "abc", "NaN", "Infinity"])
def test_slow_or_unparseable_timer_passes(submit, ttc):
    assert spam_gate(submit(time_to_complete=ttc))[0] is False


def test_challenge_only_checked_when_both_present(submit):
    assert spam_gate(submit(challenge="7"))[0] is False
    assert spam_gate(submit(challenge="7", challenge_answer="7"))[0] is False

    blocked, reason, _ = spam_gate(submit(challenge="7", challenge_answer="8"))
    assert blocked is True
    assert reason == RejectReason.bad_challenge


@pytest.mark.parametrize("email", ["", "plainaddress", "a@b", "a b@c.com", "@gmail.com"])
def test_invalid_email_rejected(submit, email):
    blocked, reason, _ = spam_gate(submit(email=email))
    assert blocked is True
    assert reason == RejectReason.invalid_email


def test_email_shape():
    assert is_valid_email("a@b.com") is True
    assert is_valid_email("first.last+tag@sub.domain.co.uk") is True
    assert is_valid_email("a@b") is False


@pytest.mark.parametrize(
    "email, blocked",
    [
        ("x@mailinator.com", True),
        ("x@inbox.mailinator.com", True),
        ("x@mailinator.com.", True),
        ("x@inbox.mailinator.com.", True),
        ("x@notmailinator.com", False),
        ("x@gmail.com", False),
    ],
)
def test_blocked_domains_match_exact_and_subdomains(email, blocked):
    assert is_blocked_domain(email) is blocked


def test_trailing_dot_does_not_escape_blocked_domain_gate(submit):
    blocked, reason, detail = spam_gate(submit(email="bot@mailinator.com."))
    assert (blocked, reason) == (True, RejectReason.blocked_domain)
    assert detail == "mailinator.com"


def test_blocked_domain_gate(submit):
    blocked, reason, detail = spam_gate(submit(email="Bot@YOPMAIL.com"))
    assert blocked is True
    assert reason == RejectReason.blocked_domain
    assert detail == "yopmail.com"


def test_interest_and_best_time_must_be_known_choices(submit):
    blocked, reason, detail = spam_gate(submit(interest="Crypto"))
    assert (blocked, reason) == (True, RejectReason.invalid_choice)
    assert "interest" in detail

    blocked, reason, detail = spam_gate(submit(bestTime="3am"))
    assert (blocked, reason) == (True, RejectReason.invalid_choice)
    assert "bestTime" in detail


def test_policy_overrides(submit):
    policy = SpamPolicy(min_fill_ms=30000, allowed_interests=frozenset({"Powerlifting"}))
    assert spam_gate(submit(), policy)[1] == RejectReason.too_fast
    assert spam_gate(submit(time_to_complete="40000"), policy)[1] == RejectReason.invalid_choice
    assert spam_gate(submit(time_to_complete="40000", interest="Powerlifting"), policy)[0] is False


def test_domains_match_is_case_insensitive():
    assert domains_match("alex@AshtianyFitness.com", "sam@ashtianyfitness.com") is True
    assert domains_match("alex@ashtianyfitness.com", "sam@gmail.com") is False
    assert domains_match("", "") is False


def test_domains_match_reads_address_out_of_display_name():
    assert domains_match("Ashtiany Fitness <hello@ashtianyfitness.com>", "sam@ashtianyfitness.com") is True
    assert domains_match("Ashtiany Fitness <hello@ashtianyfitness.com>", "sam@gmail.com") is False
