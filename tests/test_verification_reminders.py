from datetime import timedelta

import pytest

from app.core.clock import utcnow
from app.repositories import profile_repo
from app.services.accounts.verification import check_unverified_accounts
from app.services.common import email_client

from conftest import auth_headers


@pytest.fixture
def sent_emails(monkeypatch):
    sent = []
    monkeypatch.setattr(email_client, "send_email", lambda to, subject, html: sent.append((to, subject)) or True)
    return sent


def _age(db, profile, **delta):
    return profile_repo.update(db, profile, verification_sent_at=utcnow() - timedelta(**delta))


def test_fresh_accounts_are_left_alone(db, headhunter, sent_emails):
    counts = check_unverified_accounts(db)
    assert counts == {"first_reminders": 0, "second_reminders": 0, "deactivations": 0}
    assert sent_emails == []


def test_first_reminder_is_sent_once(db, headhunter, sent_emails):
    _age(db, headhunter, days=2)

    assert check_unverified_accounts(db)["first_reminders"] == 1
    assert check_unverified_accounts(db)["first_reminders"] == 0
    assert [to for to, _ in sent_emails] == ["hunter@search.io"]

    db.refresh(headhunter)
    assert headhunter.first_reminder_sent_at is not None
    assert headhunter.account_status == "pending_verification"


def test_deactivates_after_grace_period(db, headhunter, sent_emails):
    _age(db, headhunter, days=8)

    counts = check_unverified_accounts(db)
    assert counts["deactivations"] == 1
    assert counts["first_reminders"] == 0
    assert counts["second_reminders"] == 0

    db.refresh(headhunter)
    assert headhunter.account_status == "deactivated"
    assert headhunter.second_reminder_sent_at is not None
    assert len(sent_emails) == 1


def test_injected_clock(db, headhunter, sent_emails):
    later = utcnow() + timedelta(days=3)
    assert check_unverified_accounts(db, now=later)["first_reminders"] == 1


def test_email_failure_does_not_stop_the_pass(db, headhunter, other_headhunter, monkeypatch):
    def broken(to, subject, html):
        raise OSError("smtp down")

    monkeypatch.setattr(email_client, "send_email", broken)
    _age(db, headhunter, days=2)
    _age(db, other_headhunter, days=2)
    assert check_unverified_accounts(db)["first_reminders"] == 2


def test_verified_and_employer_accounts_are_skipped(db, employer, headhunter, sent_emails):
    profile_repo.update(db, headhunter, email_verified=True, account_status="active",
                        verification_sent_at=utcnow() - timedelta(days=9))
    profile_repo.update(db, employer, verification_sent_at=utcnow() - timedelta(days=9))
    assert check_unverified_accounts(db)["deactivations"] == 0


def test_admin_can_trigger_check(db, client, admin, headhunter, sent_emails):
    _age(db, headhunter, days=2)
    r = client.post("/admin/accounts/check-unverified", headers=auth_headers(admin))
    assert r.status_code == 200
    assert r.json()["first_reminders"] == 1
    assert client.post("/admin/accounts/check-unverified", headers=auth_headers(headhunter)).status_code == 403
