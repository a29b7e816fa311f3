import pytest

from app.core.errors import PaymentRequiredError, ValidationFailedError
from app.repositories import subscription_repo
from app.services import application_service, notification_service, subscription_service
from app.services.common import email_client

from conftest import auth_headers

NOTE = "I have placed five backend engineers this year."


def _apply(client, headhunter, job, **overrides):
    payload = {
        "job_id": str(job.id),
        "cover_note": NOTE,
        "proposed_fee_model": "percent_fee",
        "proposed_fee_value": 20,
        "eta_days": 14,
    }
    payload.update(overrides)
    return client.post("/applications", headers=auth_headers(headhunter), json=payload)


def test_apply_deducts_credit_and_notifies_employer(db, client, employer, headhunter, open_job):
    r = _apply(client, headhunter, open_job)
    assert r.status_code == 201
    assert r.json()["status"] == "submitted"
    assert subscription_service.get_credits(db, headhunter.id) == 19

    notes = notification_service.list_notifications(db, employer.id)
    assert len(notes) == 1
    assert notes[0].type == "application_received"
    assert notes[0].title == "Noa Hunter applied to Backend Engineer"
    assert notes[0].message == "Noa Hunter applied with an ETA of 14 days"


def test_duplicate_application(client, headhunter, open_job):
    assert _apply(client, headhunter, open_job).status_code == 201
    r = _apply(client, headhunter, open_job)
    assert r.status_code == 409
    assert r.json()["detail"] == "You have already applied to this job"


@pytest.mark.parametrize("overrides", [
    {"cover_note": "too short"},
    {"cover_note": "x" * 801},
    {"proposed_fee_model": "commission"},
    {"proposed_fee_value": 0},
    {"eta_days": 0},
    {"eta_days": 61},
])
def test_apply_validation(client, headhunter, open_job, overrides):
    assert _apply(client, headhunter, open_job, **overrides).status_code == 422


def test_validate_terms_service_level():
    with pytest.raises(ValidationFailedError):
        application_service.validate_terms("short", "flat", 10, 5)
    application_service.validate_terms(None, "flat", 10, 5, require_note=False)


def test_no_credits_payment_required(db, client, headhunter, open_job):
    sub = subscription_service.ensure_subscription(db, headhunter.id)
    subscription_repo.set_credits(db, sub, 0)

    r = _apply(client, headhunter, open_job)
    assert r.status_code == 402
    with pytest.raises(PaymentRequiredError):
        subscription_service.require_credit(db, headhunter.id)


def test_unlimited_plan_skips_deduction(db, client, headhunter, open_job):
    subscription_repo.upsert(db, headhunter.id, plan_id="pro", credits_remaining=None)
    assert _apply(client, headhunter, open_job).status_code == 201
    assert subscription_service.get_credits(db, headhunter.id) is None


def test_apply_to_closed_job_conflicts(db, client, headhunter, employer, open_job):
    from app.services.jobs import service as job_service

    job_service.update_job(db, employer, open_job.id, {"status": "closed"})
    assert _apply(client, headhunter, open_job).status_code == 409


def test_email_failure_does_not_fail_application(client, headhunter, open_job, monkeypatch):
    def boom(*args, **kwargs):
        raise OSError("smtp down")

    monkeypatch.setattr(email_client, "send_email", boom)
    assert _apply(client, headhunter, open_job).status_code == 201


def test_employers_cannot_apply(client, employer, open_job):
    assert _apply(client, employer, open_job).status_code == 403


def test_shortlist_creates_engagement_and_notifies(db, client, employer, headhunter, open_job):
    app_id = _apply(client, headhunter, open_job).json()["id"]

    r = client.post(f"/applications/{app_id}/shortlist", headers=auth_headers(employer))
    assert r.status_code == 200
    assert r.json()["status"] == "shortlisted"

    engagements = client.get("/engagements", headers=auth_headers(headhunter)).json()
    assert len(engagements) == 1
    assert engagements[0]["status"] == "Proposed"
    assert engagements[0]["fee_model"] == "percent_fee"
    assert engagements[0]["fee_amount"] == 20
    assert engagements[0]["sla_days"] == 14
    assert engagements[0]["candidate_cap"] == 3

    notes = notification_service.list_notifications(db, headhunter.id)
    assert notes[0].type == "status_change"
    assert notes[0].message == "Your application for Backend Engineer was shortlisted"


def test_transitions(client, employer, headhunter, open_job):
    app_id = _apply(client, headhunter, open_job).json()["id"]
    employer_headers = auth_headers(employer)

    assert client.post(f"/applications/{app_id}/shortlist", headers=employer_headers).status_code == 200
    # Only submitted applications can be withdrawn
    assert client.post(f"/applications/{app_id}/withdraw", headers=auth_headers(headhunter)).status_code == 409
    assert client.post(f"/applications/{app_id}/reject", headers=employer_headers).json()["status"] == "rejected"
    assert client.post(f"/applications/{app_id}/shortlist", headers=employer_headers).status_code == 409


def test_withdraw(client, headhunter, other_headhunter, open_job):
    app_id = _apply(client, headhunter, open_job).json()["id"]
    assert client.post(f"/applications/{app_id}/withdraw", headers=auth_headers(other_headhunter)).status_code == 404
    r = client.post(f"/applications/{app_id}/withdraw", headers=auth_headers(headhunter))
    assert r.json()["status"] == "withdrawn"


def test_only_job_owner_manages_applications(db, client, headhunter, open_job):
    from app.services.accounts import service as account_service

    stranger = account_service.signup(db, email="x@corp.io", password="secret123", name="X", role="employer")
    app_id = _apply(client, headhunter, open_job).json()["id"]
    assert client.post(f"/applications/{app_id}/shortlist", headers=auth_headers(stranger)).status_code == 403
    assert client.get(f"/jobs/{open_job.id}/applications", headers=auth_headers(stranger)).status_code == 403


def test_lists(client, employer, headhunter, other_headhunter, open_job):
    first = _apply(client, headhunter, open_job).json()
    _apply(client, other_headhunter, open_job)
    client.post(f"/applications/{first['id']}/reject", headers=auth_headers(employer))

    rows = client.get("/jobs/%s/applications" % open_job.id, headers=auth_headers(employer)).json()
    assert {r["headhunter_name"] for r in rows} == {"Noa Hunter", "Avi Hunter"}

    mine = client.get("/applications/mine", headers=auth_headers(headhunter)).json()
    assert mine[0]["job_title"] == "Backend Engineer"
    assert mine[0]["company_name"] == "Acme"

    assert client.get("/applications/mine", params={"status": "submitted"}, headers=auth_headers(headhunter)).json() == []
    assert len(client.get("/applications/mine", params={"status": "rejected"}, headers=auth_headers(headhunter)).json()) == 1


def test_list_for_headhunter_status_sort(db, employer, headhunter):
    from app.services.jobs import service as job_service
    from conftest import job_payload

    jobs = [job_service.approve_job(db, job_service.create_job(db, employer, **job_payload(title=t)).id)
            for t in ("First", "Second", "Third")]
    apps = [application_service.apply(db, headhunter, j.id, cover_note=NOTE, fee_model="flat", fee_value=1, eta_days=3)
            for j in jobs]
    application_service.reject(db, employer, apps[0].id)
    application_service.shortlist(db, employer, apps[1].id)

    by_status = application_service.list_for_headhunter(db, headhunter, sort="status")
    assert [r["application"].status for r in by_status] == ["submitted", "shortlisted", "rejected"]

    oldest = application_service.list_for_headhunter(db, headhunter, sort="oldest")
    assert [r["job_title"] for r in oldest] == ["First", "Second", "Third"]
