import pytest

from app.core.errors import ValidationFailedError, NotFoundError
from app.services import application_service, subscription_service
from app.services.subscription_service import PLANS

from conftest import auth_headers

NOTE = "I have placed five backend engineers this year."


@pytest.fixture
def engagement_id(db, client, employer, headhunter, open_job):
    application = application_service.apply(
        db, headhunter, open_job.id, cover_note=NOTE, fee_model="percent_fee", fee_value=15, eta_days=10,
    )
    application_service.shortlist(db, employer, application.id)
    return client.get("/engagements", headers=auth_headers(employer)).json()[0]["id"]


def _candidate(name):
    return {"candidate_name": name, "candidate_email": f"{name.lower()}@mail.com", "right_to_work": True}


def test_confirm_sow_activates_after_both_parties(client, employer, headhunter, engagement_id):
    first = client.post(f"/engagements/{engagement_id}/confirm-sow", headers=auth_headers(employer)).json()
    assert first["status"] == "Proposed"
    assert first["sow_confirmed_employer"] is True
    assert first["start_at"] is None

    second = client.post(f"/engagements/{engagement_id}/confirm-sow", headers=auth_headers(headhunter)).json()
    assert second["status"] == "Active"
    assert second["start_at"] is not None
    assert second["due_at"] is not None


def test_submissions_require_active_and_respect_cap(client, employer, headhunter, engagement_id):
    hh = auth_headers(headhunter)
    url = f"/engagements/{engagement_id}/submissions"
    assert client.post(url, headers=hh, json=_candidate("Early")).status_code == 409

    client.post(f"/engagements/{engagement_id}/confirm-sow", headers=auth_headers(employer))
    client.post(f"/engagements/{engagement_id}/confirm-sow", headers=hh)

    for name in ("Maya", "Omer", "Lior"):
        r = client.post(url, headers=hh, json=_candidate(name))
        assert r.status_code == 201
        assert r.json()["status"] == "New"
    assert client.post(url, headers=hh, json=_candidate("Extra")).status_code == 409

    eng = client.get(f"/engagements/{engagement_id}", headers=auth_headers(employer)).json()
    assert [s["candidate_name"] for s in eng["submissions"]] == ["Maya", "Omer", "Lior"]


def test_submission_status_updates(client, employer, headhunter, engagement_id):
    hh = auth_headers(headhunter)
    client.post(f"/engagements/{engagement_id}/confirm-sow", headers=auth_headers(employer))
    client.post(f"/engagements/{engagement_id}/confirm-sow", headers=hh)
    sub_id = client.post(f"/engagements/{engagement_id}/submissions", headers=hh, json=_candidate("Maya")).json()["id"]

    r = client.patch(f"/engagements/submissions/{sub_id}", headers=auth_headers(employer),
                     json={"status": "Client-Interview"})
    assert r.status_code == 200
    assert r.json()["status"] == "Client-Interview"

    bad = client.patch(f"/engagements/submissions/{sub_id}", headers=auth_headers(employer), json={"status": "Maybe"})
    assert bad.status_code == 422


def test_engagement_visible_to_participants_only(client, other_headhunter, engagement_id):
    assert client.get(f"/engagements/{engagement_id}", headers=auth_headers(other_headhunter)).status_code == 403


def test_plans_listing(client):
    plans = {p["id"]: p for p in client.get("/plans").json()}
    assert plans["core"]["monthly_price"] == 29
    assert plans["core"]["yearly_price"] == 290
    assert plans["free"]["credits"] == 20
    assert plans["pro"]["credits"] is None
    assert plans["pro"]["locked"] is True


def test_select_plan_resets_credits(db, client, headhunter):
    headers = auth_headers(headhunter)
    r = client.post("/subscriptions/select", headers=headers, json={"plan_id": "core", "billing_cycle": "yearly"})
    assert r.status_code == 200
    assert r.json()["credits_remaining"] == 250
    assert r.json()["billing_cycle"] == "yearly"

    credits = client.get("/subscriptions/credits", headers=headers).json()
    assert credits == {"plan_id": "core", "credits_remaining": 250, "unlimited": False}


def test_select_locked_or_unknown_plan(db, headhunter):
    with pytest.raises(ValidationFailedError):
        subscription_service.select_plan(db, headhunter.id, "huntorix")
    with pytest.raises(NotFoundError):
        subscription_service.select_plan(db, headhunter.id, "gold")


def test_plan_prices():
    assert PLANS["huntorix"].price("yearly") == 790
    assert PLANS["free"].price("monthly") == 0
