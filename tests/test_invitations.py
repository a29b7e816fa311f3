from app.services import notification_service, subscription_service

from conftest import auth_headers


def _invite(client, employer, job, headhunter, message="Would love your help on this one"):
    return client.post("/invitations", headers=auth_headers(employer), json={
        "job_id": str(job.id), "headhunter_id": str(headhunter.id), "message": message,
    })


def test_invite_notifies_headhunter(db, client, employer, headhunter, open_job):
    r = _invite(client, employer, open_job, headhunter)
    assert r.status_code == 201
    assert r.json()["status"] == "pending"

    notes = notification_service.list_notifications(db, headhunter.id)
    assert notes[0].type == "job_invitation"
    assert notes[0].message == "You've been invited to apply for Backend Engineer"


def test_duplicate_invitation(client, employer, headhunter, open_job):
    _invite(client, employer, open_job, headhunter)
    r = _invite(client, employer, open_job, headhunter)
    assert r.status_code == 409
    assert r.json()["detail"] == "You've already invited this headhunter to this job"


def test_invite_rejects_non_headhunter_and_foreign_job(db, client, employer, admin, headhunter, open_job):
    assert _invite(client, employer, open_job, admin).status_code == 422
    assert _invite(client, admin, open_job, headhunter).status_code == 403


def test_received_and_sent_lists(client, employer, headhunter, open_job):
    _invite(client, employer, open_job, headhunter)

    received = client.get("/invitations/received", headers=auth_headers(headhunter)).json()
    assert received[0]["job_title"] == "Backend Engineer"
    assert received[0]["counterpart_name"] == "Dana Employer"

    sent = client.get("/invitations/sent", headers=auth_headers(employer)).json()
    assert sent[0]["counterpart_name"] == "Noa Hunter"

    assert client.get("/invitations/received", params={"status": "declined"},
                      headers=auth_headers(headhunter)).json() == []


def test_accept_creates_application_without_credit(db, client, employer, headhunter, open_job):
    inv_id = _invite(client, employer, open_job, headhunter).json()["id"]
    before = subscription_service.get_credits(db, headhunter.id)

    r = client.post(f"/invitations/{inv_id}/accept", headers=auth_headers(headhunter), json={
        "proposed_fee_model": "flat", "proposed_fee_value": 8000, "eta_days": 21,
    })
    assert r.status_code == 201
    body = r.json()
    assert body["status"] == "submitted"
    assert body["cover_note"] == "Would love your help on this one"
    assert subscription_service.get_credits(db, headhunter.id) == before

    notes = notification_service.list_notifications(db, employer.id)
    assert notes[0].title == "Invitation Accepted"

    again = client.post(f"/invitations/{inv_id}/accept", headers=auth_headers(headhunter), json={})
    assert again.status_code == 409


def test_accept_is_addressed_to_invitee_only(client, employer, headhunter, other_headhunter, open_job):
    inv_id = _invite(client, employer, open_job, headhunter).json()["id"]
    r = client.post(f"/invitations/{inv_id}/accept", headers=auth_headers(other_headhunter), json={})
    assert r.status_code == 404


def test_decline(db, client, employer, headhunter, open_job):
    inv_id = _invite(client, employer, open_job, headhunter).json()["id"]
    r = client.post(f"/invitations/{inv_id}/decline", headers=auth_headers(headhunter))
    assert r.status_code == 200
    assert r.json()["status"] == "declined"

    notes = notification_service.list_notifications(db, employer.id)
    assert notes[0].title == "Invitation Declined"
    assert notes[0].message == "Noa Hunter has declined your invitation for Backend Engineer"
