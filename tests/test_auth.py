from app.models.profile import Profile
from app.repositories import profile_repo
from app.services import subscription_service
from app.services.accounts import service as account_service
from app.core.security import create_verification_token, decode_token, ACCESS_TOKEN_TYPE

from conftest import auth_headers


def test_signup_employer_is_active(client):
    r = client.post("/auth/signup", json={
        "email": "Owner@Company.com", "password": "secret123", "name": "Owner", "role": "employer",
    })
    assert r.status_code == 201
    body = r.json()
    assert body["role"] == "employer"
    assert body["account_status"] == "active"
    assert body["token_type"] == "bearer"
    assert decode_token(body["access_token"], ACCESS_TOKEN_TYPE) is not None


def test_signup_headhunter_pending_with_free_plan(db, client):
    r = client.post("/auth/signup", json={
        "email": "hh@search.io", "password": "secret123", "name": "Hunter", "role": "headhunter",
    })
    assert r.status_code == 201
    assert r.json()["account_status"] == "pending_verification"

    profile = profile_repo.get_by_email(db, "hh@search.io")
    assert profile.email_verified is False
    assert profile.verification_sent_at is not None
    assert subscription_service.get_credits(db, profile.id) == 20


def test_duplicate_signup_conflict(client, employer):
    r = client.post("/auth/signup", json={
        "email": "BOSS@acme.io", "password": "secret123", "name": "Again", "role": "employer",
    })
    assert r.status_code == 409
    assert r.json()["detail"] == "User already registered"


def test_signup_rejects_unknown_role(client):
    r = client.post("/auth/signup", json={
        "email": "x@y.io", "password": "secret123", "name": "X", "role": "admin",
    })
    assert r.status_code == 422


def test_login_success_and_bad_password(client, employer):
    ok = client.post("/auth/login", json={"email": "boss@acme.io", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["user_id"] == str(employer.id)

    bad = client.post("/auth/login", json={"email": "boss@acme.io", "password": "wrong-pass"})
    assert bad.status_code == 401


def test_login_role_mismatch(client, headhunter):
    r = client.post("/auth/login", json={"email": "hunter@search.io", "password": "secret123", "role": "employer"})
    assert r.status_code == 403
    assert r.json()["detail"] == (
        "This account is registered as a headhunter. Please select the correct role and try again."
    )


def test_deactivated_account_cannot_login_or_use_token(db, client, headhunter):
    profile_repo.update(db, headhunter, account_status="deactivated")

    r = client.post("/auth/login", json={"email": "hunter@search.io", "password": "secret123"})
    assert r.status_code == 403
    assert r.json()["detail"] == "Your account has been deactivated. Please contact support."

    me = client.get("/profiles/me", headers=auth_headers(headhunter))
    assert me.status_code == 403


def test_login_form_for_docs(client, employer):
    r = client.post("/auth/login/form", data={"username": "boss@acme.io", "password": "secret123"})
    assert r.status_code == 200
    assert r.json()["role"] == "employer"


def test_verify_email(db, client, headhunter):
    token = create_verification_token(headhunter.id)
    r = client.post("/auth/verify", json={"token": token})
    assert r.status_code == 200
    assert r.json()["email_verified"] is True
    assert r.json()["account_status"] == "active"

    db.expire_all()
    assert db.get(Profile, headhunter.id).account_status == "active"


def test_verify_rejects_access_token(client, headhunter):
    r = client.post("/auth/verify", json={"token": auth_headers(headhunter)["Authorization"].split()[1]})
    assert r.status_code == 422


def test_resend_verification_after_verified_conflicts(client, employer):
    r = client.post("/auth/resend-verification", headers=auth_headers(employer))
    assert r.status_code == 409


def test_me_requires_token(client):
    assert client.get("/profiles/me").status_code == 401
    assert client.get("/profiles/me", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_me_and_update(client, employer):
    headers = auth_headers(employer)
    me = client.get("/profiles/me", headers=headers).json()
    assert me["email"] == "boss@acme.io"
    assert me["is_admin"] is False

    r = client.patch("/profiles/me", headers=headers, json={"bio": "Hiring great engineers", "show_status": False})
    assert r.status_code == 200
    assert r.json()["bio"] == "Hiring great engineers"
    assert r.json()["status_indicator"] is None
    assert r.json()["last_seen_text"] == "Active recently"


def test_public_profile_hides_private_fields(client, headhunter):
    r = client.get(f"/profiles/{headhunter.id}")
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Noa Hunter"
    assert "password_hash" not in body
    assert "email" not in body
    assert "first_reminder_sent_at" not in body


def test_presence_and_heartbeat(db, client, employer):
    headers = auth_headers(employer)
    assert client.post("/profiles/me/heartbeat", headers=headers).status_code == 204

    r = client.put("/profiles/me/presence", headers=headers, json={"status": "away"})
    assert r.status_code == 200
    assert r.json()["status"] == "away"
    assert r.json()["status_indicator"] == "Away"


def test_admin_flag(db, admin):
    assert account_service.is_admin(db, admin.id) is True
    assert account_service.get_me(db, admin)["is_admin"] is True
