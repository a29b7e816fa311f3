import os
import tempfile

# Settings are read at import time; point them at an in-memory database first
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["SMTP_HOST"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["STORAGE_DIR"] = tempfile.mkdtemp(prefix="huntorix-storage-")
os.environ["REALTIME_THROTTLE_SECONDS"] = "0.05"

import pytest
from fastapi.testclient import TestClient

import app.models  # noqa: F401
from app.core.security import create_access_token
from app.db.base import Base, engine, SessionLocal
from app.main import app as fastapi_app
from app.repositories import profile_repo
from app.services.accounts import service as account_service


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(fastapi_app) as c:
        yield c


def auth_headers(profile) -> dict:
    return {"Authorization": f"Bearer {create_access_token(profile.id, profile.role)}"}


@pytest.fixture
def employer(db):
    profile = account_service.signup(
        db, email="boss@acme.io", password="secret123", name="Dana Employer", role="employer",
    )
    return profile_repo.update(db, profile, company_name="Acme")


@pytest.fixture
def headhunter(db):
    return account_service.signup(
        db, email="hunter@search.io", password="secret123", name="Noa Hunter", role="headhunter",
    )


@pytest.fixture
def other_headhunter(db):
    return account_service.signup(
        db, email="hunter2@search.io", password="secret123", name="Avi Hunter", role="headhunter",
    )


@pytest.fixture
def admin(db):
    profile = account_service.signup(
        db, email="admin@huntorix.com", password="secret123", name="Admin", role="employer",
    )
    profile_repo.grant_role(db, profile.id, "admin")
    return profile


def job_payload(**overrides) -> dict:
    payload = {
        "title": "Backend Engineer",
        "description": "Build and run our Python APIs.",
        "industry": "Software/Tech",
        "location": "Tel Aviv",
        "seniority": "senior",
        "employment_type": "full_time",
        "budget_currency": "ILS",
        "budget_min": 30000,
        "budget_max": 40000,
        "skills_must": ["Python", "PostgreSQL"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def open_job(db, employer):
    """A reviewed, public job owned by `employer`."""
    from app.services.jobs import service as job_service

    job = job_service.create_job(db, employer, **job_payload())
    return job_service.approve_job(db, job.id)
