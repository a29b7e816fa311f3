import pytest

from app.repositories import profile_repo

from conftest import auth_headers


@pytest.fixture
def listed(db, headhunter, other_headhunter):
    """Two active headhunters with directory stats filled in."""
    noa = profile_repo.update(
        db, headhunter, account_status="active", bio="Backend and data hiring", expertise=["Engineering"],
        industries=["Software/Tech"], availability="available", rating_avg=4.2, success_rate=80,
        response_time_hours=None,
    )
    avi = profile_repo.update(
        db, other_headhunter, account_status="active", bio="Finance executives", expertise=["Executive Search"],
        industries=["Finance"], availability="busy", rating_avg=4.8, success_rate=60, response_time_hours=5,
    )
    return noa, avi


def test_save_and_unsave_job(client, headhunter, open_job):
    headers = auth_headers(headhunter)
    assert client.post(f"/saved/jobs/{open_job.id}", headers=headers).status_code == 201

    again = client.post(f"/saved/jobs/{open_job.id}", headers=headers)
    assert again.status_code == 409
    assert again.json()["detail"] == "Job already saved"

    assert [j["id"] for j in client.get("/saved/jobs", headers=headers).json()] == [str(open_job.id)]
    assert client.delete(f"/saved/jobs/{open_job.id}", headers=headers).status_code == 204
    assert client.get("/saved/jobs", headers=headers).json() == []


def test_employers_cannot_save_jobs(client, employer, open_job):
    assert client.post(f"/saved/jobs/{open_job.id}", headers=auth_headers(employer)).status_code == 403


def test_save_headhunter_and_counts(client, employer, admin, headhunter, other_headhunter):
    assert client.post(f"/saved/headhunters/{headhunter.id}", headers=auth_headers(employer)).status_code == 201
    assert client.post(f"/saved/headhunters/{headhunter.id}", headers=auth_headers(admin)).status_code == 201
    assert client.post(f"/saved/headhunters/{headhunter.id}", headers=auth_headers(employer)).status_code == 409
    assert client.post(f"/saved/headhunters/{admin.id}", headers=auth_headers(employer)).status_code == 422

    saved = client.get("/saved/headhunters", headers=auth_headers(employer)).json()
    assert [p["name"] for p in saved] == ["Noa Hunter"]

    counts = client.post("/saved/headhunters/counts", headers=auth_headers(employer), json={
        "headhunter_ids": [str(headhunter.id), str(other_headhunter.id)],
    }).json()
    assert counts == {str(headhunter.id): 2, str(other_headhunter.id): 0}


def test_directory_lists_active_headhunters_by_rating(client, listed):
    names = [p["name"] for p in client.get("/headhunters").json()]
    assert names == ["Avi Hunter", "Noa Hunter"]


def test_directory_excludes_pending_accounts(client, headhunter):
    assert client.get("/headhunters").json() == []


def test_directory_filters(client, listed):
    def names(**params):
        return [p["name"] for p in client.get("/headhunters", params=params).json()]

    assert names(search="FINANCE") == ["Avi Hunter"]
    assert names(search="engineering") == ["Noa Hunter"]
    assert names(industry="Software/Tech") == ["Noa Hunter"]
    assert names(industry="all") == ["Avi Hunter", "Noa Hunter"]
    assert names(availability="available") == ["Noa Hunter"]


def test_directory_sorts(client, listed):
    def names(sort):
        return [p["name"] for p in client.get("/headhunters", params={"sort": sort}).json()]

    assert names("success_rate") == ["Noa Hunter", "Avi Hunter"]
    # A missing response time sorts last
    assert names("response_time") == ["Avi Hunter", "Noa Hunter"]
    assert client.get("/headhunters", params={"sort": "cheapest"}).status_code == 422


def test_directory_reports_saved_count(client, employer, listed):
    noa, _ = listed
    client.post(f"/saved/headhunters/{noa.id}", headers=auth_headers(employer))
    rows = {p["name"]: p for p in client.get("/headhunters").json()}
    assert rows["Noa Hunter"]["saved_count"] == 1
    assert rows["Avi Hunter"]["saved_count"] == 0
