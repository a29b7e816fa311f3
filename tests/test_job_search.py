from datetime import timedelta

from app.core.clock import utcnow
from app.repositories import job_repo
from app.schemas.job import JobSearchFilters
from app.services.jobs import service as job_service
from app.services.jobs.search import posted_cutoff, search_jobs

from conftest import auth_headers, job_payload


def _open(db, employer, **overrides):
    job = job_service.create_job(db, employer, **job_payload(**overrides))
    return job_service.approve_job(db, job.id)


def test_query_params_omit_defaults():
    assert JobSearchFilters().to_query_params() == {}

    filters = JobSearchFilters(
        query="python",
        industries=["Software/Tech", "Cybersecurity"],
        salary_min=20000,
        posted="7d",
        limit=24,
    )
    assert filters.to_query_params() == {
        "q": "python",
        "industries": "Software/Tech,Cybersecurity",
        "min": "20000",
        "posted": "7d",
    }


def test_query_params_round_trip():
    filters = JobSearchFilters(
        query="data", seniority="senior", employment_type="contract", location="tel",
        salary_min=100, salary_max=900, currency="USD", sort="budget_high", offset=24, limit=12,
    )
    assert JobSearchFilters.from_query_params(filters.to_query_params()) == filters


def test_from_query_params_drops_invalid_values():
    filters = JobSearchFilters.from_query_params({"q": "ml", "posted": "yesterday", "limit": "500", "type": "temp"})
    assert filters.query == "ml"
    assert filters.posted == "all"
    assert filters.limit == 24
    assert filters.employment_type == "temp"


def test_only_public_searchable_jobs_are_listed(db, employer):
    visible = _open(db, employer)
    job_service.create_job(db, employer, **job_payload(title="Pending Role"))
    private = _open(db, employer, title="Hidden Role")
    job_service.set_visibility(db, employer, private.id, "private")

    result = search_jobs(db, JobSearchFilters())
    assert [j.id for j in result["items"]] == [visible.id]
    assert result["total"] == 1
    assert result["has_more"] is False


def test_query_matches_title_industry_and_skills(db, employer):
    by_title = _open(db, employer, title="Data Scientist", skills_must=["Statistics"], industry="AI / Data Science")
    by_skill = _open(db, employer, title="Platform Engineer", skills_must=["Kubernetes"], industry="Software/Tech")

    ids = lambda q: {j.id for j in search_jobs(db, JobSearchFilters(query=q))["items"]}
    assert ids("scientist") == {by_title.id}
    assert ids("KUBERNETES") == {by_skill.id}
    assert ids("ai / data") == {by_title.id}


def test_salary_overlap_in_currency(db, employer):
    low = _open(db, employer, budget_min=10000, budget_max=20000)
    high = _open(db, employer, budget_min=50000, budget_max=70000)
    usd = _open(db, employer, budget_currency="USD", budget_min=10000, budget_max=20000)

    def ids(**kw):
        return {j.id for j in search_jobs(db, JobSearchFilters(**kw))["items"]}

    assert ids(salary_min=15000, salary_max=55000) == {low.id, high.id}
    assert ids(salary_min=60000) == {high.id}
    assert ids(salary_max=15000) == {low.id}
    assert ids(salary_max=15000, currency="USD") == {usd.id}


def test_filters_and_posted_window(db, employer):
    recent = _open(db, employer, location="Tel Aviv", seniority="junior")
    old = _open(db, employer, location="Haifa", seniority="senior")
    job_repo.update(db, old, created_at=utcnow() - timedelta(days=10))

    def ids(**kw):
        return {j.id for j in search_jobs(db, JobSearchFilters(**kw))["items"]}

    assert ids(location="tel") == {recent.id}
    assert ids(seniority="senior") == {old.id}
    assert ids(posted="7d") == {recent.id}
    assert ids(posted="30d") == {recent.id, old.id}
    assert ids(exclude_job_ids=[recent.id]) == {old.id}


def test_posted_cutoff():
    now = utcnow()
    assert posted_cutoff("all", now) is None
    assert posted_cutoff("24h", now) == now - timedelta(days=1)


def test_sorting_and_paging(db, employer):
    cheap = _open(db, employer, budget_min=1000, budget_max=2000)
    mid = _open(db, employer, budget_min=3000, budget_max=4000)
    rich = _open(db, employer, budget_min=5000, budget_max=9000)

    ordered = search_jobs(db, JobSearchFilters(sort="budget_high"))["items"]
    assert [j.id for j in ordered] == [rich.id, mid.id, cheap.id]

    page = search_jobs(db, JobSearchFilters(sort="budget_low", limit=2))
    assert [j.id for j in page["items"]] == [cheap.id, mid.id]
    assert page["total"] == 3
    assert page["has_more"] is True

    last = search_jobs(db, JobSearchFilters(sort="budget_low", limit=2, offset=2))
    assert [j.id for j in last["items"]] == [rich.id]
    assert last["has_more"] is False


def test_search_endpoint_marks_applied_and_saved(db, client, employer, headhunter):
    from app.services import application_service, saved_service

    applied = _open(db, employer, title="Applied Role")
    saved = _open(db, employer, title="Saved Role")
    application_service.apply(
        db, headhunter, applied.id, cover_note="Strong network in this exact niche.",
        fee_model="flat", fee_value=5000, eta_days=14,
    )
    saved_service.save_job(db, headhunter, saved.id)

    r = client.get("/jobs", params={"sort": "oldest"}, headers=auth_headers(headhunter))
    assert r.status_code == 200
    body = r.json()
    assert [j["title"] for j in body["items"]] == ["Applied Role", "Saved Role"]
    assert body["applied_job_ids"] == [str(applied.id)]
    assert body["saved_job_ids"] == [str(saved.id)]


def test_search_endpoint_anonymous_with_bad_params(db, client, employer):
    _open(db, employer)
    r = client.get("/jobs", params={"limit": "abc", "q": "backend"})
    assert r.status_code == 200
    assert r.json()["limit"] == 24
    assert r.json()["total"] == 1
