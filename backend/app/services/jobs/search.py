# app/services/jobs/search.py
# Purpose: Opportunities search over public jobs (filters, overlap salary logic, paging).
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from sqlalchemy import select, or_, cast, String
from sqlalchemy.orm import Session

from app.core.clock import utcnow
from app.models.application import Application
from app.models.job import Job
from app.models.profile import Profile
from app.models.saved import SavedJob
from app.repositories import job_repo
from app.schemas.job import JobSearchFilters
from app.services.jobs.catalog import SEARCHABLE_STATUSES

logger = logging.getLogger("jobs.search")

POSTED_WINDOWS = {
    "24h": timedelta(days=1),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
}
UNBOUNDED_SALARY = float(2 ** 53 - 1)


def posted_cutoff(posted: str, now: Optional[datetime] = None) -> Optional[datetime]:
    window = POSTED_WINDOWS.get(posted)
    if window is None:
        return None
    return (now or utcnow()) - window


def build_search_query(filters: JobSearchFilters, now: Optional[datetime] = None):
    stmt = select(Job).where(Job.visibility == "public", Job.status.in_(SEARCHABLE_STATUSES))

    if filters.industries:
        stmt = stmt.where(Job.industry.in_(filters.industries))
    if filters.seniority:
        stmt = stmt.where(Job.seniority == filters.seniority)
    if filters.employment_type:
        stmt = stmt.where(Job.employment_type == filters.employment_type)
    if filters.location:
        stmt = stmt.where(Job.location.ilike(f"%{filters.location}%"))

    # Overlap: job_max >= min AND job_min <= max, in the chosen currency
    if filters.salary_min is not None or filters.salary_max is not None:
        low = filters.salary_min or 0
        high = filters.salary_max if filters.salary_max is not None else UNBOUNDED_SALARY
        stmt = stmt.where(
            Job.budget_currency == filters.currency,
            Job.budget_max >= low,
            Job.budget_min <= high,
        )

    cutoff = posted_cutoff(filters.posted, now)
    if cutoff is not None:
        stmt = stmt.where(Job.created_at >= cutoff)

    if filters.query:
        like = f"%{filters.query}%"
        stmt = stmt.where(or_(
            Job.title.ilike(like),
            Job.industry.ilike(like),
            cast(Job.skills_must, String).ilike(like),
        ))

    if filters.exclude_job_ids:
        stmt = stmt.where(Job.id.not_in(filters.exclude_job_ids))

    if filters.sort == "oldest":
        stmt = stmt.order_by(Job.created_at.asc())
    elif filters.sort == "budget_high":
        stmt = stmt.order_by(Job.budget_max.desc().nulls_last(), Job.created_at.desc())
    elif filters.sort == "budget_low":
        stmt = stmt.order_by(Job.budget_min.asc().nulls_last(), Job.created_at.desc())
    else:
        stmt = stmt.order_by(Job.created_at.desc())
    return stmt


def search_jobs(db: Session, filters: JobSearchFilters, viewer: Optional[Profile] = None) -> dict[str, Any]:
    stmt = build_search_query(filters)
    items, total = job_repo.search(db, stmt, offset=filters.offset, limit=filters.limit)
    logger.debug("search_jobs %s -> %d/%d", filters.to_query_params(), len(items), total)

    applied: list = []
    saved: list = []
    if viewer is not None and viewer.role == "headhunter" and items:
        ids = [j.id for j in items]
        applied = list(db.execute(
            select(Application.job_id).where(Application.headhunter_id == viewer.id, Application.job_id.in_(ids))
        ).scalars().all())
        saved = list(db.execute(
            select(SavedJob.job_id).where(SavedJob.user_id == viewer.id, SavedJob.job_id.in_(ids))
        ).scalars().all())

    return {
        "items": items,
        "total": total,
        "has_more": filters.offset + len(items) < total,
        "offset": filters.offset,
        "limit": filters.limit,
        "applied_job_ids": applied,
        "saved_job_ids": saved,
    }
