# app/services/jobs/service.py
"""
Job lifecycle: posting, owner edits (with edit history and on-hold tracking),
visibility, admin review and the hold-reason overview.
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.clock import utcnow, as_utc
from app.core.errors import NotFoundError, PermissionDeniedError, ValidationFailedError, ConflictError
from app.models.job import Job
from app.models.profile import Profile
from app.repositories import job_repo, profile_repo
from app.services.jobs.catalog import (
    EXCLUSIVITY_DAYS, HOLD_REASONS, LEGACY_HOLD_PLACEHOLDER, OWNER_SETTABLE_STATUSES, VISIBILITIES,
)
from app.services.realtime.change_feed import publish_change

logger = logging.getLogger("jobs.service")

# Fields an owner can edit and that are tracked in the edit history
EDITABLE_FIELDS = (
    "title", "description", "company_name", "industry", "seniority", "employment_type",
    "location", "remote_policy", "budget_currency", "budget_min", "budget_max",
    "skills_must", "skills_nice", "benefits", "is_exclusive", "status",
)
LIST_FIELDS = ("skills_must", "skills_nice", "benefits")


def _publish(job: Job, event: str) -> None:
    publish_change("jobs", event, {
        "id": str(job.id),
        "created_by": str(job.created_by),
        "status": job.status,
        "visibility": job.visibility,
    })


def _same(field: str, old: Any, new: Any) -> bool:
    if field in LIST_FIELDS:
        return list(old or []) == list(new or [])
    if isinstance(old, (int, float)) and isinstance(new, (int, float)) and not isinstance(old, bool):
        return float(old) == float(new)
    return old == new


def diff_job(job: Job, updates: dict[str, Any]) -> list[dict[str, Any]]:
    """[{field, old_value, new_value}] for every provided field that actually differs."""
    changes = []
    for field in EDITABLE_FIELDS:
        if field not in updates:
            continue
        old, new = getattr(job, field), updates[field]
        if not _same(field, old, new):
            changes.append({"field": field, "old_value": old, "new_value": new})
    return changes


def is_admin(db: Session, user: Optional[Profile]) -> bool:
    return bool(user) and profile_repo.has_role(db, user.id, "admin")


def create_job(db: Session, employer: Profile, **fields) -> Job:
    now = utcnow()
    is_exclusive = bool(fields.get("is_exclusive"))
    company_name = fields.pop("company_name", None) or employer.company_name
    job = job_repo.create(
        db,
        job_id_number=job_repo.next_job_number(db),
        created_by=employer.id,
        status="pending_review",
        exclusive_until=now + timedelta(days=EXCLUSIVITY_DAYS) if is_exclusive else None,
        company_name=company_name,
        **fields,
    )
    logger.info("Job #%s '%s' created by %s (pending review)", job.job_id_number, job.title, employer.id)
    _publish(job, "INSERT")
    return job


def get_job(db: Session, job_id: UUID) -> Optional[Job]:
    return job_repo.get(db, job_id)


def get_visible_job(db: Session, job_id: UUID, viewer: Optional[Profile]) -> Optional[Job]:
    """Public, reviewed jobs are visible to anyone; private or pending ones to the owner and admins."""
    job = job_repo.get(db, job_id)
    if not job:
        return None
    if job.visibility == "public" and job.status != "pending_review":
        return job
    if viewer and (job.created_by == viewer.id or is_admin(db, viewer)):
        return job
    return None


def get_owned_job(db: Session, job_id: UUID, owner: Profile) -> Job:
    job = job_repo.get(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    if job.created_by != owner.id:
        raise PermissionDeniedError("You can only manage your own jobs")
    return job


def update_job(
    db: Session,
    owner: Profile,
    job_id: UUID,
    updates: dict[str, Any],
    *,
    hold_reason: Optional[str] = None,
) -> tuple[Job, list[dict[str, Any]]]:
    """
    Apply an owner edit. Returns (job, changes); an empty change list means
    nothing was written.
    """
    job = get_owned_job(db, job_id, owner)
    now = utcnow()

    new_status = updates.get("status")
    if new_status is not None and new_status != job.status:
        if new_status not in OWNER_SETTABLE_STATUSES:
            raise ValidationFailedError(f"Status must be one of: {', '.join(OWNER_SETTABLE_STATUSES)}")
        if job.status == "pending_review":
            raise ConflictError("This job is still pending review")
        if new_status == "on_hold" and hold_reason not in HOLD_REASONS:
            raise ValidationFailedError("Please select a reason for putting this job on hold")

    exclusive_until = as_utc(job.exclusive_until)
    if job.is_exclusive and updates.get("is_exclusive") is False and exclusive_until and exclusive_until > now:
        raise ValidationFailedError(
            f"This job is exclusive until {exclusive_until:%b %d, %Y} and cannot be unmarked before then"
        )

    budget_min = updates.get("budget_min", job.budget_min)
    budget_max = updates.get("budget_max", job.budget_max)
    if budget_min is not None and budget_max is not None and budget_max < budget_min:
        raise ValidationFailedError("Maximum budget must be greater than or equal to minimum budget")

    changes = diff_job(job, updates)
    if not changes:
        logger.info("Job %s: no changes", job.id)
        return job, []

    fields = {c["field"]: c["new_value"] for c in changes}
    if fields.get("is_exclusive") is True and not job.is_exclusive:
        fields["exclusive_until"] = now + timedelta(days=EXCLUSIVITY_DAYS)
    elif fields.get("is_exclusive") is False:
        fields["exclusive_until"] = None

    previous_status = job.status
    job = job_repo.update(db, job, **fields)
    job_repo.add_edit_history(db, job_id=job.id, edited_by=owner.id, changes=changes)

    if "status" in fields:
        if fields["status"] == "on_hold":
            job_repo.add_hold(db, job_id=job.id, created_by=owner.id, reason=hold_reason)
        elif previous_status == "on_hold":
            job_repo.resolve_open_holds(db, job.id, now)

    logger.info("Job %s updated: %s", job.id, ", ".join(fields))
    _publish(job, "UPDATE")
    return job, changes


def set_visibility(db: Session, owner: Profile, job_id: UUID, visibility: str) -> Job:
    if visibility not in VISIBILITIES:
        raise ValidationFailedError("Visibility must be public or private")
    job = get_owned_job(db, job_id, owner)
    if job.visibility != visibility:
        job = job_repo.update(db, job, visibility=visibility)
        _publish(job, "UPDATE")
    return job


def list_my_jobs(db: Session, owner: Profile) -> list[dict[str, Any]]:
    jobs = job_repo.list_by_owner(db, owner.id)
    ids = [j.id for j in jobs]
    app_counts = job_repo.application_counts(db, ids)
    edits = job_repo.edit_counts(db, ids)
    out = []
    for job in jobs:
        total, pending = app_counts.get(job.id, (0, 0))
        out.append({
            "job": job,
            "application_count": total,
            "pending_count": pending,
            "edit_count": edits.get(job.id, 0),
        })
    return out


def get_edit_history(db: Session, viewer: Profile, job_id: UUID):
    job = job_repo.get(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    if job.created_by != viewer.id and not is_admin(db, viewer):
        raise PermissionDeniedError("Only the job owner can view its edit history")
    return job_repo.list_edit_history(db, job.id)


def delete_job(db: Session, owner: Profile, job_id: UUID) -> None:
    job = get_owned_job(db, job_id, owner)
    row = {"id": str(job.id), "created_by": str(job.created_by), "status": job.status, "visibility": job.visibility}
    job_repo.delete(db, job)
    logger.info("Job %s deleted by %s", job_id, owner.id)
    publish_change("jobs", "DELETE", row)


# ---- Admin review -----------------------------------------------------------

def list_jobs_for_review(db: Session) -> dict[str, list[Job]]:
    return {
        "pending": job_repo.list_by_status(db, "pending_review"),
        "approved": job_repo.list_by_status(db, "open"),
        "rejected": job_repo.list_by_status(db, "closed"),
    }


def _review(db: Session, job_id: UUID, target: str) -> Job:
    job = job_repo.get(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    if job.status != "pending_review":
        raise ConflictError("Only jobs pending review can be approved or rejected")
    job = job_repo.update(db, job, status=target)
    _publish(job, "UPDATE")
    return job


def approve_job(db: Session, job_id: UUID) -> Job:
    job = _review(db, job_id, "open")
    logger.info("Job %s approved", job.id)
    return job


def reject_job(db: Session, job_id: UUID) -> Job:
    job = _review(db, job_id, "closed")
    logger.info("Job %s rejected", job.id)
    return job


def hold_reasons_overview(db: Session) -> dict[str, list[dict[str, Any]]]:
    """Current holds (open rows, or a placeholder for on-hold jobs with no row) and resolved history."""
    holds = job_repo.list_holds(db)
    jobs = job_repo.get_many(db, [h.job_id for h in holds])
    on_hold_jobs = job_repo.list_by_status(db, "on_hold")
    for j in on_hold_jobs:
        jobs[j.id] = j

    def entry(job: Job, reason: str, created_at, resolved_at, is_current: bool) -> dict[str, Any]:
        return {
            "job_id": job.id,
            "job_title": job.title,
            "job_id_number": job.job_id_number,
            "employer_id": job.created_by,
            "reason": reason,
            "created_at": created_at,
            "resolved_at": resolved_at,
            "is_current": is_current,
        }

    current, history = [], []
    tracked = set()
    for h in holds:
        job = jobs.get(h.job_id)
        if not job:
            continue
        if h.resolved_at is None and job.status == "on_hold":
            current.append(entry(job, h.reason, h.created_at, None, True))
            tracked.add(job.id)
        else:
            history.append(entry(job, h.reason, h.created_at, h.resolved_at, False))

    for job in on_hold_jobs:
        if job.id not in tracked:
            current.append(entry(job, LEGACY_HOLD_PLACEHOLDER, job.updated_at, None, True))

    return {"current": current, "history": history}
