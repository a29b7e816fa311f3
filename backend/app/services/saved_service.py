"""Bookmarks: headhunters save jobs, employers save headhunters."""
from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, ValidationFailedError
from app.models.job import Job
from app.models.profile import Profile
from app.repositories import saved_repo, job_repo, profile_repo


def save_job(db: Session, user: Profile, job_id: UUID) -> None:
    if not job_repo.get(db, job_id):
        raise NotFoundError("Job not found")
    if saved_repo.find_job(db, user.id, job_id):
        raise ConflictError("Job already saved")
    try:
        saved_repo.add_job(db, user.id, job_id)
    except IntegrityError:
        db.rollback()
        raise ConflictError("Job already saved")


def unsave_job(db: Session, user: Profile, job_id: UUID) -> None:
    saved_repo.remove_job(db, user.id, job_id)


def list_saved_jobs(db: Session, user: Profile) -> list[Job]:
    return [row.job for row in saved_repo.list_jobs(db, user.id) if row.job is not None]


def save_headhunter(db: Session, user: Profile, headhunter_id: UUID) -> None:
    target = profile_repo.get(db, headhunter_id)
    if not target:
        raise NotFoundError("Headhunter not found")
    if target.role != "headhunter":
        raise ValidationFailedError("Only headhunters can be saved")
    if saved_repo.find_headhunter(db, user.id, headhunter_id):
        raise ConflictError("Headhunter already saved")
    try:
        saved_repo.add_headhunter(db, user.id, headhunter_id)
    except IntegrityError:
        db.rollback()
        raise ConflictError("Headhunter already saved")


def unsave_headhunter(db: Session, user: Profile, headhunter_id: UUID) -> None:
    saved_repo.remove_headhunter(db, user.id, headhunter_id)


def list_saved_headhunters(db: Session, user: Profile) -> list[Profile]:
    return [row.headhunter for row in saved_repo.list_headhunters(db, user.id) if row.headhunter is not None]


def get_saved_counts_for_headhunters(db: Session, headhunter_ids: list[UUID]) -> dict[UUID, int]:
    counts = saved_repo.count_saves_for_headhunters(db, headhunter_ids)
    return {hh_id: counts.get(hh_id, 0) for hh_id in headhunter_ids}
