# path: backend/app/repositories/job_repo.py
# Purpose: Data-access only (CRUD) for Job and its audit tables. No business rules here.
from typing import Optional, Tuple
from uuid import UUID
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from app.models.application import Application
from app.models.job import Job, JobEditHistory, JobHoldHistory

FIRST_JOB_NUMBER = 1000


def next_job_number(db: Session) -> int:
    current = db.execute(select(func.max(Job.job_id_number))).scalar_one_or_none()
    return FIRST_JOB_NUMBER if current is None else current + 1


def create(db: Session, **fields) -> Job:
    job = Job(**fields)
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def get(db: Session, job_id: UUID) -> Optional[Job]:
    return db.get(Job, job_id)


def get_many(db: Session, ids) -> dict[UUID, Job]:
    if not ids:
        return {}
    rows = db.execute(select(Job).where(Job.id.in_(list(set(ids))))).scalars().all()
    return {j.id: j for j in rows}


def list_by_owner(db: Session, owner_id: UUID) -> list[Job]:
    return list(db.execute(
        select(Job).where(Job.created_by == owner_id).order_by(Job.created_at.desc())
    ).scalars().all())


def list_by_status(db: Session, status: str) -> list[Job]:
    return list(db.execute(
        select(Job).where(Job.status == status).order_by(Job.created_at.desc())
    ).scalars().all())


def search(db: Session, stmt, *, offset: int, limit: int) -> Tuple[list[Job], int]:
    """Run a prepared filtered select(Job) with count + page."""
    total = db.execute(select(func.count()).select_from(stmt.order_by(None).subquery())).scalar_one()
    rows = db.execute(stmt.offset(offset).limit(limit)).scalars().all()
    return list(rows), total


def update(db: Session, job: Job, **fields) -> Job:
    for k, v in fields.items():
        setattr(job, k, v)
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def delete(db: Session, job: Job) -> None:
    db.delete(job)
    db.commit()


def application_counts(db: Session, job_ids: list[UUID]) -> dict[UUID, Tuple[int, int]]:
    """job_id -> (total applications, submitted applications)."""
    if not job_ids:
        return {}
    rows = db.execute(
        select(Application.job_id, Application.status, func.count())
        .where(Application.job_id.in_(job_ids))
        .group_by(Application.job_id, Application.status)
    ).all()
    counts: dict[UUID, Tuple[int, int]] = {}
    for job_id, status, n in rows:
        total, pending = counts.get(job_id, (0, 0))
        counts[job_id] = (total + n, pending + (n if status == "submitted" else 0))
    return counts


def edit_counts(db: Session, job_ids: list[UUID]) -> dict[UUID, int]:
    if not job_ids:
        return {}
    rows = db.execute(
        select(JobEditHistory.job_id, func.count())
        .where(JobEditHistory.job_id.in_(job_ids))
        .group_by(JobEditHistory.job_id)
    ).all()
    return {job_id: n for job_id, n in rows}


def add_edit_history(db: Session, *, job_id: UUID, edited_by: UUID, changes: list[dict]) -> JobEditHistory:
    row = JobEditHistory(job_id=job_id, edited_by=edited_by, changes=changes)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def list_edit_history(db: Session, job_id: UUID) -> list[JobEditHistory]:
    return list(db.execute(
        select(JobEditHistory).where(JobEditHistory.job_id == job_id).order_by(JobEditHistory.edited_at.desc())
    ).scalars().all())


def add_hold(db: Session, *, job_id: UUID, created_by: UUID, reason: str) -> JobHoldHistory:
    row = JobHoldHistory(job_id=job_id, created_by=created_by, reason=reason)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def resolve_open_holds(db: Session, job_id: UUID, resolved_at) -> int:
    rows = db.execute(
        select(JobHoldHistory).where(JobHoldHistory.job_id == job_id, JobHoldHistory.resolved_at.is_(None))
    ).scalars().all()
    for row in rows:
        row.resolved_at = resolved_at
    db.commit()
    return len(rows)


def list_holds(db: Session) -> list[JobHoldHistory]:
    return list(db.execute(
        select(JobHoldHistory).order_by(JobHoldHistory.created_at.desc())
    ).scalars().all())
