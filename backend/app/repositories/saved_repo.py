# path: backend/app/repositories/saved_repo.py
# Purpose: Data-access only for saved jobs / saved headhunters.
from typing import Optional
from uuid import UUID
from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session
from app.models.saved import SavedJob, SavedHeadhunter


def find_job(db: Session, user_id: UUID, job_id: UUID) -> Optional[SavedJob]:
    return db.execute(
        select(SavedJob).where(SavedJob.user_id == user_id, SavedJob.job_id == job_id)
    ).scalar_one_or_none()


def add_job(db: Session, user_id: UUID, job_id: UUID) -> SavedJob:
    row = SavedJob(user_id=user_id, job_id=job_id)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def remove_job(db: Session, user_id: UUID, job_id: UUID) -> int:
    result = db.execute(delete(SavedJob).where(SavedJob.user_id == user_id, SavedJob.job_id == job_id))
    db.commit()
    return result.rowcount or 0


def list_jobs(db: Session, user_id: UUID) -> list[SavedJob]:
    return list(db.execute(
        select(SavedJob).where(SavedJob.user_id == user_id).order_by(SavedJob.created_at.desc())
    ).scalars().all())


def find_headhunter(db: Session, user_id: UUID, headhunter_id: UUID) -> Optional[SavedHeadhunter]:
    return db.execute(
        select(SavedHeadhunter).where(SavedHeadhunter.user_id == user_id, SavedHeadhunter.headhunter_id == headhunter_id)
    ).scalar_one_or_none()


def add_headhunter(db: Session, user_id: UUID, headhunter_id: UUID) -> SavedHeadhunter:
    row = SavedHeadhunter(user_id=user_id, headhunter_id=headhunter_id)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def remove_headhunter(db: Session, user_id: UUID, headhunter_id: UUID) -> int:
    result = db.execute(
        delete(SavedHeadhunter).where(SavedHeadhunter.user_id == user_id, SavedHeadhunter.headhunter_id == headhunter_id)
    )
    db.commit()
    return result.rowcount or 0


def list_headhunters(db: Session, user_id: UUID) -> list[SavedHeadhunter]:
    return list(db.execute(
        select(SavedHeadhunter).where(SavedHeadhunter.user_id == user_id).order_by(SavedHeadhunter.created_at.desc())
    ).scalars().all())


def count_saves_for_headhunters(db: Session, headhunter_ids: list[UUID]) -> dict[UUID, int]:
    if not headhunter_ids:
        return {}
    rows = db.execute(
        select(SavedHeadhunter.headhunter_id, func.count())
        .where(SavedHeadhunter.headhunter_id.in_(headhunter_ids))
        .group_by(SavedHeadhunter.headhunter_id)
    ).all()
    return {hh_id: n for hh_id, n in rows}
