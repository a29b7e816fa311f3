# path: backend/app/repositories/engagement_repo.py
# Purpose: Data-access only for Engagement and Submission.
from typing import Optional
from uuid import UUID
from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session
from app.models.engagement import Engagement, Submission


def create(db: Session, **fields) -> Engagement:
    eng = Engagement(**fields)
    db.add(eng)
    db.commit()
    db.refresh(eng)
    return eng


def get(db: Session, engagement_id: UUID) -> Optional[Engagement]:
    return db.get(Engagement, engagement_id)


def get_by_application(db: Session, application_id: UUID) -> Optional[Engagement]:
    return db.execute(
        select(Engagement).where(Engagement.application_id == application_id)
    ).scalar_one_or_none()


def list_for_user(db: Session, user_id: UUID) -> list[Engagement]:
    return list(db.execute(
        select(Engagement)
        .where(or_(Engagement.employer_id == user_id, Engagement.headhunter_id == user_id))
        .order_by(Engagement.created_at.desc())
    ).scalars().all())


def update(db: Session, engagement: Engagement, **fields) -> Engagement:
    for k, v in fields.items():
        setattr(engagement, k, v)
    db.add(engagement)
    db.commit()
    db.refresh(engagement)
    return engagement


def count_submissions(db: Session, engagement_id: UUID) -> int:
    return db.execute(
        select(func.count()).select_from(Submission).where(Submission.engagement_id == engagement_id)
    ).scalar_one()


def add_submission(db: Session, engagement_id: UUID, **fields) -> Submission:
    sub = Submission(engagement_id=engagement_id, **fields)
    db.add(sub)
    db.commit()
    db.refresh(sub)
    return sub


def get_submission(db: Session, submission_id: UUID) -> Optional[Submission]:
    return db.get(Submission, submission_id)


def set_submission_status(db: Session, submission: Submission, status: str) -> Submission:
    submission.status = status
    db.add(submission)
    db.commit()
    db.refresh(submission)
    return submission
