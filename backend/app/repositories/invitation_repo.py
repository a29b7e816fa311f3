# path: backend/app/repositories/invitation_repo.py
# Purpose: Data-access only (CRUD) for JobInvitation.
from typing import Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.models.invitation import JobInvitation


def create(db: Session, *, job_id: UUID, employer_id: UUID, headhunter_id: UUID, message: Optional[str]) -> JobInvitation:
    inv = JobInvitation(job_id=job_id, employer_id=employer_id, headhunter_id=headhunter_id, message=message)
    db.add(inv)
    db.commit()
    db.refresh(inv)
    return inv


def get(db: Session, invitation_id: UUID) -> Optional[JobInvitation]:
    return db.get(JobInvitation, invitation_id)


def find(db: Session, *, job_id: UUID, headhunter_id: UUID) -> Optional[JobInvitation]:
    return db.execute(
        select(JobInvitation).where(JobInvitation.job_id == job_id, JobInvitation.headhunter_id == headhunter_id)
    ).scalar_one_or_none()


def list_received(db: Session, headhunter_id: UUID, *, status: Optional[str] = None) -> list[JobInvitation]:
    stmt = select(JobInvitation).where(JobInvitation.headhunter_id == headhunter_id)
    if status:
        stmt = stmt.where(JobInvitation.status == status)
    return list(db.execute(stmt.order_by(JobInvitation.created_at.desc())).scalars().all())


def list_sent(db: Session, employer_id: UUID) -> list[JobInvitation]:
    return list(db.execute(
        select(JobInvitation).where(JobInvitation.employer_id == employer_id).order_by(JobInvitation.created_at.desc())
    ).scalars().all())


def set_status(db: Session, invitation: JobInvitation, status: str) -> JobInvitation:
    invitation.status = status
    db.add(invitation)
    db.commit()
    db.refresh(invitation)
    return invitation
