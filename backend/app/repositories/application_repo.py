# path: backend/app/repositories/application_repo.py
# Purpose: Data-access only (CRUD) for Application.
from typing import Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.models.application import Application


def create(db: Session, *, job_id: UUID, headhunter_id: UUID, cover_note: Optional[str],
           proposed_fee_model: str, proposed_fee_value: float, eta_days: int,
           status: str = "submitted") -> Application:
    app_row = Application(
        job_id=job_id,
        headhunter_id=headhunter_id,
        cover_note=cover_note,
        proposed_fee_model=proposed_fee_model,
        proposed_fee_value=proposed_fee_value,
        eta_days=eta_days,
        status=status,
    )
    db.add(app_row)
    db.commit()
    db.refresh(app_row)
    return app_row


def get(db: Session, application_id: UUID) -> Optional[Application]:
    return db.get(Application, application_id)


def find(db: Session, *, job_id: UUID, headhunter_id: UUID) -> Optional[Application]:
    return db.execute(
        select(Application).where(Application.job_id == job_id, Application.headhunter_id == headhunter_id)
    ).scalar_one_or_none()


def list_for_headhunter(db: Session, headhunter_id: UUID, *, status: Optional[str] = None) -> list[Application]:
    stmt = select(Application).where(Application.headhunter_id == headhunter_id)
    if status:
        stmt = stmt.where(Application.status == status)
    return list(db.execute(stmt.order_by(Application.created_at.desc())).scalars().all())


def list_for_job(db: Session, job_id: UUID) -> list[Application]:
    return list(db.execute(
        select(Application).where(Application.job_id == job_id).order_by(Application.created_at.desc())
    ).scalars().all())


def set_status(db: Session, application: Application, status: str) -> Application:
    application.status = status
    db.add(application)
    db.commit()
    db.refresh(application)
    return application
