"""Applications: a headhunter applies to an open job; the employer shortlists or rejects."""
from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFoundError, PermissionDeniedError, ConflictError, ValidationFailedError
from app.models.application import Application
from app.models.job import Job
from app.models.profile import Profile
from app.repositories import application_repo, job_repo, profile_repo
from app.services import engagement_service, notification_service, subscription_service
from app.services.common import email_client

logger = logging.getLogger("applications.service")

FEE_MODELS = ("percent_fee", "flat", "hourly")
DUPLICATE_MESSAGE = "You have already applied to this job"
STATUS_ORDER = {"submitted": 0, "shortlisted": 1, "rejected": 2, "withdrawn": 3}


def validate_terms(cover_note: Optional[str], fee_model: str, fee_value: float, eta_days: int,
                   *, require_note: bool = True) -> None:
    note = (cover_note or "").strip()
    if require_note or note:
        if len(note) < 15:
            raise ValidationFailedError("Cover note must be at least 15 characters")
        if len(note) > 800:
            raise ValidationFailedError("Cover note must be at most 800 characters")
    if fee_model not in FEE_MODELS:
        raise ValidationFailedError("Fee model must be percent_fee, flat or hourly")
    if fee_value is None or fee_value <= 0:
        raise ValidationFailedError("Fee value must be greater than 0")
    if eta_days is None or not 1 <= eta_days <= 60:
        raise ValidationFailedError("ETA must be between 1 and 60 days")


def _send_application_email(db: Session, job: Job, headhunter: Profile, application: Application) -> None:
    employer = profile_repo.get(db, job.created_by)
    if not employer:
        return
    link = f"{settings.PUBLIC_BASE_URL.rstrip('/')}/jobs/{job.id}/applications"
    subject, html = email_client.application_email(
        headhunter.name, job.title, application.eta_days,
        application.proposed_fee_model, application.proposed_fee_value, link,
    )
    try:
        email_client.send_email(employer.email, subject, html)
    except Exception:
        logger.exception("Application email for job %s failed", job.id)


def create_application(
    db: Session,
    headhunter: Profile,
    job: Job,
    *,
    cover_note: Optional[str],
    fee_model: str,
    fee_value: float,
    eta_days: int,
) -> Application:
    """Insert a submitted application; maps the unique-constraint race to the duplicate error."""
    try:
        return application_repo.create(
            db,
            job_id=job.id,
            headhunter_id=headhunter.id,
            cover_note=(cover_note or "").strip() or None,
            proposed_fee_model=fee_model,
            proposed_fee_value=fee_value,
            eta_days=eta_days,
        )
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_MESSAGE)


def apply(
    db: Session,
    headhunter: Profile,
    job_id: UUID,
    *,
    cover_note: str,
    fee_model: str,
    fee_value: float,
    eta_days: int,
) -> Application:
    validate_terms(cover_note, fee_model, fee_value, eta_days)

    job = job_repo.get(db, job_id)
    if not job or job.visibility != "public" and job.created_by != headhunter.id:
        raise NotFoundError("Job not found")
    if job.status != "open":
        raise ConflictError("This job is not accepting applications")
    if application_repo.find(db, job_id=job.id, headhunter_id=headhunter.id):
        raise ConflictError(DUPLICATE_MESSAGE)

    subscription_service.require_credit(db, headhunter.id)
    application = create_application(
        db, headhunter, job, cover_note=cover_note, fee_model=fee_model, fee_value=fee_value, eta_days=eta_days,
    )
    remaining = subscription_service.consume_credit(db, headhunter.id)
    logger.info("Application %s to job %s (credits left: %s)", application.id, job.id,
                "unlimited" if remaining is None else remaining)

    name = headhunter.name or "A headhunter"
    notification_service.notify(
        db,
        user_id=job.created_by,
        type="application_received",
        title=f"{name} applied to {job.title}",
        message=f"{name} applied with an ETA of {eta_days} days",
        payload={
            "job_id": str(job.id),
            "application_id": str(application.id),
            "headhunter_id": str(headhunter.id),
        },
        related_id=application.id,
    )
    _send_application_email(db, job, headhunter, application)
    return application


def list_for_headhunter(db: Session, headhunter: Profile, *, status: str = "all", sort: str = "recent") -> list[dict[str, Any]]:
    rows = application_repo.list_for_headhunter(db, headhunter.id, status=None if status == "all" else status)
    if sort == "oldest":
        rows = sorted(rows, key=lambda a: a.created_at)
    elif sort == "status":
        rows = sorted(rows, key=lambda a: (STATUS_ORDER.get(a.status, 99), -a.created_at.timestamp()))
    jobs = job_repo.get_many(db, [a.job_id for a in rows])
    out = []
    for a in rows:
        job = jobs.get(a.job_id)
        out.append({
            "application": a,
            "job_title": job.title if job else None,
            "job_status": job.status if job else None,
            "company_name": job.company_name if job else None,
        })
    return out


def list_for_job(db: Session, employer: Profile, job_id: UUID) -> list[dict[str, Any]]:
    job = job_repo.get(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    if job.created_by != employer.id:
        raise PermissionDeniedError("You can only view applications for your own jobs")
    rows = application_repo.list_for_job(db, job.id)
    people = profile_repo.get_many(db, [a.headhunter_id for a in rows])
    out = []
    for a in rows:
        hh = people.get(a.headhunter_id)
        out.append({
            "application": a,
            "headhunter_name": hh.name if hh else None,
            "headhunter_avatar_url": hh.avatar_url if hh else None,
            "headhunter_rating": hh.rating_avg if hh else None,
        })
    return out


def _owned_application(db: Session, employer: Profile, application_id: UUID) -> tuple[Application, Job]:
    application = application_repo.get(db, application_id)
    if not application:
        raise NotFoundError("Application not found")
    job = job_repo.get(db, application.job_id)
    if not job or job.created_by != employer.id:
        raise PermissionDeniedError("You can only manage applications for your own jobs")
    return application, job


def _notify_status(db: Session, application: Application, job: Job, status: str) -> None:
    notification_service.notify(
        db,
        user_id=application.headhunter_id,
        type="status_change",
        title=f"Application {status}",
        message=f"Your application for {job.title} was {status}",
        payload={"job_id": str(job.id), "application_id": str(application.id), "status": status},
        related_id=application.id,
    )


def shortlist(db: Session, employer: Profile, application_id: UUID) -> Application:
    application, job = _owned_application(db, employer, application_id)
    if application.status != "submitted":
        raise ConflictError(f"Cannot shortlist an application that is {application.status}")
    application = application_repo.set_status(db, application, "shortlisted")
    engagement_service.create_from_application(db, application, employer.id)
    _notify_status(db, application, job, "shortlisted")
    return application


def reject(db: Session, employer: Profile, application_id: UUID) -> Application:
    application, job = _owned_application(db, employer, application_id)
    if application.status not in ("submitted", "shortlisted"):
        raise ConflictError(f"Cannot reject an application that is {application.status}")
    application = application_repo.set_status(db, application, "rejected")
    _notify_status(db, application, job, "rejected")
    return application


def withdraw(db: Session, headhunter: Profile, application_id: UUID) -> Application:
    application = application_repo.get(db, application_id)
    if not application or application.headhunter_id != headhunter.id:
        raise NotFoundError("Application not found")
    if application.status != "submitted":
        raise ConflictError(f"Cannot withdraw an application that is {application.status}")
    return application_repo.set_status(db, application, "withdrawn")
