"""Job invitations: an employer invites a headhunter; accepting creates an application for free."""
from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, PermissionDeniedError, ConflictError, ValidationFailedError
from app.models.application import Application
from app.models.invitation import JobInvitation
from app.models.profile import Profile
from app.repositories import invitation_repo, job_repo, profile_repo, application_repo
from app.services import application_service, notification_service

logger = logging.getLogger("invitations.service")

DUPLICATE_MESSAGE = "You've already invited this headhunter to this job"


def invite(db: Session, employer: Profile, *, job_id: UUID, headhunter_id: UUID, message: Optional[str] = None) -> JobInvitation:
    job = job_repo.get(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    if job.created_by != employer.id:
        raise PermissionDeniedError("You can only invite headhunters to your own jobs")
    if job.status != "open":
        raise ConflictError("Only open jobs can receive invitations")

    headhunter = profile_repo.get(db, headhunter_id)
    if not headhunter or headhunter.role != "headhunter":
        raise ValidationFailedError("Invitations can only be sent to headhunters")
    if invitation_repo.find(db, job_id=job.id, headhunter_id=headhunter.id):
        raise ConflictError(DUPLICATE_MESSAGE)

    try:
        inv = invitation_repo.create(
            db, job_id=job.id, employer_id=employer.id, headhunter_id=headhunter.id,
            message=(message or "").strip() or None,
        )
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_MESSAGE)

    logger.info("Employer %s invited %s to job %s", employer.id, headhunter.id, job.id)
    notification_service.notify(
        db,
        user_id=headhunter.id,
        type="job_invitation",
        title="Job Invitation",
        message=f"You've been invited to apply for {job.title}",
        payload={"job_id": str(job.id), "invitation_id": str(inv.id), "employer_id": str(employer.id)},
        related_id=inv.id,
    )
    return inv


def _decorate(db: Session, invitations: list[JobInvitation], counterpart_attr: str) -> list[dict[str, Any]]:
    jobs = job_repo.get_many(db, [i.job_id for i in invitations])
    people = profile_repo.get_many(db, [getattr(i, counterpart_attr) for i in invitations])
    out = []
    for inv in invitations:
        job = jobs.get(inv.job_id)
        person = people.get(getattr(inv, counterpart_attr))
        out.append({
            "invitation": inv,
            "job_title": job.title if job else None,
            "counterpart_name": person.name if person else None,
        })
    return out


def list_received(db: Session, headhunter: Profile, *, status: Optional[str] = None) -> list[dict[str, Any]]:
    rows = invitation_repo.list_received(db, headhunter.id, status=None if status in (None, "all") else status)
    return _decorate(db, rows, "employer_id")


def list_sent(db: Session, employer: Profile) -> list[dict[str, Any]]:
    return _decorate(db, invitation_repo.list_sent(db, employer.id), "headhunter_id")


def _pending_for(db: Session, headhunter: Profile, invitation_id: UUID) -> JobInvitation:
    inv = invitation_repo.get(db, invitation_id)
    if not inv or inv.headhunter_id != headhunter.id:
        raise NotFoundError("Invitation not found")
    if inv.status != "pending":
        raise ConflictError(f"This invitation was already {inv.status}")
    return inv


def accept(
    db: Session,
    headhunter: Profile,
    invitation_id: UUID,
    *,
    cover_note: Optional[str],
    fee_model: str,
    fee_value: float,
    eta_days: int,
) -> tuple[JobInvitation, Application]:
    inv = _pending_for(db, headhunter, invitation_id)
    application_service.validate_terms(cover_note, fee_model, fee_value, eta_days, require_note=False)

    job = job_repo.get(db, inv.job_id)
    if not job:
        raise NotFoundError("Job not found")
    if job.status != "open":
        raise ConflictError("This job is no longer accepting applications")
    if application_repo.find(db, job_id=job.id, headhunter_id=headhunter.id):
        raise ConflictError(application_service.DUPLICATE_MESSAGE)

    # Invited applications do not consume credits
    application = application_service.create_application(
        db, headhunter, job, cover_note=cover_note or inv.message, fee_model=fee_model,
        fee_value=fee_value, eta_days=eta_days,
    )
    inv = invitation_repo.set_status(db, inv, "accepted")
    logger.info("Invitation %s accepted -> application %s", inv.id, application.id)

    name = headhunter.name or "A headhunter"
    notification_service.notify(
        db,
        user_id=inv.employer_id,
        type="application",
        title="Invitation Accepted",
        message=f"{name} has accepted your invitation and applied to {job.title}",
        payload={"job_id": str(job.id), "application_id": str(application.id), "headhunter_id": str(headhunter.id)},
        related_id=application.id,
    )
    return inv, application


def decline(db: Session, headhunter: Profile, invitation_id: UUID) -> JobInvitation:
    inv = _pending_for(db, headhunter, invitation_id)
    inv = invitation_repo.set_status(db, inv, "declined")
    job = job_repo.get(db, inv.job_id)
    title = job.title if job else "your job"
    name = headhunter.name or "A headhunter"
    notification_service.notify(
        db,
        user_id=inv.employer_id,
        type="invitation_declined",
        title="Invitation Declined",
        message=f"{name} has declined your invitation for {title}",
        payload={"job_id": str(inv.job_id), "invitation_id": str(inv.id), "headhunter_id": str(headhunter.id)},
        related_id=inv.id,
    )
    return inv
