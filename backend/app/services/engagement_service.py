"""Engagements: the working agreement opened when an employer shortlists an application."""
from __future__ import annotations

import logging
from datetime import timedelta
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.clock import utcnow
from app.core.errors import NotFoundError, PermissionDeniedError, ConflictError, ValidationFailedError
from app.models.application import Application
from app.models.engagement import Engagement, Submission
from app.models.profile import Profile
from app.repositories import engagement_repo
from app.services import notification_service

logger = logging.getLogger("engagements.service")

ENGAGEMENT_STATUSES = ("Proposed", "Active", "ShortlistDue", "Interviewing", "Offer", "Completed", "Closed", "Cancelled")
SUBMISSION_STATUSES = ("New", "Shortlisted", "Client-Interview", "Rejected", "Offer", "Hired")
DEFAULT_CANDIDATE_CAP = 3


def create_from_application(db: Session, application: Application, employer_id: UUID) -> Engagement:
    existing = engagement_repo.get_by_application(db, application.id)
    if existing:
        return existing
    eng = engagement_repo.create(
        db,
        application_id=application.id,
        job_id=application.job_id,
        employer_id=employer_id,
        headhunter_id=application.headhunter_id,
        status="Proposed",
        fee_model=application.proposed_fee_model,
        fee_amount=application.proposed_fee_value,
        sla_days=application.eta_days,
        candidate_cap=DEFAULT_CANDIDATE_CAP,
    )
    logger.info("Engagement %s proposed for application %s", eng.id, application.id)
    return eng


def _participant(engagement: Engagement | None, user: Profile) -> Engagement:
    if not engagement:
        raise NotFoundError("Engagement not found")
    if user.id not in (engagement.employer_id, engagement.headhunter_id):
        raise PermissionDeniedError("You are not part of this engagement")
    return engagement


def get_engagement(db: Session, user: Profile, engagement_id: UUID) -> Engagement:
    return _participant(engagement_repo.get(db, engagement_id), user)


def list_engagements(db: Session, user: Profile) -> list[Engagement]:
    return engagement_repo.list_for_user(db, user.id)


def confirm_sow(db: Session, user: Profile, engagement_id: UUID) -> Engagement:
    eng = get_engagement(db, user, engagement_id)
    if eng.status != "Proposed":
        raise ConflictError("The statement of work can only be confirmed while the engagement is proposed")

    fields: dict = {}
    if user.id == eng.employer_id:
        fields["sow_confirmed_employer"] = True
    else:
        fields["sow_confirmed_headhunter"] = True

    employer_ok = fields.get("sow_confirmed_employer", eng.sow_confirmed_employer)
    headhunter_ok = fields.get("sow_confirmed_headhunter", eng.sow_confirmed_headhunter)
    if employer_ok and headhunter_ok:
        start = utcnow()
        fields.update(status="Active", start_at=start, due_at=start + timedelta(days=eng.sla_days))

    eng = engagement_repo.update(db, eng, **fields)
    if eng.status == "Active":
        logger.info("Engagement %s is active, due %s", eng.id, eng.due_at)
        other = eng.headhunter_id if user.id == eng.employer_id else eng.employer_id
        notification_service.notify(
            db, user_id=other, type="engagement_active", title="Engagement Active",
            message="Both parties confirmed the statement of work", related_id=eng.id,
            payload={"engagement_id": str(eng.id)},
        )
    return eng


def add_submission(db: Session, headhunter: Profile, engagement_id: UUID, **fields) -> Submission:
    eng = get_engagement(db, headhunter, engagement_id)
    if headhunter.id != eng.headhunter_id:
        raise PermissionDeniedError("Only the engaged headhunter can submit candidates")
    if eng.status != "Active":
        raise ConflictError("Candidates can only be submitted to an active engagement")
    if engagement_repo.count_submissions(db, eng.id) >= eng.candidate_cap:
        raise ConflictError(f"This engagement is capped at {eng.candidate_cap} candidates")

    sub = engagement_repo.add_submission(db, eng.id, status="New", **fields)
    notification_service.notify(
        db, user_id=eng.employer_id, type="submission_received", title="New Candidate Submitted",
        message=f"{headhunter.name or 'Your headhunter'} submitted {sub.candidate_name}",
        payload={"engagement_id": str(eng.id), "submission_id": str(sub.id)}, related_id=sub.id,
    )
    return sub


def update_submission_status(db: Session, employer: Profile, submission_id: UUID, status: str) -> Submission:
    if status not in SUBMISSION_STATUSES:
        raise ValidationFailedError(f"Status must be one of: {', '.join(SUBMISSION_STATUSES)}")
    sub = engagement_repo.get_submission(db, submission_id)
    if not sub:
        raise NotFoundError("Submission not found")
    eng = _participant(engagement_repo.get(db, sub.engagement_id), employer)
    if employer.id != eng.employer_id:
        raise PermissionDeniedError("Only the employer can update candidate status")
    return engagement_repo.set_submission_status(db, sub, status)
