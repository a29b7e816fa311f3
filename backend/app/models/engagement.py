# Purpose: Engagement (working agreement after shortlisting) and the candidates submitted into it.
from __future__ import annotations

import uuid
from sqlalchemy import Column, String, Integer, Float, Boolean, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.db.base import Base


class Engagement(Base):
    """
    Status: Proposed -> Active (both SOW confirmations) -> ShortlistDue / Interviewing /
    Offer -> Completed | Closed | Cancelled.
    """
    __tablename__ = "engagements"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    application_id = Column(Uuid, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, unique=True)
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    employer_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    headhunter_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(String(32), nullable=False, default="Proposed")
    fee_model = Column(String(32), nullable=False)
    fee_amount = Column(Float, nullable=False)
    sla_days = Column(Integer, nullable=False)
    candidate_cap = Column(Integer, nullable=False, default=3)
    deposit_required = Column(Boolean, nullable=False, default=False)
    deposit_amount = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)

    sow_confirmed_employer = Column(Boolean, nullable=False, default=False)
    sow_confirmed_headhunter = Column(Boolean, nullable=False, default=False)

    start_at = Column(DateTime(timezone=True), nullable=True)
    due_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    submissions = relationship(
        "Submission",
        back_populates="engagement",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Submission.submitted_at",
    )


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    engagement_id = Column(Uuid, ForeignKey("engagements.id", ondelete="CASCADE"), nullable=False, index=True)

    candidate_name = Column(String(200), nullable=False)
    candidate_email = Column(String(320), nullable=True)
    candidate_phone = Column(String(64), nullable=True)
    cv_url = Column(Text, nullable=True)
    salary_expectation = Column(String(100), nullable=True)
    notice_period = Column(String(100), nullable=True)
    right_to_work = Column(Boolean, nullable=True)
    notes = Column(Text, nullable=True)

    # New | Shortlisted | Client-Interview | Rejected | Offer | Hired
    status = Column(String(32), nullable=False, default="New")

    submitted_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    engagement = relationship("Engagement", back_populates="submissions")
