from __future__ import annotations

import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Integer, Float, Text, Uuid
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.db.base import Base


class Application(Base):
    """
    A headhunter's proposal to fill a Job.
    """
    __tablename__ = "applications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    headhunter_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    # Status: submitted, shortlisted, rejected, withdrawn
    status = Column(String(32), nullable=False, default="submitted")

    cover_note = Column(Text, nullable=True)
    proposed_fee_model = Column(String(32), nullable=False)  # percent_fee | flat | hourly
    proposed_fee_value = Column(Float, nullable=False)
    eta_days = Column(Integer, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    job = relationship("Job", back_populates="applications")
    headhunter = relationship("Profile")

    # One application per headhunter per job
    __table_args__ = (
        UniqueConstraint('job_id', 'headhunter_id', name='uq_application_job_headhunter'),
    )
