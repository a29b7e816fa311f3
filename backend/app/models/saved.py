from __future__ import annotations

import uuid
from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.db.base import Base


class SavedJob(Base):
    """Headhunter bookmark on a job."""
    __tablename__ = "saved_jobs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    job = relationship("Job")

    __table_args__ = (
        UniqueConstraint('user_id', 'job_id', name='uq_saved_job_user_job'),
    )


class SavedHeadhunter(Base):
    """Employer bookmark on a headhunter profile."""
    __tablename__ = "saved_headhunters"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    headhunter_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    headhunter = relationship("Profile", foreign_keys=[headhunter_id])

    __table_args__ = (
        UniqueConstraint('user_id', 'headhunter_id', name='uq_saved_headhunter_user_headhunter'),
    )
