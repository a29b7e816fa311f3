from __future__ import annotations

import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Text, Uuid
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.db.base import Base


class JobInvitation(Base):
    """
    An employer's invitation for a specific headhunter to apply to one of their jobs.
    """
    __tablename__ = "job_invitations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    employer_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    headhunter_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    # Status: pending, accepted, declined
    status = Column(String(32), nullable=False, default="pending")
    message = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    job = relationship("Job")

    __table_args__ = (
        UniqueConstraint('job_id', 'headhunter_id', name='uq_job_invitation_job_headhunter'),
    )
