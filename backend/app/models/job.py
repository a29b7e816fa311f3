# app/models/job.py
# Purpose: Job postings plus their audit trails (field edits and on-hold periods).

from __future__ import annotations

import uuid
from sqlalchemy import Column, Text, String, Integer, Float, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.db.base import Base
from app.db.types import JSONType


class Job(Base):
    """
    Top-level job row.
    - `job_id_number`: human-facing sequential number shown on cards.
    - `status`: pending_review -> open (admin) -> on_hold / shortlisted / awarded / closed.
    - `exclusive_until`: end of the 14-day exclusivity commitment.
    """
    __tablename__ = "jobs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    job_id_number = Column(Integer, nullable=False, unique=True)
    created_by = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=False)
    company_name = Column(String(200), nullable=True)
    industry = Column(String(100), nullable=True)
    seniority = Column(String(32), nullable=True)
    employment_type = Column(String(32), nullable=True)
    location = Column(String(200), nullable=True)
    remote_policy = Column(String(32), nullable=True)  # on_site | hybrid | remote

    budget_currency = Column(String(8), nullable=True, default="ILS")
    budget_min = Column(Float, nullable=True)
    budget_max = Column(Float, nullable=True)

    skills_must = Column(JSONType, nullable=True)
    skills_nice = Column(JSONType, nullable=True)
    benefits = Column(JSONType, nullable=True)

    visibility = Column(String(16), nullable=False, default="public")
    status = Column(String(32), nullable=False, default="pending_review", index=True)
    is_exclusive = Column(Boolean, nullable=False, default=False)
    exclusive_until = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    applications = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    edit_history = relationship(
        "JobEditHistory",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="JobEditHistory.edited_at.desc()",
    )
    hold_history = relationship(
        "JobHoldHistory",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class JobEditHistory(Base):
    """
    One row per saved edit. `changes` is a list of {field, old_value, new_value}.
    """
    __tablename__ = "job_edit_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    edited_by = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    changes = Column(JSONType, nullable=False)
    edited_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    job = relationship("Job", back_populates="edit_history")


class JobHoldHistory(Base):
    """An on-hold period with its reason; `resolved_at` is set when the job leaves on_hold."""
    __tablename__ = "job_hold_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    reason = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    resolved_at = Column(DateTime(timezone=True), nullable=True)

    job = relationship("Job", back_populates="hold_history")
