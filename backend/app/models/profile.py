# app/models/profile.py
# Purpose: Marketplace accounts. One row per user; `role` is the marketplace side
# (employer / headhunter), admin rights live in `user_roles`.
from __future__ import annotations

import uuid
from sqlalchemy import Column, Text, String, Integer, Float, Boolean, DateTime, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.db.base import Base
from app.db.types import JSONType


class Profile(Base):
    """
    Account + public profile.
    - Employers fill the `company_*` fields.
    - Headhunters fill expertise/industries and the performance stats used by the directory.
    - `verification_sent_at` / `*_reminder_sent_at` drive the unverified-account reminders.
    """
    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(256), nullable=False)
    role = Column(String(32), nullable=False)  # employer | headhunter
    name = Column(String(200), nullable=True)

    # Verification & account lifecycle
    email_verified = Column(Boolean, nullable=False, default=False)
    account_status = Column(String(32), nullable=False, default="active")  # active | pending_verification | deactivated
    verification_sent_at = Column(DateTime(timezone=True), nullable=True)
    first_reminder_sent_at = Column(DateTime(timezone=True), nullable=True)
    second_reminder_sent_at = Column(DateTime(timezone=True), nullable=True)

    # Shared profile fields
    bio = Column(Text, nullable=True)
    avatar_url = Column(Text, nullable=True)
    cover_image_url = Column(Text, nullable=True)
    location = Column(String(200), nullable=True)
    linkedin = Column(Text, nullable=True)
    website = Column(Text, nullable=True)
    languages = Column(JSONType, nullable=True)

    # Headhunter fields
    expertise = Column(JSONType, nullable=True)
    industries = Column(JSONType, nullable=True)
    skills = Column(JSONType, nullable=True)
    specializations = Column(JSONType, nullable=True)
    certifications = Column(JSONType, nullable=True)
    regions = Column(JSONType, nullable=True)
    portfolio_links = Column(JSONType, nullable=True)
    availability = Column(String(32), nullable=True)  # available | busy | unavailable
    years_experience = Column(Integer, nullable=True)
    hourly_rate = Column(Float, nullable=True)
    placement_fee_percent = Column(Float, nullable=True)
    placements_count = Column(Integer, nullable=True)
    rating_avg = Column(Float, nullable=True)
    success_rate = Column(Float, nullable=True)
    response_time_hours = Column(Float, nullable=True)
    active_searches = Column(Integer, nullable=True)

    # Employer fields
    company_name = Column(String(200), nullable=True)
    company_sector = Column(String(200), nullable=True)
    company_size = Column(String(64), nullable=True)
    company_hq = Column(String(200), nullable=True)
    company_mission = Column(Text, nullable=True)
    company_culture = Column(Text, nullable=True)
    company_benefits = Column(JSONType, nullable=True)
    founded_year = Column(Integer, nullable=True)
    open_positions = Column(Integer, nullable=True)

    # Presence & preferences
    status = Column(String(16), nullable=True, default="online")  # online | away
    show_status = Column(Boolean, nullable=False, default=True)
    last_seen = Column(DateTime(timezone=True), nullable=True)
    show_ai_assistant = Column(Boolean, nullable=False, default=True)
    onboarding_completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    roles = relationship("UserRole", back_populates="profile", cascade="all, delete-orphan", passive_deletes=True)


class UserRole(Base):
    """Platform roles (admin / moderator) granted on top of the marketplace role."""
    __tablename__ = "user_roles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    role = Column(String(32), nullable=False)  # admin | moderator | user
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    profile = relationship("Profile", back_populates="roles")

    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )
