from __future__ import annotations

import uuid
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Uuid

from app.core.clock import utcnow
from app.db.base import Base


class Subscription(Base):
    """
    Current plan of a user. `credits_remaining` is NULL for unlimited plans.
    """
    __tablename__ = "subscriptions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, unique=True)
    plan_id = Column(String(32), nullable=False, default="free")
    billing_cycle = Column(String(16), nullable=False, default="monthly")  # monthly | yearly
    credits_remaining = Column(Integer, nullable=True)
    period_start = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
