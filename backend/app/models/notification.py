from __future__ import annotations

import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Uuid

from app.core.clock import utcnow
from app.db.base import Base
from app.db.types import JSONType


class Notification(Base):
    """
    In-app notification.
    `type`: application_received | status_change | job_invitation | application |
            invitation_declined | new_message | engagement_active | submission_received
    """
    __tablename__ = "notifications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(64), nullable=False)
    title = Column(String(300), nullable=False)
    message = Column(Text, nullable=False, default="")
    payload = Column(JSONType, nullable=True)
    related_id = Column(Uuid, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
