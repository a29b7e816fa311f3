# Purpose: Direct and job-scoped messages between two users, plus starred conversations.
from __future__ import annotations

import uuid
from sqlalchemy import Column, Text, Boolean, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.db.base import Base
from app.db.types import JSONType


class Message(Base):
    __tablename__ = "messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    from_user = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    to_user = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    # NULL job_id means a direct (non job-scoped) conversation
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=True, index=True)
    engagement_id = Column(Uuid, ForeignKey("engagements.id", ondelete="CASCADE"), nullable=True)

    body = Column(Text, nullable=False, default="")
    attachments = Column(JSONType, nullable=True)
    reply_to = Column(Uuid, ForeignKey("messages.id", ondelete="SET NULL"), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    edited_at = Column(DateTime(timezone=True), nullable=True)

    sender = relationship("Profile", foreign_keys=[from_user])
    replied_message = relationship("Message", remote_side=[id], uselist=False)


class StarredConversation(Base):
    __tablename__ = "starred_conversations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    other_user_id = Column(Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint('user_id', 'other_user_id', 'job_id', name='uq_starred_conversation'),
    )
