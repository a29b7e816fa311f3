# Purpose: Pydantic DTOs for messaging (conversations, replies, attachments).

from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field


class Attachment(BaseModel):
    name: str
    url: str
    type: Optional[str] = None
    size: Optional[int] = None


class MessageCreate(BaseModel):
    to_user: UUID
    body: str = Field(default="", max_length=10000)
    job_id: Optional[UUID] = None
    reply_to: Optional[UUID] = None
    attachments: list[Attachment] = Field(default_factory=list)


class MessageEdit(BaseModel):
    body: str = Field(min_length=1, max_length=10000)


class ReplyPreview(BaseModel):
    id: UUID
    body: str
    sender_name: Optional[str] = None


class MessageOut(BaseModel):
    id: UUID
    from_user: UUID
    to_user: UUID
    job_id: Optional[UUID] = None
    body: str
    attachments: Optional[list[Attachment]] = None
    reply_to: Optional[UUID] = None
    replied_message: Optional[ReplyPreview] = None
    is_read: bool
    created_at: datetime
    edited_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ConversationSummary(BaseModel):
    other_user_id: UUID
    other_user_name: Optional[str] = None
    other_user_avatar_url: Optional[str] = None
    job_id: Optional[UUID] = None
    job_title: Optional[str] = None
    last_message: MessageOut
    unread_count: int
    is_starred: bool


class StarIn(BaseModel):
    other_user_id: UUID
    job_id: Optional[UUID] = None
