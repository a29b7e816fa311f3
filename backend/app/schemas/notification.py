from typing import Any, Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel


class NotificationOut(BaseModel):
    id: UUID
    type: str
    title: str
    message: str
    payload: Optional[dict[str, Any]] = None
    related_id: Optional[UUID] = None
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UnreadCountOut(BaseModel):
    count: int
