# Purpose: Pydantic DTOs for job invitations.

from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field

from app.schemas.application import ApplicationTerms


class InvitationCreate(BaseModel):
    job_id: UUID
    headhunter_id: UUID
    message: Optional[str] = Field(default=None, max_length=1000)


class InvitationAccept(ApplicationTerms):
    pass


class InvitationOut(BaseModel):
    id: UUID
    job_id: UUID
    employer_id: UUID
    headhunter_id: UUID
    status: str
    message: Optional[str] = None
    created_at: datetime
    job_title: Optional[str] = None
    counterpart_name: Optional[str] = None

    class Config:
        from_attributes = True
