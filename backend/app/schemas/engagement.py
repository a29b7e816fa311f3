# Purpose: Pydantic DTOs for engagements and candidate submissions.

from typing import Literal, Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field

SubmissionStatus = Literal["New", "Shortlisted", "Client-Interview", "Rejected", "Offer", "Hired"]


class SubmissionCreate(BaseModel):
    candidate_name: str = Field(min_length=1, max_length=200)
    candidate_email: Optional[str] = Field(default=None, max_length=320)
    candidate_phone: Optional[str] = Field(default=None, max_length=64)
    cv_url: Optional[str] = None
    salary_expectation: Optional[str] = Field(default=None, max_length=100)
    notice_period: Optional[str] = Field(default=None, max_length=100)
    right_to_work: Optional[bool] = None
    notes: Optional[str] = None


class SubmissionStatusIn(BaseModel):
    status: SubmissionStatus


class SubmissionOut(SubmissionCreate):
    id: UUID
    engagement_id: UUID
    status: str
    submitted_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EngagementOut(BaseModel):
    id: UUID
    application_id: UUID
    job_id: UUID
    employer_id: UUID
    headhunter_id: UUID
    status: str
    fee_model: str
    fee_amount: float
    sla_days: int
    candidate_cap: int
    deposit_required: bool
    deposit_amount: Optional[float] = None
    notes: Optional[str] = None
    sow_confirmed_employer: bool
    sow_confirmed_headhunter: bool
    start_at: Optional[datetime] = None
    due_at: Optional[datetime] = None
    created_at: datetime
    submissions: list[SubmissionOut] = []

    class Config:
        from_attributes = True
