# Purpose: Pydantic DTOs for applications (headhunter proposals on jobs).

from typing import Literal, Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field

FeeModel = Literal["percent_fee", "flat", "hourly"]


class ApplicationCreate(BaseModel):
    job_id: UUID
    cover_note: str = Field(min_length=15, max_length=800)
    proposed_fee_model: FeeModel
    proposed_fee_value: float = Field(gt=0)
    eta_days: int = Field(ge=1, le=60)


class ApplicationTerms(BaseModel):
    """Application fields supplied when accepting an invitation."""
    cover_note: Optional[str] = Field(default=None, max_length=800)
    proposed_fee_model: FeeModel = "percent_fee"
    proposed_fee_value: float = Field(default=20, gt=0)
    eta_days: int = Field(default=14, ge=1, le=60)


class ApplicationOut(BaseModel):
    id: UUID
    job_id: UUID
    headhunter_id: UUID
    status: str
    cover_note: Optional[str] = None
    proposed_fee_model: str
    proposed_fee_value: float
    eta_days: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ApplicationWithJobOut(ApplicationOut):
    job_title: Optional[str] = None
    job_status: Optional[str] = None
    company_name: Optional[str] = None


class ApplicationWithHeadhunterOut(ApplicationOut):
    headhunter_name: Optional[str] = None
    headhunter_avatar_url: Optional[str] = None
    headhunter_rating: Optional[float] = None
