# Purpose: Pydantic DTOs for the account owner's profile and the public projection of it.

from typing import Literal, Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field


class PublicProfileOut(BaseModel):
    id: UUID
    role: str
    name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    cover_image_url: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None
    languages: Optional[list[str]] = None

    expertise: Optional[list[str]] = None
    industries: Optional[list[str]] = None
    skills: Optional[list[str]] = None
    specializations: Optional[list[str]] = None
    certifications: Optional[list[str]] = None
    regions: Optional[list[str]] = None
    portfolio_links: Optional[list[str]] = None
    availability: Optional[str] = None
    years_experience: Optional[int] = None
    hourly_rate: Optional[float] = None
    placement_fee_percent: Optional[float] = None
    placements_count: Optional[int] = None
    rating_avg: Optional[float] = None
    success_rate: Optional[float] = None
    response_time_hours: Optional[float] = None
    active_searches: Optional[int] = None

    company_name: Optional[str] = None
    company_sector: Optional[str] = None
    company_size: Optional[str] = None
    company_hq: Optional[str] = None
    company_mission: Optional[str] = None
    company_culture: Optional[str] = None
    company_benefits: Optional[list[str]] = None
    founded_year: Optional[int] = None
    open_positions: Optional[int] = None

    # Filled by the presence formatter, not stored
    status_indicator: Optional[str] = None
    last_seen_text: Optional[str] = None

    created_at: datetime

    class Config:
        from_attributes = True


class ProfileOut(PublicProfileOut):
    email: str
    email_verified: bool
    account_status: str
    status: Optional[str] = None
    show_status: bool
    last_seen: Optional[datetime] = None
    show_ai_assistant: bool
    onboarding_completed: bool
    is_admin: bool = False


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=200)
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    cover_image_url: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=200)
    linkedin: Optional[str] = None
    website: Optional[str] = None
    languages: Optional[list[str]] = None

    expertise: Optional[list[str]] = None
    industries: Optional[list[str]] = None
    skills: Optional[list[str]] = None
    specializations: Optional[list[str]] = None
    certifications: Optional[list[str]] = None
    regions: Optional[list[str]] = None
    portfolio_links: Optional[list[str]] = None
    availability: Optional[Literal["available", "busy", "unavailable"]] = None
    years_experience: Optional[int] = Field(default=None, ge=0)
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    placement_fee_percent: Optional[float] = Field(default=None, ge=0, le=100)

    company_name: Optional[str] = Field(default=None, max_length=200)
    company_sector: Optional[str] = None
    company_size: Optional[str] = None
    company_hq: Optional[str] = None
    company_mission: Optional[str] = None
    company_culture: Optional[str] = None
    company_benefits: Optional[list[str]] = None
    founded_year: Optional[int] = None
    open_positions: Optional[int] = Field(default=None, ge=0)

    show_status: Optional[bool] = None
    show_ai_assistant: Optional[bool] = None
    onboarding_completed: Optional[bool] = None


class PresenceIn(BaseModel):
    status: Literal["online", "away"]
