# Purpose: Pydantic DTOs for Post-Job autofill (raw LLM extraction and the normalised form draft).

from typing import Optional
from pydantic import BaseModel, Field


class ParseTextIn(BaseModel):
    text: str = Field(default="", max_length=50000)


class JobDraft(BaseModel):
    """Prefill values for the Post-Job form. Unknown/invalid values are left empty."""
    title: Optional[str] = None
    custom_title: Optional[str] = None
    description: Optional[str] = None
    company_name: Optional[str] = None
    industry: Optional[str] = None
    seniority: Optional[str] = None
    employment_type: Optional[str] = None
    location: Optional[str] = None
    remote_policy: Optional[str] = None
    budget_currency: Optional[str] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    skills_must: list[str] = Field(default_factory=list)
    skills_nice: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)


class AutofillOut(BaseModel):
    draft: JobDraft
    source_chars: int
