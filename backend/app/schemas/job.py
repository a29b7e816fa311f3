# Purpose: Pydantic DTOs for Job endpoints, job search filters and admin review views.

from typing import Any, Literal, Mapping, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from datetime import datetime
from uuid import UUID

from app.services.jobs.catalog import DEFAULT_CURRENCY

Seniority = Literal[
    "junior", "mid_level", "senior", "lead_principal", "manager_director", "vp_c_level",
    "mid", "lead", "exec",
]
EmploymentType = Literal["full_time", "contract", "temp"]
RemotePolicy = Literal["on_site", "hybrid", "remote"]
Currency = Literal["ILS", "USD", "EUR", "GBP", "INR"]
Visibility = Literal["public", "private"]
OwnerStatus = Literal["open", "closed", "on_hold"]


def _clean_list(values: Optional[list[str]]) -> Optional[list[str]]:
    if values is None:
        return None
    out: list[str] = []
    for v in values:
        s = (v or "").strip()
        if s and s not in out:
            out.append(s)
    return out


class JobCreate(BaseModel):
    title: str = Field(max_length=300)
    description: str
    company_name: Optional[str] = Field(default=None, max_length=200)
    industry: str = Field(max_length=100)
    seniority: Optional[Seniority] = None
    employment_type: Optional[EmploymentType] = None
    location: str = Field(max_length=200)
    remote_policy: Optional[RemotePolicy] = None
    budget_currency: Currency = DEFAULT_CURRENCY
    budget_min: Optional[float] = Field(default=None, ge=0)
    budget_max: Optional[float] = Field(default=None, ge=0)
    skills_must: list[str] = Field(default_factory=list)
    skills_nice: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    visibility: Visibility = "public"
    is_exclusive: bool = False

    @field_validator("title", "industry", "location")
    @classmethod
    def _required_text(cls, v: str, info) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v

    @field_validator("description")
    @classmethod
    def _description_length(cls, v: str) -> str:
        v = (v or "").strip()
        if len(v) < 10:
            raise ValueError("Description must be at least 10 characters")
        return v

    @field_validator("skills_must", "skills_nice", "benefits")
    @classmethod
    def _dedupe(cls, v: list[str]) -> list[str]:
        return _clean_list(v) or []

    @model_validator(mode="after")
    def _check_ranges(self):
        if not self.skills_must:
            raise ValueError("At least one must-have skill is required")
        if self.budget_min is not None and self.budget_max is not None and self.budget_max < self.budget_min:
            raise ValueError("Maximum budget must be greater than or equal to minimum budget")
        return self


class JobUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    description: Optional[str] = Field(default=None, min_length=10)
    company_name: Optional[str] = Field(default=None, max_length=200)
    industry: Optional[str] = Field(default=None, min_length=1, max_length=100)
    seniority: Optional[Seniority] = None
    employment_type: Optional[EmploymentType] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=200)
    remote_policy: Optional[RemotePolicy] = None
    budget_currency: Optional[Currency] = None
    budget_min: Optional[float] = Field(default=None, ge=0)
    budget_max: Optional[float] = Field(default=None, ge=0)
    skills_must: Optional[list[str]] = None
    skills_nice: Optional[list[str]] = None
    benefits: Optional[list[str]] = None
    is_exclusive: Optional[bool] = None
    status: Optional[OwnerStatus] = None
    hold_reason: Optional[str] = None

    @field_validator("skills_must", "skills_nice", "benefits")
    @classmethod
    def _dedupe(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return _clean_list(v)

    @field_validator("skills_must")
    @classmethod
    def _must_not_empty(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is not None and not v:
            raise ValueError("At least one must-have skill is required")
        return v

    # Omit a field to leave it unchanged; these cannot be cleared
    @field_validator(
        "title", "description", "industry", "location", "budget_currency", "is_exclusive", "status",
        mode="before",
    )
    @classmethod
    def _not_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("This field cannot be cleared")
        return v


class VisibilityIn(BaseModel):
    visibility: Visibility


class JobOut(BaseModel):
    id: UUID
    job_id_number: int
    created_by: UUID
    title: str
    description: str
    company_name: Optional[str] = None
    industry: Optional[str] = None
    seniority: Optional[str] = None
    employment_type: Optional[str] = None
    location: Optional[str] = None
    remote_policy: Optional[str] = None
    budget_currency: Optional[str] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    skills_must: Optional[list[str]] = None
    skills_nice: Optional[list[str]] = None
    benefits: Optional[list[str]] = None
    visibility: str
    status: str
    is_exclusive: bool
    exclusive_until: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class JobListOut(BaseModel):
    items: list[JobOut]
    total: int


class MyJobOut(JobOut):
    application_count: int = 0
    pending_count: int = 0
    edit_count: int = 0


class JobUpdateResult(BaseModel):
    job: JobOut
    changed: bool
    changes: list[dict[str, Any]] = Field(default_factory=list)


class JobEditHistoryOut(BaseModel):
    id: UUID
    job_id: UUID
    edited_by: UUID
    changes: list[dict[str, Any]]
    edited_at: datetime

    class Config:
        from_attributes = True


class JobReviewListsOut(BaseModel):
    pending: list[JobOut]
    approved: list[JobOut]
    rejected: list[JobOut]


class HoldEntryOut(BaseModel):
    job_id: UUID
    job_title: str
    job_id_number: int
    employer_id: UUID
    reason: str
    created_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    is_current: bool


class HoldOverviewOut(BaseModel):
    current: list[HoldEntryOut]
    history: list[HoldEntryOut]


# ---- Search -----------------------------------------------------------------

PostedWindow = Literal["all", "24h", "7d", "30d"]
SortOrder = Literal["recent", "oldest", "budget_high", "budget_low"]

# field name -> query-string key
_QUERY_KEYS = {
    "query": "q",
    "industries": "industries",
    "seniority": "seniority",
    "employment_type": "type",
    "location": "location",
    "salary_min": "min",
    "salary_max": "max",
    "currency": "currency",
    "posted": "posted",
    "sort": "sort",
    "exclude_job_ids": "exclude",
    "offset": "offset",
    "limit": "limit",
}
_LIST_FIELDS = ("industries", "exclude_job_ids")


class JobSearchFilters(BaseModel):
    query: Optional[str] = None
    industries: list[str] = Field(default_factory=list)
    seniority: Optional[Seniority] = None
    employment_type: Optional[EmploymentType] = None
    location: Optional[str] = None
    salary_min: Optional[float] = Field(default=None, ge=0)
    salary_max: Optional[float] = Field(default=None, ge=0)
    currency: Currency = DEFAULT_CURRENCY
    posted: PostedWindow = "all"
    sort: SortOrder = "recent"
    exclude_job_ids: list[UUID] = Field(default_factory=list)
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=24, ge=1, le=100)

    @field_validator("query", "location", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("industries", mode="before")
    @classmethod
    def _clean_industries(cls, v):
        return _clean_list(v) or []

    def to_query_params(self) -> dict[str, str]:
        """Serialize to URL state, leaving out every value that equals its default."""
        defaults = JobSearchFilters()
        params: dict[str, str] = {}
        for field, key in _QUERY_KEYS.items():
            value = getattr(self, field)
            if value == getattr(defaults, field) or value is None:
                continue
            if field in _LIST_FIELDS:
                params[key] = ",".join(str(v) for v in value)
            elif isinstance(value, float) and value.is_integer():
                params[key] = str(int(value))
            else:
                params[key] = str(value)
        return params

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "JobSearchFilters":
        """Parse URL state; keys that are missing or fail validation fall back to defaults."""
        data: dict[str, Any] = {}
        for field, key in _QUERY_KEYS.items():
            raw = params.get(key)
            if raw is None or raw == "":
                continue
            if field in _LIST_FIELDS:
                data[field] = [part for part in raw.split(",") if part.strip()]
            else:
                data[field] = raw
        try:
            return cls(**data)
        except ValidationError as e:
            bad = {err["loc"][0] for err in e.errors() if err.get("loc")}
            return cls(**{k: v for k, v in data.items() if k not in bad})


class JobSearchResult(BaseModel):
    items: list[JobOut]
    total: int
    has_more: bool
    offset: int
    limit: int
    # Jobs in this page the viewer already applied to / saved
    applied_job_ids: list[UUID] = Field(default_factory=list)
    saved_job_ids: list[UUID] = Field(default_factory=list)
