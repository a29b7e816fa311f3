# Purpose: Job routes: posting, owner management, Opportunities search and Post-Job AI autofill.

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, File
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_optional_user, require_role
from app.db.base import get_db
from app.models.profile import Profile
from app.schemas.application import ApplicationOut, ApplicationWithHeadhunterOut
from app.schemas.autofill import ParseTextIn, AutofillOut
from app.schemas.job import (
    JobCreate, JobUpdate, JobOut, MyJobOut, JobUpdateResult, JobEditHistoryOut,
    VisibilityIn, JobSearchFilters, JobSearchResult,
)
from app.services import application_service
from app.services.jobs import service as job_service
from app.services.jobs import search as job_search
from app.services.jobs import autofill

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("", response_model=JobOut, status_code=201)
def create_job(payload: JobCreate, user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    return job_service.create_job(db, user, **payload.model_dump())


@router.get("", response_model=JobSearchResult)
def search_jobs(request: Request, viewer: Optional[Profile] = Depends(get_optional_user), db: Session = Depends(get_db)):
    """Query-string keys follow JobSearchFilters.to_query_params (q, industries, type, min, max, ...)."""
    filters = JobSearchFilters.from_query_params(request.query_params)
    return job_search.search_jobs(db, filters, viewer)


@router.get("/mine", response_model=list[MyJobOut])
def list_my_jobs(user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    rows = job_service.list_my_jobs(db, user)
    return [
        MyJobOut(
            **JobOut.model_validate(r["job"]).model_dump(),
            application_count=r["application_count"],
            pending_count=r["pending_count"],
            edit_count=r["edit_count"],
        )
        for r in rows
    ]


@router.post("/autofill/text", response_model=AutofillOut)
def autofill_from_text(payload: ParseTextIn, user: Profile = Depends(require_role("employer"))):
    draft = autofill.autofill_from_text(payload.text)
    return AutofillOut(draft=draft, source_chars=len(payload.text.strip()))


@router.post("/autofill/document", response_model=AutofillOut)
def autofill_from_document(file: UploadFile = File(...), user: Profile = Depends(require_role("employer"))):
    data = file.file.read()
    draft, chars = autofill.autofill_from_document(file.filename or "", file.content_type, data)
    return AutofillOut(draft=draft, source_chars=chars)


@router.get("/{job_id}", response_model=JobOut)
def get_job(job_id: UUID, viewer: Optional[Profile] = Depends(get_optional_user), db: Session = Depends(get_db)):
    job = job_service.get_visible_job(db, job_id, viewer)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.patch("/{job_id}", response_model=JobUpdateResult)
def update_job(job_id: UUID, payload: JobUpdate, user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    updates = payload.model_dump(exclude_unset=True)
    hold_reason = updates.pop("hold_reason", None)
    job, changes = job_service.update_job(db, user, job_id, updates, hold_reason=hold_reason)
    return JobUpdateResult(job=job, changed=bool(changes), changes=changes)


@router.put("/{job_id}/visibility", response_model=JobOut)
def set_visibility(job_id: UUID, payload: VisibilityIn, user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    return job_service.set_visibility(db, user, job_id, payload.visibility)


@router.get("/{job_id}/history", response_model=list[JobEditHistoryOut])
def get_edit_history(job_id: UUID, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return job_service.get_edit_history(db, user, job_id)


@router.get("/{job_id}/applications", response_model=list[ApplicationWithHeadhunterOut])
def list_job_applications(job_id: UUID, user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    rows = application_service.list_for_job(db, user, job_id)
    return [
        ApplicationWithHeadhunterOut(
            **ApplicationOut.model_validate(r["application"]).model_dump(),
            headhunter_name=r["headhunter_name"],
            headhunter_avatar_url=r["headhunter_avatar_url"],
            headhunter_rating=r["headhunter_rating"],
        )
        for r in rows
    ]


@router.delete("/{job_id}", status_code=204)
def delete_job(job_id: UUID, user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    job_service.delete_job(db, user, job_id)
    return None
