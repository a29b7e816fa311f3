# Purpose: Admin-only routes: job review queue, hold-reason overview, account housekeeping.

from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.db.base import get_db
from app.models.profile import Profile
from app.schemas.job import JobOut, JobReviewListsOut, HoldOverviewOut
from app.services.accounts.verification import check_unverified_accounts
from app.services.jobs import service as job_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/jobs/review", response_model=JobReviewListsOut)
def list_jobs_for_review(admin: Profile = Depends(require_admin), db: Session = Depends(get_db)):
    return job_service.list_jobs_for_review(db)


@router.get("/jobs/holds", response_model=HoldOverviewOut)
def hold_reasons_overview(admin: Profile = Depends(require_admin), db: Session = Depends(get_db)):
    return job_service.hold_reasons_overview(db)


@router.post("/jobs/{job_id}/approve", response_model=JobOut)
def approve_job(job_id: UUID, admin: Profile = Depends(require_admin), db: Session = Depends(get_db)):
    return job_service.approve_job(db, job_id)


@router.post("/jobs/{job_id}/reject", response_model=JobOut)
def reject_job(job_id: UUID, admin: Profile = Depends(require_admin), db: Session = Depends(get_db)):
    return job_service.reject_job(db, job_id)


@router.post("/accounts/check-unverified")
def run_verification_check(admin: Profile = Depends(require_admin), db: Session = Depends(get_db)):
    return check_unverified_accounts(db)
