from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import require_role, get_current_user
from app.db.base import get_db
from app.models.profile import Profile
from app.schemas.directory import SavedCountsIn
from app.schemas.job import JobOut
from app.schemas.profile import PublicProfileOut
from app.services import saved_service
from app.services.accounts.service import profile_to_dict

router = APIRouter(prefix="/saved", tags=["saved"])


@router.get("/jobs", response_model=list[JobOut])
def list_saved_jobs(user: Profile = Depends(require_role("headhunter")), db: Session = Depends(get_db)):
    return saved_service.list_saved_jobs(db, user)


@router.post("/jobs/{job_id}", status_code=201)
def save_job(job_id: UUID, user: Profile = Depends(require_role("headhunter")), db: Session = Depends(get_db)):
    saved_service.save_job(db, user, job_id)
    return {"saved": True}


@router.delete("/jobs/{job_id}", status_code=204)
def unsave_job(job_id: UUID, user: Profile = Depends(require_role("headhunter")), db: Session = Depends(get_db)):
    saved_service.unsave_job(db, user, job_id)
    return None


@router.get("/headhunters", response_model=list[PublicProfileOut])
def list_saved_headhunters(user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    return [profile_to_dict(p) for p in saved_service.list_saved_headhunters(db, user)]


@router.post("/headhunters/counts")
def saved_counts(payload: SavedCountsIn, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    counts = saved_service.get_saved_counts_for_headhunters(db, payload.headhunter_ids)
    return {str(k): v for k, v in counts.items()}


@router.post("/headhunters/{headhunter_id}", status_code=201)
def save_headhunter(headhunter_id: UUID, user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    saved_service.save_headhunter(db, user, headhunter_id)
    return {"saved": True}


@router.delete("/headhunters/{headhunter_id}", status_code=204)
def unsave_headhunter(headhunter_id: UUID, user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    saved_service.unsave_headhunter(db, user, headhunter_id)
    return None
