from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, require_role
from app.db.base import get_db
from app.models.profile import Profile
from app.schemas.engagement import EngagementOut, SubmissionCreate, SubmissionOut, SubmissionStatusIn
from app.services import engagement_service

router = APIRouter(prefix="/engagements", tags=["engagements"])


@router.get("", response_model=list[EngagementOut])
def list_engagements(user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return engagement_service.list_engagements(db, user)


@router.patch("/submissions/{submission_id}", response_model=SubmissionOut)
def update_submission_status(
    submission_id: UUID,
    payload: SubmissionStatusIn,
    user: Profile = Depends(require_role("employer")),
    db: Session = Depends(get_db),
):
    return engagement_service.update_submission_status(db, user, submission_id, payload.status)


@router.get("/{engagement_id}", response_model=EngagementOut)
def get_engagement(engagement_id: UUID, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return engagement_service.get_engagement(db, user, engagement_id)


@router.post("/{engagement_id}/confirm-sow", response_model=EngagementOut)
def confirm_sow(engagement_id: UUID, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return engagement_service.confirm_sow(db, user, engagement_id)


@router.post("/{engagement_id}/submissions", response_model=SubmissionOut, status_code=201)
def add_submission(
    engagement_id: UUID,
    payload: SubmissionCreate,
    user: Profile = Depends(require_role("headhunter")),
    db: Session = Depends(get_db),
):
    return engagement_service.add_submission(db, user, engagement_id, **payload.model_dump())
