from typing import Literal
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import require_role
from app.db.base import get_db
from app.models.profile import Profile
from app.schemas.application import ApplicationCreate, ApplicationOut, ApplicationWithJobOut
from app.services import application_service

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("", response_model=ApplicationOut, status_code=201)
def apply(payload: ApplicationCreate, user: Profile = Depends(require_role("headhunter")), db: Session = Depends(get_db)):
    return application_service.apply(
        db,
        user,
        payload.job_id,
        cover_note=payload.cover_note,
        fee_model=payload.proposed_fee_model,
        fee_value=payload.proposed_fee_value,
        eta_days=payload.eta_days,
    )


@router.get("/mine", response_model=list[ApplicationWithJobOut])
def list_my_applications(
    status: str = Query("all"),
    sort: Literal["recent", "oldest", "status"] = Query("recent"),
    user: Profile = Depends(require_role("headhunter")),
    db: Session = Depends(get_db),
):
    rows = application_service.list_for_headhunter(db, user, status=status, sort=sort)
    return [
        ApplicationWithJobOut(
            **ApplicationOut.model_validate(r["application"]).model_dump(),
            job_title=r["job_title"],
            job_status=r["job_status"],
            company_name=r["company_name"],
        )
        for r in rows
    ]


@router.post("/{application_id}/shortlist", response_model=ApplicationOut)
def shortlist(application_id: UUID, user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    return application_service.shortlist(db, user, application_id)


@router.post("/{application_id}/reject", response_model=ApplicationOut)
def reject(application_id: UUID, user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    return application_service.reject(db, user, application_id)


@router.post("/{application_id}/withdraw", response_model=ApplicationOut)
def withdraw(application_id: UUID, user: Profile = Depends(require_role("headhunter")), db: Session = Depends(get_db)):
    return application_service.withdraw(db, user, application_id)
