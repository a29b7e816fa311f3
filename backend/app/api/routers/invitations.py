from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import require_role
from app.db.base import get_db
from app.models.profile import Profile
from app.schemas.application import ApplicationOut
from app.schemas.invitation import InvitationCreate, InvitationAccept, InvitationOut
from app.services import invitation_service

router = APIRouter(prefix="/invitations", tags=["invitations"])


def _out(row: dict) -> InvitationOut:
    base = InvitationOut.model_validate(row["invitation"]).model_dump(exclude={"job_title", "counterpart_name"})
    return InvitationOut(**base, job_title=row["job_title"], counterpart_name=row["counterpart_name"])


@router.post("", response_model=InvitationOut, status_code=201)
def invite(payload: InvitationCreate, user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    return invitation_service.invite(
        db, user, job_id=payload.job_id, headhunter_id=payload.headhunter_id, message=payload.message,
    )


@router.get("/received", response_model=list[InvitationOut])
def list_received(
    status: Optional[str] = Query(None),
    user: Profile = Depends(require_role("headhunter")),
    db: Session = Depends(get_db),
):
    return [_out(r) for r in invitation_service.list_received(db, user, status=status)]


@router.get("/sent", response_model=list[InvitationOut])
def list_sent(user: Profile = Depends(require_role("employer")), db: Session = Depends(get_db)):
    return [_out(r) for r in invitation_service.list_sent(db, user)]


@router.post("/{invitation_id}/accept", response_model=ApplicationOut, status_code=201)
def accept(
    invitation_id: UUID,
    payload: InvitationAccept,
    user: Profile = Depends(require_role("headhunter")),
    db: Session = Depends(get_db),
):
    _, application = invitation_service.accept(
        db,
        user,
        invitation_id,
        cover_note=payload.cover_note,
        fee_model=payload.proposed_fee_model,
        fee_value=payload.proposed_fee_value,
        eta_days=payload.eta_days,
    )
    return application


@router.post("/{invitation_id}/decline", response_model=InvitationOut)
def decline(invitation_id: UUID, user: Profile = Depends(require_role("headhunter")), db: Session = Depends(get_db)):
    return invitation_service.decline(db, user, invitation_id)
