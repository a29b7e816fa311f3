from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.base import get_db
from app.models.profile import Profile
from app.schemas.profile import ProfileOut, ProfileUpdate, PublicProfileOut, PresenceIn
from app.services.accounts import service as account_service

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileOut)
def get_me(user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return account_service.get_me(db, user)


@router.patch("/me", response_model=ProfileOut)
def update_me(payload: ProfileUpdate, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return account_service.update_me(db, user, **payload.model_dump(exclude_unset=True))


@router.post("/me/heartbeat", status_code=204)
def heartbeat(user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    account_service.touch_last_seen(db, user)
    return None


@router.put("/me/presence", response_model=ProfileOut)
def set_presence(payload: PresenceIn, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    user = account_service.set_presence(db, user, payload.status)
    return account_service.get_me(db, user)


@router.get("/{user_id}", response_model=PublicProfileOut)
def get_public_profile(user_id: UUID, db: Session = Depends(get_db)):
    profile = account_service.get_public_profile(db, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile
