from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.base import get_db
from app.models.profile import Profile
from app.schemas.notification import NotificationOut, UnreadCountOut
from app.services import notification_service

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationOut])
def list_notifications(
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return notification_service.list_notifications(db, user.id, unread_only=unread_only, limit=limit)


@router.get("/unread-count", response_model=UnreadCountOut)
def unread_count(user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return UnreadCountOut(count=notification_service.unread_count(db, user.id))


@router.post("/read-all")
def mark_all_read(user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"updated": notification_service.mark_all_read(db, user.id)}


@router.post("/{notification_id}/read", response_model=NotificationOut)
def mark_read(notification_id: UUID, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return notification_service.mark_read(db, user.id, notification_id)
