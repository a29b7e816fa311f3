# path: backend/app/repositories/notification_repo.py
# Purpose: Data-access only (CRUD) for Notification.
from typing import Any, Optional
from uuid import UUID
from sqlalchemy import select, func, update
from sqlalchemy.orm import Session
from app.models.notification import Notification


def create(db: Session, *, user_id: UUID, type: str, title: str, message: str,
           payload: Optional[dict[str, Any]] = None, related_id: Optional[UUID] = None) -> Notification:
    row = Notification(user_id=user_id, type=type, title=title, message=message, payload=payload, related_id=related_id)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def get(db: Session, notification_id: UUID) -> Optional[Notification]:
    return db.get(Notification, notification_id)


def list_for_user(db: Session, user_id: UUID, *, unread_only: bool = False, limit: int = 50) -> list[Notification]:
    stmt = select(Notification).where(Notification.user_id == user_id)
    if unread_only:
        stmt = stmt.where(Notification.is_read.is_(False))
    return list(db.execute(stmt.order_by(Notification.created_at.desc()).limit(limit)).scalars().all())


def count_unread(db: Session, user_id: UUID) -> int:
    return db.execute(
        select(func.count()).select_from(Notification)
        .where(Notification.user_id == user_id, Notification.is_read.is_(False))
    ).scalar_one()


def mark_read(db: Session, notification: Notification) -> Notification:
    notification.is_read = True
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


def mark_all_read(db: Session, user_id: UUID) -> int:
    result = db.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        .values(is_read=True)
    )
    db.commit()
    return result.rowcount or 0
