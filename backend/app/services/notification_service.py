from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.notification import Notification
from app.repositories import notification_repo
from app.services.realtime.change_feed import publish_change

logger = logging.getLogger("notifications.service")


def notify(
    db: Session,
    *,
    user_id: UUID,
    type: str,
    title: str,
    message: str,
    payload: Optional[dict[str, Any]] = None,
    related_id: Optional[UUID] = None,
) -> Optional[Notification]:
    """Create an in-app notification. Failures are logged and never raised to the caller."""
    try:
        row = notification_repo.create(
            db, user_id=user_id, type=type, title=title, message=message,
            payload=payload, related_id=related_id,
        )
    except Exception:
        logger.exception("Failed to create %s notification for %s", type, user_id)
        db.rollback()
        return None
    publish_change("notifications", "INSERT", {"id": str(row.id), "user_id": str(user_id), "type": type})
    return row


def list_notifications(db: Session, user_id: UUID, *, unread_only: bool = False, limit: int = 50) -> list[Notification]:
    return notification_repo.list_for_user(db, user_id, unread_only=unread_only, limit=limit)


def unread_count(db: Session, user_id: UUID) -> int:
    return notification_repo.count_unread(db, user_id)


def mark_read(db: Session, user_id: UUID, notification_id: UUID) -> Notification:
    row = notification_repo.get(db, notification_id)
    # Someone else's notification looks the same as a missing one
    if not row or row.user_id != user_id:
        raise NotFoundError("Notification not found")
    row = notification_repo.mark_read(db, row)
    publish_change("notifications", "UPDATE", {"id": str(row.id), "user_id": str(user_id)})
    return row


def mark_all_read(db: Session, user_id: UUID) -> int:
    n = notification_repo.mark_all_read(db, user_id)
    if n:
        publish_change("notifications", "UPDATE", {"user_id": str(user_id)})
    return n
