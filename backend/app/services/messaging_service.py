"""Messaging between two users, per job or direct, with replies, attachments and stars."""
from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.clock import utcnow
from app.core.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from app.models.message import Message
from app.models.profile import Profile
from app.repositories import message_repo, profile_repo, job_repo
from app.services import notification_service
from app.services.common import storage
from app.services.realtime.change_feed import publish_change

logger = logging.getLogger("messages.service")

PREVIEW_CHARS = 100


def _preview(body: str) -> str:
    body = body or ""
    return body[:PREVIEW_CHARS] + "..." if len(body) > PREVIEW_CHARS else body


def _publish(msg: Message, event: str) -> None:
    publish_change("messages", event, {
        "id": str(msg.id),
        "from_user": str(msg.from_user),
        "to_user": str(msg.to_user),
        "job_id": str(msg.job_id) if msg.job_id else None,
    })


def send_message(
    db: Session,
    sender: Profile,
    *,
    to_user: UUID,
    body: str,
    job_id: Optional[UUID] = None,
    reply_to: Optional[UUID] = None,
    attachments: Optional[list[dict[str, Any]]] = None,
) -> Message:
    body = (body or "").strip()
    attachments = attachments or []
    if not body and not attachments:
        raise ValidationFailedError("Message cannot be empty")
    if to_user == sender.id:
        raise ValidationFailedError("You cannot message yourself")
    if not profile_repo.get(db, to_user):
        raise NotFoundError("Recipient not found")
    if job_id is not None and not job_repo.get(db, job_id):
        raise NotFoundError("Job not found")
    if reply_to is not None:
        original = message_repo.get(db, reply_to)
        if not original or {original.from_user, original.to_user} != {sender.id, to_user}:
            raise ValidationFailedError("Replied message is not part of this conversation")

    msg = message_repo.create(
        db, from_user=sender.id, to_user=to_user, body=body, job_id=job_id,
        reply_to=reply_to, attachments=attachments,
    )
    _publish(msg, "INSERT")

    notification_service.notify(
        db,
        user_id=to_user,
        type="new_message",
        title=f"New message from {sender.name or 'Someone'}",
        message=_preview(body) if body else f"Sent {len(attachments)} attachment(s)",
        payload={"job_id": str(job_id) if job_id else None, "from_user": str(sender.id)},
        related_id=msg.id,
    )
    return msg


def message_to_dict(msg: Message, replied: Optional[Message] = None, names: Optional[dict] = None) -> dict[str, Any]:
    data = {c.name: getattr(msg, c.name) for c in Message.__table__.columns if c.name != "engagement_id"}
    data["replied_message"] = None
    if replied is not None:
        sender = (names or {}).get(replied.from_user)
        data["replied_message"] = {
            "id": replied.id,
            "body": replied.body,
            "sender_name": sender.name if sender else None,
        }
    return data


def get_conversation(db: Session, user: Profile, other_id: UUID, job_id: Optional[UUID] = None) -> list[dict[str, Any]]:
    """Messages between the two users in this scope, oldest first. Marks inbound messages read."""
    rows = message_repo.list_conversation(db, user.id, other_id, job_id)
    replied = message_repo.get_many(db, [m.reply_to for m in rows if m.reply_to])
    names = profile_repo.get_many(db, [m.from_user for m in replied.values()])
    out = [message_to_dict(m, replied.get(m.reply_to) if m.reply_to else None, names) for m in rows]

    if message_repo.mark_read(db, to_user=user.id, from_user=other_id, job_id=job_id):
        publish_change("messages", "UPDATE", {"from_user": str(other_id), "to_user": str(user.id),
                                              "job_id": str(job_id) if job_id else None})
    return out


def list_conversations(db: Session, user: Profile) -> list[dict[str, Any]]:
    """One entry per (counterpart, job), newest conversation first."""
    groups: dict[tuple, dict[str, Any]] = {}
    for msg in message_repo.list_involving(db, user.id):  # newest first
        other = msg.to_user if msg.from_user == user.id else msg.from_user
        key = (other, msg.job_id)
        entry = groups.get(key)
        if entry is None:
            entry = groups[key] = {"other_user_id": other, "job_id": msg.job_id, "last_message": msg, "unread_count": 0}
        if msg.to_user == user.id and not msg.is_read:
            entry["unread_count"] += 1

    stars = {(s.other_user_id, s.job_id) for s in message_repo.list_stars(db, user.id)}
    people = profile_repo.get_many(db, [k[0] for k in groups])
    jobs = job_repo.get_many(db, [k[1] for k in groups if k[1]])

    out = []
    for (other, job_id), entry in groups.items():
        person = people.get(other)
        job = jobs.get(job_id) if job_id else None
        out.append({
            **entry,
            "last_message": message_to_dict(entry["last_message"]),
            "other_user_name": person.name if person else None,
            "other_user_avatar_url": person.avatar_url if person else None,
            "job_title": job.title if job else None,
            "is_starred": (other, job_id) in stars,
        })
    out.sort(key=lambda e: e["last_message"]["created_at"], reverse=True)
    return out


def edit_message(db: Session, user: Profile, message_id: UUID, body: str) -> Message:
    msg = message_repo.get(db, message_id)
    if not msg:
        raise NotFoundError("Message not found")
    if msg.from_user != user.id:
        raise PermissionDeniedError("You can only edit your own messages")
    body = (body or "").strip()
    if not body:
        raise ValidationFailedError("Message cannot be empty")
    msg = message_repo.update_body(db, msg, body=body, edited_at=utcnow())
    _publish(msg, "UPDATE")
    return msg


def delete_conversation(db: Session, user: Profile, other_id: UUID, job_id: Optional[UUID] = None) -> int:
    n = message_repo.delete_conversation(db, user.id, other_id, job_id)
    message_repo.remove_star(db, user.id, other_id, job_id)
    logger.info("User %s deleted %d messages with %s (job=%s)", user.id, n, other_id, job_id)
    publish_change("messages", "DELETE", {"from_user": str(user.id), "to_user": str(other_id),
                                          "job_id": str(job_id) if job_id else None})
    return n


def star_conversation(db: Session, user: Profile, other_id: UUID, job_id: Optional[UUID] = None) -> bool:
    if message_repo.find_star(db, user.id, other_id, job_id):
        return True
    try:
        message_repo.add_star(db, user.id, other_id, job_id)
    except IntegrityError:
        db.rollback()
    return True


def unstar_conversation(db: Session, user: Profile, other_id: UUID, job_id: Optional[UUID] = None) -> bool:
    message_repo.remove_star(db, user.id, other_id, job_id)
    return False


def upload_attachments(user: Profile, files: list[tuple[str, Optional[str], bytes]]) -> list[dict[str, Any]]:
    """files: (filename, content_type, data). Returns attachment descriptors for send_message."""
    out = []
    for filename, content_type, data in files:
        _, url = storage.save_upload(storage.MESSAGE_ATTACHMENTS_BUCKET, user.id, filename, data)
        out.append({"name": filename, "url": url, "type": content_type, "size": len(data)})
    return out
