# path: backend/app/repositories/message_repo.py
# Purpose: Data-access only (CRUD) for Message and StarredConversation.
from typing import Any, Optional
from uuid import UUID
from sqlalchemy import select, or_, and_, delete, update
from sqlalchemy.orm import Session
from app.models.message import Message, StarredConversation


def _pair_clause(user_id: UUID, other_id: UUID, job_id: Optional[UUID]):
    pair = or_(
        and_(Message.from_user == user_id, Message.to_user == other_id),
        and_(Message.from_user == other_id, Message.to_user == user_id),
    )
    scope = Message.job_id == job_id if job_id is not None else Message.job_id.is_(None)
    return and_(pair, scope)


def create(db: Session, *, from_user: UUID, to_user: UUID, body: str, job_id: Optional[UUID] = None,
           reply_to: Optional[UUID] = None, attachments: Optional[list[dict[str, Any]]] = None) -> Message:
    msg = Message(
        from_user=from_user,
        to_user=to_user,
        body=body,
        job_id=job_id,
        reply_to=reply_to,
        attachments=attachments or None,
    )
    db.add(msg)
    db.commit()
    db.refresh(msg)
    return msg


def get(db: Session, message_id: UUID) -> Optional[Message]:
    return db.get(Message, message_id)


def get_many(db: Session, ids) -> dict[UUID, Message]:
    if not ids:
        return {}
    rows = db.execute(select(Message).where(Message.id.in_(list(set(ids))))).scalars().all()
    return {m.id: m for m in rows}


def list_conversation(db: Session, user_id: UUID, other_id: UUID, job_id: Optional[UUID]) -> list[Message]:
    return list(db.execute(
        select(Message).where(_pair_clause(user_id, other_id, job_id)).order_by(Message.created_at.asc())
    ).scalars().all())


def list_involving(db: Session, user_id: UUID) -> list[Message]:
    return list(db.execute(
        select(Message)
        .where(or_(Message.from_user == user_id, Message.to_user == user_id))
        .order_by(Message.created_at.desc())
    ).scalars().all())


def mark_read(db: Session, *, to_user: UUID, from_user: UUID, job_id: Optional[UUID]) -> int:
    scope = Message.job_id == job_id if job_id is not None else Message.job_id.is_(None)
    result = db.execute(
        update(Message)
        .where(Message.to_user == to_user, Message.from_user == from_user, scope, Message.is_read.is_(False))
        .values(is_read=True)
    )
    db.commit()
    return result.rowcount or 0


def update_body(db: Session, message: Message, *, body: str, edited_at) -> Message:
    message.body = body
    message.edited_at = edited_at
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


def delete_conversation(db: Session, user_id: UUID, other_id: UUID, job_id: Optional[UUID]) -> int:
    result = db.execute(delete(Message).where(_pair_clause(user_id, other_id, job_id)))
    db.commit()
    return result.rowcount or 0


def _star_scope(user_id: UUID, other_id: UUID, job_id: Optional[UUID]):
    scope = StarredConversation.job_id == job_id if job_id is not None else StarredConversation.job_id.is_(None)
    return and_(StarredConversation.user_id == user_id, StarredConversation.other_user_id == other_id, scope)


def find_star(db: Session, user_id: UUID, other_id: UUID, job_id: Optional[UUID]) -> Optional[StarredConversation]:
    return db.execute(select(StarredConversation).where(_star_scope(user_id, other_id, job_id))).scalar_one_or_none()


def add_star(db: Session, user_id: UUID, other_id: UUID, job_id: Optional[UUID]) -> StarredConversation:
    row = StarredConversation(user_id=user_id, other_user_id=other_id, job_id=job_id)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def remove_star(db: Session, user_id: UUID, other_id: UUID, job_id: Optional[UUID]) -> int:
    result = db.execute(delete(StarredConversation).where(_star_scope(user_id, other_id, job_id)))
    db.commit()
    return result.rowcount or 0


def list_stars(db: Session, user_id: UUID) -> list[StarredConversation]:
    return list(db.execute(
        select(StarredConversation).where(StarredConversation.user_id == user_id)
    ).scalars().all())
