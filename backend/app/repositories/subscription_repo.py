# path: backend/app/repositories/subscription_repo.py
# Purpose: Data-access only for Subscription.
from typing import Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.models.subscription import Subscription


def get_for_user(db: Session, user_id: UUID) -> Optional[Subscription]:
    return db.execute(select(Subscription).where(Subscription.user_id == user_id)).scalar_one_or_none()


def upsert(db: Session, user_id: UUID, **fields) -> Subscription:
    sub = get_for_user(db, user_id)
    if sub is None:
        sub = Subscription(user_id=user_id)
    for k, v in fields.items():
        setattr(sub, k, v)
    db.add(sub)
    db.commit()
    db.refresh(sub)
    return sub


def set_credits(db: Session, sub: Subscription, credits: Optional[int]) -> Subscription:
    sub.credits_remaining = credits
    db.add(sub)
    db.commit()
    db.refresh(sub)
    return sub
