# path: backend/app/repositories/profile_repo.py
# Purpose: Data-access only (CRUD) for Profile and UserRole. No business rules here.
from typing import Optional, Sequence
from uuid import UUID
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from app.models.profile import Profile, UserRole


def create(db: Session, **fields) -> Profile:
    profile = Profile(**fields)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def get(db: Session, user_id: UUID) -> Optional[Profile]:
    return db.get(Profile, user_id)


def get_by_email(db: Session, email: str) -> Optional[Profile]:
    return db.execute(
        select(Profile).where(func.lower(Profile.email) == email.strip().lower())
    ).scalar_one_or_none()


def get_many(db: Session, ids: Sequence[UUID]) -> dict[UUID, Profile]:
    if not ids:
        return {}
    rows = db.execute(select(Profile).where(Profile.id.in_(list(set(ids))))).scalars().all()
    return {p.id: p for p in rows}


def update(db: Session, profile: Profile, **fields) -> Profile:
    for k, v in fields.items():
        setattr(profile, k, v)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def list_headhunters(db: Session) -> list[Profile]:
    """Active headhunters, newest first."""
    return list(db.execute(
        select(Profile)
        .where(Profile.role == "headhunter", Profile.account_status == "active")
        .order_by(Profile.created_at.desc())
    ).scalars().all())


def list_unverified_headhunters(db: Session) -> list[Profile]:
    return list(db.execute(
        select(Profile).where(
            Profile.role == "headhunter",
            Profile.email_verified.is_(False),
            Profile.account_status == "pending_verification",
        )
    ).scalars().all())


def has_role(db: Session, user_id: UUID, role: str) -> bool:
    found = db.execute(
        select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == role)
    ).first()
    return found is not None


def grant_role(db: Session, user_id: UUID, role: str) -> UserRole:
    row = UserRole(user_id=user_id, role=role)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
