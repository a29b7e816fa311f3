# app/services/accounts/service.py
"""Signup / login / email verification and profile reads & writes."""
from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.clock import utcnow
from app.core.config import settings
from app.core.errors import (
    AuthenticationError, ConflictError, PermissionDeniedError, NotFoundError, ValidationFailedError,
)
from app.core.security import (
    hash_password, verify_password, create_access_token, create_verification_token,
    decode_token, VERIFICATION_TOKEN_TYPE,
)
from app.models.profile import Profile
from app.repositories import profile_repo
from app.services import subscription_service
from app.services.accounts.presence import calculate_status_indicator
from app.services.common import email_client

logger = logging.getLogger("accounts.service")

ROLES = ("employer", "headhunter")
DEACTIVATED_MESSAGE = "Your account has been deactivated. Please contact support."


def verification_link(user_id: UUID) -> str:
    token = create_verification_token(user_id)
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/auth/verify?token={token}"


def send_verification_email(profile: Profile) -> bool:
    subject, html = email_client.verification_email(profile.name, verification_link(profile.id))
    try:
        return email_client.send_email(profile.email, subject, html)
    except Exception:
        logger.exception("Verification email to %s failed", profile.email)
        return False


def signup(db: Session, *, email: str, password: str, name: str, role: str) -> Profile:
    if role not in ROLES:
        raise ValidationFailedError("Role must be employer or headhunter")
    email = email.strip().lower()
    if profile_repo.get_by_email(db, email):
        raise ConflictError("User already registered")

    fields: dict[str, Any] = dict(
        email=email,
        password_hash=hash_password(password),
        name=name.strip(),
        role=role,
    )
    if role == "headhunter":
        fields.update(
            email_verified=False,
            account_status="pending_verification",
            verification_sent_at=utcnow(),
            availability="available",
        )
    else:
        fields.update(email_verified=True, account_status="active")

    try:
        profile = profile_repo.create(db, **fields)
    except IntegrityError:
        db.rollback()
        raise ConflictError("User already registered")

    logger.info("New %s account %s", role, profile.id)
    if role == "headhunter":
        subscription_service.ensure_subscription(db, profile.id)
        send_verification_email(profile)
    return profile


def login(db: Session, *, email: str, password: str, role: Optional[str] = None) -> tuple[Profile, str]:
    profile = profile_repo.get_by_email(db, email)
    if not profile or not verify_password(password, profile.password_hash):
        raise AuthenticationError("Invalid login credentials")
    if role and role != profile.role:
        raise PermissionDeniedError(
            f"This account is registered as a {profile.role}. Please select the correct role and try again."
        )
    if profile.account_status == "deactivated":
        raise PermissionDeniedError(DEACTIVATED_MESSAGE)

    profile = profile_repo.update(db, profile, last_seen=utcnow(), status="online")
    return profile, create_access_token(profile.id, profile.role)


def verify_email(db: Session, token: str) -> Profile:
    user_id = decode_token(token, VERIFICATION_TOKEN_TYPE)
    if user_id is None:
        raise ValidationFailedError("Verification link is invalid or has expired")
    profile = profile_repo.get(db, user_id)
    if not profile:
        raise NotFoundError("User not found")
    if profile.account_status == "deactivated":
        raise PermissionDeniedError(DEACTIVATED_MESSAGE)
    if profile.email_verified and profile.account_status == "active":
        return profile
    return profile_repo.update(db, profile, email_verified=True, account_status="active")


def resend_verification(db: Session, profile: Profile) -> bool:
    if profile.email_verified:
        raise ConflictError("Email is already verified")
    profile_repo.update(db, profile, verification_sent_at=utcnow())
    return send_verification_email(profile)


def is_admin(db: Session, user_id: UUID) -> bool:
    return profile_repo.has_role(db, user_id, "admin")


def _with_presence(profile: Profile, data: dict[str, Any]) -> dict[str, Any]:
    indicator, text = calculate_status_indicator(profile.show_status, profile.last_seen, profile.status)
    data["status_indicator"] = indicator
    data["last_seen_text"] = text
    return data


def profile_to_dict(profile: Profile, *, include_private: bool = False) -> dict[str, Any]:
    """Column values for the API; the private variant is for the account owner only."""
    hidden = {"password_hash", "verification_sent_at", "first_reminder_sent_at", "second_reminder_sent_at"}
    if not include_private:
        hidden |= {"email", "email_verified", "account_status", "status", "show_status",
                   "last_seen", "show_ai_assistant", "onboarding_completed", "updated_at"}
    data = {c.name: getattr(profile, c.name) for c in Profile.__table__.columns if c.name not in hidden}
    return _with_presence(profile, data)


def get_me(db: Session, profile: Profile) -> dict[str, Any]:
    data = profile_to_dict(profile, include_private=True)
    data["is_admin"] = is_admin(db, profile.id)
    return data


def update_me(db: Session, profile: Profile, **fields) -> dict[str, Any]:
    changes = {k: v for k, v in fields.items() if v is not None}
    if changes:
        profile = profile_repo.update(db, profile, **changes)
    return get_me(db, profile)


def get_public_profile(db: Session, user_id: UUID) -> Optional[dict[str, Any]]:
    profile = profile_repo.get(db, user_id)
    if not profile or profile.account_status == "deactivated":
        return None
    return profile_to_dict(profile)


def touch_last_seen(db: Session, profile: Profile) -> Profile:
    return profile_repo.update(db, profile, last_seen=utcnow())


def set_presence(db: Session, profile: Profile, status: str) -> Profile:
    if status not in ("online", "away"):
        raise ValidationFailedError("Status must be online or away")
    return profile_repo.update(db, profile, status=status, last_seen=utcnow())
