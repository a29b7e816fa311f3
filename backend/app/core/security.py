# app/core/security.py
# Purpose: Password hashing (salted PBKDF2-SHA256) and signed tokens (access + email verification).
from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import timedelta
from typing import Any, Dict, Optional
from uuid import UUID

from jose import jwt, JWTError

from app.core.clock import utcnow
from app.core.config import settings

PBKDF2_ITERATIONS = 100_000

ACCESS_TOKEN_TYPE = "access"
VERIFICATION_TOKEN_TYPE = "email_verification"


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    hashed = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS)
    return f"{salt}${hashed.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt, sep, hashed = (stored or "").partition("$")
    if not sep:
        return False
    check = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), PBKDF2_ITERATIONS)
    return hmac.compare_digest(check.hex(), hashed)


def _encode(subject: UUID, token_type: str, expires_in: timedelta, extra: Optional[Dict[str, Any]] = None) -> str:
    now = utcnow()
    claims: Dict[str, Any] = {
        "sub": str(subject),
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    if extra:
        claims.update(extra)
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(user_id: UUID, role: str) -> str:
    return _encode(
        user_id,
        ACCESS_TOKEN_TYPE,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        {"role": role},
    )


def create_verification_token(user_id: UUID) -> str:
    return _encode(user_id, VERIFICATION_TOKEN_TYPE, timedelta(hours=settings.VERIFICATION_TOKEN_EXPIRE_HOURS))


def decode_token(token: str, expected_type: str) -> Optional[UUID]:
    """Return the subject id for a valid token of the expected type, else None."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != expected_type:
        return None
    try:
        return UUID(payload.get("sub", ""))
    except (TypeError, ValueError):
        return None
