# app/api/deps.py
# Purpose: Shared FastAPI dependencies (current user, role guards).
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.security import decode_token, ACCESS_TOKEN_TYPE
from app.db.base import get_db
from app.models.profile import Profile
from app.repositories import profile_repo

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login/form", auto_error=False)

_CREDENTIALS_ERROR = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Profile:
    if not token:
        raise _CREDENTIALS_ERROR
    user_id = decode_token(token, ACCESS_TOKEN_TYPE)
    if user_id is None:
        raise _CREDENTIALS_ERROR
    user = profile_repo.get(db, user_id)
    if not user:
        raise _CREDENTIALS_ERROR
    if user.account_status == "deactivated":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account has been deactivated. Please contact support.",
        )
    return user


def get_optional_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[Profile]:
    """Same as get_current_user but anonymous callers get None."""
    if not token:
        return None
    user_id = decode_token(token, ACCESS_TOKEN_TYPE)
    if user_id is None:
        return None
    return profile_repo.get(db, user_id)


def require_role(role: str):
    def _guard(user: Profile = Depends(get_current_user)) -> Profile:
        if user.role != role:
            raise HTTPException(status_code=403, detail=f"Only {role}s can perform this action")
        return user
    return _guard


def require_admin(
    user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Profile:
    if not profile_repo.has_role(db, user.id, "admin"):
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def get_stream_user(
    access_token: Optional[str] = Query(None),
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Profile:
    """EventSource cannot send headers, so streams also accept `?access_token=`."""
    return get_current_user(token=token or access_token, db=db)
