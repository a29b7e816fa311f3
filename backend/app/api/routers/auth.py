# Purpose: Signup, login (JSON and OAuth2 form) and email verification.

from fastapi import APIRouter, Depends, Query
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.base import get_db
from app.models.profile import Profile
from app.schemas.auth import SignupIn, LoginIn, TokenOut, VerifyEmailIn
from app.schemas.profile import ProfileOut
from app.services.accounts import service as account_service
from app.core.security import create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_out(profile: Profile, token: str) -> TokenOut:
    return TokenOut(access_token=token, user_id=profile.id, role=profile.role, account_status=profile.account_status)


@router.post("/signup", response_model=TokenOut, status_code=201)
def signup(payload: SignupIn, db: Session = Depends(get_db)):
    profile = account_service.signup(
        db, email=payload.email, password=payload.password, name=payload.name, role=payload.role,
    )
    return _token_out(profile, create_access_token(profile.id, profile.role))


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    profile, token = account_service.login(db, email=payload.email, password=payload.password, role=payload.role)
    return _token_out(profile, token)


@router.post("/login/form", response_model=TokenOut, include_in_schema=False)
def login_form(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    profile, token = account_service.login(db, email=form.username, password=form.password)
    return _token_out(profile, token)


@router.post("/verify", response_model=ProfileOut)
def verify_email(payload: VerifyEmailIn, db: Session = Depends(get_db)):
    profile = account_service.verify_email(db, payload.token)
    return account_service.get_me(db, profile)


@router.get("/verify", response_model=ProfileOut)
def verify_email_link(token: str = Query(...), db: Session = Depends(get_db)):
    profile = account_service.verify_email(db, token)
    return account_service.get_me(db, profile)


@router.post("/resend-verification")
def resend_verification(user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    sent = account_service.resend_verification(db, user)
    return {"sent": sent}
