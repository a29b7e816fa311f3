# Purpose: Pydantic DTOs for signup / login / email verification.

from typing import Literal, Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator


class SignupIn(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=6, max_length=128)
    name: str = Field(min_length=1, max_length=200)
    role: Literal["employer", "headhunter"]

    @field_validator("email")
    @classmethod
    def _email_shape(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("Invalid email address")
        return v


class LoginIn(BaseModel):
    email: str
    password: str
    role: Optional[Literal["employer", "headhunter"]] = None


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: UUID
    role: str
    account_status: str


class VerifyEmailIn(BaseModel):
    token: str
