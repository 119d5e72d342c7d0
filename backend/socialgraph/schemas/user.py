"""User Schemas — Pydantic models with field-level validation for the users API.

Invariants:
    - name, handle, email are stripped; empty after stripping is a 400
    - email is a syntactically valid address of at most 50 characters
    - UserResponse has no password field of any kind

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
    - Password length bounded in characters here; the 72-byte bcrypt limit is
      enforced by CredentialVerifier
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from socialgraph.core.domain_types import UserRecord

MAX_EMAIL_LENGTH = 50


class UserProfile(BaseModel):
    """Editable profile fields."""
    name: str = Field(min_length=1, max_length=50)
    handle: str = Field(min_length=1, max_length=50)
    email: EmailStr

    @field_validator("name", "handle")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("email")
    @classmethod
    def bound_email(cls, v: str) -> str:
        v = v.strip()
        if len(v) > MAX_EMAIL_LENGTH:
            raise ValueError(f"must be at most {MAX_EMAIL_LENGTH} characters")
        return v


class UserCreate(UserProfile):
    """Registration payload."""
    password: str = Field(min_length=6, max_length=72)


class UserUpdate(UserProfile):
    """Profile update payload (password changes go through PasswordChange)."""


class PasswordChange(BaseModel):
    current: str = Field(min_length=1, max_length=72)
    new: str = Field(min_length=6, max_length=72)


class UserResponse(BaseModel):
    """Public-facing user data."""
    id: int
    name: str
    handle: str
    email: str
    created_at: datetime

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        return cls(
            id=user.id, name=user.name, handle=user.handle,
            email=user.email, created_at=user.created_at,
        )


class FollowToggleResponse(BaseModel):
    user_id: int
    following: bool
