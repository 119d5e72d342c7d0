"""Auth Schemas — login request/response.

Invariants:
    - LoginRequest.email is normalized the same way UserProfile.email is
      (domain lowercased, Unicode NFC) so it matches the stored address

Design Decisions:
    - LoginRequest.email is a plain string: a malformed address fails the same way
      as an unknown one (401), not with a distinguishable 400
"""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=256)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip()
        try:
            return validate_email(v, check_deliverability=False).normalized
        except EmailNotValidError:
            return v


class LoginResponse(BaseModel):
    token: str
    user_id: int
    token_type: str = "bearer"
