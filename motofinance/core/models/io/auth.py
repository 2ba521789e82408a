"""
Authentication and profile I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from motofinance.core.models.domain import UserRole
from motofinance.core.validation import FormModel, OptionalKenyanPhone


class SignInRequest(FormModel):
    """Credentials for signing in."""

    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=6, description="Account password")


class SignUpRequest(FormModel):
    """Registration form for a new staff account."""

    full_name: str = Field(min_length=2, max_length=100)
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=6)
    confirm_password: str
    phone: OptionalKenyanPhone = None

    @model_validator(mode="after")
    def _passwords_match(self) -> "SignUpRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class ProfileRead(BaseModel):
    """Public view of a staff profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: str
    phone: Optional[str] = None
    role: UserRole
    created_at: datetime
    updated_at: datetime


class ProfileRoleUpdate(FormModel):
    """Body for changing a staff member's role."""

    role: UserRole


class SessionRead(BaseModel):
    """An active sign-in session with its bearer token."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    profile: ProfileRead
