"""
Staff profile and sign-in session entities.

A profile is one back-office user account. Sessions are opaque bearer
tokens issued at sign-in; a session stops being valid once it expires or
is revoked by signing out.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from motofinance.core.models.domain import UserRole

from ..base import AwareDateTime, Base, as_utc, new_id, utc_now


class ProfileBase(Base):
    """Base fields for a staff profile."""

    email: str = Field(max_length=255, unique=True, index=True, description="Sign-in email, stored lower case")
    full_name: str = Field(max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20)
    role: str = Field(default=UserRole.rider_clerk.value, max_length=20, description="admin, accountant or rider_clerk")


class Profile(ProfileBase, table=True):
    """Entity for a staff account.

    Table: profiles
    """

    __tablename__ = "profiles"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    password_hash: str = Field(max_length=255, description="Salted PBKDF2-SHA256 hash")

    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Profile(id={self.id}, email={self.email}, role={self.role})"


class AuthSession(Base, table=True):
    """Entity for an issued bearer token.

    Table: auth_sessions
    """

    __tablename__ = "auth_sessions"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    token: str = Field(max_length=128, unique=True, index=True)
    profile_id: str = Field(foreign_key="profiles.id", max_length=36, index=True)
    expires_at: datetime = Field(sa_type=AwareDateTime)
    revoked_at: Optional[datetime] = Field(default=None, sa_type=AwareDateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime)

    def is_active(self, now: datetime) -> bool:
        return self.revoked_at is None and as_utc(self.expires_at) > as_utc(now)

    def __repr__(self) -> str:
        return f"AuthSession(id={self.id}, profile_id={self.profile_id}, expires_at={self.expires_at})"
