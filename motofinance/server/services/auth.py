"""
Authentication Service.

Staff accounts live in ``profiles``. Passwords are stored as salted
PBKDF2-SHA256 hashes in the form ``pbkdf2_sha256$<iterations>$<salt>$<hash>``
(salt and hash base64 encoded). Signing in issues an opaque bearer token
stored in ``auth_sessions``; signing out revokes it.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import os
import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

from motofinance.core.database.base import utc_now
from motofinance.core.database.entities import AuthSession, Profile
from motofinance.core.database.repositories import SqlRepoBundle
from motofinance.core.errors import AuthenticationError, ConflictError, NotFoundError
from motofinance.core.logging_config import get_logger
from motofinance.core.models.domain import UserRole
from motofinance.core.models.io.auth import SignUpRequest
from motofinance.server.core.config import settings

logger = get_logger(__name__)

HASH_ALGORITHM = "pbkdf2_sha256"
HASH_ITERATIONS = 260_000


def _pbkdf2(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, iterations: int = HASH_ITERATIONS) -> str:
    """Generate a salted PBKDF2 hash for the given password."""
    salt = os.urandom(16)
    digest = _pbkdf2(password, salt, iterations)
    return "$".join(
        [
            HASH_ALGORITHM,
            str(iterations),
            base64.b64encode(salt).decode(),
            base64.b64encode(digest).decode(),
        ]
    )


def verify_password(password: str, stored: str) -> bool:
    """Verify a password against the stored PBKDF2 hash. Malformed hashes never match."""
    parts = stored.split("$")
    if len(parts) != 4 or parts[0] != HASH_ALGORITHM or not parts[1].isdigit():
        return False
    try:
        salt = base64.b64decode(parts[2])
        expected = base64.b64decode(parts[3])
    except ValueError:
        return False
    return hmac.compare_digest(_pbkdf2(password, salt, int(parts[1])), expected)


async def sign_up(repos: SqlRepoBundle, payload: SignUpRequest, default_role: Optional[str] = None) -> Profile:
    """
    Register a staff account.

    The first profile ever created becomes ``admin`` so that someone can
    manage roles; every later one gets the configured default role.

    Raises:
        ConflictError: If the email is already registered.
    """
    email = payload.email.lower()
    if await repos.profiles.get_by_email(email) is not None:
        raise ConflictError(f"A profile with email '{email}' already exists")

    if await repos.profiles.count() == 0:
        role = UserRole.admin
    else:
        role = UserRole(default_role or settings.default_user_role)

    profile = Profile(
        email=email,
        full_name=payload.full_name,
        phone=payload.phone,
        role=role.value,
        password_hash=hash_password(payload.password),
    )
    profile = await repos.profiles.create(profile)
    logger.info(f"Registered profile {profile.id} with role {profile.role}")
    return profile


async def sign_in(
    repos: SqlRepoBundle,
    email: str,
    password: str,
    expire_days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Tuple[AuthSession, Profile]:
    """
    Check credentials and open a session.

    Raises:
        AuthenticationError: If the email is unknown or the password is wrong.
    """
    profile = await repos.profiles.get_by_email(email)
    if profile is None or not verify_password(password, profile.password_hash):
        logger.info(f"Rejected sign-in for {email.lower()}")
        raise AuthenticationError("Invalid email or password")

    now = now or utc_now()
    days = expire_days if expire_days is not None else settings.session_expire_days
    auth_session = AuthSession(
        token=secrets.token_urlsafe(32),
        profile_id=profile.id,
        expires_at=now + timedelta(days=days),
    )
    auth_session = await repos.auth_sessions.create(auth_session)
    logger.debug(f"Opened session {auth_session.id} for profile {profile.id}")
    return auth_session, profile


async def resolve_session(repos: SqlRepoBundle, token: str, now: Optional[datetime] = None) -> Profile:
    """
    Return the profile behind a bearer token.

    Raises:
        AuthenticationError: If the token is unknown, expired or revoked.
    """
    auth_session = await repos.auth_sessions.get_by_token(token)
    if auth_session is None or not auth_session.is_active(now or utc_now()):
        raise AuthenticationError("Session is invalid or has expired")
    profile = await repos.profiles.get_by_id(auth_session.profile_id)
    if profile is None:
        raise AuthenticationError("Session is invalid or has expired")
    return profile


async def sign_out(repos: SqlRepoBundle, token: str) -> None:
    """Revoke a session. Signing out twice is harmless."""
    auth_session = await repos.auth_sessions.get_by_token(token)
    if auth_session is None:
        raise AuthenticationError("Session is invalid or has expired")
    if auth_session.revoked_at is None:
        await repos.auth_sessions.revoke(auth_session, utc_now())
        logger.debug(f"Revoked session {auth_session.id}")


async def change_role(repos: SqlRepoBundle, profile_id: str, role: str) -> Profile:
    """Give a staff member another role."""
    profile = await repos.profiles.get_by_id(profile_id)
    if profile is None:
        raise NotFoundError("Profile", profile_id)
    profile.role = UserRole(role).value
    profile = await repos.profiles.update(profile)
    logger.info(f"Profile {profile.id} is now {profile.role}")
    return profile
