"""
Authentication Endpoints.

Sign-up, sign-in, session lookup and sign-out. Sign-in returns an opaque
bearer token that every other endpoint expects in the ``Authorization``
header.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from motofinance.core.logging_config import get_logger
from motofinance.core.models.io.auth import ProfileRead, SessionRead, SignInRequest, SignUpRequest
from motofinance.server.services import auth as auth_service
from motofinance.server.services.deps import CurrentUserDep, RepoDep, TokenDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/sign-up",
    response_model=ProfileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Sign Up",
    description="Register a staff account. The very first account becomes an admin.",
    responses={
        201: {"description": "Account created"},
        409: {"description": "Email already registered"},
        422: {"description": "Invalid form data"},
    },
)
async def sign_up(payload: SignUpRequest, repos: RepoDep) -> ProfileRead:
    """
    Register a staff account.

    - **full_name**: 2-100 characters.
    - **email**: Sign-in email, unique.
    - **password** / **confirm_password**: At least 6 characters, must match.
    """
    profile = await auth_service.sign_up(repos, payload)
    return ProfileRead.model_validate(profile)


@router.post(
    "/sign-in",
    response_model=SessionRead,
    summary="Sign In",
    description="Exchange email and password for a bearer session token.",
    responses={
        200: {"description": "Signed in"},
        401: {"description": "Invalid email or password"},
    },
)
async def sign_in(payload: SignInRequest, repos: RepoDep) -> SessionRead:
    auth_session, profile = await auth_service.sign_in(repos, payload.email, payload.password)
    return SessionRead(
        access_token=auth_session.token,
        expires_at=auth_session.expires_at,
        profile=ProfileRead.model_validate(profile),
    )


@router.get(
    "/session",
    response_model=ProfileRead,
    summary="Get Session",
    description="Return the profile behind the bearer token.",
    responses={401: {"description": "Missing, expired or revoked token"}},
)
async def get_session_profile(user: CurrentUserDep) -> ProfileRead:
    return ProfileRead.model_validate(user)


@router.post(
    "/sign-out",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sign Out",
    description="Revoke the bearer token used for this request.",
    responses={401: {"description": "Missing or unknown token"}},
)
async def sign_out(repos: RepoDep, token: TokenDep) -> None:
    await auth_service.sign_out(repos, token)
