"""
Staff Profile Endpoints.

Every signed-in user can read their own profile; listing profiles and
changing roles is reserved to admins.
"""

from __future__ import annotations

from fastapi import APIRouter

from motofinance.core.models.io.auth import ProfileRead, ProfileRoleUpdate
from motofinance.server.services import auth as auth_service
from motofinance.server.services.deps import AdminUserDep, CurrentUserDep, RepoDep

router = APIRouter()


@router.get(
    "/me",
    response_model=ProfileRead,
    summary="Get Own Profile",
    description="Return the signed-in user's profile.",
)
async def get_own_profile(user: CurrentUserDep) -> ProfileRead:
    return ProfileRead.model_validate(user)


@router.get(
    "",
    response_model=list[ProfileRead],
    summary="List Profiles",
    description="List every staff profile, oldest first. Admins only.",
    responses={403: {"description": "Caller is not an admin"}},
)
async def list_profiles(repos: RepoDep, _: AdminUserDep) -> list[ProfileRead]:
    profiles = await repos.profiles.list_all()
    return [ProfileRead.model_validate(profile) for profile in profiles]


@router.patch(
    "/{profile_id}/role",
    response_model=ProfileRead,
    summary="Change Role",
    description="Give a staff member another role. Admins only.",
    responses={
        403: {"description": "Caller is not an admin"},
        404: {"description": "Profile not found"},
    },
)
async def change_role(profile_id: str, payload: ProfileRoleUpdate, repos: RepoDep, _: AdminUserDep) -> ProfileRead:
    profile = await auth_service.change_role(repos, profile_id, payload.role)
    return ProfileRead.model_validate(profile)
