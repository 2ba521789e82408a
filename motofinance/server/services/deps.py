"""
API Dependencies.

Provides the repository bundle bound to the request's database session, the
signed-in profile, role guards and the SMS gateway for API endpoints.
"""

from __future__ import annotations

from typing import Annotated, Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from motofinance.core.database import get_session
from motofinance.core.database.entities import Profile
from motofinance.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session
from motofinance.core.errors import AuthenticationError, PermissionDeniedError
from motofinance.core.models.domain import UserRole
from motofinance.server.core.config import settings

from . import auth
from .sms import SmsGateway, build_gateway

bearer_scheme = HTTPBearer(auto_error=False, description="Session token returned by sign-in")


def get_repos(session: AsyncSession = Depends(get_session)) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


RepoDep = Annotated[SqlRepoBundle, Depends(get_repos)]


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return credentials.credentials


TokenDep = Annotated[str, Depends(get_bearer_token)]


async def get_current_user(repos: RepoDep, token: TokenDep) -> Profile:
    return await auth.resolve_session(repos, token)


CurrentUserDep = Annotated[Profile, Depends(get_current_user)]


def require_roles(*roles: UserRole, action: str = "perform this action") -> Callable:
    """
    Build a dependency that only lets the given roles through.

    Usage:
        @router.post("", dependencies=[Depends(require_roles(UserRole.admin))])
    """
    allowed = {role.value for role in roles}

    async def _check_role(user: CurrentUserDep) -> Profile:
        if user.role not in allowed:
            raise PermissionDeniedError(user.role, action)
        return user

    return _check_role


FinanceUserDep = Annotated[
    Profile, Depends(require_roles(UserRole.admin, UserRole.accountant, action="manage finances"))
]
AdminUserDep = Annotated[Profile, Depends(require_roles(UserRole.admin, action="manage staff profiles"))]


def get_sms_gateway() -> SmsGateway:
    return build_gateway(settings.sms)


SmsGatewayDep = Annotated[SmsGateway, Depends(get_sms_gateway)]
