"""
Health Check Endpoints.

``/health`` reports whether the server and its database are reachable;
``/version`` reports the API and schema versions. Neither requires a session.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from motofinance.core.database import get_session
from motofinance.core.logging_config import get_logger
from motofinance.server.core import constant

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check that the API server is up and can reach its database.",
    response_description="Status object.",
    responses={503: {"description": "Database unreachable"}},
)
async def health_check(session: AsyncSession = Depends(get_session)):
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check could not reach the database: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "degraded", "database": "unreachable"},
        )
    return {"status": "ok", "database": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    return {"name": constant.PROJECT_NAME, "version": constant.API_VERSION, "schema_version": constant.SCHEMA_VERSION}
