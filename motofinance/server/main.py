"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware
(CORS, request timing), registers exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from motofinance.core.database import engine, init_db
from motofinance.core.logging_config import get_logger, setup_logging
from motofinance.core.monitoring import initialize_logfire

from .api.v1 import (
    auth,
    bikes,
    expenses,
    financed_riders,
    health,
    journal_entries,
    payments,
    potential_riders,
    profiles,
    reports,
    sms_notifications,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestTimingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the tables on development databases at startup and disposes of
    the connection pool at shutdown.
    """
    logger.info(f"Starting up {constant.PROJECT_NAME} Server...")
    await init_db()
    logger.info("Database initialized successfully")

    yield

    logger.info(f"Shutting down {constant.PROJECT_NAME} Server...")
    await engine.dispose()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    MotoFinance Back-Office API

    Staff register prospective riders, convert them into financed riders, track the bike
    inventory, record daily remittances and business expenses, read profit/loss reports
    and dispatch SMS notifications.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestTimingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)


app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth", tags=["auth"])
app.include_router(profiles.router, prefix=f"{constant.API_V1_STR}/profiles", tags=["profiles"])
app.include_router(
    potential_riders.router, prefix=f"{constant.API_V1_STR}/potential-riders", tags=["potential-riders"]
)
app.include_router(financed_riders.router, prefix=f"{constant.API_V1_STR}/financed-riders", tags=["financed-riders"])
app.include_router(bikes.router, prefix=f"{constant.API_V1_STR}/bikes", tags=["bikes"])
app.include_router(payments.router, prefix=f"{constant.API_V1_STR}/payments", tags=["payments"])
app.include_router(expenses.router, prefix=f"{constant.API_V1_STR}/expenses", tags=["expenses"])
app.include_router(journal_entries.router, prefix=f"{constant.API_V1_STR}/journal-entries", tags=["journal-entries"])
app.include_router(reports.router, prefix=f"{constant.API_V1_STR}/reports", tags=["reports"])
app.include_router(
    sms_notifications.router, prefix=f"{constant.API_V1_STR}/sms-notifications", tags=["sms-notifications"]
)


def run() -> None:
    """Console entry point: serve the app with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "motofinance.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
