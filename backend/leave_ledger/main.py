from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from leave_ledger.api.health import router as health_router
from leave_ledger.api.router import api_router
from leave_ledger.config import get_settings
from leave_ledger.db import dispose_engine
from leave_ledger.exceptions import setup_exception_handlers
from leave_ledger.logging_config import setup_logging
from leave_ledger.middleware import setup_middleware

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "balances", "description": "Per-type leave balances and the monthly payroll ledger."},
    {"name": "accrual-rules", "description": "Monthly credit configuration per leave type."},
    {"name": "statistics", "description": "Leave request counts by status."},
    {"name": "employees", "description": "Development employee directory."},
    {"name": "health", "description": "Service liveness."},
]


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger.info("%s v%s starting (%s)", settings.app_name, settings.app_version, settings.environment)
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("%s stopped", settings.app_name)


def create_app() -> FastAPI:
    """Build the Leave Ledger API."""
    settings = get_settings()
    setup_logging(settings)

    show_docs = settings.environment != "production"
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
    )

    setup_middleware(application, settings)
    setup_exception_handlers(application)

    application.include_router(health_router)
    application.include_router(api_router)
    return application


app = create_app()
