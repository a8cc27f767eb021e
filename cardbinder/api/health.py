"""
Health check endpoints.

Liveness, plus readiness covering the database and the card catalog.
"""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cardbinder.db.database import get_session
from cardbinder.services.catalog import CatalogLoadError, load_catalog

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    catalog: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Does not check dependencies."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 if the database is unreachable or the card catalog
    cannot be loaded.
    """
    try:
        await asyncio.to_thread(load_catalog)
        catalog_status = "loaded"
    except CatalogLoadError as e:
        logger.warning("Catalog unavailable: %s", e)
        catalog_status = "missing"

    try:
        await session.execute(text("SELECT 1"))
        database_status = "connected"
    except SQLAlchemyError:
        database_status = "disconnected"

    if catalog_status != "loaded" or database_status != "connected":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(
            status="not ready", database=database_status, catalog=catalog_status
        )

    return HealthResponse(status="ready", database=database_status, catalog=catalog_status)
