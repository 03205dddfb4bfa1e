"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gym_api.core.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


class PingResponse(BaseModel):
    """Ping response model."""

    status: str
    database: str


@router.get("/ping", response_model=PingResponse)
async def ping(db: AsyncSession = Depends(get_db)) -> PingResponse:
    """
    Ping endpoint for health checks.

    Runs ``SELECT 1`` against the configured database.

    Raises:
        HTTPException: 503 if the database cannot be reached
    """
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.error("Health check failed", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database unavailable"
        ) from None
    return PingResponse(status="ok", database="connected")
