"""Trainer endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gym_api.api.schemas import TrainerCreate, TrainerResponse
from gym_api.core.database import get_db
from gym_api.models.trainer import Trainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trainers", tags=["trainers"])


@router.get("", response_model=list[TrainerResponse])
async def list_trainers(db: AsyncSession = Depends(get_db)) -> list[Trainer]:
    """
    List all trainers.

    Args:
        db: Database session

    Returns:
        List of trainers
    """
    result = await db.execute(select(Trainer).order_by(Trainer.id))
    return list(result.scalars().all())


@router.post(
    "",
    response_model=TrainerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Trainer could not be created"}},
)
async def create_trainer(
    payload: TrainerCreate, db: AsyncSession = Depends(get_db)
) -> Trainer:
    """
    Create a new trainer.

    Args:
        payload: Trainer creation data
        db: Database session

    Returns:
        Created trainer

    Raises:
        HTTPException: 400 if the record cannot be stored
    """
    trainer = Trainer(**payload.model_dump())
    try:
        db.add(trainer)
        await db.flush()
        await db.refresh(trainer)
    except SQLAlchemyError:
        logger.warning("Failed to create trainer", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Error creating trainer"
        ) from None

    logger.info("Created trainer id=%s", trainer.id)
    return trainer
