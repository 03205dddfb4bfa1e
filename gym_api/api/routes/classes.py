"""Gym class endpoints, including client enrollment."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy import DateTime, Integer, func, insert, literal, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gym_api.api.schemas import (
    DB_INT_MAX,
    DB_INT_MIN,
    ClassCreate,
    ClassDetailResponse,
    ClassResponse,
    EnrollmentCreate,
    MessageResponse,
)
from gym_api.core.database import get_db
from gym_api.models.class_ import GymClass
from gym_api.models.client import Client
from gym_api.models.enrollment import class_clients
from gym_api.models.trainer import Trainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/classes", tags=["classes"])


@router.get("", response_model=list[ClassDetailResponse])
async def list_classes(db: AsyncSession = Depends(get_db)) -> list[GymClass]:
    """
    List all classes with their trainer and enrolled clients.

    Args:
        db: Database session

    Returns:
        List of classes
    """
    result = await db.execute(
        select(GymClass)
        .options(selectinload(GymClass.trainer), selectinload(GymClass.clients))
        .order_by(GymClass.id)
    )
    return list(result.scalars().all())


@router.post(
    "",
    response_model=ClassResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Class could not be created"},
        404: {"description": "Trainer not found"},
    },
)
async def create_class(
    payload: ClassCreate, db: AsyncSession = Depends(get_db)
) -> GymClass:
    """
    Create a new class led by an existing trainer.

    Args:
        payload: Class creation data
        db: Database session

    Returns:
        Created class

    Raises:
        HTTPException: 404 if the trainer does not exist, 400 if the record
            cannot be stored
    """
    trainer = await db.get(Trainer, payload.trainer_id)
    if trainer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trainer not found")

    new_class = GymClass(
        title=payload.title,
        trainer_id=trainer.id,
        date_time=payload.date_time,
        capacity=payload.capacity,
    )
    try:
        db.add(new_class)
        await db.flush()
        await db.refresh(new_class)
    except SQLAlchemyError:
        logger.warning("Failed to create class", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Error creating class"
        ) from None

    logger.info("Created class id=%s trainer_id=%s", new_class.id, trainer.id)
    return new_class


async def _insert_if_not_full(db: AsyncSession, class_id: int, client_id: int) -> bool:
    """
    Insert the enrollment row only while the class is below capacity.

    The count and the insert run as a single statement, so two requests
    cannot both take the last seat. Returns False when nothing was inserted.
    """
    enrolled = (
        select(func.count())
        .select_from(class_clients)
        .where(class_clients.c.class_id == class_id)
        .correlate(None)
        .scalar_subquery()
    )
    capacity = (
        select(GymClass.capacity)
        .where(GymClass.id == class_id)
        .correlate(None)
        .scalar_subquery()
    )
    now = datetime.now(UTC).replace(tzinfo=None)

    stmt = insert(class_clients).from_select(
        ["class_id", "client_id", "created_at"],
        select(
            literal(class_id, Integer),
            literal(client_id, Integer),
            literal(now, DateTime),
        ).where(enrolled < capacity),
    )
    result = await db.execute(stmt)
    return result.rowcount == 1


@router.post(
    "/{class_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Client already enrolled or class is full"},
        404: {"description": "Class or client not found"},
    },
)
async def enroll_client(
    class_id: Annotated[int, Path(ge=DB_INT_MIN, le=DB_INT_MAX)],
    payload: EnrollmentCreate,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Enroll a client into a class.

    All checks and the insert share the request transaction. The class row is
    locked where the backend supports SELECT ... FOR UPDATE.

    Args:
        class_id: ID of the class
        payload: Body carrying ``clientId``
        db: Database session

    Returns:
        Confirmation message

    Raises:
        HTTPException: 404 if the class or client does not exist, 400 if the
            client is already enrolled or the class is full
    """
    result = await db.execute(
        select(GymClass)
        .options(selectinload(GymClass.clients))
        .where(GymClass.id == class_id)
        .with_for_update()
    )
    gym_class = result.scalar_one_or_none()
    if gym_class is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")

    client = await db.get(Client, payload.client_id)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")

    participants = gym_class.clients
    if any(p.id == client.id for p in participants):
        logger.warning("Client %s already enrolled in class %s", client.id, class_id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Client already enrolled")

    if len(participants) >= gym_class.capacity:
        logger.warning("Class %s is full (capacity=%s)", class_id, gym_class.capacity)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Class is full")

    try:
        inserted = await _insert_if_not_full(db, class_id, client.id)
    except IntegrityError:
        # Lost a race against an identical request
        logger.warning("Client %s already enrolled in class %s", client.id, class_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Client already enrolled"
        ) from None

    if not inserted:
        logger.warning("Class %s filled up before client %s could enroll", class_id, client.id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Class is full")

    logger.info("Enrolled client %s in class %s", client.id, class_id)
    return MessageResponse(message="Client added")
