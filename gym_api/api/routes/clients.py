"""Client endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gym_api.api.schemas import ClientCreate, ClientResponse
from gym_api.core.database import get_db
from gym_api.models.client import Client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=list[ClientResponse])
async def list_clients(db: AsyncSession = Depends(get_db)) -> list[Client]:
    """
    List all clients.

    Args:
        db: Database session

    Returns:
        List of clients
    """
    result = await db.execute(select(Client).order_by(Client.id))
    return list(result.scalars().all())


@router.post(
    "",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Client could not be created"}},
)
async def create_client(
    payload: ClientCreate, db: AsyncSession = Depends(get_db)
) -> Client:
    """
    Create a new client.

    Args:
        payload: Client creation data
        db: Database session

    Returns:
        Created client

    Raises:
        HTTPException: 400 if the record cannot be stored
    """
    client = Client(**payload.model_dump())
    try:
        db.add(client)
        await db.flush()
        await db.refresh(client)
    except SQLAlchemyError:
        logger.warning("Failed to create client", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Error creating client"
        ) from None

    logger.info("Created client id=%s", client.id)
    return client
