"""Request and response schemas.

Fields are exposed in camelCase (``membershipType``, ``trainerId``,
``dateTime``); request bodies also accept the snake_case names.
"""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

CAMEL_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}
ORM_CONFIG = {**CAMEL_CONFIG, "from_attributes": True}

# Signed 64-bit range of an INTEGER/BIGINT column
DB_INT_MIN = -(2**63)
DB_INT_MAX = 2**63 - 1

DbInt = Annotated[int, Field(ge=DB_INT_MIN, le=DB_INT_MAX)]


class TrainerCreate(BaseModel):
    """Trainer creation schema."""

    name: str
    specialization: str
    email: str

    model_config = CAMEL_CONFIG


class TrainerResponse(TrainerCreate):
    """Trainer response schema."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ORM_CONFIG


class ClientCreate(BaseModel):
    """Client creation schema."""

    name: str
    age: DbInt
    membership_type: str

    model_config = CAMEL_CONFIG


class ClientResponse(ClientCreate):
    """Client response schema."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ORM_CONFIG


class ClassCreate(BaseModel):
    """Class creation schema."""

    title: str
    trainer_id: DbInt
    date_time: datetime = Field(description="Start of the session (ISO 8601)")
    capacity: DbInt = Field(description="Maximum number of enrolled clients")

    model_config = CAMEL_CONFIG

    @field_validator("date_time")
    @classmethod
    def to_naive_utc(cls, value: datetime) -> datetime:
        """Store times as naive UTC; values without an offset are taken as UTC."""
        if value.tzinfo is not None:
            return value.astimezone(UTC).replace(tzinfo=None)
        return value


class ClassResponse(ClassCreate):
    """Class response schema."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ORM_CONFIG


class ClassDetailResponse(ClassResponse):
    """Class with its trainer and enrolled clients."""

    trainer: TrainerResponse | None = None
    clients: list[ClientResponse] = []


class EnrollmentCreate(BaseModel):
    """Enrollment request."""

    client_id: DbInt

    model_config = CAMEL_CONFIG


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str
