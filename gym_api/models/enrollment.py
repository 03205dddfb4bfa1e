"""Class enrollment join table."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Table

from gym_api.core.database import Base

# The composite primary key keeps a client from being enrolled twice in one class.
class_clients = Table(
    "class_clients",
    Base.metadata,
    Column("class_id", Integer, ForeignKey("classes.id"), primary_key=True),
    Column("client_id", Integer, ForeignKey("clients.id"), primary_key=True),
    Column(
        "created_at",
        DateTime,
        nullable=False,
        default=lambda: datetime.now(UTC).replace(tzinfo=None),
    ),
)
