"""Gym class model."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gym_api.core.database import Base
from gym_api.models.enrollment import class_clients

if TYPE_CHECKING:
    from gym_api.models.client import Client
    from gym_api.models.trainer import Trainer


class GymClass(Base):
    """
    Scheduled session led by one trainer.

    ``capacity`` bounds the number of enrolled clients. It is checked when a
    client enrolls, not by a storage constraint.
    """

    __tablename__ = "classes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    trainer_id: Mapped[int] = mapped_column(ForeignKey("trainers.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    date_time: Mapped[datetime] = mapped_column(nullable=False)
    capacity: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC).replace(tzinfo=None)
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC).replace(tzinfo=None),
        onupdate=lambda: datetime.now(UTC).replace(tzinfo=None),
    )

    trainer: Mapped[Trainer] = relationship(back_populates="classes")
    clients: Mapped[list[Client]] = relationship(
        secondary=class_clients, back_populates="classes", order_by="Client.id"
    )

    def __repr__(self) -> str:
        """String representation of GymClass."""
        return f"<GymClass(id={self.id}, title={self.title}, capacity={self.capacity})>"
