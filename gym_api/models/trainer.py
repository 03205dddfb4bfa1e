"""Trainer model."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gym_api.core.database import Base

if TYPE_CHECKING:
    from gym_api.models.class_ import GymClass


class Trainer(Base):
    """Staff member who leads classes."""

    __tablename__ = "trainers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    specialization: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC).replace(tzinfo=None)
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC).replace(tzinfo=None),
        onupdate=lambda: datetime.now(UTC).replace(tzinfo=None),
    )

    classes: Mapped[list[GymClass]] = relationship(back_populates="trainer")

    def __repr__(self) -> str:
        """String representation of Trainer."""
        return f"<Trainer(id={self.id}, name={self.name}, specialization={self.specialization})>"
