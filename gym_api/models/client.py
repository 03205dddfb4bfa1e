"""Client model."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gym_api.core.database import Base
from gym_api.models.enrollment import class_clients

if TYPE_CHECKING:
    from gym_api.models.class_ import GymClass


class Client(Base):
    """Gym member who can enroll in classes."""

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(nullable=False)
    membership_type: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC).replace(tzinfo=None)
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC).replace(tzinfo=None),
        onupdate=lambda: datetime.now(UTC).replace(tzinfo=None),
    )

    classes: Mapped[list[GymClass]] = relationship(
        secondary=class_clients, back_populates="clients"
    )

    def __repr__(self) -> str:
        """String representation of Client."""
        return f"<Client(id={self.id}, name={self.name}, membership_type={self.membership_type})>"
