"""Activity statistic - per-year activity counts, rebuilt wholesale."""

from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, AccountMixin


class ActivityStatistic(UUIDMixin, TimestampMixin, AccountMixin, Base):
    __tablename__ = "activity_statistic"

    contact_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contact.id", ondelete="CASCADE"), index=True
    )
    year: Mapped[int] = mapped_column(Integer)
    count: Mapped[int] = mapped_column(Integer, default=0)

    # Relationships
    contact: Mapped["Contact"] = relationship(back_populates="activity_statistics")  # noqa: F821

    def __repr__(self) -> str:
        return f"<ActivityStatistic {self.year}={self.count}>"
