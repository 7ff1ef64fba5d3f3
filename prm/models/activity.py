"""Activity model - things done together with a contact."""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, AccountMixin


class Activity(UUIDMixin, TimestampMixin, AccountMixin, Base):
    __tablename__ = "activity"

    contact_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contact.id", ondelete="CASCADE"), index=True
    )
    summary: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    date_it_happened: Mapped[date] = mapped_column(Date, index=True)

    # Relationships
    contact: Mapped["Contact"] = relationship(back_populates="activities")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Activity {self.summary!r} {self.date_it_happened}>"
