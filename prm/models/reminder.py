"""Reminder model."""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, AccountMixin


class Reminder(UUIDMixin, TimestampMixin, AccountMixin, Base):
    __tablename__ = "reminder"

    contact_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contact.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column(String(300))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    next_expected_date: Mapped[date] = mapped_column(Date)
    frequency_type: Mapped[str] = mapped_column(String(20), default="one_time")  # one_time, week, month, year
    frequency_number: Mapped[int] = mapped_column(Integer, default=1)

    # Relationships
    contact: Mapped["Contact"] = relationship(back_populates="reminders")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Reminder {self.title!r}>"
