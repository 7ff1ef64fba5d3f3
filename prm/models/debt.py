"""Debt model - money owed by or to a contact."""

from __future__ import annotations

import uuid

from sqlalchemy import Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, AccountMixin


class Debt(UUIDMixin, TimestampMixin, AccountMixin, Base):
    __tablename__ = "debt"

    contact_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contact.id", ondelete="CASCADE"), index=True
    )
    in_debt: Mapped[str] = mapped_column(String(3), default="yes")  # yes: contact owes the user
    status: Mapped[str] = mapped_column(String(20), default="inprogress")  # inprogress, completed
    amount: Mapped[float] = mapped_column(Float)
    reason: Mapped[str | None] = mapped_column(Text, default=None)

    # Relationships
    contact: Mapped["Contact"] = relationship(back_populates="debts")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Debt {self.amount} in_debt={self.in_debt}>"
