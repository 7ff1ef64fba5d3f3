"""Gift model - gift ideas and gifts already offered."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, AccountMixin


class Gift(UUIDMixin, TimestampMixin, AccountMixin, Base):
    __tablename__ = "gift"

    contact_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contact.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255))
    comment: Mapped[str | None] = mapped_column(Text, default=None)
    url: Mapped[str | None] = mapped_column(String(500), default=None)
    value_in_dollars: Mapped[float | None] = mapped_column(Float, default=None)
    is_an_idea: Mapped[bool] = mapped_column(Boolean, default=True)
    has_been_offered: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relationships
    contact: Mapped["Contact"] = relationship(back_populates="gifts")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Gift {self.name!r}>"
