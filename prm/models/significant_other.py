"""Significant other model - partners of a contact, past and current."""

from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from .base import Base, UUIDMixin, TimestampMixin, AccountMixin, RelativeMixin, blank_to_none

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


class SignificantOther(UUIDMixin, TimestampMixin, AccountMixin, RelativeMixin, Base):
    __tablename__ = "significant_other"
    __table_args__ = (
        Index("ix_significant_other_contact_status", "contact_id", "status"),
    )

    contact_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contact.id", ondelete="CASCADE"), index=True
    )
    last_name: Mapped[str | None] = mapped_column(String(100), default=None)
    status: Mapped[str] = mapped_column(String(20), default=STATUS_ACTIVE)  # active, inactive

    # Relationships
    contact: Mapped["Contact"] = relationship(back_populates="significant_others")  # noqa: F821

    @validates("last_name")
    def _validate_last_name(self, key: str, value: str | None) -> str | None:
        return blank_to_none(value)

    @property
    def complete_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p is not None)

    def __repr__(self) -> str:
        return f"<SignificantOther {self.first_name!r} {self.status}>"
