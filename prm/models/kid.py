"""Kid model - children of a contact."""

from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, AccountMixin, RelativeMixin


class Kid(UUIDMixin, TimestampMixin, AccountMixin, RelativeMixin, Base):
    __tablename__ = "kid"

    child_of_contact_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contact.id", ondelete="CASCADE"), index=True
    )

    # Relationships
    parent: Mapped["Contact"] = relationship(back_populates="kids")  # noqa: F821

    @property
    def contact_id(self) -> uuid.UUID:
        return self.child_of_contact_id

    def __repr__(self) -> str:
        return f"<Kid {self.first_name!r}>"
