"""Event model - append-only audit trail of changes made to a contact's records."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass

from sqlalchemy import ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, AccountMixin


class ObjectType(str, enum.Enum):
    CONTACT = "contact"
    KID = "kid"
    SIGNIFICANT_OTHER = "significantother"
    NOTE = "note"
    ACTIVITY = "activity"
    REMINDER = "reminder"
    GIFT = "gift"
    TASK = "task"
    DEBT = "debt"


class Operation(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# Model class name -> subject tag
_SUBJECT_TYPES = {
    "Contact": ObjectType.CONTACT,
    "Kid": ObjectType.KID,
    "SignificantOther": ObjectType.SIGNIFICANT_OTHER,
    "Note": ObjectType.NOTE,
    "Activity": ObjectType.ACTIVITY,
    "Reminder": ObjectType.REMINDER,
    "Gift": ObjectType.GIFT,
    "Task": ObjectType.TASK,
    "Debt": ObjectType.DEBT,
}


@dataclass(frozen=True)
class EventSubject:
    """The record an event is about: a kind tag plus that record's id."""

    object_type: ObjectType
    object_id: uuid.UUID

    @classmethod
    def of(cls, record) -> "EventSubject":
        try:
            object_type = _SUBJECT_TYPES[type(record).__name__]
        except KeyError:
            raise TypeError(f"{type(record).__name__} records are not audited") from None
        if record.id is None:
            raise ValueError(f"{type(record).__name__} must be flushed before it is audited")
        return cls(object_type, record.id)


class Event(UUIDMixin, TimestampMixin, AccountMixin, Base):
    __tablename__ = "event"
    __table_args__ = (
        Index("ix_event_subject", "contact_id", "object_type", "object_id"),
    )

    contact_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contact.id", ondelete="CASCADE"), index=True
    )
    object_type: Mapped[str] = mapped_column(String(50))  # see ObjectType
    object_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    nature_of_operation: Mapped[str] = mapped_column(String(20))  # create, update, delete

    # Relationships
    contact: Mapped["Contact"] = relationship(back_populates="events")  # noqa: F821

    @property
    def subject(self) -> EventSubject:
        return EventSubject(ObjectType(self.object_type), self.object_id)

    @property
    def operation(self) -> Operation:
        return Operation(self.nature_of_operation)

    def __repr__(self) -> str:
        return f"<Event {self.nature_of_operation} {self.object_type}>"
