"""Base model classes and mixins for PRM models."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ..dates import utcnow, years_between


class Base(DeclarativeBase):
    pass


class UUIDMixin:
    """Adds a UUID primary key."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )


class TimestampMixin:
    """Adds created_at / updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class AccountMixin:
    """Adds account_id FK; every record is owned by exactly one account."""

    account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("account.id", ondelete="CASCADE"),
        index=True,
    )


def blank_to_none(value: str | None) -> str | None:
    """Store absent optional text as NULL, never as an empty string."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


def ucfirst(value: str | None) -> str | None:
    if not value:
        return value
    return value[:1].upper() + value[1:]


class RelativeMixin:
    """Name, gender and birthdate columns shared by kids and significant others."""

    first_name: Mapped[str] = mapped_column(String(100))
    gender: Mapped[str | None] = mapped_column(String(20), default=None)
    birthdate: Mapped[date | None] = mapped_column(Date, default=None)
    is_birthdate_approximate: Mapped[str] = mapped_column(String(20), default="unknown")

    @property
    def age(self) -> int | None:
        if self.birthdate is None:
            return None
        return years_between(self.birthdate, utcnow().date())
