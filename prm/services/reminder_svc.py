"""Reminder service."""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.contact import Contact
from ..models.reminder import Reminder
from . import event_svc
from .common import count_owned, get_owned, list_owned

FREQUENCY_TYPES = ("one_time", "week", "month", "year")


async def list_reminders(db: AsyncSession, contact: Contact) -> list[Reminder]:
    """Reminders, soonest first."""
    return await list_owned(
        db, Reminder, contact, order_by=Reminder.next_expected_date.asc()
    )


async def count_reminders(db: AsyncSession, contact: Contact) -> int:
    return await count_owned(db, Reminder, contact)


async def get_reminder(db: AsyncSession, contact: Contact, reminder_id: uuid.UUID) -> Reminder:
    return await get_owned(db, Reminder, contact, reminder_id)


async def add_reminder(
    db: AsyncSession,
    contact: Contact,
    title: str,
    next_expected_date: date,
    *,
    description: str | None = None,
    frequency_type: str = "one_time",
    frequency_number: int = 1,
) -> Reminder:
    if frequency_type not in FREQUENCY_TYPES:
        raise ValueError(f"unknown reminder frequency {frequency_type!r}")
    reminder = Reminder(
        account_id=contact.account_id,
        contact_id=contact.id,
        title=title,
        description=description,
        next_expected_date=next_expected_date,
        frequency_type=frequency_type,
        frequency_number=frequency_number,
    )
    return await event_svc.create_audited(db, contact, reminder)


async def delete_reminder(db: AsyncSession, contact: Contact, reminder: Reminder) -> None:
    await event_svc.delete_audited(db, contact, reminder)
