"""Contact service - CRUD, search, name and preference updates."""

from __future__ import annotations

import random
import uuid
from datetime import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..dates import create_date_from_format, diff_for_humans, utcnow
from ..models.contact import Contact
from ..models.event import Operation
from . import event_svc
from .common import atomic


async def list_contacts(
    db: AsyncSession,
    account_id: uuid.UUID,
    *,
    search: str | None = None,
    offset: int = 0,
    limit: int = 50,
) -> tuple[list[Contact], int]:
    """List contacts with optional search and pagination. Returns (contacts, total)."""
    stmt = select(Contact).where(Contact.account_id == account_id)

    if search:
        q = f"%{search}%"
        stmt = stmt.where(
            or_(
                Contact.first_name.ilike(q),
                Contact.middle_name.ilike(q),
                Contact.last_name.ilike(q),
                Contact.email.ilike(q),
                Contact.phone_number.ilike(q),
            )
        )

    # Count
    count_stmt = select(func.count()).select_from(stmt.subquery())
    total = (await db.execute(count_stmt)).scalar() or 0

    # Fetch page
    stmt = stmt.order_by(
        Contact.last_name.asc().nullslast(), Contact.first_name.asc()
    ).offset(offset).limit(limit)
    result = await db.execute(stmt)
    contacts = list(result.scalars().all())

    return contacts, total


async def get_contact(
    db: AsyncSession, contact_id: uuid.UUID, *, account_id: uuid.UUID | None = None
) -> Contact | None:
    """Get a single contact, optionally scoped to an account."""
    stmt = select(Contact).where(Contact.id == contact_id)
    if account_id is not None:
        stmt = stmt.where(Contact.account_id == account_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_contact(
    db: AsyncSession, account_id: uuid.UUID, **kwargs
) -> Contact:
    """Create a new contact with a random avatar color, and log it."""
    kwargs.setdefault("default_avatar_color", _pick_avatar_color())
    contact = Contact(account_id=account_id, **kwargs)
    async with atomic(db, contact):
        db.add(contact)
        await db.flush()
        await event_svc.record_event(db, contact, contact, Operation.CREATE)
    await db.refresh(contact)
    return contact


async def update_contact(
    db: AsyncSession, contact_id: uuid.UUID, **kwargs
) -> Contact | None:
    """Update an existing contact."""
    contact = await get_contact(db, contact_id)
    if not contact:
        return None
    async with atomic(db, contact):
        for key, value in kwargs.items():
            setattr(contact, key, value)
        await db.flush()
        await event_svc.record_event(db, contact, contact, Operation.UPDATE)
    await db.refresh(contact)
    return contact


async def delete_contact(db: AsyncSession, contact_id: uuid.UUID) -> bool:
    """Delete a contact and everything it owns. Returns True if found and deleted."""
    contact = await get_contact(db, contact_id)
    if not contact:
        return False
    await db.delete(contact)
    await db.commit()
    return True


async def update_name(
    db: AsyncSession,
    contact: Contact,
    first_name: str,
    middle_name: str | None = None,
    last_name: str | None = None,
) -> bool:
    """Rename a contact. Returns False, changing nothing, when first_name is empty.

    ``None`` for the middle or last name leaves that part unchanged.
    """
    if not first_name:
        return False

    contact.first_name = first_name
    if middle_name is not None:
        contact.middle_name = middle_name
    if last_name is not None:
        contact.last_name = last_name

    await db.commit()
    await db.refresh(contact)
    return True


async def update_food_preferencies(
    db: AsyncSession, contact: Contact, food_preferencies: str | None
) -> Contact:
    contact.food_preferencies = food_preferencies
    await db.commit()
    await db.refresh(contact)
    return contact


def _pick_avatar_color() -> str:
    return random.choice(settings.avatar_palette)


async def set_avatar_color(
    db: AsyncSession, contact: Contact, color: str | None = None
) -> str:
    """Set the fallback avatar color; a random palette color when none is given."""
    contact.default_avatar_color = color or _pick_avatar_color()
    await db.commit()
    await db.refresh(contact)
    return contact.default_avatar_color


async def mark_talked_to(
    db: AsyncSession, contact: Contact, when: datetime | None = None
) -> Contact:
    contact.last_talked_to = when or utcnow()
    await db.commit()
    await db.refresh(contact)
    return contact


def get_last_updated(contact: Contact, timezone: str | None = None) -> str:
    """Last update day as ``YYYY/MM/DD`` in the account (or given) timezone."""
    tz = timezone or contact.account.timezone
    return create_date_from_format(contact.updated_at, tz).strftime("%Y/%m/%d")


def get_last_called(contact: Contact, now: datetime | None = None) -> str | None:
    """How long ago the user last talked to the contact, e.g. ``3 days ago``."""
    if contact.last_talked_to is None:
        return None
    return diff_for_humans(contact.last_talked_to, now)
