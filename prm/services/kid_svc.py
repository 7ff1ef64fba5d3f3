"""Kid service.

Kids keep ``Contact.number_of_kids`` / ``Contact.has_kids`` in step: every
add or delete adjusts both in the same transaction, with an atomic UPDATE,
and the counter never drops below zero.
"""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.contact import Contact
from ..models.event import EventSubject, Operation
from ..models.kid import Kid
from ..schemas.relative import RelativeCreate
from . import event_svc
from .common import adjust_counter, atomic, count_owned, ensure_owned, get_owned, list_owned, refresh_counters

_COUNTERS = ("number_of_kids", "has_kids")


async def list_kids(db: AsyncSession, contact: Contact) -> list[Kid]:
    return await list_owned(db, Kid, contact)


async def count_kids(db: AsyncSession, contact: Contact) -> int:
    return await count_owned(db, Kid, contact)


async def get_kid(db: AsyncSession, contact: Contact, kid_id: uuid.UUID) -> Kid:
    """Raises RecordNotFound unless the kid exists and belongs to ``contact``."""
    return await get_owned(db, Kid, contact, kid_id)


async def add_kid(db: AsyncSession, contact: Contact, data: RelativeCreate) -> Kid:
    birthdate = data.resolve_birthdate()
    kid = Kid(
        account_id=contact.account_id,
        child_of_contact_id=contact.id,
        first_name=data.first_name,
        gender=data.gender,
        is_birthdate_approximate=data.birthdate_approximate,
        birthdate=birthdate,
    )
    async with atomic(db, contact):
        db.add(kid)
        await db.flush()
        contact.has_kids = adjust_counter(contact, "number_of_kids", 1)
        await event_svc.record_event(db, contact, kid, Operation.CREATE)
    await db.refresh(kid)
    await refresh_counters(db, contact, *_COUNTERS)
    return kid


async def edit_kid(
    db: AsyncSession, contact: Contact, kid: Kid, data: RelativeCreate
) -> Kid:
    ensure_owned(contact, kid)
    birthdate = data.resolve_birthdate()
    async with atomic(db, contact, kid):
        kid.first_name = data.first_name
        kid.gender = data.gender
        kid.is_birthdate_approximate = data.birthdate_approximate
        kid.birthdate = birthdate
        await db.flush()
        await event_svc.record_event(db, contact, kid, Operation.UPDATE)
    await db.refresh(kid)
    return kid


async def edit_kid_by_id(
    db: AsyncSession, contact: Contact, kid_id: uuid.UUID, data: RelativeCreate
) -> Kid:
    kid = await get_kid(db, contact, kid_id)
    return await edit_kid(db, contact, kid, data)


async def delete_kid(db: AsyncSession, contact: Contact, kid: Kid) -> None:
    ensure_owned(contact, kid)
    subject = EventSubject.of(kid)
    async with atomic(db, contact, kid):
        await db.delete(kid)
        await event_svc.purge_events(db, contact, subject)
        contact.has_kids = adjust_counter(contact, "number_of_kids", -1)
        await event_svc.record_event(db, contact, subject, Operation.DELETE)
    await refresh_counters(db, contact, *_COUNTERS)


async def delete_kid_by_id(db: AsyncSession, contact: Contact, kid_id: uuid.UUID) -> None:
    kid = await get_kid(db, contact, kid_id)
    await delete_kid(db, contact, kid)
