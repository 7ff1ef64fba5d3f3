"""Note service."""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.contact import Contact
from ..models.event import EventSubject, Operation
from ..models.note import Note
from . import event_svc
from .common import adjust_counter, atomic, count_owned, ensure_owned, get_owned, list_owned, refresh_counters


async def list_notes(db: AsyncSession, contact: Contact) -> list[Note]:
    return await list_owned(db, Note, contact, order_by=Note.created_at.desc())


async def count_notes(db: AsyncSession, contact: Contact) -> int:
    return await count_owned(db, Note, contact)


async def get_note(db: AsyncSession, contact: Contact, note_id: uuid.UUID) -> Note:
    return await get_owned(db, Note, contact, note_id)


async def add_note(db: AsyncSession, contact: Contact, body: str) -> Note:
    note = Note(account_id=contact.account_id, contact_id=contact.id, body=body)
    async with atomic(db, contact):
        db.add(note)
        await db.flush()
        adjust_counter(contact, "number_of_notes", 1)
        await event_svc.record_event(db, contact, note, Operation.CREATE)
    await db.refresh(note)
    await refresh_counters(db, contact, "number_of_notes")
    return note


async def edit_note(db: AsyncSession, contact: Contact, note: Note, body: str) -> Note:
    return await event_svc.update_audited(db, contact, note, body=body)


async def edit_note_by_id(
    db: AsyncSession, contact: Contact, note_id: uuid.UUID, body: str
) -> Note:
    note = await get_note(db, contact, note_id)
    return await edit_note(db, contact, note, body)


async def delete_note(db: AsyncSession, contact: Contact, note: Note) -> None:
    ensure_owned(contact, note)
    subject = EventSubject.of(note)
    async with atomic(db, contact, note):
        await db.delete(note)
        adjust_counter(contact, "number_of_notes", -1)
        await event_svc.purge_events(db, contact, subject)
        await event_svc.record_event(db, contact, subject, Operation.DELETE)
    await refresh_counters(db, contact, "number_of_notes")


async def delete_note_by_id(db: AsyncSession, contact: Contact, note_id: uuid.UUID) -> None:
    note = await get_note(db, contact, note_id)
    await delete_note(db, contact, note)
