"""Test note service."""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from prm.models.account import Account
from prm.models.contact import Contact
from prm.models.event import EventSubject
from prm.services import event_svc, note_svc
from prm.services.common import RecordNotFound


@pytest.mark.asyncio
async def test_add_and_list_notes(db: AsyncSession, contact: Contact):
    await note_svc.add_note(db, contact, "Met at the conference")
    await note_svc.add_note(db, contact, "Plays the cello")

    notes = await note_svc.list_notes(db, contact)
    assert {n.body for n in notes} == {"Met at the conference", "Plays the cello"}
    assert contact.number_of_notes == 2
    assert await note_svc.count_notes(db, contact) == 2


@pytest.mark.asyncio
async def test_edit_note_logs_update(db: AsyncSession, contact: Contact):
    note = await note_svc.add_note(db, contact, "Draft")
    edited = await note_svc.edit_note_by_id(db, contact, note.id, "Final")
    assert edited.body == "Final"
    assert contact.number_of_notes == 1

    events = await event_svc.list_events(db, contact, subject=EventSubject.of(note))
    assert sorted(e.nature_of_operation for e in events) == ["create", "update"]


@pytest.mark.asyncio
async def test_delete_note(db: AsyncSession, contact: Contact):
    note = await note_svc.add_note(db, contact, "Temporary")
    subject = EventSubject.of(note)

    await note_svc.delete_note_by_id(db, contact, note.id)

    assert contact.number_of_notes == 0
    assert await note_svc.list_notes(db, contact) == []
    events = await event_svc.list_events(db, contact, subject=subject)
    assert [e.nature_of_operation for e in events] == ["delete"]


@pytest.mark.asyncio
async def test_note_counter_clamped_at_zero(db: AsyncSession, contact: Contact):
    note = await note_svc.add_note(db, contact, "Temporary")
    contact.number_of_notes = 0
    await db.commit()

    await note_svc.delete_note(db, contact, note)
    assert contact.number_of_notes == 0


@pytest.mark.asyncio
async def test_foreign_note_is_not_found(db: AsyncSession, account: Account, contact: Contact):
    stranger = Contact(account_id=account.id, first_name="Other")
    db.add(stranger)
    await db.commit()
    await db.refresh(stranger)
    note = await note_svc.add_note(db, stranger, "Private")

    with pytest.raises(RecordNotFound):
        await note_svc.delete_note_by_id(db, contact, note.id)
    with pytest.raises(RecordNotFound):
        await note_svc.edit_note(db, contact, note, "Overwritten")

    assert await note_svc.count_notes(db, stranger) == 1
    assert stranger.number_of_notes == 1
    assert contact.number_of_notes == 0
