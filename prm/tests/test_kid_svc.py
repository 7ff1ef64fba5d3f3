"""Test kid service: birthdate policies, counters and audit events."""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from prm.dates import utcnow
from prm.models.account import Account
from prm.models.contact import Contact
from prm.models.event import EventSubject
from prm.schemas.relative import RelativeCreate
from prm.services import event_svc, kid_svc
from prm.services.common import RecordNotFound


@pytest.mark.asyncio
async def test_add_kid_with_approximate_age(db: AsyncSession, contact: Contact):
    kid = await kid_svc.add_kid(
        db, contact,
        RelativeCreate(first_name="tom", gender="male", birthdate_approximate="approximate", age=10),
    )

    assert kid.first_name == "Tom"
    assert kid.birthdate == date(utcnow().year - 10, 1, 1)
    assert kid.is_birthdate_approximate == "approximate"
    assert kid.account_id == contact.account_id
    assert contact.number_of_kids == 1
    assert contact.has_kids is True


@pytest.mark.asyncio
async def test_add_kid_exact_and_unknown_birthdates(db: AsyncSession, contact: Contact):
    exact = await kid_svc.add_kid(
        db, contact,
        RelativeCreate(first_name="Ann", birthdate_approximate="exact", birthdate="2012-04-30"),
    )
    unknown = await kid_svc.add_kid(
        db, contact,
        RelativeCreate(first_name="Bea", birthdate_approximate="unknown", birthdate="2012-04-30"),
    )
    assert exact.birthdate == date(2012, 4, 30)
    assert unknown.birthdate is None
    assert contact.number_of_kids == 2
    assert await kid_svc.count_kids(db, contact) == 2


@pytest.mark.asyncio
async def test_add_kid_with_malformed_date_writes_nothing(db: AsyncSession, contact: Contact):
    with pytest.raises(ValueError):
        await kid_svc.add_kid(
            db, contact,
            RelativeCreate(first_name="Ann", birthdate_approximate="exact", birthdate="30/04/2012"),
        )
    assert await kid_svc.count_kids(db, contact) == 0
    assert await event_svc.list_events(db, contact) == []
    assert contact.number_of_kids == 0


@pytest.mark.asyncio
async def test_edit_kid(db: AsyncSession, contact: Contact):
    kid = await kid_svc.add_kid(db, contact, RelativeCreate(first_name="Tom"))

    edited = await kid_svc.edit_kid_by_id(
        db, contact, kid.id,
        RelativeCreate(first_name="thomas", birthdate_approximate="exact", birthdate="2015-02-03"),
    )
    assert edited.id == kid.id
    assert edited.first_name == "Thomas"
    assert edited.birthdate == date(2015, 2, 3)
    assert contact.number_of_kids == 1

    events = await event_svc.list_events(db, contact, subject=EventSubject.of(kid))
    assert sorted(e.nature_of_operation for e in events) == ["create", "update"]


@pytest.mark.asyncio
async def test_delete_last_kid_resets_counters(db: AsyncSession, contact: Contact):
    first = await kid_svc.add_kid(db, contact, RelativeCreate(first_name="Tom"))
    second = await kid_svc.add_kid(db, contact, RelativeCreate(first_name="Ann"))
    assert contact.number_of_kids == 2

    await kid_svc.delete_kid(db, contact, first)
    assert contact.number_of_kids == 1
    assert contact.has_kids is True

    await kid_svc.delete_kid_by_id(db, contact, second.id)
    assert contact.number_of_kids == 0
    assert contact.has_kids is False
    assert await kid_svc.list_kids(db, contact) == []


@pytest.mark.asyncio
async def test_kid_counter_never_goes_negative(db: AsyncSession, contact: Contact):
    kid = await kid_svc.add_kid(db, contact, RelativeCreate(first_name="Tom"))

    # Counter drifted out of sync with the collection
    contact.number_of_kids = 0
    await db.commit()

    await kid_svc.delete_kid(db, contact, kid)
    assert contact.number_of_kids == 0
    assert contact.has_kids is False


@pytest.mark.asyncio
async def test_delete_kid_replaces_history_with_delete_event(db: AsyncSession, contact: Contact):
    kid = await kid_svc.add_kid(db, contact, RelativeCreate(first_name="Tom"))
    await kid_svc.edit_kid(db, contact, kid, RelativeCreate(first_name="Tommy"))
    subject = EventSubject.of(kid)

    await kid_svc.delete_kid(db, contact, kid)

    events = await event_svc.list_events(db, contact, subject=subject)
    assert [e.nature_of_operation for e in events] == ["delete"]


@pytest.mark.asyncio
async def test_foreign_kid_is_not_found(db: AsyncSession, account: Account, contact: Contact):
    stranger = Contact(account_id=account.id, first_name="Other")
    db.add(stranger)
    await db.commit()
    await db.refresh(stranger)
    kid = await kid_svc.add_kid(db, stranger, RelativeCreate(first_name="Zoe"))

    with pytest.raises(RecordNotFound):
        await kid_svc.delete_kid_by_id(db, contact, kid.id)
    with pytest.raises(RecordNotFound):
        await kid_svc.edit_kid(db, contact, kid, RelativeCreate(first_name="Hacked"))
    with pytest.raises(RecordNotFound):
        await kid_svc.get_kid(db, contact, uuid.uuid4())

    assert await kid_svc.count_kids(db, stranger) == 1
    assert kid.first_name == "Zoe"
    assert contact.number_of_kids == 0
    assert await event_svc.list_events(db, contact) == []


@pytest.mark.asyncio
async def test_blank_kid_name_is_rejected_before_writing(db: AsyncSession, contact: Contact):
    with pytest.raises(ValidationError):
        await kid_svc.add_kid(db, contact, RelativeCreate(first_name="   "))
    assert await kid_svc.count_kids(db, contact) == 0
    assert contact.number_of_kids == 0
