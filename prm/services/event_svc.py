"""Event service - audit trail of create/update/delete operations per contact."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.contact import Contact
from ..models.event import Event, EventSubject, Operation
from .common import atomic, ensure_owned

log = logging.getLogger(__name__)


def _as_subject(subject: EventSubject | Any) -> EventSubject:
    if isinstance(subject, EventSubject):
        return subject
    return EventSubject.of(subject)


async def record_event(
    db: AsyncSession,
    contact: Contact,
    subject: EventSubject | Any,
    operation: Operation | str,
) -> Event:
    """Append an event inside the caller's transaction (flushed, not committed)."""
    subject = _as_subject(subject)
    operation = Operation(operation)
    event = Event(
        account_id=contact.account_id,
        contact_id=contact.id,
        object_type=subject.object_type.value,
        object_id=subject.object_id,
        nature_of_operation=operation.value,
    )
    db.add(event)
    await db.flush()
    log.debug(
        "event %s %s:%s on contact %s",
        operation.value, subject.object_type.value, subject.object_id, contact.id,
    )
    return event


async def log_event(
    db: AsyncSession,
    contact: Contact,
    subject: EventSubject | Any,
    operation: Operation | str,
) -> uuid.UUID:
    """Append an event in its own transaction. Returns the event id."""
    subject = _as_subject(subject)
    operation = Operation(operation)
    async with atomic(db, contact):
        event = await record_event(db, contact, subject, operation)
    return event.id


async def purge_events(db: AsyncSession, contact: Contact, subject: EventSubject | Any) -> int:
    """Delete every event previously logged about ``subject`` (no commit)."""
    subject = _as_subject(subject)
    stmt = delete(Event).where(
        Event.contact_id == contact.id,
        Event.object_type == subject.object_type.value,
        Event.object_id == subject.object_id,
    )
    result = await db.execute(stmt)
    log.debug(
        "purged %s events for %s:%s", result.rowcount,
        subject.object_type.value, subject.object_id,
    )
    return result.rowcount


async def list_events(
    db: AsyncSession,
    contact: Contact,
    *,
    subject: EventSubject | None = None,
    limit: int | None = None,
) -> list[Event]:
    stmt = select(Event).where(Event.contact_id == contact.id)
    if subject is not None:
        stmt = stmt.where(
            Event.object_type == subject.object_type.value,
            Event.object_id == subject.object_id,
        )
    stmt = stmt.order_by(Event.created_at.desc())
    if limit:
        stmt = stmt.limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_audited(db: AsyncSession, contact: Contact, record: Any) -> Any:
    """Insert a contact-owned record and log its creation."""
    if record.id is None:
        record.id = uuid.uuid4()
    subject = EventSubject.of(record)
    async with atomic(db, contact):
        db.add(record)
        await db.flush()
        await record_event(db, contact, subject, Operation.CREATE)
    await db.refresh(record)
    return record


async def update_audited(db: AsyncSession, contact: Contact, record: Any, **changes) -> Any:
    """Apply ``changes`` to a contact-owned record and log the update."""
    ensure_owned(contact, record)
    subject = EventSubject.of(record)
    async with atomic(db, contact, record):
        for key, value in changes.items():
            setattr(record, key, value)
        await db.flush()
        await record_event(db, contact, subject, Operation.UPDATE)
    await db.refresh(record)
    return record


async def delete_audited(db: AsyncSession, contact: Contact, record: Any) -> None:
    """Delete a contact-owned record, replacing its history with one delete event."""
    ensure_owned(contact, record)
    subject = EventSubject.of(record)
    async with atomic(db, contact, record):
        await db.delete(record)
        await purge_events(db, contact, subject)
        await record_event(db, contact, subject, Operation.DELETE)
