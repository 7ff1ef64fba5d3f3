"""Significant other service.

A contact has at most one active significant other. Adding or editing one
makes it the active partner and demotes the previous one to ``inactive`` in
the same transaction (most recently activated wins).
"""

from __future__ import annotations

import uuid

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.contact import Contact
from ..models.event import Operation
from ..models.significant_other import STATUS_ACTIVE, STATUS_INACTIVE, SignificantOther
from ..schemas.relative import RelativeCreate
from . import event_svc
from .common import atomic, ensure_owned, get_owned, list_owned


async def list_significant_others(db: AsyncSession, contact: Contact) -> list[SignificantOther]:
    return await list_owned(db, SignificantOther, contact)


async def get_current_significant_other(
    db: AsyncSession, contact: Contact
) -> SignificantOther | None:
    stmt = (
        select(SignificantOther)
        .where(
            SignificantOther.contact_id == contact.id,
            SignificantOther.status == STATUS_ACTIVE,
        )
        .order_by(SignificantOther.updated_at.desc())
        .limit(1)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_significant_other(
    db: AsyncSession, contact: Contact, significant_other_id: uuid.UUID
) -> SignificantOther:
    """Raises RecordNotFound unless it exists and belongs to ``contact``."""
    return await get_owned(db, SignificantOther, contact, significant_other_id)


async def _demote_others(db: AsyncSession, contact: Contact, keep_id: uuid.UUID) -> None:
    await db.execute(
        update(SignificantOther)
        .where(
            SignificantOther.contact_id == contact.id,
            SignificantOther.status == STATUS_ACTIVE,
            SignificantOther.id != keep_id,
        )
        .values(status=STATUS_INACTIVE)
    )


def _apply(significant_other: SignificantOther, data: RelativeCreate) -> None:
    significant_other.first_name = data.first_name
    significant_other.last_name = data.last_name
    significant_other.gender = data.gender
    significant_other.is_birthdate_approximate = data.birthdate_approximate
    significant_other.status = STATUS_ACTIVE


async def add_significant_other(
    db: AsyncSession, contact: Contact, data: RelativeCreate
) -> SignificantOther:
    birthdate = data.resolve_birthdate()
    significant_other = SignificantOther(
        account_id=contact.account_id,
        contact_id=contact.id,
        birthdate=birthdate,
    )
    _apply(significant_other, data)
    async with atomic(db, contact):
        db.add(significant_other)
        await db.flush()
        await _demote_others(db, contact, significant_other.id)
        await event_svc.record_event(db, contact, significant_other, Operation.CREATE)
    await db.refresh(significant_other)
    return significant_other


async def edit_significant_other(
    db: AsyncSession,
    contact: Contact,
    significant_other: SignificantOther,
    data: RelativeCreate,
) -> SignificantOther:
    ensure_owned(contact, significant_other)
    birthdate = data.resolve_birthdate()
    async with atomic(db, contact, significant_other):
        _apply(significant_other, data)
        significant_other.birthdate = birthdate
        await db.flush()
        await _demote_others(db, contact, significant_other.id)
        await event_svc.record_event(db, contact, significant_other, Operation.UPDATE)
    await db.refresh(significant_other)
    return significant_other


async def edit_significant_other_by_id(
    db: AsyncSession,
    contact: Contact,
    significant_other_id: uuid.UUID,
    data: RelativeCreate,
) -> SignificantOther:
    significant_other = await get_significant_other(db, contact, significant_other_id)
    return await edit_significant_other(db, contact, significant_other, data)


async def delete_significant_other(
    db: AsyncSession, contact: Contact, significant_other: SignificantOther
) -> None:
    await event_svc.delete_audited(db, contact, significant_other)


async def delete_significant_other_by_id(
    db: AsyncSession, contact: Contact, significant_other_id: uuid.UUID
) -> None:
    significant_other = await get_significant_other(db, contact, significant_other_id)
    await delete_significant_other(db, contact, significant_other)
