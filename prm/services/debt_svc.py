"""Debt service - money owed between the user and a contact."""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.contact import Contact
from ..models.debt import Debt
from . import event_svc
from .common import count_owned, get_owned, list_owned


async def list_debts(db: AsyncSession, contact: Contact) -> list[Debt]:
    return await list_owned(db, Debt, contact)


async def has_debt(db: AsyncSession, contact: Contact) -> bool:
    """True when any debt is recorded, whichever side owes it."""
    return await count_owned(db, Debt, contact) != 0


async def get_debt(db: AsyncSession, contact: Contact, debt_id: uuid.UUID) -> Debt:
    return await get_owned(db, Debt, contact, debt_id)


async def add_debt(
    db: AsyncSession,
    contact: Contact,
    amount: float,
    *,
    contact_owes: bool = True,
    reason: str | None = None,
) -> Debt:
    debt = Debt(
        account_id=contact.account_id,
        contact_id=contact.id,
        in_debt="yes" if contact_owes else "no",
        amount=amount,
        reason=reason,
    )
    return await event_svc.create_audited(db, contact, debt)


async def delete_debt(db: AsyncSession, contact: Contact, debt: Debt) -> None:
    await event_svc.delete_audited(db, contact, debt)
