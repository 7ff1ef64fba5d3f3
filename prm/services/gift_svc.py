"""Gift service - gift ideas and gifts offered."""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.contact import Contact
from ..models.gift import Gift
from . import event_svc
from .common import count_owned, get_owned, list_owned


async def list_gifts(db: AsyncSession, contact: Contact) -> list[Gift]:
    return await list_owned(db, Gift, contact)


async def list_gifts_offered(db: AsyncSession, contact: Contact) -> list[Gift]:
    return await list_owned(db, Gift, contact, Gift.has_been_offered.is_(True))


async def list_gift_ideas(db: AsyncSession, contact: Contact) -> list[Gift]:
    return await list_owned(db, Gift, contact, Gift.is_an_idea.is_(True))


async def count_gifts(db: AsyncSession, contact: Contact) -> int:
    return await count_owned(db, Gift, contact)


async def get_gift(db: AsyncSession, contact: Contact, gift_id: uuid.UUID) -> Gift:
    return await get_owned(db, Gift, contact, gift_id)


async def add_gift(
    db: AsyncSession,
    contact: Contact,
    name: str,
    *,
    comment: str | None = None,
    url: str | None = None,
    value_in_dollars: float | None = None,
    offered: bool = False,
) -> Gift:
    gift = Gift(
        account_id=contact.account_id,
        contact_id=contact.id,
        name=name,
        comment=comment,
        url=url,
        value_in_dollars=value_in_dollars,
        is_an_idea=not offered,
        has_been_offered=offered,
    )
    return await event_svc.create_audited(db, contact, gift)


async def offer_gift(db: AsyncSession, contact: Contact, gift: Gift) -> Gift:
    """Turn a gift idea into a gift that has been offered."""
    return await event_svc.update_audited(
        db, contact, gift, is_an_idea=False, has_been_offered=True
    )


async def delete_gift(db: AsyncSession, contact: Contact, gift: Gift) -> None:
    await event_svc.delete_audited(db, contact, gift)
