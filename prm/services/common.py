"""Shared helpers for services working on records owned by a contact."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import case, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.contact import Contact


class RecordNotFound(LookupError):
    """Raised when a record does not exist or is not owned by the given contact."""

    def __init__(self, model: type, record_id: uuid.UUID | None):
        self.model = model
        self.record_id = record_id
        super().__init__(f"{model.__name__} {record_id} not found")


def owner_column(model: type):
    """Foreign key column pointing at the owning contact."""
    if hasattr(model, "child_of_contact_id"):
        return model.child_of_contact_id
    return model.contact_id


def ensure_owned(contact: Contact, record: Any) -> None:
    if record is None or record.contact_id != contact.id:
        raise RecordNotFound(type(record), getattr(record, "id", None))


async def get_owned(
    db: AsyncSession, model: type, contact: Contact, record_id: uuid.UUID
) -> Any:
    stmt = select(model).where(model.id == record_id, owner_column(model) == contact.id)
    record = (await db.execute(stmt)).scalar_one_or_none()
    if record is None:
        raise RecordNotFound(model, record_id)
    return record


async def list_owned(
    db: AsyncSession, model: type, contact: Contact, *criteria, order_by=None
) -> list:
    stmt = select(model).where(owner_column(model) == contact.id, *criteria)
    stmt = stmt.order_by(order_by if order_by is not None else model.created_at.asc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_owned(db: AsyncSession, model: type, contact: Contact, *criteria) -> int:
    stmt = select(func.count()).select_from(model).where(
        owner_column(model) == contact.id, *criteria
    )
    return (await db.execute(stmt)).scalar() or 0


def adjust_counter(contact: Contact, name: str, delta: int):
    """Schedule an atomic ``counter = max(counter + delta, 0)`` for the next flush.

    Returns the SQL expression so callers can derive flags from the same
    pre-update value.
    """
    column = getattr(Contact, name)
    expr = case((column + delta > 0, column + delta), else_=0)
    setattr(contact, name, expr)
    return column + delta > 0


async def refresh_counters(db: AsyncSession, contact: Contact, *names: str) -> None:
    """Reload counters written as SQL expressions, along with updated_at."""
    await db.refresh(contact, attribute_names=[*names, "updated_at"])


@asynccontextmanager
async def atomic(db: AsyncSession, *reload: Any) -> AsyncIterator[AsyncSession]:
    """Commit everything written inside the block at once, or nothing.

    A rollback expires every instance in the session, and expired attributes
    cannot be lazy-loaded under asyncio. The ``reload`` instances (usually the
    contact) are refreshed after a rollback so callers can keep reading them.
    """
    try:
        yield db
        await db.commit()
    except Exception:
        await db.rollback()
        for instance in reload:
            if inspect(instance).persistent:
                await db.refresh(instance)
        raise
