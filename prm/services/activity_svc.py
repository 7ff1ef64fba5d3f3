"""Activity service - activities done with a contact and their yearly statistics."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import delete, extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dates import create_date_from_format, get_short_date
from ..models.activity import Activity
from ..models.activity_statistic import ActivityStatistic
from ..models.contact import Contact
from . import event_svc
from .common import atomic, count_owned, get_owned, list_owned

log = logging.getLogger(__name__)


async def list_activities(db: AsyncSession, contact: Contact) -> list[Activity]:
    """Activities, most recent first."""
    return await list_owned(
        db, Activity, contact, order_by=Activity.date_it_happened.desc()
    )


async def count_activities(db: AsyncSession, contact: Contact) -> int:
    return await count_owned(db, Activity, contact)


async def get_activity(db: AsyncSession, contact: Contact, activity_id) -> Activity:
    return await get_owned(db, Activity, contact, activity_id)


async def add_activity(
    db: AsyncSession,
    contact: Contact,
    summary: str,
    date_it_happened: date,
    description: str | None = None,
) -> Activity:
    activity = Activity(
        account_id=contact.account_id,
        contact_id=contact.id,
        summary=summary,
        description=description,
        date_it_happened=date_it_happened,
    )
    return await event_svc.create_audited(db, contact, activity)


async def delete_activity(db: AsyncSession, contact: Contact, activity: Activity) -> None:
    await event_svc.delete_audited(db, contact, activity)


async def get_last_activity_date(
    db: AsyncSession,
    contact: Contact,
    timezone: str | None = None,
    locale: str | None = None,
) -> str | None:
    """Short date (``Oct 29, 1981``) of the latest activity, or None."""
    stmt = select(func.max(Activity.date_it_happened)).where(Activity.contact_id == contact.id)
    last = (await db.execute(stmt)).scalar()
    if last is None:
        return None
    moment = create_date_from_format(last, timezone or contact.account.timezone)
    return get_short_date(moment, locale or contact.account.locale)


async def list_statistics(db: AsyncSession, contact: Contact) -> list[ActivityStatistic]:
    return await list_owned(
        db, ActivityStatistic, contact, order_by=ActivityStatistic.year.asc()
    )


async def calculate_activities_statistics(
    db: AsyncSession, contact: Contact
) -> list[ActivityStatistic]:
    """Rebuild the per-year activity counts of a contact from scratch."""
    year = extract("year", Activity.date_it_happened)
    counts_stmt = (
        select(year, func.count())
        .where(Activity.contact_id == contact.id)
        .group_by(year)
        .order_by(year)
    )

    async with atomic(db, contact):
        await db.execute(
            delete(ActivityStatistic).where(ActivityStatistic.contact_id == contact.id)
        )
        rows = (await db.execute(counts_stmt)).all()
        statistics = [
            ActivityStatistic(
                account_id=contact.account_id,
                contact_id=contact.id,
                year=int(row_year),
                count=row_count,
            )
            for row_year, row_count in rows
        ]
        db.add_all(statistics)

    log.debug("rebuilt %d activity statistics for contact %s", len(statistics), contact.id)
    return statistics
