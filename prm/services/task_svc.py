"""Task service."""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..dates import utcnow
from ..models.contact import Contact
from ..models.task import STATUS_COMPLETED, STATUS_IN_PROGRESS, Task
from . import event_svc
from .common import get_owned, list_owned


async def list_tasks(
    db: AsyncSession, contact: Contact, *, status: str | None = None
) -> list[Task]:
    criteria = [Task.status == status] if status else []
    return await list_owned(db, Task, contact, *criteria)


async def list_tasks_in_progress(db: AsyncSession, contact: Contact) -> list[Task]:
    return await list_tasks(db, contact, status=STATUS_IN_PROGRESS)


async def list_completed_tasks(db: AsyncSession, contact: Contact) -> list[Task]:
    return await list_tasks(db, contact, status=STATUS_COMPLETED)


async def get_task(db: AsyncSession, contact: Contact, task_id: uuid.UUID) -> Task:
    return await get_owned(db, Task, contact, task_id)


async def add_task(
    db: AsyncSession, contact: Contact, title: str, description: str | None = None
) -> Task:
    task = Task(
        account_id=contact.account_id,
        contact_id=contact.id,
        title=title,
        description=description,
        status=STATUS_IN_PROGRESS,
    )
    return await event_svc.create_audited(db, contact, task)


async def complete_task(db: AsyncSession, contact: Contact, task: Task) -> Task:
    return await event_svc.update_audited(
        db, contact, task, status=STATUS_COMPLETED, completed_at=utcnow()
    )


async def delete_task(db: AsyncSession, contact: Contact, task: Task) -> None:
    await event_svc.delete_audited(db, contact, task)
