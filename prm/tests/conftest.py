"""Async test fixtures for PRM tests using SQLite."""

from __future__ import annotations

import uuid

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from prm.models.base import Base
from prm.models.account import Account
from prm.models.contact import Contact


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def account(db: AsyncSession):
    acct = Account(
        id=uuid.uuid4(),
        name="Test Account",
        timezone="UTC",
        locale="en",
    )
    db.add(acct)
    await db.commit()
    await db.refresh(acct)
    return acct


@pytest_asyncio.fixture
async def contact(db: AsyncSession, account: Account):
    person = Contact(account_id=account.id, first_name="Jean", last_name="Dupont")
    db.add(person)
    await db.commit()
    await db.refresh(person)
    return person
