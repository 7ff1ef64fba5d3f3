"""PRM CLI - local database administration."""

from __future__ import annotations

import asyncio
import json
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .config import settings
from .database import async_session_factory, init_models
from .database import engine as default_engine
from .models import Account, Base
from .schemas.contact import ContactCreate, ContactResponse, ContactUpdate
from .services import activity_svc, contact_svc, event_svc

app = typer.Typer(
    name="prm",
    help="PRM - personal relationship manager",
    no_args_is_help=True,
)
console = Console()

accounts_app = typer.Typer(help="Account management")
contacts_app = typer.Typer(help="Contact management")

app.add_typer(accounts_app, name="accounts")
app.add_typer(contacts_app, name="contacts")

DatabaseOption = typer.Option(None, "--database-url", help="Overrides PRM_DATABASE_URL")


@asynccontextmanager
async def _session(database_url: str | None) -> AsyncIterator[AsyncSession]:
    if not database_url:
        try:
            async with async_session_factory() as session:
                yield session
        finally:
            # Pooled connections are bound to the loop of this asyncio.run call
            await default_engine.dispose()
        return

    engine = create_async_engine(database_url, echo=settings.echo_sql)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with factory() as session:
            yield session
    finally:
        await engine.dispose()


def _parse_id(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        console.print(f"[red]Not a valid id: {value}[/red]")
        raise typer.Exit(1)


def _validated(schema, **values):
    try:
        return schema(**values)
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]{field}: {error['msg']}[/red]")
        raise typer.Exit(1)


async def _require_contact(db: AsyncSession, contact_id: str):
    contact = await contact_svc.get_contact(db, _parse_id(contact_id))
    if contact is None:
        console.print(f"[red]Contact {contact_id} not found[/red]")
        raise typer.Exit(1)
    return contact


@app.command("init-db")
def init_db(database_url: str = DatabaseOption):
    """Create all tables."""

    async def _init():
        if not database_url:
            await init_models()
            await default_engine.dispose()
            return
        engine = create_async_engine(database_url)
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        finally:
            await engine.dispose()

    asyncio.run(_init())
    console.print("[green]Database ready[/green]")


@accounts_app.command("create")
def accounts_create(
    name: str = typer.Argument(..., help="Account name"),
    timezone: str = typer.Option("UTC", "--timezone", "-z", help="IANA timezone"),
    locale: str = typer.Option("en", "--locale", "-l", help="Display locale"),
    database_url: str = DatabaseOption,
):
    """Create an account."""

    async def _create():
        async with _session(database_url) as db:
            account = Account(name=name, timezone=timezone, locale=locale)
            db.add(account)
            await db.commit()
            return account.id

    account_id = asyncio.run(_create())
    console.print(f"[green]Created account[/green] {account_id}")


@contacts_app.command("add")
def contacts_add(
    account_id: str = typer.Argument(..., help="Owning account id"),
    first_name: str = typer.Argument(..., help="First name"),
    last_name: str = typer.Option(None, "--last-name", help="Last name"),
    email: str = typer.Option(None, "--email", help="Email address"),
    database_url: str = DatabaseOption,
):
    """Add a contact to an account."""
    account_uuid = _parse_id(account_id)
    data = _validated(ContactCreate, first_name=first_name, last_name=last_name, email=email)

    async def _add():
        async with _session(database_url) as db:
            if await db.get(Account, account_uuid) is None:
                console.print(f"[red]Account {account_id} not found[/red]")
                raise typer.Exit(1)
            contact = await contact_svc.create_contact(
                db, account_uuid, **data.model_dump(exclude_none=True)
            )
            return contact.id, contact.complete_name

    contact_id, name = asyncio.run(_add())
    console.print(f"[green]Added {name}[/green] {contact_id}")


@contacts_app.command("update")
def contacts_update(
    contact_id: str = typer.Argument(..., help="Contact id"),
    first_name: str = typer.Option(None, "--first-name", help="First name"),
    last_name: str = typer.Option(None, "--last-name", help="Last name"),
    email: str = typer.Option(None, "--email", help="Email address"),
    database_url: str = DatabaseOption,
):
    """Update a contact; only the given fields change."""
    contact_uuid = _parse_id(contact_id)
    changes = {
        key: value
        for key, value in {"first_name": first_name, "last_name": last_name, "email": email}.items()
        if value is not None
    }
    data = _validated(ContactUpdate, **changes)

    async def _update():
        async with _session(database_url) as db:
            contact = await contact_svc.update_contact(
                db, contact_uuid, **data.model_dump(exclude_unset=True)
            )
            return contact.complete_name if contact else None

    name = asyncio.run(_update())
    if name is None:
        console.print(f"[red]Contact {contact_id} not found[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Updated {name}[/green]")


@contacts_app.command("list")
def contacts_list(
    account_id: str = typer.Argument(..., help="Owning account id"),
    search: str = typer.Option(None, "--search", "-s", help="Filter by name, email or phone"),
    limit: int = typer.Option(50, "--limit", "-n", help="Max results"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    database_url: str = DatabaseOption,
):
    """List contacts of an account."""
    account_uuid = _parse_id(account_id)

    async def _list():
        async with _session(database_url) as db:
            contacts, total = await contact_svc.list_contacts(
                db, account_uuid, search=search, limit=limit
            )
            rows = [ContactResponse.model_validate(c).model_dump(mode="json") for c in contacts]
            return rows, total

    rows, total = asyncio.run(_list())

    if json_output:
        console.print_json(json.dumps({"contacts": rows, "total": total}))
        return

    table = Table(title=f"Contacts ({total})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Kids", justify="right")
    table.add_column("Notes", justify="right")
    for row in rows:
        table.add_row(
            row["id"], row["complete_name"], row["email"] or "-",
            str(row["number_of_kids"]), str(row["number_of_notes"]),
        )
    console.print(table)


@contacts_app.command("stats")
def contacts_stats(
    contact_id: str = typer.Argument(..., help="Contact id"),
    database_url: str = DatabaseOption,
):
    """Rebuild and show the yearly activity statistics of a contact."""

    async def _stats():
        async with _session(database_url) as db:
            contact = await _require_contact(db, contact_id)
            stats = await activity_svc.calculate_activities_statistics(db, contact)
            return contact.complete_name, [(s.year, s.count) for s in stats]

    name, stats = asyncio.run(_stats())

    table = Table(title=f"Activities with {name}")
    table.add_column("Year")
    table.add_column("Activities", justify="right")
    for year, count in stats:
        table.add_row(str(year), str(count))
    console.print(table)


@contacts_app.command("events")
def contacts_events(
    contact_id: str = typer.Argument(..., help="Contact id"),
    limit: int = typer.Option(20, "--limit", "-n", help="Max events"),
    database_url: str = DatabaseOption,
):
    """Show the latest audit events of a contact."""

    async def _events():
        async with _session(database_url) as db:
            contact = await _require_contact(db, contact_id)
            events = await event_svc.list_events(db, contact, limit=limit)
            return [
                (e.created_at, e.nature_of_operation, e.object_type, str(e.object_id))
                for e in events
            ]

    events = asyncio.run(_events())

    if not events:
        console.print("[dim]No events[/dim]")
        return

    table = Table(title="Events")
    table.add_column("When", style="dim", no_wrap=True)
    table.add_column("Operation", style="cyan", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Object", overflow="fold")
    for created_at, operation, object_type, object_id in events:
        table.add_row(created_at.strftime("%Y-%m-%d %H:%M:%S"), operation, object_type, object_id)
    console.print(table)


@accounts_app.command("list")
def accounts_list(database_url: str = DatabaseOption):
    """List accounts."""

    async def _list():
        async with _session(database_url) as db:
            result = await db.execute(select(Account).order_by(Account.name))
            return [(str(a.id), a.name, a.timezone) for a in result.scalars().all()]

    table = Table(title="Accounts")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Timezone")
    for row in asyncio.run(_list()):
        table.add_row(*row)
    console.print(table)


if __name__ == "__main__":
    app()
