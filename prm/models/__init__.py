"""PRM models - re-exports all models and Base.metadata."""

from .base import Base, UUIDMixin, TimestampMixin, AccountMixin, RelativeMixin
from .account import Account
from .country import Country
from .contact import Contact
from .kid import Kid
from .significant_other import SignificantOther
from .note import Note
from .event import Event, EventSubject, ObjectType, Operation
from .activity import Activity
from .activity_statistic import ActivityStatistic
from .reminder import Reminder
from .gift import Gift
from .task import Task
from .debt import Debt

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "AccountMixin",
    "RelativeMixin",
    "Account",
    "Country",
    "Contact",
    "Kid",
    "SignificantOther",
    "Note",
    "Event",
    "EventSubject",
    "ObjectType",
    "Operation",
    "Activity",
    "ActivityStatistic",
    "Reminder",
    "Gift",
    "Task",
    "Debt",
]
