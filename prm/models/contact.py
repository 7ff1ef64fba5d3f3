"""Contact model - the aggregate root for everything known about a person."""

from __future__ import annotations

import re
import uuid
from datetime import date, datetime
from urllib.parse import quote_plus

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from ..dates import utcnow, years_between
from .base import Base, UUIDMixin, TimestampMixin, AccountMixin, blank_to_none

_INITIAL_RE = re.compile(r"(?:(?<=\s)|^)[^\W_]")

BIRTHDATE_EXACT = "exact"
BIRTHDATE_APPROXIMATE = "approximate"
BIRTHDATE_UNKNOWN = "unknown"


class Contact(UUIDMixin, TimestampMixin, AccountMixin, Base):
    __tablename__ = "contact"
    __table_args__ = (
        Index("ix_contact_account_last_name", "account_id", "last_name"),
    )

    first_name: Mapped[str] = mapped_column(String(100))
    middle_name: Mapped[str | None] = mapped_column(String(100), default=None)
    last_name: Mapped[str | None] = mapped_column(String(100), default=None)
    gender: Mapped[str | None] = mapped_column(String(20), default=None)

    birthdate: Mapped[date | None] = mapped_column(Date, default=None)
    is_birthdate_approximate: Mapped[str] = mapped_column(String(20), default=BIRTHDATE_UNKNOWN)

    street: Mapped[str | None] = mapped_column(String(255), default=None)
    city: Mapped[str | None] = mapped_column(String(100), default=None)
    province: Mapped[str | None] = mapped_column(String(100), default=None)
    postal_code: Mapped[str | None] = mapped_column(String(20), default=None)
    country_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("country.id", ondelete="SET NULL"), default=None
    )

    email: Mapped[str | None] = mapped_column(String(255), default=None, index=True)
    phone_number: Mapped[str | None] = mapped_column(String(50), default=None)
    twitter_profile_url: Mapped[str | None] = mapped_column(String(255), default=None)
    facebook_profile_url: Mapped[str | None] = mapped_column(String(255), default=None)
    linkedin_profile_url: Mapped[str | None] = mapped_column(String(255), default=None)
    food_preferencies: Mapped[str | None] = mapped_column(Text, default=None)

    default_avatar_color: Mapped[str | None] = mapped_column(String(7), default=None)
    has_avatar: Mapped[bool] = mapped_column(Boolean, default=False)
    avatar_file_name: Mapped[str | None] = mapped_column(String(255), default=None)
    last_talked_to: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)

    # Denormalized counters, maintained with atomic UPDATEs by the services
    number_of_kids: Mapped[int] = mapped_column(Integer, default=0)
    has_kids: Mapped[bool] = mapped_column(Boolean, default=False)
    number_of_notes: Mapped[int] = mapped_column(Integer, default=0)

    # Many-to-one relations are loaded with the contact; owned collections are
    # only declared for delete cascades and are queried through the services.
    account: Mapped["Account"] = relationship(back_populates="contacts", lazy="joined")  # noqa: F821
    country: Mapped["Country | None"] = relationship(lazy="joined")  # noqa: F821

    kids: Mapped[list["Kid"]] = relationship(  # noqa: F821
        back_populates="parent", cascade="all, delete-orphan"
    )
    significant_others: Mapped[list["SignificantOther"]] = relationship(  # noqa: F821
        back_populates="contact", cascade="all, delete-orphan"
    )
    notes: Mapped[list["Note"]] = relationship(  # noqa: F821
        back_populates="contact", cascade="all, delete-orphan"
    )
    events: Mapped[list["Event"]] = relationship(  # noqa: F821
        back_populates="contact", cascade="all, delete-orphan"
    )
    activities: Mapped[list["Activity"]] = relationship(  # noqa: F821
        back_populates="contact", cascade="all, delete-orphan"
    )
    activity_statistics: Mapped[list["ActivityStatistic"]] = relationship(  # noqa: F821
        back_populates="contact", cascade="all, delete-orphan"
    )
    reminders: Mapped[list["Reminder"]] = relationship(  # noqa: F821
        back_populates="contact", cascade="all, delete-orphan"
    )
    gifts: Mapped[list["Gift"]] = relationship(  # noqa: F821
        back_populates="contact", cascade="all, delete-orphan"
    )
    tasks: Mapped[list["Task"]] = relationship(  # noqa: F821
        back_populates="contact", cascade="all, delete-orphan"
    )
    debts: Mapped[list["Debt"]] = relationship(  # noqa: F821
        back_populates="contact", cascade="all, delete-orphan"
    )

    @validates(
        "middle_name", "last_name", "gender", "street", "city", "province",
        "postal_code", "email", "phone_number", "twitter_profile_url",
        "facebook_profile_url", "linkedin_profile_url", "food_preferencies",
        "avatar_file_name",
    )
    def _validate_optional_text(self, key: str, value: str | None) -> str | None:
        return blank_to_none(value)

    @property
    def complete_name(self) -> str:
        parts = [p for p in (self.first_name, self.middle_name, self.last_name) if p is not None]
        return " ".join(parts)

    @property
    def initials(self) -> str:
        """First character of every word of the complete name, used for avatars."""
        return "".join(_INITIAL_RE.findall(self.complete_name))

    @property
    def age(self) -> int | None:
        if self.birthdate is None:
            return None
        return years_between(self.birthdate, utcnow().date())

    @property
    def birthdate_is_approximate(self) -> bool | str:
        """True for unknown birthdates, False for exact ones, raw value otherwise."""
        flag = self.is_birthdate_approximate
        if flag == BIRTHDATE_UNKNOWN:
            return True
        if flag == BIRTHDATE_EXACT:
            return False
        return flag

    @property
    def partial_address(self) -> str | None:
        """Address as ``City, Province``; None without a city."""
        if self.city is None:
            return None
        if self.province is not None:
            return f"{self.city}, {self.province}"
        return self.city

    @property
    def country_name(self) -> str | None:
        return self.country.country if self.country else None

    @property
    def country_iso(self) -> str | None:
        return self.country.iso if self.country else None

    @property
    def full_address(self) -> str | None:
        parts = [
            p for p in (self.street, self.city, self.province, self.postal_code, self.country_name)
            if p is not None
        ]
        return ", ".join(parts) or None

    @property
    def google_map_address(self) -> str:
        return f"https://www.google.ca/maps/place/{quote_plus(self.full_address or '')}"

    @property
    def avatar_color(self) -> str | None:
        return self.default_avatar_color

    def __repr__(self) -> str:
        return f"<Contact {self.complete_name!r}>"
