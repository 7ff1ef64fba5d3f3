"""Country reference data."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UUIDMixin


class Country(UUIDMixin, Base):
    __tablename__ = "country"

    iso: Mapped[str] = mapped_column(String(2), unique=True, index=True)
    country: Mapped[str] = mapped_column(String(100))

    def __repr__(self) -> str:
        return f"<Country {self.iso!r}>"
