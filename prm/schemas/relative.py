"""Input schema for kids and significant others."""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from ..dates import approximate_birthdate, parse_ymd
from ..models.base import ucfirst

BirthdateApproximation = Literal["exact", "approximate", "unknown"]


class RelativeCreate(BaseModel):
    """Name, gender and birthdate of a relative as entered by the user.

    ``birthdate_approximate`` selects how the birthdate is derived:

    * ``approximate``: only ``age`` is known; born on January 1st of
      (current year - age).
    * ``unknown``: no birthdate is stored.
    * ``exact``: ``birthdate`` holds a ``YYYY-MM-DD`` string.
    """

    first_name: str = Field(min_length=1)
    last_name: str | None = None
    gender: str | None = None
    birthdate_approximate: BirthdateApproximation = "unknown"
    birthdate: str | None = None
    age: int | None = Field(default=None, ge=0)

    @field_validator("first_name")
    @classmethod
    def _capitalize(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("first name must not be blank")
        return ucfirst(value)

    def resolve_birthdate(self, today: date | None = None) -> date | None:
        """Raises ValueError when the selected policy lacks or cannot parse its input."""
        if self.birthdate_approximate == "approximate":
            if self.age is None:
                raise ValueError("age is required for an approximate birthdate")
            return approximate_birthdate(self.age, today)
        if self.birthdate_approximate == "unknown":
            return None
        if self.birthdate is None:
            raise ValueError("birthdate is required for an exact birthdate")
        return parse_ymd(self.birthdate)
