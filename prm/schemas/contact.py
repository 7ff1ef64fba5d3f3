"""Contact schemas."""

from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, Field


class ContactCreate(BaseModel):
    model_config = {"str_strip_whitespace": True}

    first_name: str = Field(min_length=1)
    middle_name: str | None = None
    last_name: str | None = None
    gender: str | None = None
    birthdate: date | None = None
    is_birthdate_approximate: str = "unknown"
    street: str | None = None
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None
    country_id: uuid.UUID | None = None
    email: str | None = None
    phone_number: str | None = None
    twitter_profile_url: str | None = None
    facebook_profile_url: str | None = None
    linkedin_profile_url: str | None = None
    food_preferencies: str | None = None


class ContactUpdate(ContactCreate):
    first_name: str | None = Field(default=None, min_length=1)


class ContactResponse(ContactCreate):
    id: uuid.UUID
    complete_name: str
    initials: str
    age: int | None = None
    default_avatar_color: str | None = None
    number_of_kids: int = 0
    has_kids: bool = False
    number_of_notes: int = 0

    model_config = {"from_attributes": True}
