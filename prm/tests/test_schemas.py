"""Test input and output schemas, and birthdate resolution."""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from pydantic import ValidationError

from prm.models.contact import Contact
from prm.schemas.contact import ContactCreate, ContactResponse, ContactUpdate
from prm.schemas.relative import RelativeCreate


def test_first_name_is_capitalized():
    assert RelativeCreate(first_name="tom").first_name == "Tom"
    assert RelativeCreate(first_name="mcKenzie").first_name == "McKenzie"


def test_rejects_blank_first_name():
    with pytest.raises(ValidationError):
        RelativeCreate(first_name="   ")
    assert RelativeCreate(first_name="  tom ").first_name == "Tom"


def test_rejects_empty_name_and_unknown_policy():
    with pytest.raises(ValidationError):
        RelativeCreate(first_name="")
    with pytest.raises(ValidationError):
        RelativeCreate(first_name="Tom", birthdate_approximate="maybe")
    with pytest.raises(ValidationError):
        RelativeCreate(first_name="Tom", birthdate_approximate="approximate", age=-1)


def test_resolve_birthdate_policies():
    today = date(2024, 8, 15)

    approximate = RelativeCreate(first_name="Tom", birthdate_approximate="approximate", age=10)
    assert approximate.resolve_birthdate(today) == date(2014, 1, 1)

    unknown = RelativeCreate(first_name="Tom", birthdate_approximate="unknown", birthdate="2014-05-05")
    assert unknown.resolve_birthdate(today) is None

    exact = RelativeCreate(first_name="Tom", birthdate_approximate="exact", birthdate="2014-05-05")
    assert exact.resolve_birthdate(today) == date(2014, 5, 5)


def test_resolve_birthdate_rejects_malformed_or_missing_input():
    with pytest.raises(ValueError):
        RelativeCreate(first_name="Tom", birthdate_approximate="exact", birthdate="05/05/2014").resolve_birthdate()
    with pytest.raises(ValueError):
        RelativeCreate(first_name="Tom", birthdate_approximate="exact").resolve_birthdate()
    with pytest.raises(ValueError):
        RelativeCreate(first_name="Tom", birthdate_approximate="approximate").resolve_birthdate()


def test_contact_create_requires_first_name():
    with pytest.raises(ValidationError):
        ContactCreate(first_name="")
    assert ContactCreate(first_name="Jean").is_birthdate_approximate == "unknown"


def test_contact_update_tracks_given_fields():
    update = ContactUpdate(last_name="Dupont")
    assert update.model_dump(exclude_unset=True) == {"last_name": "Dupont"}


def test_contact_response_from_model():
    contact = Contact(
        first_name="Jean", middle_name="Paul", last_name="Dupont",
        is_birthdate_approximate="unknown", number_of_kids=2, has_kids=True, number_of_notes=0,
    )
    contact.id = uuid.uuid4()

    response = ContactResponse.model_validate(contact)

    assert response.complete_name == "Jean Paul Dupont"
    assert response.initials == "JPD"
    assert response.number_of_kids == 2
    assert response.age is None
