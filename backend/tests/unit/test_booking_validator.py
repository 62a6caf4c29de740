# backend/tests/unit/test_booking_validator.py
"""
Party resolution for bookings: request shape, party type and studio scoping.
"""

import pytest

from luz.core.config import settings
from luz.core.exceptions import NotFoundException, ValidationException
from luz.models.customer import Child
from luz.schemas.booking import ChildData
from luz.services.booking_validator import BookingValidator, PartyRequest


@pytest.fixture
def validator(db):
    return BookingValidator(db)


class TestRequestShape:
    def test_child_id_with_child_data_is_ambiguous(self, validator, factory, studio):
        slot = factory.slot(studio, for_children=True)
        customer = factory.customer(studio)
        child = factory.child(customer)

        with pytest.raises(ValidationException) as exc_info:
            validator.resolve_party(
                slot,
                PartyRequest(child_id=child.id, child_data=ChildData(first_name="Noa")),
            )
        assert exc_info.value.message.startswith("ambiguous party")

    def test_customer_id_with_child_id_is_ambiguous(self, validator, factory, studio):
        slot = factory.slot(studio, for_children=True)
        customer = factory.customer(studio)
        child = factory.child(customer)

        with pytest.raises(ValidationException) as exc_info:
            validator.resolve_party(
                slot, PartyRequest(customer_id=customer.id, child_id=child.id)
            )
        assert exc_info.value.message.startswith("ambiguous party")

    def test_child_data_without_customer(self, validator, factory, studio):
        slot = factory.slot(studio, for_children=True)

        with pytest.raises(ValidationException) as exc_info:
            validator.resolve_party(slot, PartyRequest(child_data=ChildData(first_name="Noa")))
        assert exc_info.value.message == "customerId required for inline child creation"

    def test_empty_party(self, validator, factory, studio):
        slot = factory.slot(studio)

        with pytest.raises(ValidationException) as exc_info:
            validator.resolve_party(slot, PartyRequest())
        assert exc_info.value.message == "customerId or childId is required"

    def test_shape_is_checked_before_party_type(self, validator, factory, studio):
        adult_slot = factory.slot(studio, for_children=False)
        customer = factory.customer(studio)
        child = factory.child(customer)

        with pytest.raises(ValidationException) as exc_info:
            validator.resolve_party(
                adult_slot, PartyRequest(customer_id=customer.id, child_id=child.id)
            )
        assert exc_info.value.code == "AMBIGUOUS_PARTY"


class TestPartyType:
    def test_child_on_adult_slot(self, validator, factory, studio):
        slot = factory.slot(studio, for_children=False)
        child = factory.child(factory.customer(studio))

        with pytest.raises(ValidationException) as exc_info:
            validator.resolve_party(slot, PartyRequest(child_id=child.id))
        assert exc_info.value.message == "This slot is not for children"

    def test_adult_on_children_slot(self, validator, factory, studio):
        slot = factory.slot(studio, for_children=True)
        customer = factory.customer(studio)

        with pytest.raises(ValidationException) as exc_info:
            validator.resolve_party(slot, PartyRequest(customer_id=customer.id))
        assert exc_info.value.message == "This slot requires a child"


class TestStudioScoping:
    def test_customer_of_other_studio_is_not_found(self, validator, factory, studio):
        slot = factory.slot(studio)
        other = factory.studio()
        foreign_customer = factory.customer(other)

        with pytest.raises(NotFoundException) as exc_info:
            validator.resolve_party(slot, PartyRequest(customer_id=foreign_customer.id))
        assert exc_info.value.message == "Customer not found"

    def test_child_of_other_studio_is_not_found(self, validator, factory, studio):
        slot = factory.slot(studio, for_children=True)
        other = factory.studio()
        foreign_child = factory.child(factory.customer(other))

        with pytest.raises(NotFoundException) as exc_info:
            validator.resolve_party(slot, PartyRequest(child_id=foreign_child.id))
        assert exc_info.value.message == "Child not found"

    def test_invite_child_must_belong_to_invite_customer(self, validator, factory, studio):
        slot = factory.slot(studio, for_children=True)
        invite_customer = factory.customer(studio)
        sibling_family = factory.customer(studio)
        other_child = factory.child(sibling_family)

        with pytest.raises(NotFoundException):
            validator.resolve_party(
                slot,
                PartyRequest(
                    customer_id=invite_customer.id,
                    child_id=other_child.id,
                    customer_implied=True,
                ),
            )


class TestResolution:
    def test_adult_party(self, validator, factory, studio):
        slot = factory.slot(studio)
        customer = factory.customer(studio)

        party = validator.resolve_party(slot, PartyRequest(customer_id=customer.id))

        assert party.customer_id == customer.id
        assert party.child_id is None
        assert party.child_created is False

    def test_existing_child_party(self, validator, factory, studio):
        slot = factory.slot(studio, for_children=True)
        child = factory.child(factory.customer(studio))

        party = validator.resolve_party(slot, PartyRequest(child_id=child.id))

        assert party.child_id == child.id
        assert party.customer_id is None

    def test_inline_child_is_created_under_customer(self, validator, db, factory, studio):
        slot = factory.slot(studio, for_children=True)
        customer = factory.customer(studio)

        party = validator.resolve_party(
            slot,
            PartyRequest(
                customer_id=customer.id,
                child_data=ChildData(first_name="Lia", avatar_key="owl"),
            ),
        )

        assert party.child_created is True
        assert party.customer_id is None
        child = db.get(Child, party.child_id)
        assert child.customer_id == customer.id
        assert child.first_name == "Lia"
        assert child.avatar_key == "owl"

    def test_inline_child_without_avatar_uses_default(self, validator, factory, studio):
        slot = factory.slot(studio, for_children=True)
        customer = factory.customer(studio)

        party = validator.resolve_party(
            slot,
            PartyRequest(customer_id=customer.id, child_data=ChildData(first_name="Lia")),
        )

        assert party.child.avatar_key == settings.default_child_avatar_key
