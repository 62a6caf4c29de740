# backend/tests/repositories/test_customer_repository.py
from datetime import datetime, timezone

from luz.repositories.factory import RepositoryFactory


def test_find_by_contact_matches_email_or_phone(db, factory, studio):
    by_email = factory.customer(studio, email="a@example.com")
    by_phone = factory.customer(studio, phone="+972501111111")
    repo = RepositoryFactory.create_customer_repository(db)

    assert repo.find_by_contact(studio.id, email="a@example.com").id == by_email.id
    assert repo.find_by_contact(studio.id, phone="+972501111111").id == by_phone.id
    assert repo.find_by_contact(studio.id, email="nobody@example.com") is None
    assert repo.find_by_contact(studio.id) is None


def test_find_by_contact_is_scoped_to_studio(db, factory, studio):
    factory.customer(factory.studio(), email="a@example.com")
    repo = RepositoryFactory.create_customer_repository(db)

    assert repo.find_by_contact(studio.id, email="a@example.com") is None


def test_find_by_contact_can_exclude_a_customer(db, factory, studio):
    customer = factory.customer(studio, email="a@example.com")
    repo = RepositoryFactory.create_customer_repository(db)

    assert repo.find_by_contact(studio.id, email="a@example.com", exclude_id=customer.id) is None


def test_list_with_counts(db, factory, studio):
    older = factory.customer(studio, first_name="Older")
    newer = factory.customer(studio, first_name="Newer")
    older.created_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
    newer.created_at = datetime(2025, 2, 1, tzinfo=timezone.utc)
    db.commit()
    factory.child(older)
    factory.child(older)
    slot = factory.slot(studio, max_participants=5)
    factory.booking(slot, customer=older)

    rows = RepositoryFactory.create_customer_repository(db).list_with_counts(studio.id)

    assert [(c.first_name, children, bookings) for c, children, bookings in rows] == [
        ("Newer", 0, 0),
        ("Older", 2, 1),
    ]


def test_count_all_bookings_includes_children(db, factory, studio):
    customer = factory.customer(studio)
    child = factory.child(customer)
    adult_slot = factory.slot(studio)
    kids_slot = factory.slot(studio, for_children=True)
    factory.booking(adult_slot, customer=customer)
    factory.booking(kids_slot, child=child)
    factory.booking(adult_slot, customer=factory.customer(studio))

    repo = RepositoryFactory.create_customer_repository(db)

    assert repo.count_all_bookings(customer.id) == 2
    assert RepositoryFactory.create_child_repository(db).count_bookings(child.id) == 1


def test_child_lookup_joins_through_customer(db, factory, studio):
    child = factory.child(factory.customer(studio))
    repo = RepositoryFactory.create_child_repository(db)

    assert repo.get_in_studio(child.id, studio.id).id == child.id
    assert repo.get_in_studio(child.id, factory.studio().id) is None
