# backend/tests/routes/test_customer_routes.py
"""
Customer and child endpoints, including the delete cascade.
"""

from luz.models.booking import Booking
from luz.models.customer import Child, Customer
from luz.models.invite import Invite


class TestCustomerRoutes:
    def test_create_customer(self, client, studio, owner_headers):
        response = client.post(
            f"/studios/{studio.id}/customers",
            json={"firstName": "Dana", "contactEmail": "dana@example.com"},
            headers=owner_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["studio_id"] == studio.id
        assert body["contact_email"] == "dana@example.com"
        assert body["contact_phone"] is None

    def test_duplicate_contact(self, client, factory, studio, owner_headers):
        existing = factory.customer(studio, phone="+972501234567")

        response = client.post(
            f"/studios/{studio.id}/customers",
            json={"firstName": "Other", "contactPhone": "+972501234567"},
            headers=owner_headers,
        )

        assert response.status_code == 409
        problem = response.json()
        assert problem["code"] == "DUPLICATE_CUSTOMER"
        assert problem["details"]["customer"]["id"] == existing.id

    def test_requires_contact(self, client, studio, owner_headers):
        response = client.post(
            f"/studios/{studio.id}/customers", json={"firstName": "Dana"}, headers=owner_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Validation failed"

    def test_invalid_email(self, client, studio, owner_headers):
        response = client.post(
            f"/studios/{studio.id}/customers",
            json={"firstName": "Dana", "contactEmail": "not-an-email"},
            headers=owner_headers,
        )

        assert response.status_code == 400

    def test_stranger_cannot_create(self, client, studio, stranger_headers):
        response = client.post(
            f"/studios/{studio.id}/customers",
            json={"firstName": "Dana", "contactEmail": "dana@example.com"},
            headers=stranger_headers,
        )

        assert response.status_code == 403

    def test_list_with_counts(self, client, factory, studio, owner_headers):
        customer = factory.customer(studio)
        child = factory.child(customer)
        factory.booking(factory.slot(studio, for_children=True), child=child)
        factory.booking(factory.slot(studio), customer=customer)

        response = client.get(f"/studios/{studio.id}/customers", headers=owner_headers)

        assert response.status_code == 200
        [row] = response.json()
        assert row["id"] == customer.id
        assert row["children_count"] == 1
        assert row["bookings_count"] == 1

    def test_customer_detail(self, client, factory, studio, owner_headers):
        customer = factory.customer(studio, first_name="Dana")
        factory.child(customer, first_name="Noa")
        factory.booking(factory.slot(studio), customer=customer)

        response = client.get(f"/customers/{customer.id}", headers=owner_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["studio_slug"] == "sunrise-yoga"
        assert [c["first_name"] for c in body["children"]] == ["Noa"]
        assert body["total_bookings"] == 1

    def test_foreign_customer_is_forbidden(self, client, factory, studio, stranger_headers):
        customer = factory.customer(studio)

        response = client.get(f"/customers/{customer.id}", headers=stranger_headers)

        assert response.status_code == 403

    def test_patch_customer(self, client, factory, studio, owner_headers):
        customer = factory.customer(studio)

        response = client.patch(
            f"/customers/{customer.id}", json={"firstName": "Dina"}, headers=owner_headers
        )

        assert response.status_code == 200
        assert response.json()["first_name"] == "Dina"

    def test_patch_without_fields(self, client, factory, studio, owner_headers):
        customer = factory.customer(studio)

        response = client.patch(f"/customers/{customer.id}", json={}, headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No fields to update"

    def test_patch_into_existing_contact(self, client, factory, studio, owner_headers):
        factory.customer(studio, email="taken@example.com")
        customer = factory.customer(studio)

        response = client.patch(
            f"/customers/{customer.id}",
            json={"contactEmail": "taken@example.com"},
            headers=owner_headers,
        )

        assert response.status_code == 409

    def test_patch_cannot_clear_every_contact(self, client, db, factory, studio, owner_headers):
        customer = factory.customer(studio, email="dana@example.com")

        response = client.patch(
            f"/customers/{customer.id}",
            json={"contactEmail": None, "contactPhone": None},
            headers=owner_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "CONTACT_REQUIRED"
        db.expire_all()
        assert db.get(Customer, customer.id).contact_email == "dana@example.com"

    def test_patch_may_swap_email_for_phone(self, client, factory, studio, owner_headers):
        customer = factory.customer(studio, email="dana@example.com")

        response = client.patch(
            f"/customers/{customer.id}",
            json={"contactEmail": None, "contactPhone": "+15550100"},
            headers=owner_headers,
        )

        assert response.status_code == 200
        assert response.json()["contact_email"] is None
        assert response.json()["contact_phone"] == "+15550100"

    def test_delete_cascades(self, client, db, factory, studio, owner_headers):
        customer = factory.customer(studio, first_name="Dana")
        child = factory.child(customer)
        factory.booking(factory.slot(studio), customer=customer)
        factory.booking(factory.slot(studio, for_children=True), child=child)
        factory.invite(studio, customer)
        customer_id, child_id = customer.id, child.id

        response = client.delete(f"/customers/{customer_id}", headers=owner_headers)

        assert response.status_code == 200
        assert response.json() == {
            "message": "Customer deleted successfully",
            "deleted": {
                "customer_id": customer_id,
                "customer_name": "Dana",
                "children_deleted": 1,
                "bookings_deleted": 2,
            },
        }
        db.expire_all()
        assert db.get(Customer, customer_id) is None
        assert db.get(Child, child_id) is None
        assert db.query(Booking).count() == 0
        assert db.query(Invite).count() == 0
        assert client.get(f"/customers/{customer_id}", headers=owner_headers).status_code == 404
        assert client.get(f"/children/{child_id}", headers=owner_headers).status_code == 404


class TestChildRoutes:
    def test_create_and_list_children(self, client, factory, studio, owner_headers):
        customer = factory.customer(studio)

        created = client.post(
            f"/customers/{customer.id}/children",
            json={"firstName": "Noa", "avatarKey": "owl"},
            headers=owner_headers,
        )
        assert created.status_code == 201
        assert created.json()["customer_id"] == customer.id

        listed = client.get(f"/customers/{customer.id}/children", headers=owner_headers)
        assert listed.status_code == 200
        assert listed.json()[0]["bookings_count"] == 0

    def test_child_requires_avatar(self, client, factory, studio, owner_headers):
        customer = factory.customer(studio)

        response = client.post(
            f"/customers/{customer.id}/children", json={"firstName": "Noa"}, headers=owner_headers
        )

        assert response.status_code == 400

    def test_child_detail(self, client, factory, studio, owner_headers):
        customer = factory.customer(studio, first_name="Dana", phone="+972500000000")
        child = factory.child(customer, first_name="Noa")

        response = client.get(f"/children/{child.id}", headers=owner_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["customer_name"] == "Dana"
        assert body["contact_phone"] == "+972500000000"
        assert body["studio_name"] == studio.name
        assert body["total_bookings"] == 0

    def test_patch_child(self, client, factory, studio, owner_headers):
        child = factory.child(factory.customer(studio))

        response = client.patch(
            f"/children/{child.id}", json={"avatarKey": "bear"}, headers=owner_headers
        )

        assert response.status_code == 200
        assert response.json()["avatar_key"] == "bear"

    def test_delete_child(self, client, db, factory, studio, owner_headers):
        child = factory.child(factory.customer(studio), first_name="Noa")
        factory.booking(factory.slot(studio, for_children=True), child=child)
        child_id = child.id

        response = client.delete(f"/children/{child_id}", headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["deleted"] == {
            "child_id": child_id,
            "child_name": "Noa",
            "bookings_deleted": 1,
        }
        db.expire_all()
        assert db.query(Booking).count() == 0

    def test_malformed_child_id(self, client, owner_headers):
        response = client.get("/children/123", headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid child ID"
