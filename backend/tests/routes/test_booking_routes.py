# backend/tests/routes/test_booking_routes.py
"""
Operator booking endpoints end to end: HTTP -> service -> SQLite.
"""

from luz.core.ulid_helper import generate_ulid
from luz.models.booking import Booking, BookingStatus


def _problem(response):
    assert response.headers["content-type"].startswith("application/problem+json")
    return response.json()


class TestCreateBookingRoute:
    def test_books_until_full_then_conflict(self, client, factory, studio, owner_headers):
        slot = factory.slot(studio, max_participants=1)
        first = factory.customer(studio)
        second = factory.customer(studio)

        created = client.post(
            "/bookings", json={"slotId": slot.id, "customerId": first.id}, headers=owner_headers
        )
        assert created.status_code == 201
        body = created.json()
        assert body["status"] == "CONFIRMED"
        assert body["paid"] is False
        assert body["slot_id"] == slot.id
        assert body["customer_id"] == first.id

        rejected = client.post(
            "/bookings", json={"slotId": slot.id, "customerId": second.id}, headers=owner_headers
        )
        assert rejected.status_code == 409
        problem = _problem(rejected)
        assert problem["detail"] == "Slot is fully booked"
        assert problem["code"] == "CAPACITY_REACHED"
        assert problem["details"]["max_participants"] == 1

    def test_inline_child(self, client, factory, studio, owner_headers):
        slot = factory.slot(studio, for_children=True)
        customer = factory.customer(studio)

        response = client.post(
            "/bookings",
            json={
                "slotId": slot.id,
                "customerId": customer.id,
                "childData": {"firstName": "Noa", "avatarKey": "fox"},
            },
            headers=owner_headers,
        )

        assert response.status_code == 201
        assert response.json()["child_id"]
        assert response.json()["customer_id"] is None

    def test_ambiguous_party(self, client, factory, studio, owner_headers):
        slot = factory.slot(studio, for_children=True)
        customer = factory.customer(studio)
        child = factory.child(customer)

        response = client.post(
            "/bookings",
            json={"slotId": slot.id, "customerId": customer.id, "childId": child.id},
            headers=owner_headers,
        )

        assert response.status_code == 400
        assert _problem(response)["detail"].startswith("ambiguous party")

    def test_missing_party(self, client, factory, studio, owner_headers):
        slot = factory.slot(studio)

        response = client.post("/bookings", json={"slotId": slot.id}, headers=owner_headers)

        assert response.status_code == 400
        assert _problem(response)["detail"] == "customerId or childId is required"

    def test_unknown_field_is_rejected(self, client, factory, studio, owner_headers):
        slot = factory.slot(studio)
        customer = factory.customer(studio)

        response = client.post(
            "/bookings",
            json={"slotId": slot.id, "customerId": customer.id, "status": "CANCELLED"},
            headers=owner_headers,
        )

        assert response.status_code == 400
        problem = _problem(response)
        assert problem["detail"] == "Validation failed"
        assert problem["errors"][0]["field"] == "status"

    def test_missing_slot_id(self, client, owner_headers):
        response = client.post("/bookings", json={}, headers=owner_headers)

        assert response.status_code == 400
        assert _problem(response)["errors"][0]["field"] == "slotId"

    def test_requires_authentication(self, client, factory, studio):
        slot = factory.slot(studio)

        response = client.post("/bookings", json={"slotId": slot.id, "customerId": "x"})

        assert response.status_code == 401
        assert _problem(response)["detail"] == "Not authenticated"

    def test_invalid_token(self, client):
        response = client.get("/bookings", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401
        assert _problem(response)["detail"] == "Could not validate credentials"

    def test_other_studio_slot_looks_missing(self, client, factory, studio, stranger_headers):
        slot = factory.slot(studio)
        customer = factory.customer(studio)

        response = client.post(
            "/bookings",
            json={"slotId": slot.id, "customerId": customer.id},
            headers=stranger_headers,
        )

        assert response.status_code == 404
        assert _problem(response)["detail"] == "Slot not found or not available"
        assert _problem(response)["code"] == "SLOT_NOT_FOUND"


class TestBookingLifecycleRoutes:
    def test_list_and_filter(self, client, factory, studio, owner_headers):
        slot = factory.slot(studio, max_participants=5)
        customer = factory.customer(studio)
        booking = factory.booking(slot, customer=customer)
        factory.booking(slot, customer=factory.customer(studio), status=BookingStatus.CANCELLED)

        response = client.get(
            "/bookings",
            params={"customerId": customer.id, "status": "CONFIRMED"},
            headers=owner_headers,
        )

        assert response.status_code == 200
        assert [b["id"] for b in response.json()] == [booking.id]

    def test_list_limit_is_bounded(self, client, owner_headers):
        response = client.get("/bookings", params={"limit": 500}, headers=owner_headers)

        assert response.status_code == 400

    def test_list_rejects_unknown_status(self, client, owner_headers):
        response = client.get("/bookings", params={"status": "LOST"}, headers=owner_headers)

        assert response.status_code == 400

    def test_get_booking_details(self, client, factory, studio, owner_headers):
        slot = factory.slot(studio, title="Evening Flow")
        customer = factory.customer(studio, first_name="Dana", email="dana@example.com")
        booking = factory.booking(slot, customer=customer)

        response = client.get(f"/bookings/{booking.id}", headers=owner_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["slot_title"] == "Evening Flow"
        assert body["customer_name"] == "Dana"
        assert body["contact_email"] == "dana@example.com"
        assert body["price"] == 50.0

    def test_malformed_booking_id(self, client, owner_headers):
        response = client.get("/bookings/not-a-ulid", headers=owner_headers)

        assert response.status_code == 400
        assert _problem(response)["detail"] == "Invalid booking ID"

    def test_unknown_booking(self, client, owner_headers):
        response = client.get(f"/bookings/{generate_ulid()}", headers=owner_headers)

        assert response.status_code == 404
        assert _problem(response)["detail"] == "Booking not found"

    def test_foreign_booking_looks_missing(self, client, factory, studio, stranger_headers):
        booking = factory.booking(factory.slot(studio), customer=factory.customer(studio))

        response = client.get(f"/bookings/{booking.id}", headers=stranger_headers)

        assert response.status_code == 404

    def test_update_status(self, client, factory, studio, owner_headers):
        booking = factory.booking(factory.slot(studio), customer=factory.customer(studio))

        response = client.patch(
            f"/bookings/{booking.id}/status", json={"status": "NO_SHOW"}, headers=owner_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "NO_SHOW"

    def test_update_status_rejects_unknown_value(self, client, factory, studio, owner_headers):
        booking = factory.booking(factory.slot(studio), customer=factory.customer(studio))

        response = client.patch(
            f"/bookings/{booking.id}/status", json={"status": "DONE"}, headers=owner_headers
        )

        assert response.status_code == 400

    def test_pay_twice(self, client, factory, studio, owner_headers):
        booking = factory.booking(factory.slot(studio), customer=factory.customer(studio))

        first = client.patch(
            f"/bookings/{booking.id}/payment",
            json={"paidMethod": "cash", "paidAt": "2025-03-01T10:00:00Z"},
            headers=owner_headers,
        )
        assert first.status_code == 200
        assert first.json()["paid"] is True
        assert first.json()["paid_method"] == "cash"
        assert first.json()["paid_at"].startswith("2025-03-01T10:00:00")

        second = client.patch(
            f"/bookings/{booking.id}/payment", json={"paidMethod": "bit"}, headers=owner_headers
        )
        assert second.status_code == 400
        assert _problem(second)["detail"] == "Booking is already marked as paid"

    def test_unknown_payment_method(self, client, factory, studio, owner_headers):
        booking = factory.booking(factory.slot(studio), customer=factory.customer(studio))

        response = client.patch(
            f"/bookings/{booking.id}/payment", json={"paidMethod": "card"}, headers=owner_headers
        )

        assert response.status_code == 400

    def test_delete_booking(self, client, db, factory, studio, owner_headers):
        slot = factory.slot(studio)
        booking = factory.booking(slot, customer=factory.customer(studio))
        booking_id = booking.id

        response = client.delete(f"/bookings/{booking_id}", headers=owner_headers)

        assert response.status_code == 200
        assert response.json() == {
            "message": "Booking deleted successfully",
            "deleted": {"booking_id": booking_id, "slot_id": slot.id},
        }
        db.expire_all()
        assert db.get(Booking, booking_id) is None
        assert client.get(f"/bookings/{booking_id}", headers=owner_headers).status_code == 404
