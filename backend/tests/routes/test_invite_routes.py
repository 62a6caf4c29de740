# backend/tests/routes/test_invite_routes.py
from datetime import datetime, timedelta, timezone

from luz.core.ulid_helper import generate_ulid


class TestCreateInviteRoute:
    def test_create_invite(self, client, studio, owner_headers):
        response = client.post(
            "/invites",
            json={"studioId": studio.id, "customer": {"firstName": "Maya", "email": "maya@example.com"}},
            headers=owner_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert len(body["short_hash"]) == 16
        assert body["invite_url"] == f"/luz/sunrise-yoga/{body['short_hash']}"
        assert body["studio_id"] == studio.id

    def test_customer_needs_contact(self, client, studio, owner_headers):
        response = client.post(
            "/invites",
            json={"studioId": studio.id, "customer": {"firstName": "Maya"}},
            headers=owner_headers,
        )

        assert response.status_code == 400

    def test_unknown_studio(self, client, owner_headers):
        response = client.post(
            "/invites",
            json={"studioId": generate_ulid(), "customer": {"firstName": "Maya", "phone": "+1555"}},
            headers=owner_headers,
        )

        assert response.status_code == 404

    def test_requires_authentication(self, client, studio):
        response = client.post(
            "/invites",
            json={"studioId": studio.id, "customer": {"firstName": "Maya", "phone": "+1555"}},
        )

        assert response.status_code == 401


class TestInviteBookingRoute:
    def test_book_through_invite(self, client, factory, studio):
        customer = factory.customer(studio)
        invite = factory.invite(studio, customer)
        slot = factory.slot(studio)

        response = client.post(
            f"/public/invites/{invite.short_hash}/bookings", json={"slotId": slot.id}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["customer_id"] == customer.id
        assert body["status"] == "CONFIRMED"

    def test_book_child_through_invite(self, client, factory, studio):
        invite = factory.invite(studio, factory.customer(studio))
        slot = factory.slot(studio, for_children=True)

        response = client.post(
            f"/public/invites/{invite.short_hash}/bookings",
            json={"slotId": slot.id, "child": {"firstName": "Tom"}},
        )

        assert response.status_code == 201
        assert response.json()["child_id"]

    def test_expired_invite(self, client, factory, studio):
        invite = factory.invite(
            studio,
            factory.customer(studio),
            expires_at=datetime.now(timezone.utc) - timedelta(days=1),
        )
        slot = factory.slot(studio)

        response = client.post(
            f"/public/invites/{invite.short_hash}/bookings", json={"slotId": slot.id}
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Invite not found or expired"

    def test_unknown_invite(self, client, factory, studio):
        slot = factory.slot(studio)

        response = client.post("/public/invites/0000000000000000/bookings", json={"slotId": slot.id})

        assert response.status_code == 404
        assert response.json()["detail"] == "Invite not found or expired"

    def test_full_slot(self, client, factory, studio):
        invite = factory.invite(studio, factory.customer(studio))
        slot = factory.slot(studio, max_participants=1)
        factory.booking(slot, customer=factory.customer(studio))

        response = client.post(
            f"/public/invites/{invite.short_hash}/bookings", json={"slotId": slot.id}
        )

        assert response.status_code == 409
        assert response.json()["code"] == "CAPACITY_REACHED"

    def test_customer_id_is_not_accepted(self, client, factory, studio):
        invite = factory.invite(studio, factory.customer(studio))
        slot = factory.slot(studio)

        response = client.post(
            f"/public/invites/{invite.short_hash}/bookings",
            json={"slotId": slot.id, "customerId": generate_ulid()},
        )

        assert response.status_code == 400
