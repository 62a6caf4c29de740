# backend/tests/routes/test_health_routes.py
import pytest

from luz.middleware.request_logging import normalize_path


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["timestamp"].endswith("Z")


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-abc"})

    assert response.headers["X-Request-ID"] == "req-abc"


def test_request_id_is_generated_and_reported_in_errors(client):
    response = client.get("/bookings")

    request_id = response.headers["X-Request-ID"]
    assert request_id
    assert response.json()["request_id"] == request_id


def test_metrics_exposition(client):
    client.get("/public/nowhere/slots", params={"week": "2025-11"})

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert b"luz_http_requests_total" in response.content
    assert b'endpoint="/public/nowhere/slots"' in response.content


def test_unknown_route_is_problem_json(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["instance"] == "/nope"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("/bookings/01ARZ3NDEKTSV4RRFFQ69G5FAV", "/bookings/:id"),
        ("/studios/01ARZ3NDEKTSV4RRFFQ69G5FAV/slots", "/studios/:id/slots"),
        ("/legacy/42", "/legacy/:id"),
        ("/public/sunrise-yoga/slots", "/public/sunrise-yoga/slots"),
    ],
)
def test_normalize_path(raw, expected):
    assert normalize_path(raw) == expected
