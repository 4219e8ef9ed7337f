"""
Tests for the HTTP API.

The application is wired to a per-test SQLite database and the recording
gateway through FastAPI dependency overrides.
"""

import pytest
from sqlalchemy import func, select

from community_events.api.dependencies import get_notification_gateway
from community_events.models.event import Event

API = "/api/v1"


def submit(api_client, payload) -> str:
    response = api_client.post(f"{API}/event/new", json=payload)
    assert response.status_code == 200, response.text
    return response.json()["id"]


def approve(api_client, gateway):
    event_id, auth_code = gateway.last_auth_link()
    response = api_client.get(f"{API}/event/update/{event_id}", params={"auth_code": auth_code})
    assert response.status_code == 200, response.text
    return event_id


class TestHealthEndpoints:

    def test_health_check(self, api_client):
        response = api_client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ping(self, api_client):
        response = api_client.get(f"{API}/ping")
        assert response.status_code == 200
        assert response.json() == "pong"


class TestCreateEvent:

    def test_returns_string_id(self, api_client, minimal_payload):
        response = api_client.post(f"{API}/event/new", json=minimal_payload)

        assert response.status_code == 200
        assert response.json()["id"].isdigit()

    def test_event_hidden_until_approved(self, api_client, gateway, minimal_payload):
        """Test the documented scenario end to end over HTTP."""
        event_id = submit(api_client, minimal_payload)

        assert api_client.get(f"{API}/event/{event_id}").status_code == 404
        assert api_client.get(f"{API}/event/all").json() == []

        approve(api_client, gateway)

        response = api_client.get(f"{API}/event/{event_id}")
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == int(event_id)
        assert body["title"] == "T"
        assert body["startDate"] == "2025-01-01"
        assert body["startTime"] == "09:00:00"
        assert body["isAuthenticated"] is True
        assert "authCode" not in body

    def test_full_payload_round_trips(self, api_client, gateway, minimal_payload):
        payload = dict(
            minimal_payload,
            prefecture="Osaka",
            eventType="meetup",
            isOnline=True,
            officialUrl="https://example.com",
            onlineLectureUrl="https://example.com/live",
            venue="Room 1",
            target="Everyone",
            capacity="30",
            description="Talks and pizza",
            tags=["b", "a"],
            speakers=[{"name": "Ada", "title": "Eng", "organization": "X"}],
            schedule=[{"time": "09:00", "title": "Intro", "speaker": "Ada"}],
        )
        event_id = submit(api_client, payload)
        approve(api_client, gateway)

        body = api_client.get(f"{API}/event/{event_id}").json()
        assert body["prefecture"] == "Osaka"
        assert body["eventType"] == "meetup"
        assert body["isOnline"] is True
        assert body["isOffline"] is False
        assert body["onlineLectureUrl"] == "https://example.com/live"
        assert body["tags"] == ["b", "a"]
        assert body["speakers"] == [{"name": "Ada", "title": "Eng", "organization": "X"}]
        assert body["schedule"] == [{"time": "09:00", "title": "Intro", "speaker": "Ada"}]

    @pytest.mark.parametrize("missing", [
        "title", "organizer", "startDate", "startTime", "endDate", "endTime", "email",
    ])
    def test_missing_required_field_is_rejected(self, api_client, gateway, minimal_payload, missing):
        del minimal_payload[missing]

        response = api_client.post(f"{API}/event/new", json=minimal_payload)

        assert response.status_code == 400
        assert gateway.messages == []

    @pytest.mark.parametrize("field, value", [
        ("email", "not-an-email"),
        ("email", "a@b.com."),
        ("email", "<x>@b.c"),
        ("email", "a@-b.com"),
        ("email", "a b@c.d"),
        ("email", ""),
        ("title", "   "),
        ("startDate", "2025-13-01"),
        ("startTime", "25:00"),
    ])
    def test_invalid_field_is_rejected(self, api_client, gateway, minimal_payload, field, value):
        minimal_payload[field] = value

        response = api_client.post(f"{API}/event/new", json=minimal_payload)

        assert response.status_code == 400
        assert gateway.messages == []

    def test_delivery_failure_returns_500_and_stores_nothing(
        self, app, api_client, failing_gateway, database, minimal_payload
    ):
        """Test the documented failure scenario over HTTP."""
        app.dependency_overrides[get_notification_gateway] = lambda: failing_gateway

        response = api_client.post(f"{API}/event/new", json=minimal_payload)

        assert response.status_code == 500
        assert response.json()["detail"] == "failed to send Slack notification"
        assert api_client.get(f"{API}/event/all").json() == []
        with database.session() as session:
            count = session.scalar(
                select(func.count()).select_from(Event).where(
                    Event.title == "T", Event.organizer == "O"
                )
            )
        assert count == 0


class TestAuthenticateEvent:

    def test_success_message(self, api_client, gateway, minimal_payload):
        submit(api_client, minimal_payload)
        event_id, auth_code = gateway.last_auth_link()

        response = api_client.get(f"{API}/event/update/{event_id}?auth_code={auth_code}")

        assert response.status_code == 200
        assert response.json() == {"message": "Event authenticated successfully"}

    def test_second_approval_also_succeeds(self, api_client, gateway, minimal_payload):
        submit(api_client, minimal_payload)
        approve(api_client, gateway)
        approve(api_client, gateway)

        assert len(api_client.get(f"{API}/event/all").json()) == 1

    def test_wrong_code_is_rejected(self, api_client, minimal_payload):
        event_id = submit(api_client, minimal_payload)

        response = api_client.get(f"{API}/event/update/{event_id}", params={"auth_code": "guess"})

        assert response.status_code == 400
        assert api_client.get(f"{API}/event/{event_id}").status_code == 404

    def test_missing_code_is_rejected(self, api_client, minimal_payload):
        event_id = submit(api_client, minimal_payload)
        assert api_client.get(f"{API}/event/update/{event_id}").status_code == 400

    def test_non_numeric_id_is_rejected(self, api_client):
        assert api_client.get(f"{API}/event/update/abc?auth_code=x").status_code == 400


class TestListAndGet:

    def test_list_is_ordered_by_start(self, api_client, gateway, minimal_payload):
        for title, start_date, start_time in [
            ("second", "2025-05-01", "09:00"),
            ("first", "2025-04-01", "18:00"),
            ("third", "2025-05-01", "10:30"),
        ]:
            submit(api_client, dict(minimal_payload, title=title, startDate=start_date,
                                    endDate=start_date, startTime=start_time))
            approve(api_client, gateway)

        titles = [event["title"] for event in api_client.get(f"{API}/event/all").json()]
        assert titles == ["first", "second", "third"]

    def test_unknown_event_is_404(self, api_client):
        response = api_client.get(f"{API}/event/987654")
        assert response.status_code == 404
        assert response.json()["detail"] == "event not found"

    def test_non_numeric_id_is_400(self, api_client):
        assert api_client.get(f"{API}/event/abc").status_code == 400


class TestContact:

    def test_forwards_message(self, api_client, gateway):
        response = api_client.post(f"{API}/contact", json={
            "name": "Ada",
            "email": "ada@example.com",
            "message": "Hello",
        })

        assert response.status_code == 200
        assert response.json() == "ok"
        assert "Name: Ada" in gateway.messages[0]

    def test_delivery_failure_is_500(self, app, api_client, failing_gateway):
        app.dependency_overrides[get_notification_gateway] = lambda: failing_gateway

        response = api_client.post(f"{API}/contact", json={
            "name": "Ada",
            "email": "ada@example.com",
            "message": "Hello",
        })

        assert response.status_code == 500
