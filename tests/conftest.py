"""
Shared pytest fixtures for the community events tests.

Every test gets its own file-backed SQLite database so that separate
sessions really are separate transactions, and a recording stand-in for
the Slack gateway.
"""

import re
from datetime import date, time
from typing import List, Tuple

import pytest
from fastapi.testclient import TestClient

from community_events.api.app import create_application
from community_events.api.dependencies import (
    get_api_base_url,
    get_event_store,
    get_notification_gateway
)
from community_events.db import Database, DatabaseConfig
from community_events.event_coordinator import EventCoordinator
from community_events.event_store import EventStore
from community_events.models.event import EventFields
from community_events.models.records import Speaker, ScheduleSlot
from community_events.notifications import DeliveryError, NotificationGateway

API_BASE_URL = "http://testserver/api/v1"

AUTH_LINK_PATTERN = re.compile(r"/event/update/(\d+)\?auth_code=([0-9a-f-]+)")


class RecordingGateway(NotificationGateway):
    """
    Gateway double that keeps every delivered message.

    With ``fail=True`` every send raises DeliveryError, like a Slack outage.
    """

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.messages: List[str] = []
        self.attempts = 0

    def send(self, message: str) -> None:
        self.attempts += 1
        if self.fail:
            raise DeliveryError("Simulated Slack outage")
        self.messages.append(message)

    def last_auth_link(self) -> Tuple[int, str]:
        """(event id, auth code) taken from the most recent message."""
        match = AUTH_LINK_PATTERN.search(self.messages[-1])
        assert match, f"No authentication link in: {self.messages[-1]}"
        return int(match.group(1)), match.group(2)


@pytest.fixture
def database(tmp_path) -> Database:
    """Fresh database with the schema in place."""
    db = Database(DatabaseConfig(url=f"sqlite:///{tmp_path / 'events.db'}"))
    db.ensure_tables_exist()
    yield db
    db.dispose()


@pytest.fixture
def store(database: Database) -> EventStore:
    return EventStore(database)


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def failing_gateway() -> RecordingGateway:
    return RecordingGateway(fail=True)


@pytest.fixture
def coordinator(store: EventStore, gateway: RecordingGateway) -> EventCoordinator:
    return EventCoordinator(store=store, gateway=gateway, api_base_url=API_BASE_URL)


# =============================================================================
# Event Fixtures
# =============================================================================

def make_fields(**overrides) -> EventFields:
    """Minimal valid submission, with optional field overrides."""
    values = dict(
        title="T",
        organizer="O",
        start_date=date(2025, 1, 1),
        start_time=time(9, 0),
        end_date=date(2025, 1, 1),
        end_time=time(10, 0),
        email="a@b.com",
    )
    values.update(overrides)
    return EventFields(**values)


@pytest.fixture
def minimal_fields() -> EventFields:
    return make_fields()


@pytest.fixture
def full_fields() -> EventFields:
    """Submission with every optional attribute set."""
    return make_fields(
        title="PyCon Mini",
        organizer="Python User Group",
        end_time=time(18, 0),
        prefecture="Tokyo",
        event_type="conference",
        is_online=True,
        is_offline=True,
        official_url="https://example.com/pycon",
        online_lecture_url="https://example.com/live",
        venue="Hall A",
        target="Beginners",
        capacity="100",
        description="A day of talks.\nBring a laptop.",
        tags=["python", "コミュニティ", "beginners"],
        speakers=[
            Speaker(name="Ada", title="Engineer", organization="Analytical Co."),
            Speaker(name="Grace", title="Admiral", organization="Navy"),
        ],
        schedule=[
            ScheduleSlot(time="09:00", title="Opening", speaker="Ada"),
            ScheduleSlot(time="10:00", title="Keynote", speaker="Grace"),
        ],
    )


@pytest.fixture
def minimal_payload() -> dict:
    """Request body of the documented creation scenario."""
    return {
        "title": "T",
        "organizer": "O",
        "startDate": "2025-01-01",
        "startTime": "09:00",
        "endDate": "2025-01-01",
        "endTime": "10:00",
        "email": "a@b.com",
    }


# =============================================================================
# API Fixtures
# =============================================================================

@pytest.fixture
def app(store: EventStore, gateway: RecordingGateway):
    """Application wired to the test database and the recording gateway."""
    application = create_application(use_lifespan=False)
    application.dependency_overrides[get_event_store] = lambda: store
    application.dependency_overrides[get_notification_gateway] = lambda: gateway
    application.dependency_overrides[get_api_base_url] = lambda: API_BASE_URL
    return application


@pytest.fixture
def api_client(app) -> TestClient:
    return TestClient(app)
