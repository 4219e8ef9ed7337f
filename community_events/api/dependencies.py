"""Dependency providers for the routers.

Tests swap these out through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from ..config.app import get_app_config
from ..contact_notifier import ContactNotifier
from ..db import get_database
from ..event_coordinator import EventCoordinator
from ..event_store import EventStore
from ..notifications import NotificationGateway, create_slack_gateway

def get_event_store() -> EventStore:
    return EventStore(get_database())

@lru_cache()
def get_notification_gateway() -> NotificationGateway:
    # Built once so configuration is read at startup, not per message
    return create_slack_gateway()

def get_api_base_url() -> str:
    return get_app_config().api_base_url

def get_event_coordinator(
    store: EventStore = Depends(get_event_store),
    gateway: NotificationGateway = Depends(get_notification_gateway),
    api_base_url: str = Depends(get_api_base_url)
) -> EventCoordinator:
    return EventCoordinator(store=store, gateway=gateway, api_base_url=api_base_url)

def get_contact_notifier(
    gateway: NotificationGateway = Depends(get_notification_gateway)
) -> ContactNotifier:
    return ContactNotifier(gateway)
