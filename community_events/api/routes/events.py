"""Events router module."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from ..dependencies import get_event_coordinator, get_event_store
from ..schemas import (
    AuthenticateEventResponse,
    CreateEventRequest,
    CreateEventResponse,
    EventResponse
)
from ...db import CommitError, StoreError
from ...event_coordinator import EventCoordinator
from ...event_store import EventStore, NotFoundError
from ...notifications import DeliveryError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/event", tags=["events"])

@router.get("/all", response_model=List[EventResponse])
def get_events(store: EventStore = Depends(get_event_store)):
    """Get all published events, earliest first."""
    try:
        events = store.list_visible_events()
    except StoreError as e:
        logger.error(f"Failed to list events: {e}")
        raise HTTPException(status_code=500, detail="failed to fetch events")
    return [event.to_dict() for event in events]

@router.post("/new", response_model=CreateEventResponse)
def create_event(
    request: CreateEventRequest,
    coordinator: EventCoordinator = Depends(get_event_coordinator)
):
    """
    Register a new event.

    The event stays hidden until a moderator opens the authentication
    link that is posted to the moderation channel.
    """
    try:
        event_id = coordinator.create_event(request.to_fields())
    except DeliveryError as e:
        logger.error(f"Event submission aborted: {e}")
        raise HTTPException(status_code=500, detail="failed to send Slack notification")
    except CommitError as e:
        logger.error(f"Event submission aborted: {e}")
        raise HTTPException(status_code=500, detail="failed to commit transaction")
    except StoreError as e:
        logger.error(f"Event submission aborted: {e}")
        raise HTTPException(status_code=500, detail="failed to create event")
    return CreateEventResponse(id=str(event_id))

@router.get("/update/{event_id}", response_model=AuthenticateEventResponse)
def authenticate_event(
    event_id: int,
    auth_code: str = Query(default=""),
    store: EventStore = Depends(get_event_store)
):
    """Publish an event using the link sent to the moderators."""
    try:
        store.authenticate(event_id, auth_code)
    except NotFoundError:
        raise HTTPException(status_code=400, detail="authentication failed")
    except StoreError as e:
        logger.error(f"Failed to authenticate event {event_id}: {e}")
        raise HTTPException(status_code=500, detail="failed to authenticate event")
    return AuthenticateEventResponse(message="Event authenticated successfully")

@router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: int, store: EventStore = Depends(get_event_store)):
    """Get a single published event by ID."""
    try:
        event = store.get_event(event_id)
    except StoreError as e:
        logger.error(f"Failed to fetch event {event_id}: {e}")
        raise HTTPException(status_code=500, detail="failed to fetch event")
    if event is None:
        raise HTTPException(status_code=404, detail="event not found")
    return event.to_dict()
