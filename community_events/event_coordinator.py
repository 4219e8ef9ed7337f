"""Coordinator for registering a new event.

A submission is persisted and announced to the moderators as one unit:

    begin -> insert -> notify -> commit

The insert happens inside an open transaction, the moderation message
(which carries the secret authentication link) is delivered next, and only
then is the transaction committed. Any failure before the commit rolls the
insert back, so an event never exists without its moderators having been
sent the link to approve it.

The one gap left open: if the commit fails after the message was
delivered, the moderators hold a link to an event that does not exist.
"""

import logging
from urllib.parse import quote

from .event_store import EventStore
from .models.event import EventFields
from .notifications import NotificationGateway

logger = logging.getLogger(__name__)

NEW_EVENT_MESSAGE = (
    "A new event has been submitted.\n"
    "Title: {title}\n"
    "Organizer: {organizer}\n"
    "Authentication link: {link}"
)

def build_auth_link(api_base_url: str, event_id: int, auth_code: str) -> str:
    """Return the link that publishes an event, e.g. .../event/update/7?auth_code=..."""
    return f"{api_base_url.rstrip('/')}/event/update/{event_id}?auth_code={quote(auth_code, safe='')}"

class EventCoordinator:
    """Creates events so that the stored row and the moderator message agree."""

    def __init__(self, store: EventStore, gateway: NotificationGateway, api_base_url: str):
        """
        Args:
            store: Where events are persisted
            gateway: Channel that receives the moderation message
            api_base_url: Public URL of the versioned API, used for the link
        """
        self.store = store
        self.gateway = gateway
        self.api_base_url = api_base_url

    def compose_message(self, fields: EventFields, event_id: int, auth_code: str) -> str:
        return NEW_EVENT_MESSAGE.format(
            title=fields.title,
            organizer=fields.organizer,
            link=build_auth_link(self.api_base_url, event_id, auth_code),
        )

    def create_event(self, fields: EventFields) -> int:
        """
        Persist an event and notify the moderators, all or nothing.

        Args:
            fields: Already validated submission

        Returns:
            The id assigned to the new event

        Raises:
            StoreError: If the transaction cannot be opened, the insert fails
                or the commit fails (CommitError)
            DeliveryError: If the moderation message cannot be delivered;
                the insert has been rolled back
        """
        tx = self.store.begin_transaction()
        try:
            try:
                event_id, auth_code = self.store.create_event(tx, fields)
            except Exception as e:
                logger.error(f"Insert of '{fields.title}' failed, discarding the submission: {e}")
                raise

            message = self.compose_message(fields, event_id, auth_code)
            try:
                self.gateway.send(message)
            except Exception:
                logger.error(f"Notification for event {event_id} failed, discarding the submission")
                raise
            logger.info(f"Moderators notified about event {event_id}")

            try:
                self.store.commit(tx)
            except Exception as e:
                # Moderators now hold a link to a row that was never stored
                logger.error(f"Commit of event {event_id} failed after moderators were notified: {e}")
                raise
            logger.info(f"Event {event_id} ('{fields.title}') committed")
            return event_id
        finally:
            self.store.rollback(tx)
