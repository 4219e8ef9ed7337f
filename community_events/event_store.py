"""Durable storage of submitted events.

Events are created inside a caller-controlled transaction so that the
caller decides when (and whether) the new row becomes durable. Reads only
ever see committed rows whose ``is_authenticated`` flag is set; an
unauthenticated event is indistinguishable from a missing one.
"""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .db import Database, StoreError, SessionError, CommitError
from .models.event import Event, EventFields

logger = logging.getLogger(__name__)

# A transaction is an open SQLAlchemy session owned by the caller
Transaction = Session

class NotFoundError(Exception):
    """Raised when no event matches the given id and authentication token."""
    pass

def generate_auth_code() -> str:
    """Return a fresh random token (UUID4, 122 random bits)."""
    return str(uuid.uuid4())

class EventStore:
    """Event persistence on top of a SQLAlchemy database."""

    def __init__(self, database: Database):
        self.database = database

    def begin_transaction(self) -> Transaction:
        """
        Open an isolated unit of work.

        Raises:
            StoreError: If no session can be opened
        """
        tx = self.database.new_session()
        try:
            tx.begin()
        except SQLAlchemyError as e:
            tx.close()
            raise SessionError(f"Failed to begin transaction: {e}") from e
        return tx

    def create_event(self, tx: Transaction, fields: EventFields) -> Tuple[int, str]:
        """
        Insert an unauthenticated event inside ``tx``.

        The row gets its id from the database and a new authentication
        token. Nothing is visible to other transactions until ``commit``.

        Returns:
            Tuple of (event id, authentication token)

        Raises:
            StoreError: If serialization or the insert fails
        """
        auth_code = generate_auth_code()
        try:
            event = Event.from_fields(fields, auth_code)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Failed to serialize event: {e}") from e

        try:
            tx.add(event)
            tx.flush()
        except SQLAlchemyError as e:
            raise SessionError(f"Failed to insert event: {e}") from e

        logger.info(f"Inserted event {event.id} ('{event.title}'), awaiting commit")
        return event.id, auth_code

    def commit(self, tx: Transaction) -> None:
        """
        Make every write of ``tx`` durable.

        Raises:
            CommitError: If the database refuses the commit
        """
        try:
            tx.commit()
        except SQLAlchemyError as e:
            raise CommitError(f"Failed to commit transaction: {e}") from e

    def rollback(self, tx: Transaction) -> None:
        """
        Discard uncommitted writes of ``tx`` and release it.

        Safe to call unconditionally: after a successful commit it only
        closes the session.
        """
        try:
            tx.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Rollback failed: {e}")
        finally:
            tx.close()

    def list_visible_events(self) -> List[Event]:
        """Return authenticated events ordered by start date and time, then id."""
        with self.database.session() as session:
            query = (
                select(Event)
                .where(Event.is_authenticated.is_(True))
                .order_by(Event.start_date, Event.start_time, Event.id)
            )
            return list(session.scalars(query).all())

    def get_event(self, event_id: int) -> Optional[Event]:
        """Return the event if it exists and is authenticated, else None."""
        with self.database.session() as session:
            query = select(Event).where(
                Event.id == event_id,
                Event.is_authenticated.is_(True)
            )
            return session.scalars(query).first()

    def authenticate(self, event_id: int, auth_code: str) -> None:
        """
        Mark an event as authenticated.

        The update is a single conditional statement, so concurrent callers
        presenting the same valid token all succeed and the flag flips once.
        Repeating a successful call succeeds again without changing anything.

        Raises:
            NotFoundError: If no event has this id and token
            StoreError: If the update fails
        """
        with self.database.session() as session:
            result = session.execute(
                update(Event)
                .where(Event.id == event_id, Event.auth_code == auth_code)
                .values(is_authenticated=True)
                .execution_options(synchronize_session=False)
            )
            matched = result.rowcount

        if not matched:
            logger.warning(f"Authentication rejected for event {event_id}")
            raise NotFoundError(f"No event matches id {event_id} and the given auth code")

        logger.info(f"Event {event_id} authenticated")
