"""Event model definition."""

from dataclasses import asdict, dataclass, field
from datetime import date, time
from typing import Any, Dict, List, Optional

from sqlalchemy import Boolean, Column, Date, Index, Integer, String, Text, Time
from sqlalchemy.orm import validates

from .base import Base
from .records import (
    Speaker,
    ScheduleSlot,
    dump_schedule,
    dump_speakers,
    dump_tags,
    load_schedule,
    load_speakers,
    load_tags,
)

@dataclass
class EventFields:
    """
    Everything a submitter provides when registering an event.

    The store adds identity, the authentication token and the
    authenticated flag on top of these.
    """
    title: str
    organizer: str
    start_date: date
    start_time: time
    end_date: date
    end_time: time
    email: str
    prefecture: Optional[str] = None
    event_type: Optional[str] = None
    is_online: bool = False
    is_offline: bool = False
    official_url: Optional[str] = None
    online_lecture_url: Optional[str] = None
    venue: Optional[str] = None
    target: Optional[str] = None
    capacity: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    speakers: List[Speaker] = field(default_factory=list)
    schedule: List[ScheduleSlot] = field(default_factory=list)

class Event(Base):
    """
    A community event row.

    Fields:
        id: Unique identifier assigned by the database
        title: Event title
        organizer: Person or group running the event
        start_date / start_time: When the event starts
        end_date / end_time: When the event ends
        email: Contact address of the submitter
        prefecture: Region the event takes place in (optional)
        event_type: Category of the event (optional)
        is_online / is_offline: Attendance modes
        official_url: Event homepage (optional)
        online_lecture_url: Streaming link (optional)
        venue: Where the event takes place (optional)
        target: Intended audience (optional)
        capacity: Free-text capacity, e.g. "50 people" (optional)
        description: Free-text description (optional)
        tags / speakers / schedule: JSON encoded collections, see models.records
        auth_code: Secret token required to publish the event
        is_authenticated: Whether the event is publicly visible
    """
    __tablename__ = 'events'
    __table_args__ = (
        Index('ix_events_visible_start', 'is_authenticated', 'start_date', 'start_time'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    organizer = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_date = Column(Date, nullable=False)
    end_time = Column(Time, nullable=False)
    email = Column(String(255), nullable=False)
    prefecture = Column(String(255))
    event_type = Column(String(255))
    is_online = Column(Boolean, nullable=False, default=False)
    is_offline = Column(Boolean, nullable=False, default=False)
    official_url = Column(String(255))
    online_lecture_url = Column(String(255))
    venue = Column(String(255))
    target = Column(String(255))
    capacity = Column(String(255))
    description = Column(Text)
    tags = Column(Text, nullable=False, default='[]')
    speakers = Column(Text, nullable=False, default='[]')
    schedule = Column(Text, nullable=False, default='[]')
    auth_code = Column(String(36), nullable=False)
    is_authenticated = Column(Boolean, nullable=False, default=False)

    @validates('auth_code')
    def _validate_auth_code(self, key, value):
        # The token is issued once at creation and never replaced
        if self.auth_code is not None and value != self.auth_code:
            raise ValueError("auth_code cannot be changed once set")
        return value

    @classmethod
    def from_fields(cls, fields: EventFields, auth_code: str) -> 'Event':
        """Build an unauthenticated row from submitted fields."""
        return cls(
            title=fields.title,
            organizer=fields.organizer,
            start_date=fields.start_date,
            start_time=fields.start_time,
            end_date=fields.end_date,
            end_time=fields.end_time,
            email=fields.email,
            prefecture=fields.prefecture,
            event_type=fields.event_type,
            is_online=fields.is_online,
            is_offline=fields.is_offline,
            official_url=fields.official_url,
            online_lecture_url=fields.online_lecture_url,
            venue=fields.venue,
            target=fields.target,
            capacity=fields.capacity,
            description=fields.description,
            tags=dump_tags(fields.tags),
            speakers=dump_speakers(fields.speakers),
            schedule=dump_schedule(fields.schedule),
            auth_code=auth_code,
            is_authenticated=False,
        )

    @property
    def tag_list(self) -> List[str]:
        return load_tags(self.tags)

    @property
    def speaker_list(self) -> List[Speaker]:
        return load_speakers(self.speakers)

    @property
    def schedule_list(self) -> List[ScheduleSlot]:
        return load_schedule(self.schedule)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary. The authentication token is never included."""
        return {
            'id': self.id,
            'title': self.title,
            'organizer': self.organizer,
            'start_date': self.start_date,
            'start_time': self.start_time,
            'end_date': self.end_date,
            'end_time': self.end_time,
            'email': self.email,
            'prefecture': self.prefecture,
            'event_type': self.event_type,
            'is_online': self.is_online,
            'is_offline': self.is_offline,
            'official_url': self.official_url,
            'online_lecture_url': self.online_lecture_url,
            'venue': self.venue,
            'target': self.target,
            'capacity': self.capacity,
            'description': self.description,
            'tags': self.tag_list,
            'speakers': [asdict(s) for s in self.speaker_list],
            'schedule': [asdict(s) for s in self.schedule_list],
            'is_authenticated': self.is_authenticated,
        }

    def __str__(self) -> str:
        """String representation."""
        return f"Event(id={self.id}, title={self.title}, authenticated={self.is_authenticated})"
