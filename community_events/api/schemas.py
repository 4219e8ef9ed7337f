"""Request and response bodies of the HTTP API.

The wire format uses camelCase keys (``startDate``, ``officialUrl``, ...);
snake_case names are accepted as well.
"""

from datetime import date, time
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from ..models.event import EventFields
from ..models.records import Speaker, ScheduleSlot

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class SpeakerSchema(CamelModel):
    name: str = ""
    title: str = ""
    organization: str = ""

class ScheduleSlotSchema(CamelModel):
    time: str = ""
    title: str = ""
    speaker: str = ""

class CreateEventRequest(CamelModel):
    """Body of POST /event/new."""
    title: str = Field(..., min_length=1)
    organizer: str = Field(..., min_length=1)
    start_date: date
    start_time: time
    end_date: date
    end_time: time
    email: EmailStr
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
    tags: Optional[List[str]] = None
    speakers: Optional[List[SpeakerSchema]] = None
    schedule: Optional[List[ScheduleSlotSchema]] = None

    @field_validator('title', 'organizer')
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_fields(self) -> EventFields:
        return EventFields(
            title=self.title,
            organizer=self.organizer,
            start_date=self.start_date,
            start_time=self.start_time,
            end_date=self.end_date,
            end_time=self.end_time,
            email=str(self.email),
            prefecture=self.prefecture,
            event_type=self.event_type,
            is_online=self.is_online,
            is_offline=self.is_offline,
            official_url=self.official_url,
            online_lecture_url=self.online_lecture_url,
            venue=self.venue,
            target=self.target,
            capacity=self.capacity,
            description=self.description,
            tags=list(self.tags or []),
            speakers=[Speaker(**s.model_dump()) for s in (self.speakers or [])],
            schedule=[ScheduleSlot(**s.model_dump()) for s in (self.schedule or [])],
        )

class CreateEventResponse(CamelModel):
    # Serialized as a string for compatibility with existing clients
    id: str

class AuthenticateEventResponse(CamelModel):
    message: str

class EventResponse(CamelModel):
    """A publicly visible event."""
    id: int
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
    tags: List[str] = []
    speakers: List[SpeakerSchema] = []
    schedule: List[ScheduleSlotSchema] = []
    is_authenticated: bool

class CreateContactRequest(CamelModel):
    """Body of POST /contact."""
    name: str
    email: str
    message: str
