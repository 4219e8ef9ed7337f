"""Models package initialization."""

from .base import Base
from .records import Speaker, ScheduleSlot
from .event import Event, EventFields

__all__ = ['Base', 'Event', 'EventFields', 'Speaker', 'ScheduleSlot']
