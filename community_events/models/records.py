"""Collection attributes of an event and their stored encoding.

Tags, speakers and schedule slots are stored in the ``events`` table as
text columns holding one JSON array each:

    tags:      ["python", "beginners"]
    speakers:  [{"name": ..., "title": ..., "organization": ...}]
    schedule:  [{"time": ..., "title": ..., "speaker": ...}]

``organization`` carries the speaker's affiliation and ``speaker`` in a
schedule slot refers to a speaker by name. Arrays keep their order, an
empty collection is stored as ``[]`` and a stored ``null`` or empty
value reads back as an empty list.
"""

import json
from dataclasses import dataclass, asdict
from typing import Iterable, List, Optional

@dataclass
class Speaker:
    """A person presenting at an event."""
    name: str = ""
    title: str = ""
    organization: str = ""

@dataclass
class ScheduleSlot:
    """One entry of an event's timetable."""
    time: str = ""
    title: str = ""
    speaker: str = ""

def _dump(items: list) -> str:
    return json.dumps(items, ensure_ascii=False)

def _load(blob: Optional[str], what: str) -> list:
    if blob is None or blob == "":
        return []
    try:
        value = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Stored {what} are not valid JSON: {e}") from e
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"Stored {what} must be a JSON array, got {type(value).__name__}")
    return value

def dump_tags(tags: Optional[Iterable[str]]) -> str:
    return _dump([str(tag) for tag in (tags or [])])

def load_tags(blob: Optional[str]) -> List[str]:
    return [str(tag) for tag in _load(blob, "tags")]

def dump_speakers(speakers: Optional[Iterable[Speaker]]) -> str:
    return _dump([asdict(speaker) for speaker in (speakers or [])])

def load_speakers(blob: Optional[str]) -> List[Speaker]:
    return [
        Speaker(
            name=item.get('name', ''),
            title=item.get('title', ''),
            organization=item.get('organization', '')
        )
        for item in _load(blob, "speakers")
    ]

def dump_schedule(schedule: Optional[Iterable[ScheduleSlot]]) -> str:
    return _dump([asdict(slot) for slot in (schedule or [])])

def load_schedule(blob: Optional[str]) -> List[ScheduleSlot]:
    return [
        ScheduleSlot(
            time=item.get('time', ''),
            title=item.get('title', ''),
            speaker=item.get('speaker', '')
        )
        for item in _load(blob, "schedule")
    ]
