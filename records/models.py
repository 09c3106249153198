"""Data models for club events and gallery photos."""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class EventCategory(str, Enum):
    """Fixed classification of a club event."""
    RACING = 'racing'
    CRUISING = 'cruising'
    SOCIAL = 'social'
    MEETING = 'meeting'


class PhotoAlbum(str, Enum):
    """Fixed classification of a gallery photo."""
    RACING = 'racing'
    CRUISING = 'cruising'
    SOCIAL = 'social'
    CLUBHOUSE = 'clubhouse'
    HISTORICAL = 'historical'


class SortOrder(str, Enum):
    ASC = 'asc'
    DESC = 'desc'


class CalendarView(str, Enum):
    MONTH = 'month'
    WEEK = 'week'
    DAY = 'day'


@dataclass(frozen=True)
class Event:
    """Club event. Timestamps are timezone-aware and end >= start."""
    event_id: str
    title: str
    start: datetime
    end: datetime
    category: EventCategory
    description: str
    location: Optional[str] = None
    registration_required: bool = False
    registration_url: Optional[str] = None
    recurrence: Optional[str] = None


@dataclass(frozen=True)
class Photo:
    """Gallery photo. Width and height describe the original asset."""
    photo_id: str
    src: str
    width: int
    height: int
    alt: str
    title: str
    album: PhotoAlbum
    captured_on: date
    caption: Optional[str] = None
    photographer: Optional[str] = None


@dataclass(frozen=True)
class RecordStore:
    """Immutable collections of events and photos, passed to consumers."""
    events: Tuple[Event, ...] = ()
    photos: Tuple[Photo, ...] = ()

    def get_event(self, event_id: str) -> Optional[Event]:
        for event in self.events:
            if event.event_id == event_id:
                return event
        return None


@dataclass(frozen=True)
class EventQuery:
    """Event list filter state for a single query."""
    categories: FrozenSet[EventCategory] = frozenset()
    search: str = ''


@dataclass(frozen=True)
class PhotoQuery:
    """Gallery filter state for a single query."""
    albums: FrozenSet[PhotoAlbum] = frozenset()
    search: str = ''
    order: SortOrder = SortOrder.DESC


@dataclass(frozen=True)
class EventPartition:
    """Events split around a reference instant."""
    upcoming: Tuple[Event, ...]
    past: Tuple[Event, ...]


@dataclass(frozen=True)
class EventRow:
    """List view row for a single event."""
    event_id: str
    title: str
    month_label: str
    day_label: str
    weekday_label: str
    date_label: str
    time_range: str
    same_day: bool
    end_date_label: Optional[str]
    location: Optional[str]
    category: EventCategory
    category_label: str
    description: str
    recurrence: Optional[str]
    registration_url: Optional[str]
    is_upcoming: bool
    ics: str
    ics_filename: str


@dataclass(frozen=True)
class CalendarCell:
    """One day on a calendar grid."""
    day: date
    in_range: bool
    is_today: bool
    events: Tuple[Event, ...] = ()


@dataclass(frozen=True)
class CalendarGrid:
    """Calendar layout for a month, week or day view."""
    view: CalendarView
    anchor: date
    title: str
    weeks: Tuple[Tuple[CalendarCell, ...], ...] = field(default_factory=tuple)
