"""Parse request parameters into immutable query values."""
from datetime import date, datetime
from typing import Dict, FrozenSet, Optional, Type, TypeVar

from records.models import (
    CalendarView,
    EventCategory,
    EventQuery,
    PhotoAlbum,
    PhotoQuery,
    SortOrder,
)

E = TypeVar('E', EventCategory, PhotoAlbum, SortOrder, CalendarView)


class InvalidQueryError(ValueError):
    """Raised when a request parameter has an unsupported value."""


def _enum_value(enum_type: Type[E], value: str, name: str) -> E:
    try:
        return enum_type(value.strip().lower())
    except ValueError:
        allowed = ', '.join(member.value for member in enum_type)
        raise InvalidQueryError(
            f"Invalid {name} {value!r}; expected one of: {allowed}"
        )


def _enum_set(enum_type: Type[E], raw: Optional[str], name: str) -> FrozenSet[E]:
    if not raw:
        return frozenset()
    return frozenset(
        _enum_value(enum_type, part, name)
        for part in raw.split(',')
        if part.strip()
    )


def parse_event_query(params: Dict[str, str]) -> EventQuery:
    """Build an EventQuery from 'category' (comma list) and 'q'."""
    return EventQuery(
        categories=_enum_set(EventCategory, params.get('category'), 'category'),
        search=params.get('q') or ''
    )


def parse_photo_query(params: Dict[str, str]) -> PhotoQuery:
    """Build a PhotoQuery from 'album' (comma list), 'q' and 'order'."""
    order = params.get('order')
    return PhotoQuery(
        albums=_enum_set(PhotoAlbum, params.get('album'), 'album'),
        search=params.get('q') or '',
        order=_enum_value(SortOrder, order, 'order') if order else SortOrder.DESC
    )


def parse_calendar_view(raw: Optional[str]) -> CalendarView:
    if not raw:
        return CalendarView.MONTH
    return _enum_value(CalendarView, raw, 'view')


def parse_anchor_date(raw: Optional[str], default: date) -> date:
    """Parse a YYYY-MM-DD anchor date, falling back to default."""
    if not raw:
        return default
    try:
        return datetime.strptime(raw.strip(), '%Y-%m-%d').date()
    except ValueError:
        raise InvalidQueryError(f"Invalid date {raw!r}; expected YYYY-MM-DD")
