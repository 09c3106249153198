"""List and calendar projections of club events."""
import calendar
import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional

from projection.ics_export import generate_ics, ics_filename
from records.catalog import CATEGORY_LABELS
from records.models import (
    CalendarCell,
    CalendarGrid,
    CalendarView,
    Event,
    EventRow,
)

logger = logging.getLogger(__name__)


def format_time(value: datetime) -> str:
    """Render a time as h:mm AM/PM."""
    hour = value.hour % 12 or 12
    meridiem = 'AM' if value.hour < 12 else 'PM'
    return f'{hour}:{value.minute:02d} {meridiem}'


def format_long_date(value: date) -> str:
    """Render a date as e.g. 'Wednesday, January 8, 2025'."""
    return f'{value:%A}, {value:%B} {value.day}, {value.year}'


def _days_since_sunday(value: date) -> int:
    return (value.weekday() + 1) % 7


def build_list_row(
    event: Event,
    tz: tzinfo,
    now: datetime,
    dtstamp: Optional[datetime] = None
) -> EventRow:
    """
    Project a single event into its list view row.

    Args:
        event: Event to display
        tz: Display timezone for every label
        now: Reference instant used for the upcoming flag
        dtstamp: Optional DTSTAMP for the embedded calendar file

    Returns:
        EventRow for the list view
    """
    start = event.start.astimezone(tz)
    end = event.end.astimezone(tz)
    same_day = start.date() == end.date()

    registration_url = None
    if event.registration_required and event.registration_url:
        registration_url = event.registration_url

    return EventRow(
        event_id=event.event_id,
        title=event.title,
        month_label=f'{start:%b}',
        day_label=str(start.day),
        weekday_label=f'{start:%a}',
        date_label=format_long_date(start.date()),
        time_range=f'{format_time(start)} - {format_time(end)}',
        same_day=same_day,
        end_date_label=None if same_day else format_long_date(end.date()),
        location=event.location,
        category=event.category,
        category_label=CATEGORY_LABELS[event.category],
        description=event.description,
        recurrence=event.recurrence,
        registration_url=registration_url,
        is_upcoming=event.start >= now,
        ics=generate_ics(event, dtstamp=dtstamp),
        ics_filename=ics_filename(event)
    )


def build_list_rows(
    events: Iterable[Event],
    tz: tzinfo,
    now: datetime,
    dtstamp: Optional[datetime] = None
) -> List[EventRow]:
    """Project events into list rows, keeping their order."""
    return [build_list_row(event, tz, now, dtstamp) for event in events]


def _grid_range(view: CalendarView, anchor: date):
    if view == CalendarView.MONTH:
        first = anchor.replace(day=1)
        last = anchor.replace(
            day=calendar.monthrange(anchor.year, anchor.month)[1]
        )
        start = first - timedelta(days=_days_since_sunday(first))
        end = last + timedelta(days=6 - _days_since_sunday(last))
        return start, end
    if view == CalendarView.WEEK:
        start = anchor - timedelta(days=_days_since_sunday(anchor))
        return start, start + timedelta(days=6)
    return anchor, anchor


def build_calendar(
    events: Iterable[Event],
    view: CalendarView,
    anchor: date,
    tz: tzinfo,
    today: date
) -> CalendarGrid:
    """
    Lay events out on a month, week or day grid by start day.

    Month and week grids are whole Sunday-first weeks. Each event appears
    once, on the day it starts in the display timezone; cells list their
    events in input order.

    Args:
        events: Events to place, already filtered and sorted
        view: Grid shape
        anchor: Any day inside the period to show
        tz: Display timezone
        today: Day flagged as today

    Returns:
        CalendarGrid with rows of seven cells (one cell for the day view)
    """
    by_day: Dict[date, List[Event]] = {}
    for event in events:
        by_day.setdefault(event.start.astimezone(tz).date(), []).append(event)

    start, end = _grid_range(view, anchor)
    cells = []
    day = start
    while day <= end:
        if view == CalendarView.MONTH:
            in_range = day.month == anchor.month and day.year == anchor.year
        else:
            in_range = True
        cells.append(CalendarCell(
            day=day,
            in_range=in_range,
            is_today=day == today,
            events=tuple(by_day.get(day, ()))
        ))
        day += timedelta(days=1)

    weeks = tuple(tuple(cells[i:i + 7]) for i in range(0, len(cells), 7))

    if view == CalendarView.DAY:
        title = format_long_date(anchor)
    else:
        title = f'{anchor:%B} {anchor.year}'

    logger.debug(f"Built {view.value} calendar for {anchor}: {len(cells)} cells")
    return CalendarGrid(view=view, anchor=anchor, title=title, weeks=weeks)


def navigate(view: CalendarView, anchor: date, step: int) -> date:
    """
    Move the anchor by step months, weeks or days, as Back/Next do.

    Month moves keep the day of month where possible, clamping to the
    last day of shorter months.
    """
    if view == CalendarView.MONTH:
        month_index = anchor.year * 12 + anchor.month - 1 + step
        year, month = divmod(month_index, 12)
        month += 1
        day = min(anchor.day, calendar.monthrange(year, month)[1])
        return date(year, month, day)
    if view == CalendarView.WEEK:
        return anchor + timedelta(weeks=step)
    return anchor + timedelta(days=step)
