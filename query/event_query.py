"""Filtering and time partitioning for club events."""
import logging
from datetime import datetime
from typing import AbstractSet, Iterable, List

from records.models import Event, EventCategory, EventPartition, EventQuery

logger = logging.getLogger(__name__)


def filter_events_by_category(
    events: Iterable[Event],
    categories: AbstractSet[EventCategory]
) -> List[Event]:
    """
    Keep events whose category is in the given set.

    An empty set means no filter and returns every event.

    Args:
        events: Events to filter
        categories: Categories to keep

    Returns:
        New list of matching events in input order
    """
    if not categories:
        return list(events)
    return [event for event in events if event.category in categories]


def search_events(events: Iterable[Event], query: str) -> List[Event]:
    """
    Case-insensitive substring search over title, description and location.

    A blank or whitespace-only query returns every event.
    """
    if not query.strip():
        return list(events)
    needle = query.lower()
    return [
        event for event in events
        if needle in event.title.lower()
        or needle in event.description.lower()
        or (event.location is not None and needle in event.location.lower())
    ]


def upcoming_events(events: Iterable[Event], now: datetime) -> List[Event]:
    """Events starting at or after now, soonest first."""
    # sorted() is stable, so equal start times keep input order
    return sorted(
        (event for event in events if event.start >= now),
        key=lambda event: event.start
    )


def past_events(events: Iterable[Event], now: datetime) -> List[Event]:
    """Events that started before now, most recent first."""
    return sorted(
        (event for event in events if event.start < now),
        key=lambda event: event.start,
        reverse=True
    )


def partition_events(events: Iterable[Event], now: datetime) -> EventPartition:
    """
    Split events into upcoming and past around now.

    An event starting exactly at now is upcoming.

    Args:
        events: Events to partition
        now: Reference instant, timezone-aware

    Returns:
        EventPartition with sorted upcoming and past tuples
    """
    events = list(events)
    partition = EventPartition(
        upcoming=tuple(upcoming_events(events, now)),
        past=tuple(past_events(events, now))
    )
    logger.debug(
        f"Partitioned {len(events)} events: {len(partition.upcoming)} "
        f"upcoming, {len(partition.past)} past"
    )
    return partition


def apply_event_query(events: Iterable[Event], query: EventQuery) -> List[Event]:
    """Apply the category filter, then the text search."""
    filtered = filter_events_by_category(events, query.categories)
    return search_events(filtered, query.search)
