"""Unit tests for event filtering and partitioning."""
from datetime import datetime, timedelta, timezone

import pytest

from query.event_query import (
    apply_event_query,
    filter_events_by_category,
    partition_events,
    past_events,
    search_events,
    upcoming_events,
)
from records.models import Event, EventCategory, EventQuery

NOW = datetime(2025, 1, 8, 12, 0, tzinfo=timezone.utc)


def make_event(event_id, hours_from_now, category=EventCategory.RACING,
               title='Wednesday Night Racing', description='Beer can races',
               location='AYC Starting Line'):
    start = NOW + timedelta(hours=hours_from_now)
    return Event(
        event_id=event_id,
        title=title,
        start=start,
        end=start + timedelta(hours=2),
        category=category,
        description=description,
        location=location
    )


@pytest.fixture
def sample_events():
    """Mixed past and upcoming events across categories."""
    return [
        make_event('race-1', 24, EventCategory.RACING),
        make_event('past-1', -48, EventCategory.SOCIAL,
                   title='Opening Day Ceremony',
                   description='Blessing of the fleet', location='AYC Dock'),
        make_event('cruise-1', 6, EventCategory.CRUISING,
                   title='Sunset Cruise Rally',
                   description='Dinner at anchor', location=None),
        make_event('meeting-1', 72, EventCategory.MEETING,
                   title='Board of Directors Meeting',
                   description='Agenda posted one week prior',
                   location='AYC Clubhouse'),
        make_event('past-2', -5, EventCategory.RACING,
                   title='Spring Series Race #1'),
    ]


class TestFilterEventsByCategory:
    """Test cases for the category filter."""

    def test_empty_filter_returns_all_events(self, sample_events):
        """An empty category set is no filter, not an empty result."""
        result = filter_events_by_category(sample_events, frozenset())

        assert result == sample_events
        assert result is not sample_events

    def test_keeps_only_selected_categories(self, sample_events):
        selected = {EventCategory.RACING, EventCategory.MEETING}

        result = filter_events_by_category(sample_events, selected)

        assert [e.event_id for e in result] == ['race-1', 'meeting-1', 'past-2']
        assert all(e.category in selected for e in result)

    def test_no_false_negatives(self, sample_events):
        selected = {EventCategory.SOCIAL}

        result = filter_events_by_category(sample_events, selected)

        expected = [e for e in sample_events if e.category in selected]
        assert result == expected

    def test_unmatched_filter_returns_empty_list(self):
        events = [make_event('race-1', 1, EventCategory.RACING)]

        assert filter_events_by_category(events, {EventCategory.SOCIAL}) == []


class TestSearchEvents:
    """Test cases for free-text event search."""

    def test_blank_query_returns_all(self, sample_events):
        assert search_events(sample_events, '') == sample_events
        assert search_events(sample_events, '   ') == sample_events

    def test_matches_title_case_insensitively(self, sample_events):
        result = search_events(sample_events, 'SUNSET')

        assert [e.event_id for e in result] == ['cruise-1']

    def test_matches_description_and_location(self, sample_events):
        assert [e.event_id for e in search_events(sample_events, 'fleet')] == ['past-1']
        assert [e.event_id for e in search_events(sample_events, 'clubhouse')] == ['meeting-1']

    def test_nonmatching_query_returns_empty(self, sample_events):
        assert search_events(sample_events, 'NONMATCHING_TOKEN') == []


class TestPartition:
    """Test cases for the upcoming/past partition."""

    def test_partition_is_total_and_disjoint(self, sample_events):
        partition = partition_events(sample_events, NOW)

        upcoming_ids = {e.event_id for e in partition.upcoming}
        past_ids = {e.event_id for e in partition.past}
        assert upcoming_ids | past_ids == {e.event_id for e in sample_events}
        assert upcoming_ids & past_ids == set()

    def test_upcoming_sorted_soonest_first(self, sample_events):
        result = upcoming_events(sample_events, NOW)

        assert [e.event_id for e in result] == ['cruise-1', 'race-1', 'meeting-1']
        starts = [e.start for e in result]
        assert starts == sorted(starts)

    def test_past_sorted_most_recent_first(self, sample_events):
        result = past_events(sample_events, NOW)

        assert [e.event_id for e in result] == ['past-2', 'past-1']

    def test_event_starting_now_is_upcoming(self):
        event = make_event('race-now', 0)

        partition = partition_events([event], NOW)

        assert partition.upcoming == (event,)
        assert partition.past == ()

    def test_ties_keep_input_order(self):
        """Equal start times keep their original order in both halves."""
        first = make_event('a', 5)
        second = make_event('b', 5)
        third = make_event('c', -5)
        fourth = make_event('d', -5)

        partition = partition_events([first, third, second, fourth], NOW)

        assert [e.event_id for e in partition.upcoming] == ['a', 'b']
        assert [e.event_id for e in partition.past] == ['c', 'd']

    def test_partition_does_not_mutate_input(self, sample_events):
        original = list(sample_events)

        partition_events(sample_events, NOW)

        assert sample_events == original


class TestApplyEventQuery:
    """Test cases for composed event queries."""

    def test_category_then_search(self, sample_events):
        query = EventQuery(
            categories=frozenset({EventCategory.RACING}),
            search='spring'
        )

        result = apply_event_query(sample_events, query)

        assert [e.event_id for e in result] == ['past-2']

    def test_filters_commute(self, sample_events):
        categories = {EventCategory.RACING, EventCategory.SOCIAL}

        one_way = search_events(
            filter_events_by_category(sample_events, categories), 'race'
        )
        other_way = filter_events_by_category(
            search_events(sample_events, 'race'), categories
        )

        assert one_way == other_way

    def test_default_query_is_identity(self, sample_events):
        assert apply_event_query(sample_events, EventQuery()) == sample_events
